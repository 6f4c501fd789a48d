from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from functools import lru_cache


class DeviceType(str, enum.Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"
    TABLET = "tablet"


# Mobile tokens are checked before tablet tokens; first match wins.
MOBILE_PATTERN = re.compile(r"mobile|android|iphone|ipod|blackberry|opera mini|iemobile", re.IGNORECASE)
TABLET_PATTERN = re.compile(r"tablet|ipad|playbook|silk", re.IGNORECASE)

# Order matters: Edge and Opera carry "Chrome" in their UA, Chrome carries "Safari".
BROWSER_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Edge", re.compile(r"Edg/", re.IGNORECASE)),
    ("Opera", re.compile(r"OPR/|Opera", re.IGNORECASE)),
    ("Brave", re.compile(r"Brave", re.IGNORECASE)),
    ("Vivaldi", re.compile(r"Vivaldi", re.IGNORECASE)),
    ("Samsung Browser", re.compile(r"SamsungBrowser", re.IGNORECASE)),
    ("UC Browser", re.compile(r"UCBrowser", re.IGNORECASE)),
    ("Yandex", re.compile(r"YaBrowser", re.IGNORECASE)),
    ("DuckDuckGo", re.compile(r"DuckDuckGo", re.IGNORECASE)),
    ("Chrome", re.compile(r"Chrome", re.IGNORECASE)),
    ("Firefox", re.compile(r"Firefox", re.IGNORECASE)),
    ("Safari", re.compile(r"Safari", re.IGNORECASE)),
    ("IE", re.compile(r"MSIE|Trident", re.IGNORECASE)),
)

# Windows 11 reports the same NT version as Windows 10.
OS_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Windows 11", re.compile(r"Windows NT 10.*Win64", re.IGNORECASE)),
    ("Windows 10", re.compile(r"Windows NT 10", re.IGNORECASE)),
    ("Windows 8.1", re.compile(r"Windows NT 6\.3", re.IGNORECASE)),
    ("Windows 8", re.compile(r"Windows NT 6\.2", re.IGNORECASE)),
    ("Windows 7", re.compile(r"Windows NT 6\.1", re.IGNORECASE)),
    ("Windows Vista", re.compile(r"Windows NT 6\.0", re.IGNORECASE)),
    ("Windows XP", re.compile(r"Windows NT 5\.[12]", re.IGNORECASE)),
    ("iOS", re.compile(r"iPhone|iPad|iPod", re.IGNORECASE)),
    ("macOS", re.compile(r"Mac OS X|Macintosh", re.IGNORECASE)),
    ("Android", re.compile(r"Android", re.IGNORECASE)),
    ("Chrome OS", re.compile(r"CrOS", re.IGNORECASE)),
    ("Linux", re.compile(r"Linux", re.IGNORECASE)),
    ("FreeBSD", re.compile(r"FreeBSD", re.IGNORECASE)),
)


@dataclass(frozen=True)
class UserAgentInfo:
    device_type: DeviceType
    browser: str | None
    operating_system: str | None


def _first_match(patterns: tuple[tuple[str, re.Pattern[str]], ...], user_agent: str | None) -> str | None:
    if not user_agent:
        return None
    for name, pattern in patterns:
        if pattern.search(user_agent):
            return name
    return None


class DeviceDetector:
    """Classifies a User-Agent string into device type, browser and OS.

    Names come from a fixed vocabulary so they can be compared directly with
    the values operators pick in the targeting editor.
    """

    def detect_device_type(self, user_agent: str | None) -> DeviceType:
        if not user_agent:
            return DeviceType.DESKTOP
        if MOBILE_PATTERN.search(user_agent):
            return DeviceType.MOBILE
        if TABLET_PATTERN.search(user_agent):
            return DeviceType.TABLET
        return DeviceType.DESKTOP

    def detect_browser(self, user_agent: str | None) -> str | None:
        return _first_match(BROWSER_PATTERNS, user_agent)

    def detect_os(self, user_agent: str | None) -> str | None:
        return _first_match(OS_PATTERNS, user_agent)

    def parse(self, user_agent: str | None) -> UserAgentInfo:
        return UserAgentInfo(
            device_type=self.detect_device_type(user_agent),
            browser=self.detect_browser(user_agent),
            operating_system=self.detect_os(user_agent),
        )


_default_detector = DeviceDetector()


@lru_cache(maxsize=2048)
def parse_user_agent(user_agent: str | None) -> UserAgentInfo:
    """Memoised parse with the default detector, keyed by the raw UA string."""
    return _default_detector.parse(user_agent)
