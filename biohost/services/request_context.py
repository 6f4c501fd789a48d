from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Iterable, Mapping
from zoneinfo import ZoneInfo

from ..config import Settings, get_settings
from .device_detection import DeviceDetector, DeviceType, parse_user_agent

Clock = Callable[[], datetime]

# Checked in order; extend by appending, not by branching.
BLOCK_COUNTRY_HEADERS: tuple[str, ...] = (
    "CF-IPCountry",  # Cloudflare
    "X-Country-Code",  # Bunny CDN
    "CloudFront-Viewer-Country",  # AWS CloudFront
    "Fastly-Geo-Country-Code",  # Fastly
)
PAGE_COUNTRY_HEADERS: tuple[str, ...] = BLOCK_COUNTRY_HEADERS + ("X-Vercel-IP-Country",)

# CDN markers for "could not determine" (XX) and Tor exit nodes (T1)
UNKNOWN_COUNTRY_CODES = frozenset({"XX", "T1", ""})


@dataclass(frozen=True)
class RequestContext:
    now: datetime
    country: str | None = None
    device_type: DeviceType = DeviceType.DESKTOP
    browser: str | None = None
    operating_system: str | None = None
    accepted_languages: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "now": self.now.isoformat(),
            "country": self.country,
            "device_type": self.device_type.value,
            "browser": self.browser,
            "operating_system": self.operating_system,
            "accepted_languages": list(self.accepted_languages),
        }


def resolve_zone(tz_name: str = "UTC") -> tzinfo:
    return timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)


def system_clock(tz_name: str = "UTC") -> Clock:
    tz = resolve_zone(tz_name)

    def _now() -> datetime:
        return datetime.now(tz)

    return _now


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive; Starlette's Headers already are not
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def extract_country(
    headers: Mapping[str, str], candidates: Iterable[str] = PAGE_COUNTRY_HEADERS
) -> str | None:
    for name in candidates:
        value = get_header(headers, name)
        if value and value.strip():
            country = value.strip().upper()
            return None if country in UNKNOWN_COUNTRY_CODES else country
    return None


def extract_device_type(user_agent: str | None) -> DeviceType:
    return parse_user_agent(user_agent).device_type


def extract_browser(user_agent: str | None) -> str | None:
    return parse_user_agent(user_agent).browser


def extract_operating_system(user_agent: str | None) -> str | None:
    return parse_user_agent(user_agent).operating_system


def extract_languages(accept_language: str | None) -> tuple[str, ...]:
    """Primary subtags from an Accept-Language value, in header order.

    q-weights are dropped, not used for ordering: "en-GB,en;q=0.9,es;q=0.8"
    gives ("en", "es").
    """
    if not accept_language:
        return ()
    languages: list[str] = []
    for part in accept_language.split(","):
        tag = part.split(";", 1)[0].strip()
        primary = tag.split("-", 1)[0].lower()
        if primary and primary not in languages:
            languages.append(primary)
    return tuple(languages)


class RequestContextExtractor:
    def __init__(
        self,
        clock: Clock | None = None,
        detector: DeviceDetector | None = None,
        trust_cdn_headers: bool = True,
        extra_country_headers: Iterable[str] = (),
    ):
        self.clock = clock or system_clock()
        self.detector = detector
        self.trust_cdn_headers = trust_cdn_headers
        self.extra_country_headers = tuple(extra_country_headers)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, clock: Clock | None = None):
        settings = settings or get_settings()
        return cls(
            clock=clock or system_clock(settings.TIMEZONE),
            trust_cdn_headers=settings.TRUST_CDN_HEADERS,
            extra_country_headers=settings.EXTRA_COUNTRY_HEADERS,
        )

    def extract(
        self, headers: Mapping[str, str], country_headers: Iterable[str] = PAGE_COUNTRY_HEADERS
    ) -> RequestContext:
        user_agent = get_header(headers, "User-Agent")
        if self.detector is not None:
            info = self.detector.parse(user_agent)
        else:
            info = parse_user_agent(user_agent)

        country = None
        if self.trust_cdn_headers:
            country = extract_country(headers, tuple(country_headers) + self.extra_country_headers)

        return RequestContext(
            now=self.clock(),
            country=country,
            device_type=info.device_type,
            browser=info.browser,
            operating_system=info.operating_system,
            accepted_languages=extract_languages(get_header(headers, "Accept-Language")),
        )
