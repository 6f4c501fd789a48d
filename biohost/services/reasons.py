from __future__ import annotations

import enum


class ReasonCode(str, enum.Enum):
    COUNTRY_EXCLUDED = "country_excluded"
    COUNTRY_NOT_ALLOWED = "country_not_allowed"
    DEVICE_NOT_ALLOWED = "device_not_allowed"
    BROWSER_NOT_ALLOWED = "browser_not_allowed"
    OS_NOT_ALLOWED = "os_not_allowed"
    LANGUAGE_NOT_ALLOWED = "language_not_allowed"
    OUTSIDE_SCHEDULE = "outside_schedule"
    BLOCK_DISABLED = "block_disabled"
    BLOCK_NOT_SCHEDULED = "block_not_scheduled"


GENERIC_MESSAGE = "This content is not available."

REASON_MESSAGES: dict[ReasonCode, str] = {
    ReasonCode.COUNTRY_EXCLUDED: "This content is not available in your region.",
    ReasonCode.COUNTRY_NOT_ALLOWED: "This content is not available in your region.",
    ReasonCode.DEVICE_NOT_ALLOWED: "This content is not available on your device type.",
    ReasonCode.BROWSER_NOT_ALLOWED: "This content is not available in your browser.",
    ReasonCode.OS_NOT_ALLOWED: "This content is not available on your operating system.",
    ReasonCode.LANGUAGE_NOT_ALLOWED: "This content is not available in your language.",
}


def reason_message(reason: ReasonCode | str | None) -> str:
    if reason is None:
        return GENERIC_MESSAGE
    try:
        code = ReasonCode(reason)
    except ValueError:
        return GENERIC_MESSAGE
    return REASON_MESSAGES.get(code, GENERIC_MESSAGE)
