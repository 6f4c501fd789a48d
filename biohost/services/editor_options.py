"""Option lists offered by the targeting and block-condition editors."""

from __future__ import annotations

from typing import Any

from .device_detection import DeviceType

DEVICE_OPTIONS = {
    DeviceType.DESKTOP.value: "Desktop",
    DeviceType.MOBILE.value: "Mobile",
    DeviceType.TABLET.value: "Tablet",
}

BROWSER_OPTIONS = [
    "Chrome",
    "Firefox",
    "Safari",
    "Edge",
    "Opera",
    "Brave",
    "Samsung Browser",
]

OPERATING_SYSTEM_OPTIONS = [
    "Windows 10",
    "Windows 11",
    "macOS",
    "iOS",
    "Android",
    "Linux",
    "Chrome OS",
]

LANGUAGE_OPTIONS = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "ar": "Arabic",
    "hi": "Hindi",
    "pl": "Polish",
    "tr": "Turkish",
    "sv": "Swedish",
    "da": "Danish",
    "no": "Norwegian",
    "fi": "Finnish",
}

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

COMMON_COUNTRIES = {
    "GB": "United Kingdom",
    "US": "United States",
    "CA": "Canada",
    "AU": "Australia",
    "NZ": "New Zealand",
    "IE": "Ireland",
    "DE": "Germany",
    "FR": "France",
    "ES": "Spain",
    "IT": "Italy",
    "NL": "Netherlands",
    "BE": "Belgium",
    "PT": "Portugal",
    "SE": "Sweden",
    "NO": "Norway",
    "DK": "Denmark",
    "FI": "Finland",
    "AT": "Austria",
    "CH": "Switzerland",
    "PL": "Poland",
    "BR": "Brazil",
    "MX": "Mexico",
    "AR": "Argentina",
    "JP": "Japan",
    "KR": "South Korea",
    "SG": "Singapore",
    "HK": "Hong Kong",
    "IN": "India",
    "AE": "United Arab Emirates",
    "SA": "Saudi Arabia",
    "ZA": "South Africa",
    "RU": "Russia",
    "CN": "China",
}


def targeting_options() -> dict[str, Any]:
    return {
        "devices": dict(DEVICE_OPTIONS),
        "browsers": {name: name for name in BROWSER_OPTIONS},
        "operating_systems": {name: name for name in OPERATING_SYSTEM_OPTIONS},
        "languages": dict(LANGUAGE_OPTIONS),
        "days_of_week": {index: name for index, name in enumerate(DAY_NAMES)},
    }
