from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping

from .device_detection import DeviceType

logger = logging.getLogger(__name__)

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class Schedule:
    """Date / time-of-day / weekday window. Every field is optional.

    Times are stored as minutes past midnight. Days use 0=Sunday..6=Saturday.
    """

    start_date: datetime | None = None
    end_date: datetime | None = None
    time_start: int | None = None
    time_end: int | None = None
    days_of_week: frozenset[int] = frozenset()

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {}
        if self.start_date is not None:
            doc["start"] = self.start_date.isoformat()
        if self.end_date is not None:
            doc["end"] = self.end_date.date().isoformat()
        if self.time_start is not None:
            doc["time_start"] = format_minutes(self.time_start)
        if self.time_end is not None:
            doc["time_end"] = format_minutes(self.time_end)
        if self.days_of_week:
            doc["days"] = sorted(self.days_of_week)
        return doc


@dataclass(frozen=True)
class RuleSet:
    countries: frozenset[str] = frozenset()
    exclude_countries: frozenset[str] = frozenset()
    devices: frozenset[DeviceType] = frozenset()
    browsers: frozenset[str] = frozenset()
    operating_systems: frozenset[str] = frozenset()
    languages: frozenset[str] = frozenset()
    schedule: Schedule | None = None
    fallback_target: str | None = None

    def is_empty(self) -> bool:
        return not (
            self.countries
            or self.exclude_countries
            or self.devices
            or self.browsers
            or self.operating_systems
            or self.languages
            or self.schedule is not None
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {}
        for key in ("countries", "exclude_countries", "browsers", "operating_systems", "languages"):
            values = getattr(self, key)
            if values:
                doc[key] = sorted(values)
        if self.devices:
            doc["devices"] = sorted(device.value for device in self.devices)
        if self.schedule is not None:
            doc["schedule"] = self.schedule.to_document()
        if self.fallback_target:
            doc["fallback_url"] = self.fallback_target
        return doc


EMPTY_RULESET = RuleSet()


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_time_of_day(value: Any) -> int | None:
    """'09:00' / '9:00' / '09:00:30' -> minutes past midnight, None if unusable."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return hours * 60 + minutes


def parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            logger.debug("Ignoring unparseable schedule date %r", value)
    return None


def _string_set(value: Any, transform=None) -> frozenset[str]:
    if not isinstance(value, _SEQUENCE_TYPES):
        return frozenset()
    items: set[str] = set()
    for item in value:
        if not isinstance(item, str) or not item.strip():
            continue
        text = item.strip()
        items.add(transform(text) if transform else text)
    return frozenset(items)


def _device_set(value: Any) -> frozenset[DeviceType]:
    devices: set[DeviceType] = set()
    for name in _string_set(value, str.lower):
        try:
            devices.add(DeviceType(name))
        except ValueError:
            logger.debug("Ignoring unknown device type %r", name)
    return frozenset(devices)


def _day_set(value: Any) -> frozenset[int]:
    if not isinstance(value, _SEQUENCE_TYPES):
        return frozenset()
    days: set[int] = set()
    for item in value:
        if isinstance(item, bool):
            continue
        if isinstance(item, str) and item.strip().isdigit():
            item = int(item.strip())
        if isinstance(item, int) and 0 <= item <= 6:
            days.add(item)
    return frozenset(days)


def parse_schedule(document: Any) -> Schedule | None:
    if not isinstance(document, Mapping):
        return None
    return Schedule(
        start_date=parse_datetime(document.get("start")),
        end_date=parse_datetime(document.get("end")),
        time_start=parse_time_of_day(document.get("time_start")),
        time_end=parse_time_of_day(document.get("time_end")),
        days_of_week=_day_set(document.get("days")),
    )


def parse_ruleset(document: Any) -> RuleSet:
    """Build a RuleSet from a stored settings document.

    Never raises: anything missing or malformed becomes "no constraint" on
    that dimension, and a non-mapping document becomes the empty RuleSet.
    """
    if isinstance(document, RuleSet):
        return document
    if not isinstance(document, Mapping) or not document:
        return EMPTY_RULESET

    fallback = document.get("fallback_url")
    if not isinstance(fallback, str) or not fallback.strip():
        fallback = None

    return RuleSet(
        countries=_string_set(document.get("countries"), str.upper),
        exclude_countries=_string_set(document.get("exclude_countries"), str.upper),
        devices=_device_set(document.get("devices")),
        browsers=_string_set(document.get("browsers")),
        operating_systems=_string_set(document.get("operating_systems")),
        languages=_string_set(document.get("languages"), str.lower),
        schedule=parse_schedule(document.get("schedule")),
        fallback_target=fallback.strip() if fallback else None,
    )


def summarize_values(values: Iterable[Any]) -> str:
    return ", ".join(str(value) for value in values)
