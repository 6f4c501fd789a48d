from datetime import datetime
from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import mapped_column, relationship
from .base import Base, UUIDMixin, TimestampMixin
from ..services.editor_options import DAY_NAMES
from ..services.ruleset import RuleSet, parse_ruleset, summarize_values
from ..services.schedule import is_within_block_window

_SUMMARY_KEYS = (
    "devices",
    "countries",
    "exclude_countries",
    "browsers",
    "operating_systems",
    "languages",
)


class Block(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "blocks"

    page_id = mapped_column(ForeignKey("pages.id"), nullable=False)
    type = mapped_column(String(64), nullable=False)
    order = mapped_column(Integer, default=0, nullable=False)
    is_enabled = mapped_column(Boolean, default=True, nullable=False)
    start_date = mapped_column(DateTime(timezone=True), nullable=True)
    end_date = mapped_column(DateTime(timezone=True), nullable=True)
    settings = mapped_column(JSON, default=dict, nullable=False)

    page = relationship("Page", back_populates="blocks")

    def __init__(self, **kwargs):
        kwargs.setdefault("is_enabled", True)
        kwargs.setdefault("order", 0)
        kwargs.setdefault("settings", {})
        super().__init__(**kwargs)

    def get_setting(self, key: str, default=None):
        return (self.settings or {}).get(key, default)

    def condition_rules(self) -> RuleSet:
        return parse_ruleset(self.get_setting("conditions"))

    def has_conditions(self) -> bool:
        return not self.condition_rules().is_empty()

    def is_active(self, now: datetime) -> bool:
        """Enabled flag and start/end columns only, no request conditions."""
        return bool(self.is_enabled) and is_within_block_window(self.start_date, self.end_date, now)

    def conditions_summary(self) -> dict[str, str]:
        conditions = self.get_setting("conditions") or {}
        if not isinstance(conditions, dict):
            return {}
        summary: dict[str, str] = {}
        for key in _SUMMARY_KEYS:
            values = conditions.get(key)
            if isinstance(values, list) and values:
                summary[key] = summarize_values(values)

        schedule = conditions.get("schedule")
        if isinstance(schedule, dict) and schedule:
            parts = []
            if schedule.get("start"):
                parts.append(f"from {schedule['start']}")
            if schedule.get("end"):
                parts.append(f"until {schedule['end']}")
            days = schedule.get("days")
            if isinstance(days, list) and days:
                parts.append(summarize_values(_day_label(day) for day in days))
            if parts:
                summary["schedule"] = " ".join(parts)
        return summary


def _day_label(day) -> str:
    if isinstance(day, int) and not isinstance(day, bool) and 0 <= day <= 6:
        return DAY_NAMES[day][:3]
    return str(day)
