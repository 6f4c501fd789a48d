from datetime import date, datetime
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models.page import PageType
from ..services.device_detection import DeviceType

TimeOfDay = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]
DayOfWeek = Annotated[int, Field(ge=0, le=6)]


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SchedulePayload(StrictModel):
    start: Optional[date] = None
    end: Optional[date] = None
    time_start: Optional[TimeOfDay] = None
    time_end: Optional[TimeOfDay] = None
    days: Optional[list[DayOfWeek]] = None

    @model_validator(mode="after")
    def _check_ranges(self):
        if self.start and self.end and self.end < self.start:
            raise ValueError("Schedule end must not be before start")
        if (self.time_start is None) != (self.time_end is None):
            raise ValueError("time_start and time_end must be set together")
        return self


class RuleSetPayload(StrictModel):
    countries: list[str] = []
    exclude_countries: list[str] = []
    devices: list[DeviceType] = []
    browsers: list[str] = []
    operating_systems: list[str] = []
    languages: list[str] = []
    schedule: Optional[SchedulePayload] = None
    fallback_url: Optional[str] = None

    @field_validator("countries", "exclude_countries")
    @classmethod
    def _country_codes(cls, values: list[str]) -> list[str]:
        codes = [value.strip().upper() for value in values]
        for code in codes:
            if len(code) != 2 or not code.isalpha():
                raise ValueError(f"Invalid country code: {code!r}")
        return codes

    @field_validator("languages")
    @classmethod
    def _language_codes(cls, values: list[str]) -> list[str]:
        codes = [value.strip().lower() for value in values]
        for code in codes:
            if not 2 <= len(code) <= 3 or not code.isalpha():
                raise ValueError(f"Invalid language code: {code!r}")
        return codes

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True, exclude_defaults=True)


class PagePayload(StrictModel):
    url: Annotated[str, Field(min_length=1, max_length=256, pattern=r"^[A-Za-z0-9_-]+$")]
    type: PageType = PageType.BIOLINK
    location_url: Optional[str] = None
    is_enabled: bool = True
    redirect_type: Literal[301, 302] = 302
    targeting: Optional[RuleSetPayload] = None

    @model_validator(mode="after")
    def _links_need_destination(self):
        if self.type == PageType.LINK and not self.location_url:
            raise ValueError("Short links require location_url")
        return self


class BlockPayload(StrictModel):
    type: str
    order: int = 0
    is_enabled: bool = True
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    conditions: Optional[RuleSetPayload] = None
    content: dict = {}
