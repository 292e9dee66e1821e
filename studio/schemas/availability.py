# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request schemas for crew availability and weekly schedules."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from studio.models.domain import WEEKDAYS

SLOT_TYPE_PATTERN = "^(available|busy|unavailable)$"
HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class SlotCreateRequest(BaseModel):
    crew_member_id: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime
    type: str = Field(default="busy", pattern=SLOT_TYPE_PATTERN)
    reason: Optional[str] = Field(default=None, max_length=500)
    project_id: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class SlotUpdateRequest(BaseModel):
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    type: Optional[str] = Field(default=None, pattern=SLOT_TYPE_PATTERN)
    reason: Optional[str] = Field(default=None, max_length=500)
    project_id: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class DayHours(BaseModel):
    start: str = Field(default="09:00", pattern=HHMM_PATTERN)
    end: str = Field(default="17:00", pattern=HHMM_PATTERN)
    available: bool = True


class WeeklyScheduleRequest(BaseModel):
    days: dict[str, DayHours]
    timezone: Optional[str] = Field(default=None, max_length=64)

    @field_validator("days")
    @classmethod
    def known_weekdays(cls, v: dict[str, DayHours]) -> dict[str, DayHours]:
        v = {k.lower(): hours for k, hours in v.items()}
        unknown = sorted(set(v) - set(WEEKDAYS))
        if unknown:
            raise ValueError(f"unknown weekdays: {unknown}")
        for day, hours in v.items():
            if hours.available and hours.start >= hours.end:
                raise ValueError(f"{day}: start must be before end")
        return v
