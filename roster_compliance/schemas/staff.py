from pydantic import Field, field_validator
from datetime import date
from typing import Optional, Union

from roster_compliance.services.compliance.intervals import to_minutes
from roster_compliance.services.compliance.types import TimeOffStatus, TimeOffType

from .base import RosterModel


class DayAvailabilityIn(RosterModel):
    day_of_week: int = Field(ge=0, le=6)  # 0 = Sunday
    available: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            to_minutes(value)
        return value


class TimeOffIn(RosterModel):
    id: str
    start_date: date
    end_date: date
    type: TimeOffType = TimeOffType.ANNUAL_LEAVE
    status: TimeOffStatus
    notes: Optional[str] = None


class SchedulingPreferencesIn(RosterModel):
    min_rest_hours_between_shifts: Optional[float] = Field(default=None, ge=0)
    max_consecutive_days: Optional[int] = Field(default=None, ge=1)
    avoid_rooms: list[str] = Field(default_factory=list)
    preferred_rooms: list[str] = Field(default_factory=list)


class StaffMemberIn(RosterModel):
    id: str
    name: str = ""
    hourly_rate: float = Field(ge=0)
    overtime_rate: float = Field(ge=0)
    max_hours_per_week: Optional[float] = Field(default=None, ge=0)
    current_weekly_hours: float = 0.0
    # the roster store sends the agency name ("anzuk", "hays", ...) or nothing
    agency: Union[bool, str, None] = None
    availability: list[DayAvailabilityIn] = Field(default_factory=list)
    time_off: list[TimeOffIn] = Field(default_factory=list)
    scheduling_preferences: Optional[SchedulingPreferencesIn] = None

    @property
    def is_agency(self) -> bool:
        return bool(self.agency)
