from pydantic import field_validator
from datetime import date
from typing import Optional

from roster_compliance.services.compliance.intervals import to_minutes
from roster_compliance.services.compliance.types import ShiftStatus

from .base import RosterModel


class ShiftIn(RosterModel):
    id: str
    staff_id: str
    centre_id: str
    room_id: str
    date: date
    start_time: str
    end_time: str
    break_minutes: int = 0
    status: ShiftStatus = ShiftStatus.DRAFT
    overnight: bool = False
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        to_minutes(value)
        return value

    @field_validator("break_minutes")
    @classmethod
    def check_break(cls, value: int) -> int:
        if value < 0:
            raise ValueError("breakMinutes cannot be negative")
        return value
