"""
Internal data types for roster compliance and costing.
decoupled from the roster store payloads for cleaner logic.

All types are frozen: the engine never mutates what it is given.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class ConflictType(str, Enum):
    OVERLAP = "overlap"
    OUTSIDE_AVAILABILITY = "outside_availability"
    OVERTIME_EXCEEDED = "overtime_exceeded"
    ON_LEAVE = "on_leave"
    INSUFFICIENT_REST = "insufficient_rest"
    MAX_CONSECUTIVE_DAYS = "max_consecutive_days"
    PREFERRED_ROOM_VIOLATED = "preferred_room_violated"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ShiftStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"


class TimeOffStatus(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


class TimeOffType(str, Enum):
    ANNUAL_LEAVE = "annual_leave"
    SICK_LEAVE = "sick_leave"
    PERSONAL_LEAVE = "personal_leave"
    UNPAID_LEAVE = "unpaid_leave"


@dataclass(frozen=True)
class Shift:
    """One scheduled work block (proposed or existing)."""
    id: str
    staff_id: str
    centre_id: str
    room_id: str
    date: date
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM", next day when overnight
    break_minutes: int = 0
    status: ShiftStatus = ShiftStatus.DRAFT
    overnight: bool = False


@dataclass(frozen=True)
class DayAvailability:
    day_of_week: int  # 0-6, Sunday-Saturday
    available: bool
    start_time: Optional[str] = None  # None means all day
    end_time: Optional[str] = None


@dataclass(frozen=True)
class TimeOff:
    id: str
    start_date: date
    end_date: date
    status: TimeOffStatus
    type: TimeOffType = TimeOffType.ANNUAL_LEAVE

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class SchedulingPreferences:
    min_rest_hours_between_shifts: Optional[float] = None
    max_consecutive_days: Optional[int] = None
    avoid_rooms: tuple[str, ...] = ()
    preferred_rooms: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "avoid_rooms", tuple(self.avoid_rooms))
        object.__setattr__(self, "preferred_rooms", tuple(self.preferred_rooms))


@dataclass(frozen=True)
class StaffMember:
    id: str
    hourly_rate: float
    overtime_rate: float
    max_hours_per_week: Optional[float] = None
    current_weekly_hours: float = 0.0  # caller snapshot, not used by the rules
    agency: bool = False
    name: str = ""
    availability: tuple[DayAvailability, ...] = ()
    time_off: tuple[TimeOff, ...] = ()
    scheduling_preferences: Optional[SchedulingPreferences] = None

    def __post_init__(self):
        object.__setattr__(self, "availability", tuple(self.availability))
        object.__setattr__(self, "time_off", tuple(self.time_off))

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def availability_for(self, day_of_week: int) -> Optional[DayAvailability]:
        return next((a for a in self.availability if a.day_of_week == day_of_week), None)


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    centre_id: Optional[str] = None


@dataclass(frozen=True)
class Conflict:
    """A reported rule violation. Values only; never persisted here."""
    id: str
    type: ConflictType
    severity: Severity
    shift_id: str
    staff_id: str
    message: str
    can_override: bool
    details: Optional[str] = None

    def __post_init__(self):
        # closed enums: unknown values raise ValueError here
        object.__setattr__(self, "type", ConflictType(self.type))
        object.__setattr__(self, "severity", Severity(self.severity))


@dataclass(frozen=True)
class StaffCost:
    """Per-staff slice of a cost rollup (unrounded)."""
    staff_id: str
    hours: float
    regular_hours: float
    overtime_hours: float
    regular_cost: float
    overtime_cost: float
    agency: bool = False


@dataclass(frozen=True)
class CostSummary:
    regular_cost: int
    overtime_cost: int
    total_cost: int
    agency_cost: int
    variance: int
    percent_used: float
    total_hours: float
    staff_count: int
    is_over_budget: bool
    is_near_budget: bool


@dataclass(frozen=True)
class PublishCheck:
    can_publish: bool
    blocking_conflicts: list[Conflict] = field(default_factory=list)


@dataclass(frozen=True)
class RosterPublishCheck:
    can_publish: bool
    blocking_shifts: list[tuple[Shift, list[Conflict]]] = field(default_factory=list)


@dataclass(frozen=True)
class RosterSnapshot:
    """Everything one evaluation needs, as loaded from a payload."""
    shifts: tuple[Shift, ...]
    staff: tuple[StaffMember, ...]
    rooms: tuple[Room, ...] = ()
