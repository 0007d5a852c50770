import pytest
from datetime import date, timedelta
from typing import Optional

from roster_compliance.services.compliance.types import (
    DayAvailability,
    Room,
    SchedulingPreferences,
    Shift,
    ShiftStatus,
    StaffMember,
)


def get_test_monday() -> date:
    # returns a fixed Monday for deterministic tests
    return date(2024, 3, 4)


def all_week_available() -> tuple[DayAvailability, ...]:
    return tuple(DayAvailability(day_of_week=d, available=True) for d in range(7))


def make_shift(
    shift_id: str,
    staff_id: str = "s1",
    day: Optional[date] = None,
    start: str = "09:00",
    end: str = "17:00",
    break_minutes: int = 0,
    centre_id: str = "c1",
    room_id: str = "r1",
    status: ShiftStatus = ShiftStatus.DRAFT,
    overnight: bool = False,
) -> Shift:
    return Shift(
        id=shift_id,
        staff_id=staff_id,
        centre_id=centre_id,
        room_id=room_id,
        date=day or get_test_monday(),
        start_time=start,
        end_time=end,
        break_minutes=break_minutes,
        status=status,
        overnight=overnight,
    )


def week_of_shifts(staff_id: str, days: int, start: str = "09:00", end: str = "17:00") -> list[Shift]:
    # one shift per day starting Monday
    monday = get_test_monday()
    return [
        make_shift(f"{staff_id}-d{i}", staff_id=staff_id, day=monday + timedelta(days=i), start=start, end=end)
        for i in range(days)
    ]


@pytest.fixture
def alice() -> StaffMember:
    # available every day, no window, default preferences
    return StaffMember(
        id="s1",
        name="Alice",
        hourly_rate=30,
        overtime_rate=45,
        max_hours_per_week=38,
        availability=all_week_available(),
    )


@pytest.fixture
def bob() -> StaffMember:
    return StaffMember(
        id="s2",
        name="Bob",
        hourly_rate=28,
        overtime_rate=42,
        max_hours_per_week=38,
        availability=all_week_available(),
    )


@pytest.fixture
def agency_carol() -> StaffMember:
    return StaffMember(
        id="s3",
        name="Carol",
        hourly_rate=50,
        overtime_rate=75,
        max_hours_per_week=38,
        agency=True,
        availability=all_week_available(),
    )


@pytest.fixture
def picky_dave() -> StaffMember:
    return StaffMember(
        id="s4",
        name="Dave",
        hourly_rate=32,
        overtime_rate=48,
        max_hours_per_week=38,
        availability=all_week_available(),
        scheduling_preferences=SchedulingPreferences(
            min_rest_hours_between_shifts=12,
            max_consecutive_days=3,
            avoid_rooms=("r2",),
        ),
    )


@pytest.fixture
def rooms() -> list[Room]:
    return [
        Room(id="r1", name="Nursery", centre_id="c1"),
        Room(id="r2", name="Toddlers", centre_id="c1"),
    ]
