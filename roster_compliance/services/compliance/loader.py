"""
Payload loader for the compliance engine.
Parses roster-store payloads (camelCase dicts) and converts them to internal
types, and serializes engine output back for the UI and export consumers.
"""

import logging
from typing import Any, Iterable, Mapping

from roster_compliance.schemas.conflicts import ConflictResponse
from roster_compliance.schemas.costing import CostSummaryResponse
from roster_compliance.schemas.rooms import RoomIn
from roster_compliance.schemas.shifts import ShiftIn
from roster_compliance.schemas.staff import StaffMemberIn

from .types import (
    Conflict,
    CostSummary,
    DayAvailability,
    Room,
    RosterSnapshot,
    SchedulingPreferences,
    Shift,
    StaffMember,
    TimeOff,
)

logger = logging.getLogger(__name__)


def load_shift(data: Mapping[str, Any]) -> Shift:
    row = ShiftIn.model_validate(data)
    return Shift(
        id=row.id,
        staff_id=row.staff_id,
        centre_id=row.centre_id,
        room_id=row.room_id,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        break_minutes=row.break_minutes,
        status=row.status,
        overnight=row.overnight,
    )


def load_staff_member(data: Mapping[str, Any]) -> StaffMember:
    row = StaffMemberIn.model_validate(data)

    prefs = None
    if row.scheduling_preferences is not None:
        p = row.scheduling_preferences
        prefs = SchedulingPreferences(
            min_rest_hours_between_shifts=p.min_rest_hours_between_shifts,
            max_consecutive_days=p.max_consecutive_days,
            avoid_rooms=tuple(p.avoid_rooms),
            preferred_rooms=tuple(p.preferred_rooms),
        )

    return StaffMember(
        id=row.id,
        name=row.name,
        hourly_rate=row.hourly_rate,
        overtime_rate=row.overtime_rate,
        max_hours_per_week=row.max_hours_per_week,
        current_weekly_hours=row.current_weekly_hours,
        agency=row.is_agency,
        availability=tuple(
            DayAvailability(
                day_of_week=a.day_of_week,
                available=a.available,
                start_time=a.start_time,
                end_time=a.end_time,
            )
            for a in row.availability
        ),
        time_off=tuple(
            TimeOff(
                id=t.id,
                start_date=t.start_date,
                end_date=t.end_date,
                status=t.status,
                type=t.type,
            )
            for t in row.time_off
        ),
        scheduling_preferences=prefs,
    )


def load_room(data: Mapping[str, Any]) -> Room:
    row = RoomIn.model_validate(data)
    return Room(id=row.id, name=row.name, centre_id=row.centre_id)


def load_roster(payload: Mapping[str, Iterable[Mapping[str, Any]]]) -> RosterSnapshot:
    """
    Load a full snapshot: {"shifts": [...], "staff": [...], "rooms": [...]}.
    Raises pydantic.ValidationError on malformed entries.
    """
    snapshot = RosterSnapshot(
        shifts=tuple(load_shift(s) for s in payload.get("shifts", [])),
        staff=tuple(load_staff_member(s) for s in payload.get("staff", [])),
        rooms=tuple(load_room(r) for r in payload.get("rooms", [])),
    )
    logger.debug(
        f"Loaded roster: {len(snapshot.shifts)} shifts, "
        f"{len(snapshot.staff)} staff, {len(snapshot.rooms)} rooms"
    )
    return snapshot


def conflict_to_payload(conflict: Conflict) -> dict[str, Any]:
    return ConflictResponse.model_validate(conflict).model_dump(by_alias=True, mode="json")


def cost_summary_to_payload(summary: CostSummary) -> dict[str, Any]:
    return CostSummaryResponse.model_validate(summary).model_dump(by_alias=True, mode="json")
