"""
Rule evaluators, one per conflict type.

Each evaluator is pure: (candidate, other_shifts, staff_member, rooms) -> conflicts.
`other_shifts` never contains the candidate itself. Evaluators only look at
shifts belonging to the candidate's staff member.
"""

from datetime import timedelta
from typing import Callable, Optional, Sequence

from roster_compliance.core.config import settings

from .intervals import (
    day_of_week,
    overlaps,
    paid_hours,
    rest_gap_minutes,
    shift_window,
    to_minutes,
)
from .policy import RULE_POLICY, UNAVAILABLE_DAY_POLICY, RulePolicy
from .types import (
    Conflict,
    ConflictType,
    Room,
    Shift,
    StaffMember,
    TimeOffStatus,
)

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

Evaluator = Callable[[Shift, Sequence[Shift], StaffMember, Sequence[Room]], list[Conflict]]


def conflict_id(conflict_type: ConflictType, *shift_ids: str) -> str:
    """
    Deterministic id: rule type plus the shift ids involved, sorted so that
    evaluating from either shift of a pair yields the same id.
    """
    return f"{conflict_type.value}:" + "|".join(sorted(shift_ids))


def _make_conflict(
    conflict_type: ConflictType,
    candidate: Shift,
    message: str,
    details: Optional[str] = None,
    conflict_key: Optional[str] = None,
    policy: Optional[RulePolicy] = None,
) -> Conflict:
    policy = policy or RULE_POLICY[conflict_type]
    return Conflict(
        id=conflict_key or conflict_id(conflict_type, candidate.id),
        type=conflict_type,
        severity=policy.severity,
        shift_id=candidate.id,
        staff_id=candidate.staff_id,
        message=message,
        details=details,
        can_override=policy.can_override,
    )


def _own_shifts(candidate: Shift, other_shifts: Sequence[Shift]) -> list[Shift]:
    return [s for s in other_shifts if s.staff_id == candidate.staff_id]


def min_rest_hours(member: StaffMember) -> float:
    prefs = member.scheduling_preferences
    if prefs and prefs.min_rest_hours_between_shifts is not None:
        return prefs.min_rest_hours_between_shifts
    return settings.DEFAULT_MIN_REST_HOURS


def max_consecutive_days(member: StaffMember) -> int:
    prefs = member.scheduling_preferences
    if prefs and prefs.max_consecutive_days:
        return prefs.max_consecutive_days
    return settings.DEFAULT_MAX_CONSECUTIVE_DAYS


def max_weekly_hours(member: StaffMember) -> float:
    if member.max_hours_per_week is None:
        return settings.DEFAULT_MAX_HOURS_PER_WEEK
    return member.max_hours_per_week


def check_overlap(
    candidate: Shift,
    other_shifts: Sequence[Shift],
    member: StaffMember,
    rooms: Sequence[Room],
) -> list[Conflict]:
    """Double-booking on the same date, at this centre or any other."""
    conflicts = []
    start, end = shift_window(candidate)

    for existing in _own_shifts(candidate, other_shifts):
        if existing.date != candidate.date:
            continue
        other_start, other_end = shift_window(existing)
        if not overlaps(start, end, other_start, other_end):
            continue

        window = f"{existing.start_time}-{existing.end_time}"
        if existing.centre_id == candidate.centre_id:
            message = f"Shift overlaps with existing shift ({window})"
            details = f"{member.display_name} already has a shift from {existing.start_time} to {existing.end_time} on this day"
        else:
            message = f"Cross-location conflict: overlaps with shift at another centre ({window})"
            details = (
                f"{member.display_name} has a conflicting shift at another location from "
                f"{existing.start_time} to {existing.end_time}. Staff cannot be in two places at once."
            )
        conflicts.append(_make_conflict(
            ConflictType.OVERLAP, candidate, message, details,
            conflict_key=conflict_id(ConflictType.OVERLAP, candidate.id, existing.id),
        ))

    return conflicts


def check_availability(
    candidate: Shift,
    other_shifts: Sequence[Shift],
    member: StaffMember,
    rooms: Sequence[Room],
) -> list[Conflict]:
    """
    No entry for the day, or available=False: whole-day error (overridable).
    Available with a window the shift runs outside of: warning.
    """
    dow = day_of_week(candidate.date)
    availability = member.availability_for(dow)

    if availability is None or not availability.available:
        return [_make_conflict(
            ConflictType.OUTSIDE_AVAILABILITY,
            candidate,
            f"{member.display_name} is not available on {DAY_NAMES[dow]}",
            policy=UNAVAILABLE_DAY_POLICY,
        )]

    if availability.start_time and availability.end_time:
        avail_start = to_minutes(availability.start_time)
        avail_end = to_minutes(availability.end_time)
        start, end = shift_window(candidate)
        if start < avail_start or end > avail_end:
            window = f"{availability.start_time}-{availability.end_time}"
            return [_make_conflict(
                ConflictType.OUTSIDE_AVAILABILITY,
                candidate,
                f"Shift extends outside availability ({window})",
                f"{member.display_name} is only available {window}",
            )]

    return []


def check_overtime(
    candidate: Shift,
    other_shifts: Sequence[Shift],
    member: StaffMember,
    rooms: Sequence[Room],
) -> list[Conflict]:
    """
    Prospective weekly hours, recomputed from the supplied shifts.
    member.current_weekly_hours is not added on top.
    """
    limit = max_weekly_hours(member)
    total = sum(paid_hours(s) for s in _own_shifts(candidate, other_shifts)) + paid_hours(candidate)

    if total <= limit:
        return []

    return [_make_conflict(
        ConflictType.OVERTIME_EXCEEDED,
        candidate,
        f"Adding this shift will exceed max weekly hours ({limit:g}h)",
        f"Total would be {total:.1f}h, {total - limit:.1f}h overtime",
        # one overtime record per staff member across a full audit
        conflict_key=f"{ConflictType.OVERTIME_EXCEEDED.value}:staff:{candidate.staff_id}",
    )]


def check_leave(
    candidate: Shift,
    other_shifts: Sequence[Shift],
    member: StaffMember,
    rooms: Sequence[Room],
) -> list[Conflict]:
    """Approved leave covering the shift date, both ends inclusive."""
    leave = next(
        (
            t for t in member.time_off
            if t.status == TimeOffStatus.APPROVED and t.covers(candidate.date)
        ),
        None,
    )
    if leave is None:
        return []

    return [_make_conflict(
        ConflictType.ON_LEAVE,
        candidate,
        f"{member.display_name} is on approved leave on this date",
        f"Leave type: {leave.type.value.replace('_', ' ')}",
    )]


def check_rest(
    candidate: Shift,
    other_shifts: Sequence[Shift],
    member: StaffMember,
    rooms: Sequence[Room],
) -> list[Conflict]:
    """
    Rest gap to the nearest shift on the previous day and on the next day,
    each checked independently (so at most two conflicts).
    """
    conflicts = []
    min_rest = min_rest_hours(member)
    own = _own_shifts(candidate, other_shifts)
    previous_day = candidate.date - timedelta(days=1)
    next_day = candidate.date + timedelta(days=1)

    before = [(rest_gap_minutes(s, candidate), s) for s in own if s.date == previous_day]
    after = [(rest_gap_minutes(candidate, s), s) for s in own if s.date == next_day]

    if before:
        gap, nearest = min(before, key=lambda item: item[0])
        rest_hours = gap / 60
        if rest_hours < min_rest:
            conflicts.append(_make_conflict(
                ConflictType.INSUFFICIENT_REST,
                candidate,
                f"Only {rest_hours:.1f}h rest from previous day shift",
                f"Minimum {min_rest:g}h rest required between shifts",
                conflict_key=conflict_id(ConflictType.INSUFFICIENT_REST, candidate.id, nearest.id),
            ))

    if after:
        gap, nearest = min(after, key=lambda item: item[0])
        rest_hours = gap / 60
        if rest_hours < min_rest:
            conflicts.append(_make_conflict(
                ConflictType.INSUFFICIENT_REST,
                candidate,
                f"Only {rest_hours:.1f}h rest before next day shift",
                f"Minimum {min_rest:g}h rest required between shifts",
                conflict_key=conflict_id(ConflictType.INSUFFICIENT_REST, candidate.id, nearest.id),
            ))

    return conflicts


def check_consecutive_days(
    candidate: Shift,
    other_shifts: Sequence[Shift],
    member: StaffMember,
    rooms: Sequence[Room],
) -> list[Conflict]:
    """Walk back and forward up to `limit` days each, counting worked days."""
    limit = max_consecutive_days(member)
    worked = {s.date for s in _own_shifts(candidate, other_shifts)}
    run = 1

    for step in range(1, limit + 1):
        if candidate.date - timedelta(days=step) not in worked:
            break
        run += 1

    for step in range(1, limit + 1):
        if candidate.date + timedelta(days=step) not in worked:
            break
        run += 1

    if run <= limit:
        return []

    return [_make_conflict(
        ConflictType.MAX_CONSECUTIVE_DAYS,
        candidate,
        f"Would exceed max {limit} consecutive work days",
        f"This would result in {run} consecutive days",
    )]


def check_avoided_room(
    candidate: Shift,
    other_shifts: Sequence[Shift],
    member: StaffMember,
    rooms: Sequence[Room],
) -> list[Conflict]:
    prefs = member.scheduling_preferences
    if not prefs or candidate.room_id not in prefs.avoid_rooms:
        return []

    room = next((r for r in rooms if r.id == candidate.room_id), None)
    room_name = room.name if room else "This room"
    return [_make_conflict(
        ConflictType.PREFERRED_ROOM_VIOLATED,
        candidate,
        f"{room_name} is in staff's avoid list",
        "Consider assigning to a different room",
    )]


# Fixed evaluation order
RULES: tuple[Evaluator, ...] = (
    check_overlap,
    check_availability,
    check_overtime,
    check_leave,
    check_rest,
    check_consecutive_days,
    check_avoided_room,
)
