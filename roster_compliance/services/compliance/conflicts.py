"""
Conflict aggregation: runs every rule over a candidate shift, or over a
whole roster for an audit, and answers publish questions.
"""

import logging
from collections import defaultdict
from typing import Optional, Sequence

from .errors import UnknownStaffMember
from .intervals import overlaps, shift_window, validate_shift
from .policy import RULE_POLICY, is_blocking
from .rules import RULES, conflict_id
from .types import (
    Conflict,
    ConflictType,
    PublishCheck,
    Room,
    RosterPublishCheck,
    Severity,
    Shift,
    ShiftStatus,
    StaffMember,
)

logger = logging.getLogger(__name__)


def _find_staff(staff: Sequence[StaffMember], staff_id: str, shift_id: Optional[str] = None) -> StaffMember:
    member = next((s for s in staff if s.id == staff_id), None)
    if member is None:
        logger.warning(f"Shift {shift_id} references unknown staff member {staff_id}")
        raise UnknownStaffMember(staff_id, shift_id)
    return member


def detect_conflicts(
    candidate: Shift,
    all_shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
    rooms: Sequence[Room],
) -> list[Conflict]:
    """
    Evaluate one candidate shift against the rest of the roster.

    The candidate is removed from `all_shifts` by id, so an edited shift is
    checked against the *other* shifts only. Rules run in fixed order and
    results are concatenated without sorting (see policy.sort_for_display).

    Raises:
        InvalidTimeFormat: a time string on the candidate (or a shift it is compared with) is malformed
        InvalidShiftDuration: a shift's paid duration is negative
        UnknownStaffMember: the candidate's staff member is not in `staff`
    """
    validate_shift(candidate)
    member = _find_staff(staff, candidate.staff_id, candidate.id)
    other_shifts = [s for s in all_shifts if s.id != candidate.id]

    conflicts = []
    for rule in RULES:
        conflicts.extend(rule(candidate, other_shifts, member, rooms))
    return conflicts


def detect_all_conflicts(
    all_shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
    rooms: Sequence[Room],
) -> list[Conflict]:
    """
    Audit every shift. Conflicts are deduplicated on id (first one wins), so
    a pair of overlapping shifts is reported once, not once per side.
    Output order follows input order and is stable across calls.
    """
    seen: dict[str, Conflict] = {}
    for shift in all_shifts:
        for conflict in detect_conflicts(shift, all_shifts, staff, rooms):
            seen.setdefault(conflict.id, conflict)

    conflicts = list(seen.values())
    logger.debug(f"Audited {len(all_shifts)} shifts: {len(conflicts)} conflicts")
    return conflicts


def partition_by_severity(conflicts: Sequence[Conflict]) -> dict[Severity, list[Conflict]]:
    partitioned: dict[Severity, list[Conflict]] = {severity: [] for severity in Severity}
    for conflict in conflicts:
        partitioned[conflict.severity].append(conflict)
    return partitioned


def detect_cross_location_conflicts(
    staff_id: str,
    all_shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
) -> list[Conflict]:
    """
    Overlap audit for a single staff member across all centres.
    Each overlapping pair on a date is reported once.
    """
    member = _find_staff(staff, staff_id)
    shifts_by_date: dict = defaultdict(list)
    for shift in all_shifts:
        if shift.staff_id == staff_id:
            shifts_by_date[shift.date].append(shift)

    policy = RULE_POLICY[ConflictType.OVERLAP]
    conflicts = []
    for shift_date, day_shifts in shifts_by_date.items():
        for i, first in enumerate(day_shifts):
            for second in day_shifts[i + 1:]:
                if not overlaps(*shift_window(first), *shift_window(second)):
                    continue
                windows = (
                    f"{first.start_time}-{first.end_time} and "
                    f"{second.start_time}-{second.end_time}"
                )
                if first.centre_id != second.centre_id:
                    message = f"Cross-location conflict: {member.display_name} has overlapping shifts at different centres"
                else:
                    message = f"{member.display_name} has overlapping shifts ({windows})"
                conflicts.append(Conflict(
                    id=conflict_id(ConflictType.OVERLAP, first.id, second.id),
                    type=ConflictType.OVERLAP,
                    severity=policy.severity,
                    shift_id=first.id,
                    staff_id=staff_id,
                    message=message,
                    details=f"Shifts overlap on {shift_date.isoformat()}: {windows}",
                    can_override=policy.can_override,
                ))
    return conflicts


def can_publish_shift(
    shift: Shift,
    all_shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
    rooms: Sequence[Room],
) -> PublishCheck:
    """A shift can be published unless it has a non-overridable error."""
    blocking = [c for c in detect_conflicts(shift, all_shifts, staff, rooms) if is_blocking(c)]
    return PublishCheck(can_publish=not blocking, blocking_conflicts=blocking)


def can_publish_roster(
    shifts: Sequence[Shift],
    centre_id: str,
    all_shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
    rooms: Sequence[Room],
) -> RosterPublishCheck:
    """Check every draft shift at one centre; evaluated against all centres' shifts."""
    blocking_shifts = []
    for shift in shifts:
        if shift.status != ShiftStatus.DRAFT or shift.centre_id != centre_id:
            continue
        check = can_publish_shift(shift, all_shifts, staff, rooms)
        if not check.can_publish:
            blocking_shifts.append((shift, check.blocking_conflicts))

    return RosterPublishCheck(can_publish=not blocking_shifts, blocking_shifts=blocking_shifts)
