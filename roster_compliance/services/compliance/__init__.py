"""
Roster compliance and cost service package.

Usage:
    from roster_compliance.services.compliance import detect_conflicts, summarize_cost

    # Check a proposed shift against the rest of the roster
    conflicts = detect_conflicts(candidate, all_shifts, staff, rooms)

    # Audit the whole roster (deduplicated)
    conflicts = detect_all_conflicts(all_shifts, staff, rooms)

    # Cost one centre's week against its budget
    summary = summarize_cost(week_shifts, staff, weekly_budget=12000, centre_id="c1")

    # Roster-store payloads go through the loader first
    from roster_compliance.services.compliance.loader import load_roster

    snapshot = load_roster(payload)
"""

from .types import (
    ConflictType,
    Severity,
    ShiftStatus,
    TimeOffStatus,
    TimeOffType,
    Shift,
    DayAvailability,
    TimeOff,
    SchedulingPreferences,
    StaffMember,
    Room,
    Conflict,
    StaffCost,
    CostSummary,
    PublishCheck,
    RosterPublishCheck,
    RosterSnapshot,
)
from .errors import (
    ComplianceError,
    InvalidTimeFormat,
    InvalidShiftDuration,
    UnknownStaffMember,
)
from .intervals import to_minutes, overlaps, effective_hours, paid_hours
from .policy import RULE_POLICY, is_blocking, sort_for_display
from .conflicts import (
    detect_conflicts,
    detect_all_conflicts,
    detect_cross_location_conflicts,
    partition_by_severity,
    can_publish_shift,
    can_publish_roster,
)
from .costing import summarize_cost, summarize_cost_by_centre, staff_cost_breakdown

__all__ = [
    # Types
    "ConflictType",
    "Severity",
    "ShiftStatus",
    "TimeOffStatus",
    "TimeOffType",
    "Shift",
    "DayAvailability",
    "TimeOff",
    "SchedulingPreferences",
    "StaffMember",
    "Room",
    "Conflict",
    "StaffCost",
    "CostSummary",
    "PublishCheck",
    "RosterPublishCheck",
    "RosterSnapshot",
    # Errors
    "ComplianceError",
    "InvalidTimeFormat",
    "InvalidShiftDuration",
    "UnknownStaffMember",
    # Main entry points
    "detect_conflicts",
    "detect_all_conflicts",
    "summarize_cost",
    # Lower-level functions
    "detect_cross_location_conflicts",
    "partition_by_severity",
    "can_publish_shift",
    "can_publish_roster",
    "summarize_cost_by_centre",
    "staff_cost_breakdown",
    "to_minutes",
    "overlaps",
    "effective_hours",
    "paid_hours",
    "RULE_POLICY",
    "is_blocking",
    "sort_for_display",
]
