"""
Cost rollup for a slice of the roster (typically one centre, one week).

Hours per staff member are split into regular and overtime bands at their
weekly maximum. Agency cost is a separate pass at full hourly rate and is
reported alongside total_cost, never folded into it.
"""

import logging
import math
from typing import Mapping, Optional, Sequence

from roster_compliance.core.config import settings

from .errors import UnknownStaffMember
from .intervals import paid_hours
from .rules import max_weekly_hours
from .types import CostSummary, Shift, StaffCost, StaffMember

logger = logging.getLogger(__name__)


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _staff_lookup(staff: Sequence[StaffMember]) -> dict[str, StaffMember]:
    return {s.id: s for s in staff}


def _member_for(lookup: dict[str, StaffMember], shift: Shift) -> StaffMember:
    member = lookup.get(shift.staff_id)
    if member is None:
        logger.warning(f"Shift {shift.id} references unknown staff member {shift.staff_id}")
        raise UnknownStaffMember(shift.staff_id, shift.id)
    return member


def staff_cost_breakdown(
    shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
) -> list[StaffCost]:
    """Per-staff hours and cost bands, in order of first appearance. Unrounded."""
    lookup = _staff_lookup(staff)
    hours_by_staff: dict[str, float] = {}

    for shift in shifts:
        _member_for(lookup, shift)
        hours_by_staff[shift.staff_id] = hours_by_staff.get(shift.staff_id, 0.0) + paid_hours(shift)

    breakdown = []
    for staff_id, hours in hours_by_staff.items():
        member = lookup[staff_id]
        limit = max_weekly_hours(member)
        regular_hours = min(hours, limit)
        overtime_hours = max(0.0, hours - limit)
        breakdown.append(StaffCost(
            staff_id=staff_id,
            hours=hours,
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            regular_cost=regular_hours * member.hourly_rate,
            overtime_cost=overtime_hours * member.overtime_rate,
            agency=member.agency,
        ))
    return breakdown


def summarize_cost(
    shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
    weekly_budget: float,
    centre_id: Optional[str] = None,
) -> CostSummary:
    """
    Roll up regular/overtime/agency cost and budget usage.

    Args:
        shifts: shifts to cost; narrowed to `centre_id` when given
        staff: staff directory slice covering every shift's staff_id
        weekly_budget: budget to compare total_cost against
        centre_id: optional centre filter

    Returns:
        CostSummary with currency rounded half-up to whole units and
        total_hours to one decimal. percent_used is capped (150 by default)
        and is 0 for a zero budget; variance is not capped.

    Raises:
        UnknownStaffMember: a shift references staff missing from `staff`
        InvalidShiftDuration: a shift has negative paid duration
    """
    if centre_id is not None:
        shifts = [s for s in shifts if s.centre_id == centre_id]

    breakdown = staff_cost_breakdown(shifts, staff)
    regular_cost = sum(row.regular_cost for row in breakdown)
    overtime_cost = sum(row.overtime_cost for row in breakdown)
    total_hours = sum(row.hours for row in breakdown)

    # separate full pass: agency staff billed at full rate, no bands
    lookup = _staff_lookup(staff)
    agency_cost = 0.0
    for shift in shifts:
        member = _member_for(lookup, shift)
        if member.agency:
            agency_cost += paid_hours(shift) * member.hourly_rate

    total_cost = regular_cost + overtime_cost
    variance = total_cost - weekly_budget
    if weekly_budget > 0:
        percent = total_cost / weekly_budget * 100
    else:
        percent = 0.0
    percent_used = min(settings.PERCENT_USED_CAP, percent)

    logger.debug(
        f"Costed {len(shifts)} shifts for centre {centre_id or 'ALL'}: "
        f"total={total_cost:.2f} budget={weekly_budget} used={percent_used:.1f}%"
    )

    return CostSummary(
        regular_cost=int(_round_half_up(regular_cost)),
        overtime_cost=int(_round_half_up(overtime_cost)),
        total_cost=int(_round_half_up(total_cost)),
        agency_cost=int(_round_half_up(agency_cost)),
        variance=int(_round_half_up(variance)),
        percent_used=percent_used,
        total_hours=_round_half_up(total_hours, 1),
        staff_count=len(breakdown),
        is_over_budget=total_cost > weekly_budget,
        is_near_budget=settings.NEAR_BUDGET_PERCENT <= percent_used < 100,
    )


def summarize_cost_by_centre(
    shifts: Sequence[Shift],
    staff: Sequence[StaffMember],
    budgets: Mapping[str, float],
) -> dict[str, CostSummary]:
    """
    One summary per centre. Centres in `budgets` come first, then any centre
    that has shifts but no budget (costed against a budget of 0).
    """
    centre_ids = list(budgets)
    for shift in shifts:
        if shift.centre_id not in centre_ids:
            centre_ids.append(shift.centre_id)

    return {
        centre_id: summarize_cost(shifts, staff, budgets.get(centre_id, 0), centre_id=centre_id)
        for centre_id in centre_ids
    }
