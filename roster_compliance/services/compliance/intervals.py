"""
Time interval utilities shared by the rule evaluators and the cost calculator.
Times are local "HH:MM" strings; intervals are half-open [start, end) in minutes.
"""

import logging
import re
from datetime import date
from typing import Optional

from .errors import InvalidShiftDuration, InvalidTimeFormat
from .types import Shift

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


def to_minutes(value: str, shift_id: Optional[str] = None) -> int:
    """Parse "HH:MM" into minutes since midnight, in [0, 1440)."""
    match = _TIME_RE.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeFormat(value, shift_id)
    return int(match.group(1)) * 60 + int(match.group(2))


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Check if two half-open minute ranges intersect. Touching ends do not overlap."""
    return start_a < end_b and start_b < end_a


def shift_window(shift: Shift) -> tuple[int, int]:
    """Minutes from the shift's own midnight; overnight ends land past 1440."""
    start = to_minutes(shift.start_time, shift.id)
    end = to_minutes(shift.end_time, shift.id)
    if shift.overnight:
        end += MINUTES_PER_DAY
    return start, end


def effective_hours(shift: Shift) -> float:
    """
    Paid hours: (end - start - break) / 60.
    Not clamped: a negative result is a data-quality problem for the caller.
    """
    start, end = shift_window(shift)
    return (end - start - shift.break_minutes) / 60


def paid_hours(shift: Shift) -> float:
    """effective_hours, raising InvalidShiftDuration instead of returning a negative."""
    hours = effective_hours(shift)
    if hours < 0:
        logger.warning(f"Shift {shift.id} has negative paid duration: {hours:.2f}h")
        raise InvalidShiftDuration(shift.id, hours)
    return hours


def validate_shift(shift: Shift) -> None:
    """Fail fast on unparseable times or a negative duration."""
    paid_hours(shift)


def rest_gap_minutes(earlier: Shift, later: Shift) -> int:
    """
    Minutes between the end of `earlier` and the start of `later`,
    measured across calendar days. For plain shifts on consecutive days this
    is (1440 - earlier_end) + later_start. Negative means they overlap.
    """
    _, earlier_end = shift_window(earlier)
    later_start, _ = shift_window(later)
    day_offset = (later.date - earlier.date).days * MINUTES_PER_DAY
    return day_offset + later_start - earlier_end


def day_of_week(day: date) -> int:
    """0 = Sunday ... 6 = Saturday, matching the roster store."""
    return day.isoweekday() % 7
