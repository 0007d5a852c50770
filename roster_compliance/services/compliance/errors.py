"""
Errors raised by the compliance engine.
Malformed input fails fast; nothing is repaired silently.
"""

from typing import Optional


class ComplianceError(Exception):
    pass


class InvalidTimeFormat(ComplianceError, ValueError):
    """A time string is not a valid 24h "HH:MM" value."""

    def __init__(self, value: object, shift_id: Optional[str] = None):
        self.value = value
        self.shift_id = shift_id
        where = f" on shift {shift_id}" if shift_id else ""
        super().__init__(f"Invalid time {value!r}{where}, expected HH:MM")


class InvalidShiftDuration(ComplianceError):
    """Paid duration is negative, usually an end before start without the overnight flag."""

    def __init__(self, shift_id: str, hours: float):
        self.shift_id = shift_id
        self.hours = hours
        super().__init__(
            f"Shift {shift_id} has negative paid duration ({hours:.2f}h); "
            f"end time is before start time and the shift is not marked overnight"
        )


class UnknownStaffMember(ComplianceError):
    def __init__(self, staff_id: str, shift_id: Optional[str] = None):
        self.staff_id = staff_id
        self.shift_id = shift_id
        where = f" referenced by shift {shift_id}" if shift_id else ""
        super().__init__(f"Unknown staff member {staff_id}{where}")
