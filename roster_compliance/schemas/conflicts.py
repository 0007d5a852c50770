from typing import Optional

from roster_compliance.services.compliance.types import ConflictType, Severity

from .base import RosterModel


class ConflictResponse(RosterModel):
    id: str
    type: ConflictType
    severity: Severity
    shift_id: str
    staff_id: str
    message: str
    details: Optional[str] = None
    can_override: bool
