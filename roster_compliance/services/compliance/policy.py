"""
Severity and override policy per conflict type, plus presentation ordering.
"""

from dataclasses import dataclass
from typing import Iterable

from .types import Conflict, ConflictType, Severity


@dataclass(frozen=True)
class RulePolicy:
    severity: Severity
    can_override: bool


# Evaluation order; also the secondary sort key for display.
RULE_ORDER: tuple[ConflictType, ...] = (
    ConflictType.OVERLAP,
    ConflictType.OUTSIDE_AVAILABILITY,
    ConflictType.OVERTIME_EXCEEDED,
    ConflictType.ON_LEAVE,
    ConflictType.INSUFFICIENT_REST,
    ConflictType.MAX_CONSECUTIVE_DAYS,
    ConflictType.PREFERRED_ROOM_VIOLATED,
)

RULE_POLICY: dict[ConflictType, RulePolicy] = {
    ConflictType.OVERLAP: RulePolicy(Severity.ERROR, can_override=False),
    # shift runs outside a declared window on an available day
    ConflictType.OUTSIDE_AVAILABILITY: RulePolicy(Severity.WARNING, can_override=True),
    ConflictType.OVERTIME_EXCEEDED: RulePolicy(Severity.WARNING, can_override=True),
    ConflictType.ON_LEAVE: RulePolicy(Severity.ERROR, can_override=False),
    ConflictType.INSUFFICIENT_REST: RulePolicy(Severity.WARNING, can_override=True),
    ConflictType.MAX_CONSECUTIVE_DAYS: RulePolicy(Severity.WARNING, can_override=True),
    ConflictType.PREFERRED_ROOM_VIOLATED: RulePolicy(Severity.WARNING, can_override=True),
}

# Staff marked unavailable for the whole day: an error a scheduler may still override.
UNAVAILABLE_DAY_POLICY = RulePolicy(Severity.ERROR, can_override=True)

SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1}


def is_blocking(conflict: Conflict) -> bool:
    """Blocking = error that cannot be overridden (prevents publish/save)."""
    return conflict.severity == Severity.ERROR and not conflict.can_override


def sort_for_display(conflicts: Iterable[Conflict]) -> list[Conflict]:
    """
    Errors before warnings, then by rule order. Stable, so conflicts of the
    same severity and type keep their evaluation order.
    """
    rule_rank = {t: i for i, t in enumerate(RULE_ORDER)}
    return sorted(
        conflicts,
        key=lambda c: (SEVERITY_RANK[c.severity], rule_rank[c.type]),
    )
