from .base import RosterModel


class CostSummaryResponse(RosterModel):
    regular_cost: int
    overtime_cost: int
    total_cost: int
    agency_cost: int
    variance: int
    percent_used: float
    total_hours: float
    staff_count: int
    is_over_budget: bool
    is_near_budget: bool
