import math
import pytest
from dataclasses import replace

from roster_compliance.services.compliance.errors import InvalidShiftDuration, UnknownStaffMember
from roster_compliance.services.compliance.costing import (
    staff_cost_breakdown,
    summarize_cost,
    summarize_cost_by_centre,
)

from conftest import make_shift, week_of_shifts


@pytest.fixture
def forty_two_hours() -> list:
    # six 7h shifts for Alice (max 38h, $30 / $45 overtime)
    return week_of_shifts("s1", 6, start="09:00", end="16:00")


class TestStaffCostBreakdown:

    def test_splits_regular_and_overtime(self, alice, forty_two_hours):
        [row] = staff_cost_breakdown(forty_two_hours, [alice])
        assert row.hours == 42
        assert row.regular_hours == 38
        assert row.overtime_hours == 4
        assert row.regular_cost == 1140
        assert row.overtime_cost == 180

    def test_order_of_first_appearance(self, alice, bob):
        shifts = [make_shift("b", staff_id="s2"), make_shift("a", staff_id="s1", start="18:00", end="20:00")]
        assert [row.staff_id for row in staff_cost_breakdown(shifts, [alice, bob])] == ["s2", "s1"]

    def test_missing_max_uses_default(self, alice, forty_two_hours):
        member = replace(alice, max_hours_per_week=None)
        [row] = staff_cost_breakdown(forty_two_hours, [member])
        assert row.regular_hours == 38


class TestSummarizeCost:

    def test_regular_and_overtime_example(self, alice, forty_two_hours):
        summary = summarize_cost(forty_two_hours, [alice], weekly_budget=1500)
        assert summary.regular_cost == 1140
        assert summary.overtime_cost == 180
        assert summary.total_cost == 1320
        assert summary.variance == -180
        assert summary.percent_used == pytest.approx(88.0)
        assert summary.total_hours == 42.0
        assert summary.staff_count == 1
        assert summary.is_over_budget is False
        assert summary.is_near_budget is False

    def test_near_budget(self, alice, forty_two_hours):
        summary = summarize_cost(forty_two_hours, [alice], weekly_budget=1400)
        assert summary.is_near_budget is True
        assert summary.is_over_budget is False

    def test_exactly_on_budget_is_not_near_or_over(self, alice, forty_two_hours):
        summary = summarize_cost(forty_two_hours, [alice], weekly_budget=1320)
        assert summary.percent_used == 100
        assert summary.is_near_budget is False
        assert summary.is_over_budget is False

    def test_percent_capped_but_variance_not(self, alice, forty_two_hours):
        summary = summarize_cost(forty_two_hours, [alice], weekly_budget=500)
        assert summary.percent_used == 150
        assert summary.variance == 820
        assert summary.is_over_budget is True
        assert summary.is_near_budget is False

    def test_zero_budget_does_not_blow_up(self, alice, forty_two_hours):
        summary = summarize_cost(forty_two_hours, [alice], weekly_budget=0)
        assert summary.percent_used == 0
        assert math.isfinite(summary.percent_used)
        assert summary.variance == 1320
        assert summary.is_over_budget is True

    def test_empty_roster(self, alice):
        summary = summarize_cost([], [alice], weekly_budget=1000)
        assert summary.total_cost == 0
        assert summary.staff_count == 0
        assert summary.variance == -1000

    def test_agency_cost_kept_out_of_total(self, alice, agency_carol):
        shifts = [
            make_shift("a", staff_id="s1", start="09:00", end="17:00"),  # 8h @ 30
            make_shift("c", staff_id="s3", start="08:00", end="18:00"),  # 10h @ 50
        ]
        summary = summarize_cost(shifts, [alice, agency_carol], weekly_budget=1000)
        assert summary.agency_cost == 500
        assert summary.total_cost == summary.regular_cost + summary.overtime_cost == 740
        assert summary.variance == -260

    def test_agency_cost_at_full_rate_without_bands(self, agency_carol):
        shifts = week_of_shifts("s3", 5, start="08:00", end="17:00")  # 45h
        summary = summarize_cost(shifts, [agency_carol], weekly_budget=5000)
        assert summary.agency_cost == 45 * 50
        assert summary.overtime_cost == 7 * 75

    def test_centre_filter(self, alice, bob):
        shifts = [
            make_shift("a", staff_id="s1", centre_id="c1"),
            make_shift("b", staff_id="s2", centre_id="c2"),
        ]
        summary = summarize_cost(shifts, [alice, bob], weekly_budget=1000, centre_id="c2")
        assert summary.total_cost == 8 * 28
        assert summary.staff_count == 1

    def test_currency_rounds_half_up(self, alice):
        member = replace(alice, hourly_rate=30.5)
        summary = summarize_cost([make_shift("a", start="09:00", end="10:00")], [member], weekly_budget=100)
        assert summary.regular_cost == 31

    def test_hours_round_to_one_decimal(self, alice):
        shift = make_shift("a", start="09:00", end="17:00", break_minutes=20)
        summary = summarize_cost([shift], [alice], weekly_budget=1000)
        assert summary.total_hours == 7.7

    def test_unknown_staff_fails(self, alice):
        with pytest.raises(UnknownStaffMember):
            summarize_cost([make_shift("a", staff_id="ghost")], [alice], weekly_budget=1000)

    def test_negative_duration_fails(self, alice):
        with pytest.raises(InvalidShiftDuration):
            summarize_cost([make_shift("a", start="17:00", end="09:00")], [alice], weekly_budget=1000)

    def test_overnight_shift_costed(self, alice):
        shift = make_shift("a", start="22:00", end="06:00", overnight=True)
        summary = summarize_cost([shift], [alice], weekly_budget=1000)
        assert summary.total_hours == 8.0
        assert summary.regular_cost == 240


class TestSummarizeCostByCentre:

    def test_one_summary_per_centre(self, alice, bob):
        shifts = [
            make_shift("a", staff_id="s1", centre_id="c1"),
            make_shift("b", staff_id="s2", centre_id="c2"),
        ]
        summaries = summarize_cost_by_centre(shifts, [alice, bob], {"c1": 200})

        assert list(summaries) == ["c1", "c2"]
        assert summaries["c1"].total_cost == 240
        assert summaries["c1"].is_over_budget is True
        # no budget configured for c2
        assert summaries["c2"].percent_used == 0
