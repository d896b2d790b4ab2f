"""Tests for annualised working time."""

from __future__ import annotations

import pytest

from truewage.core.hours import TimeBreakdown
from truewage.utils.exceptions import DegenerateComputationError


class TestTimeBreakdown:
    def test_reference_week(self) -> None:
        t = TimeBreakdown.from_inputs(37.5, 56, 30, 30, 5, 28)
        assert t.working_weeks == pytest.approx(46.4)
        assert t.weekly_commute_hours == pytest.approx(56 * 5 / 60)
        assert t.weekly_break_hours == pytest.approx(2.5)
        assert t.weekly_prep_hours == pytest.approx(2.5)
        assert t.weekly_total_hours == pytest.approx(37.5 + 56 * 5 / 60 + 5)
        assert t.annual_contract_hours == pytest.approx(1_740.0)
        assert t.annual_total_hours == pytest.approx(t.weekly_total_hours * 46.4)

    def test_fractional_working_weeks(self) -> None:
        t = TimeBreakdown.from_inputs(30, 0, 0, 0, 4, 25)
        assert t.working_weeks == pytest.approx(52 - 25 / 4)

    def test_total_at_least_contract(self) -> None:
        t = TimeBreakdown.from_inputs(40, 10, 15, 5, 5, 20)
        assert t.annual_total_hours > t.annual_contract_hours
        assert t.annual_unpaid_hours == pytest.approx(t.weekly_unpaid_hours * t.working_weeks)

    def test_equal_when_no_unpaid_time(self) -> None:
        t = TimeBreakdown.from_inputs(37.5, 0, 0, 0, 5, 28)
        assert t.annual_total_hours == t.annual_contract_hours

    def test_any_unpaid_minute_breaks_equality(self) -> None:
        for minutes in ((1, 0, 0), (0, 1, 0), (0, 0, 1)):
            t = TimeBreakdown.from_inputs(37.5, *minutes, 5, 28)
            assert t.annual_total_hours > t.annual_contract_hours

    def test_holidays_fill_the_year(self) -> None:
        with pytest.raises(DegenerateComputationError):
            TimeBreakdown.from_inputs(37.5, 0, 0, 0, 5, 260)

    def test_holidays_exceed_the_year(self) -> None:
        with pytest.raises(DegenerateComputationError):
            TimeBreakdown.from_inputs(37.5, 0, 0, 0, 1, 60)
