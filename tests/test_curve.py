"""Tests for vectorized salary sweeps."""

from __future__ import annotations

import numpy as np
import pytest

from truewage.analytics.curve import deductions_curve, salary_grid
from truewage.config.schema import TaxScheduleConfig
from truewage.core.deductions import calculate_all_deductions
from truewage.utils.exceptions import InvalidInputError


class TestSalaryGrid:
    def test_inclusive(self) -> None:
        grid = salary_grid(0, 100, 10)
        assert len(grid) == 11
        assert grid[0] == 0
        assert grid[-1] == 100

    def test_bad_step(self) -> None:
        with pytest.raises(InvalidInputError):
            salary_grid(0, 100, 0)


class TestDeductionsCurve:
    def test_matches_scalar_pipeline(self, schedule: TaxScheduleConfig) -> None:
        salaries = [0, 20_000, 35_000, 60_000, 110_000, 160_000]
        curve = deductions_curve(salaries, "england", "plan2", 5, schedule)
        for i, salary in enumerate(salaries):
            b = calculate_all_deductions(salary, "england", "plan2", 5, schedule)
            assert curve.income_tax[i] == pytest.approx(b.income_tax, abs=0.01)
            assert curve.national_insurance[i] == pytest.approx(b.national_insurance, abs=0.01)
            assert curve.student_loan[i] == pytest.approx(b.student_loan, abs=0.01)
            assert curve.net_salary[i] == pytest.approx(b.net_salary, abs=0.05)

    def test_ni_monotonic(self, schedule: TaxScheduleConfig) -> None:
        curve = deductions_curve(salary_grid(0, 250_000, 500), "england", "none", 0, schedule)
        assert np.all(np.diff(curve.national_insurance) >= 0)

    def test_net_pay_never_falls(self, schedule: TaxScheduleConfig) -> None:
        curve = deductions_curve(salary_grid(0, 250_000, 500), "scotland", "plan1", 0, schedule)
        assert np.all(np.diff(curve.net_salary) > 0)

    def test_taper_zone_take_home(self, schedule: TaxScheduleConfig) -> None:
        curve = deductions_curve(salary_grid(102_000, 120_000, 2_000), "england", "none", 0, schedule)
        np.testing.assert_allclose(curve.take_home_per_extra_pound(), 0.38, atol=1e-9)

    def test_take_home_above_taper(self, schedule: TaxScheduleConfig) -> None:
        curve = deductions_curve(salary_grid(130_000, 160_000, 5_000), "england", "none", 0, schedule)
        np.testing.assert_allclose(curve.take_home_per_extra_pound(), 0.53, atol=1e-9)

    def test_balances(self, schedule: TaxScheduleConfig) -> None:
        curve = deductions_curve(salary_grid(0, 200_000, 5_000), "england", "postgrad", 8, schedule)
        np.testing.assert_allclose(curve.net_salary + curve.total_deductions, curve.salaries)

    def test_effective_rate_zero_salary(self, schedule: TaxScheduleConfig) -> None:
        curve = deductions_curve([0, 50_000], "england", "none", 0, schedule)
        rates = curve.effective_rates()
        assert rates[0] == 0.0
        assert 0 < rates[1] < 1

    def test_negative_salary(self, schedule: TaxScheduleConfig) -> None:
        with pytest.raises(InvalidInputError):
            deductions_curve([-1, 10_000], "england", "none", 0, schedule)
