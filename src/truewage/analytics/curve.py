"""Vectorized salary sweeps of tax, NI, student loan and net pay."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from truewage.config.schema import StudentLoanPlan, TaxRegion, TaxScheduleConfig
from truewage.taxes.income_tax import IncomeTaxCalculator
from truewage.taxes.national_insurance import NationalInsuranceCalculator
from truewage.taxes.student_loan import StudentLoanCalculator
from truewage.utils.exceptions import InvalidInputError


@dataclass
class DeductionsCurve:
    """Deductions evaluated across a salary grid. All arrays have shape (n,)."""

    salaries: NDArray[np.floating[Any]]
    pension: NDArray[np.floating[Any]]
    income_tax: NDArray[np.floating[Any]]
    national_insurance: NDArray[np.floating[Any]]
    student_loan: NDArray[np.floating[Any]]
    net_salary: NDArray[np.floating[Any]]

    @property
    def total_deductions(self) -> NDArray[np.floating[Any]]:
        result: NDArray[np.floating[Any]] = (
            self.pension + self.income_tax + self.national_insurance + self.student_loan
        )
        return result

    def effective_rates(self) -> NDArray[np.floating[Any]]:
        """Total deductions over gross; 0 where gross is 0."""
        safe = np.where(self.salaries > 0, self.salaries, 1.0)
        result: NDArray[np.floating[Any]] = np.where(
            self.salaries > 0, self.total_deductions / safe, 0.0
        )
        return result

    def take_home_per_extra_pound(self) -> NDArray[np.floating[Any]]:
        """Finite-difference share of each step of salary kept as net pay, shape (n-1,)."""
        result: NDArray[np.floating[Any]] = np.diff(self.net_salary) / np.diff(self.salaries)
        return result


def deductions_curve(
    salaries: NDArray[np.floating[Any]] | list[float],
    region: TaxRegion,
    student_loan_plan: StudentLoanPlan,
    pension_percent: float,
    config: TaxScheduleConfig,
) -> DeductionsCurve:
    """Evaluate deductions for every salary in ``salaries`` at once.

    Uses the same calculators as the scalar pipeline, without penny rounding.

    Args:
        salaries: (n,) gross annual salaries, non-negative.
        region: Income tax region.
        student_loan_plan: Active repayment plan, or ``"none"``.
        pension_percent: Salary-sacrifice pension rate, 0-100.
        config: Tax-year schedule.
    """
    gross = np.asarray(salaries, dtype=float)
    if gross.ndim != 1:
        raise InvalidInputError("salaries", "must be a one-dimensional sequence")
    if np.any(gross < 0):
        raise InvalidInputError("salaries", "must be non-negative")
    if not 0 <= pension_percent <= 100:
        raise InvalidInputError("pension_percent", "must be between 0 and 100")

    pension = gross * pension_percent / 100
    working = gross - pension

    income_tax = IncomeTaxCalculator(config, region).amount_vectorized(working)
    ni = NationalInsuranceCalculator(config.national_insurance).amount_vectorized(working)
    loan = StudentLoanCalculator(config, student_loan_plan).amount_vectorized(working)

    return DeductionsCurve(
        salaries=gross,
        pension=pension,
        income_tax=income_tax,
        national_insurance=ni,
        student_loan=loan,
        net_salary=gross - pension - income_tax - ni - loan,
    )


def salary_grid(start: float, stop: float, step: float) -> NDArray[np.floating[Any]]:
    """Inclusive salary grid from ``start`` to ``stop``."""
    if step <= 0:
        raise InvalidInputError("step", "must be positive")
    if stop < start:
        raise InvalidInputError("stop", "must not be below start")
    n = int(np.floor((stop - start) / step)) + 1
    result: NDArray[np.floating[Any]] = start + step * np.arange(n, dtype=float)
    return result
