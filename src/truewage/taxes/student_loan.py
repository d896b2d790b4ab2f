"""Student loan repayments (Plans 1, 2, 4, 5 and Postgraduate)."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from truewage.config.schema import (
    STUDENT_LOAN_PLANS,
    LoanPlanConfig,
    StudentLoanPlan,
    TaxScheduleConfig,
)
from truewage.utils.exceptions import InvalidInputError


class StudentLoanCalculator:
    """Flat rate on salary above the selected plan's threshold.

    Exactly one plan applies; ``"none"`` repays nothing at any salary.
    """

    def __init__(self, config: TaxScheduleConfig, plan: StudentLoanPlan) -> None:
        if plan not in STUDENT_LOAN_PLANS:
            raise InvalidInputError("student_loan", f"unknown plan {plan!r}")
        self.plan = plan
        self._plan_config: LoanPlanConfig | None = (
            None if plan == "none" else config.student_loans[plan]
        )

    def amount(self, salary: float) -> float:
        plan = self._plan_config
        if plan is None or salary <= plan.threshold:
            return 0.0
        return (salary - plan.threshold) * plan.rate

    def amount_vectorized(
        self,
        salaries: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        plan = self._plan_config
        if plan is None:
            return np.zeros_like(salaries, dtype=float)
        result: NDArray[np.floating[Any]] = np.maximum(salaries - plan.threshold, 0.0) * plan.rate
        return result

    def marginal_rate(self, salary: float) -> float:
        plan = self._plan_config
        if plan is None or salary < plan.threshold:
            return 0.0
        return plan.rate
