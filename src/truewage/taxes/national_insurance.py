"""Class 1 employee National Insurance."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from truewage.config.schema import NIConfig


class NationalInsuranceCalculator:
    """Two-tier NI on gross pay: main rate to the UEL, upper rate above it.

    NI has no personal-allowance interaction and no regional variation.
    """

    def __init__(self, config: NIConfig) -> None:
        self._config = config

    def amount(self, salary: float) -> float:
        ni = self._config
        if salary <= ni.primary_threshold:
            return 0.0
        main_slice = min(salary, ni.upper_earnings_limit) - ni.primary_threshold
        upper_slice = max(0.0, salary - ni.upper_earnings_limit)
        return main_slice * ni.main_rate + upper_slice * ni.upper_rate

    def amount_vectorized(
        self,
        salaries: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        ni = self._config
        main_slice = np.clip(salaries, ni.primary_threshold, ni.upper_earnings_limit)
        main_slice = main_slice - ni.primary_threshold
        upper_slice = np.maximum(salaries - ni.upper_earnings_limit, 0.0)
        result: NDArray[np.floating[Any]] = (
            main_slice * ni.main_rate + upper_slice * ni.upper_rate
        )
        return result

    def marginal_rate(self, salary: float) -> float:
        ni = self._config
        if salary < ni.primary_threshold:
            return 0.0
        if salary < ni.upper_earnings_limit:
            return ni.main_rate
        return ni.upper_rate
