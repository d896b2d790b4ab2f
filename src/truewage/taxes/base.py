"""Base protocol for salary deduction calculators."""

from __future__ import annotations

from typing import Any, Protocol

import numpy as np
from numpy.typing import NDArray


class DeductionCalculator(Protocol):
    """Protocol for a deduction levied on annual salary."""

    def amount(self, salary: float) -> float:
        """Annual deduction owed on ``salary``."""
        ...

    def amount_vectorized(
        self,
        salaries: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Vectorized deduction across an array of salaries.

        Args:
            salaries: (n,) annual salaries.

        Returns:
            (n,) deduction owed per salary.
        """
        ...

    def marginal_rate(self, salary: float) -> float:
        """Rate paid on the next pound above ``salary``.

        Thresholds are lower-bound inclusive: a salary sitting exactly on a
        threshold gets the rate of the band that starts there.
        """
        ...
