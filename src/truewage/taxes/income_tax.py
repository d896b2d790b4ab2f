"""UK income tax with personal-allowance taper and regional bands."""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from truewage.config.schema import TAX_REGIONS, BandSchedule, TaxRegion, TaxScheduleConfig
from truewage.utils.exceptions import InvalidInputError

# Each extra pound inside the taper withdraws 50p of allowance, so the next
# pound of salary adds 1.5 pounds of taxable income.
TAPER_MARGINAL_MULTIPLIER = 1.5


def rebase_bands(
    schedule: BandSchedule,
    allowance: float,
    taper_end: float = math.inf,
) -> list[tuple[float, float, float]]:
    """Convert gross-income bands into ``(lower, upper, rate)`` on taxable income.

    Bounds below ``taper_end`` are shifted down by the statutory personal
    allowance and the 0% allowance band drops out. Bounds at or above
    ``taper_end`` are only reachable once the allowance is fully withdrawn,
    so they already are taxable-income bounds and stay as they are.
    """
    brackets: list[tuple[float, float, float]] = []
    lower = 0.0
    for band in schedule.bands:
        if band.threshold is None:
            upper = math.inf
        elif band.threshold >= taper_end:
            upper = band.threshold
        else:
            upper = max(0.0, band.threshold - allowance)
        if upper > lower:
            brackets.append((lower, upper, band.rate))
            lower = upper
    return brackets


class IncomeTaxCalculator:
    """Income tax for one region of a tax-year schedule.

    Taxable income is salary less the effective (tapered) personal allowance;
    the region's bands are then applied to taxable income measured from zero.
    """

    def __init__(self, config: TaxScheduleConfig, region: TaxRegion) -> None:
        if region not in TAX_REGIONS:
            raise InvalidInputError("tax_region", f"unknown region {region!r}")
        self.region = region
        self._allowance = config.personal_allowance
        self._taper_threshold = config.personal_allowance_taper_threshold
        self._taper_end = config.taper_end
        self._brackets = rebase_bands(
            config.regions[region], config.personal_allowance, config.taper_end
        )

    def personal_allowance(self, salary: float) -> float:
        """Allowance after the £1-per-£2 taper above the taper threshold."""
        if salary <= self._taper_threshold:
            return self._allowance
        reduction = math.floor((salary - self._taper_threshold) / 2)
        return max(0.0, self._allowance - reduction)

    def tax_on_taxable(self, taxable_income: float) -> float:
        """Apply the re-based bands to income already net of allowance."""
        if taxable_income <= 0:
            return 0.0
        tax = 0.0
        for lower, upper, rate in self._brackets:
            if taxable_income <= lower:
                break
            tax += (min(taxable_income, upper) - lower) * rate
        return tax

    def taxable_income(self, salary: float) -> float:
        return max(0.0, salary - self.personal_allowance(salary))

    def amount(self, salary: float) -> float:
        return self.tax_on_taxable(self.taxable_income(salary))

    def amount_vectorized(
        self,
        salaries: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        salaries = np.asarray(salaries, dtype=float)
        reduction = np.floor(np.maximum(salaries - self._taper_threshold, 0.0) / 2)
        allowance = np.maximum(self._allowance - reduction, 0.0)
        taxable = np.maximum(salaries - allowance, 0.0)
        tax: NDArray[np.floating[Any]] = np.zeros_like(salaries)
        for lower, upper, rate in self._brackets:
            tax += (np.clip(taxable, lower, upper) - lower) * rate
        return tax

    def band_rate(self, taxable_income: float) -> float:
        """Statutory rate of the band containing ``taxable_income``."""
        for _, upper, rate in self._brackets:
            if taxable_income < upper:
                return rate
        return self._brackets[-1][2]

    def marginal_rate(self, salary: float) -> float:
        """Effective income tax rate on the next pound, including taper drag."""
        allowance = self.personal_allowance(salary)
        if salary < allowance:
            return 0.0
        rate = self.band_rate(salary - allowance)
        if self._taper_threshold <= salary < self._taper_end:
            rate *= TAPER_MARGINAL_MULTIPLIER
        return rate
