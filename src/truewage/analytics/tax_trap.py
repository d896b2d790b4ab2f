"""Personal-allowance taper ("60% trap") detection."""

from __future__ import annotations

from dataclasses import dataclass

from truewage.config.schema import TaxScheduleConfig
from truewage.core.engine import CalculationResults
from truewage.taxes.income_tax import IncomeTaxCalculator


@dataclass(frozen=True)
class TaxTrapWarning:
    """Cost of sitting inside the personal-allowance taper."""

    taxable_salary: float
    allowance_lost: float
    extra_tax: float
    marginal_rate: float
    sacrifice_to_escape: float  # further pension sacrifice needed to reach the taper threshold


def check_tax_trap(
    results: CalculationResults,
    config: TaxScheduleConfig,
) -> TaxTrapWarning | None:
    """Report the taper cost when the post-pension salary is inside the taper.

    The taper runs from the taper threshold (exclusive) to the point where
    the allowance is fully withdrawn (inclusive). Outside that range returns
    None.
    """
    breakdown = results.tax_breakdown
    taxable_salary = breakdown.taxable_salary
    threshold = config.personal_allowance_taper_threshold
    if not threshold < taxable_salary <= config.taper_end:
        return None

    calc = IncomeTaxCalculator(config, results.region)
    allowance_lost = config.personal_allowance - calc.personal_allowance(taxable_salary)
    full_allowance_tax = calc.tax_on_taxable(taxable_salary - config.personal_allowance)
    extra_tax = calc.amount(taxable_salary) - full_allowance_tax

    return TaxTrapWarning(
        taxable_salary=taxable_salary,
        allowance_lost=allowance_lost,
        extra_tax=extra_tax,
        marginal_rate=calc.marginal_rate(taxable_salary),
        sacrifice_to_escape=taxable_salary - threshold,
    )
