"""Opportunity cost of spending: what the money would grow into if invested."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from truewage.core.engine import CalculationResults
from truewage.utils.exceptions import InvalidInputError

DEFAULT_REAL_RETURN = 0.07  # long-run equity return after inflation
SAFE_WITHDRAWAL_RATE = 0.04

SpendPeriod = Literal["once", "month", "year"]
_PAYMENTS_PER_YEAR: dict[str, int] = {"once": 0, "month": 12, "year": 1}


@dataclass(frozen=True)
class OpportunityCostResult:
    """Future value of money spent today instead of invested."""

    today_cost: float
    future_value: float
    growth_multiplier: float
    years_to_grow: float
    annual_retirement_income: float
    hours_of_life: float | None = None


def calculate_opportunity_cost(
    amount: float,
    years: float,
    annual_return: float = DEFAULT_REAL_RETURN,
    true_hourly_rate: float | None = None,
    period: SpendPeriod = "once",
    withdrawal_rate: float = SAFE_WITHDRAWAL_RATE,
) -> OpportunityCostResult:
    """Value a spend as the investment it displaces.

    A one-off spend compounds for ``years``. A recurring spend is treated as
    a stream of annual contributions (ordinary annuity); ``today_cost`` is
    then the total paid over the horizon.

    Args:
        amount: Spend per occurrence.
        years: Investment horizon; zero or negative means no growth.
        annual_return: Assumed annual return.
        true_hourly_rate: If positive, converts ``today_cost`` into hours worked.
        period: ``"once"``, ``"month"`` or ``"year"``.
        withdrawal_rate: Used to turn the future value into retirement income.

    Returns:
        OpportunityCostResult.
    """
    if amount < 0:
        raise InvalidInputError("amount", "must be non-negative")
    if annual_return <= -1:
        raise InvalidInputError("annual_return", "must be greater than -1")
    if period not in _PAYMENTS_PER_YEAR:
        raise InvalidInputError("period", f"unknown period {period!r}")

    years = max(0.0, years)
    growth = (1 + annual_return) ** years

    if period == "once":
        today_cost = amount
        future_value = amount * growth
    else:
        annual = amount * _PAYMENTS_PER_YEAR[period]
        today_cost = annual * years
        if annual_return == 0:
            future_value = today_cost
        else:
            future_value = annual * (growth - 1) / annual_return

    growth_multiplier = future_value / today_cost if today_cost > 0 else 1.0
    hours = today_cost / true_hourly_rate if true_hourly_rate and true_hourly_rate > 0 else None

    return OpportunityCostResult(
        today_cost=today_cost,
        future_value=future_value,
        growth_multiplier=growth_multiplier,
        years_to_grow=years,
        annual_retirement_income=future_value * withdrawal_rate,
        hours_of_life=hours,
    )


def opportunity_cost_for_results(
    amount: float,
    results: CalculationResults,
    current_age: int,
    retire_age: int,
    annual_return: float = DEFAULT_REAL_RETURN,
    period: SpendPeriod = "once",
) -> OpportunityCostResult:
    """Opportunity cost to retirement, priced in hours at the true hourly rate."""
    return calculate_opportunity_cost(
        amount,
        years=retire_age - current_age,
        annual_return=annual_return,
        true_hourly_rate=results.true_hourly_rate,
        period=period,
    )
