"""Core true-wage engine: inputs and a tax schedule in, results out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from truewage import __version__
from truewage.config.schema import (
    CalculationInputs,
    TaxRegion,
    TaxScheduleConfig,
    parse_inputs,
)
from truewage.core.deductions import TaxBreakdown, calculate_all_deductions
from truewage.core.hours import TimeBreakdown
from truewage.utils.exceptions import DegenerateComputationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationResults:
    """Output of a single true-wage computation.

    Recomputed from inputs on every call; never mutated.
    """

    true_hourly_rate: float
    assumed_hourly_rate: float
    tax_breakdown: TaxBreakdown
    time_breakdown: TimeBreakdown
    annual_work_costs: float
    stress_tax: float
    region: TaxRegion
    salary: float
    percent_of_assumed: float
    tax_year: str = ""
    engine_version: str = ""

    @property
    def disposable_income(self) -> float:
        """Net salary after work costs and the stress tax."""
        return self.tax_breakdown.net_salary - self.annual_work_costs - self.stress_tax


def synthesize(
    tax_breakdown: TaxBreakdown,
    time_breakdown: TimeBreakdown,
    annual_work_costs: float,
    stress_tax: float,
    region: TaxRegion,
    tax_year: str = "",
) -> CalculationResults:
    """Combine deductions and hours into the headline hourly rates.

    Raises:
        DegenerateComputationError: If annual hours resolve to zero.
    """
    if time_breakdown.annual_total_hours <= 0 or time_breakdown.annual_contract_hours <= 0:
        raise DegenerateComputationError(
            f"annual hours resolve to {time_breakdown.annual_total_hours:.2f}; "
            "cannot compute an hourly rate"
        )

    gross = tax_breakdown.gross_salary
    disposable = tax_breakdown.net_salary - annual_work_costs - stress_tax
    true_rate = disposable / time_breakdown.annual_total_hours
    assumed_rate = gross / time_breakdown.annual_contract_hours
    percent_of_assumed = true_rate / assumed_rate * 100 if assumed_rate > 0 else 0.0

    return CalculationResults(
        true_hourly_rate=true_rate,
        assumed_hourly_rate=assumed_rate,
        tax_breakdown=tax_breakdown,
        time_breakdown=time_breakdown,
        annual_work_costs=annual_work_costs,
        stress_tax=stress_tax,
        region=region,
        salary=gross,
        percent_of_assumed=percent_of_assumed,
        tax_year=tax_year,
        engine_version=__version__,
    )


def compute(
    inputs: CalculationInputs | Mapping[str, Any],
    config: TaxScheduleConfig,
) -> CalculationResults:
    """Run the full true-wage pipeline.

    Args:
        inputs: Employment inputs. Mappings and unvalidated models are
            validated before anything is computed.
        config: Tax-year schedule; always passed explicitly.

    Returns:
        CalculationResults with both hourly rates and the two breakdowns.

    Raises:
        InvalidInputError: If any input field is out of range.
        DegenerateComputationError: If the inputs leave no working time.
    """
    inputs = parse_inputs(inputs)

    tax_breakdown = calculate_all_deductions(
        inputs.salary,
        inputs.tax_region,
        inputs.student_loan,
        inputs.pension_percent,
        config,
    )
    logger.debug(
        "deductions for %.2f (%s): tax=%.2f ni=%.2f loan=%.2f net=%.2f",
        inputs.salary,
        inputs.tax_region,
        tax_breakdown.income_tax,
        tax_breakdown.national_insurance,
        tax_breakdown.student_loan,
        tax_breakdown.net_salary,
    )

    time_breakdown = TimeBreakdown.from_inputs(
        inputs.contract_hours,
        inputs.commute_minutes,
        inputs.unpaid_break_minutes,
        inputs.prep_minutes,
        inputs.work_days,
        inputs.holiday_days,
    )
    logger.debug(
        "hours: %.1f contract / %.1f total over %.2f weeks",
        time_breakdown.annual_contract_hours,
        time_breakdown.annual_total_hours,
        time_breakdown.working_weeks,
    )

    results = synthesize(
        tax_breakdown,
        time_breakdown,
        annual_work_costs=inputs.commute_cost + inputs.work_clothes,
        stress_tax=inputs.stress_tax,
        region=inputs.tax_region,
        tax_year=config.tax_year,
    )
    logger.debug(
        "true hourly rate %.4f vs assumed %.4f",
        results.true_hourly_rate,
        results.assumed_hourly_rate,
    )
    return results
