"""What-if scenarios: re-run the full pipeline with perturbed inputs."""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from truewage.config.schema import CalculationInputs, TaxScheduleConfig, parse_inputs
from truewage.core.engine import CalculationResults, compute
from truewage.utils.exceptions import DegenerateComputationError, InvalidInputError

logger = logging.getLogger(__name__)

_ChangeBuilder = Callable[[CalculationInputs], dict[str, Any]]


@dataclass(frozen=True)
class ScenarioSpec:
    """A labelled set of input overrides."""

    label: str
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WhatIfScenario:
    """True hourly rate under a scenario, relative to the baseline."""

    label: str
    true_hourly_rate: float
    difference: float
    percent_change: float
    results: CalculationResults = field(repr=False, compare=False)


@dataclass
class WhatIfReport:
    """Baseline plus every requested scenario, in request order."""

    baseline: CalculationResults
    scenarios: list[WhatIfScenario] = field(default_factory=list)


def _wfh(office_share: float) -> _ChangeBuilder:
    def build(inputs: CalculationInputs) -> dict[str, Any]:
        return {
            "commute_minutes": inputs.commute_minutes * office_share,
            "commute_cost": inputs.commute_cost * office_share,
        }

    return build


def _raise(pct: float) -> _ChangeBuilder:
    def build(inputs: CalculationInputs) -> dict[str, Any]:
        return {"salary": inputs.salary * (1 + pct)}

    return build


def _switch_region(inputs: CalculationInputs) -> dict[str, Any]:
    return {"tax_region": "scotland" if inputs.tax_region == "england" else "england"}


def _pension_up(inputs: CalculationInputs) -> dict[str, Any]:
    return {"pension_percent": min(100.0, inputs.pension_percent + 5)}


# name -> (label, change builder)
PRESET_SCENARIOS: dict[str, tuple[str, _ChangeBuilder]] = {
    "wfh2": ("WFH 2 days/week", _wfh(0.6)),
    "wfh3": ("WFH 3 days/week", _wfh(0.4)),
    "raise10": ("10% raise", _raise(0.10)),
    "raise20": ("20% raise", _raise(0.20)),
    "switch_region": ("Other tax region", _switch_region),
    "pension_plus5": ("Pension +5 points", _pension_up),
}


def preset_scenario(name: str, inputs: CalculationInputs) -> ScenarioSpec:
    """Build a named preset scenario against ``inputs``."""
    if name not in PRESET_SCENARIOS:
        raise InvalidInputError(
            "scenario", f"unknown preset {name!r}; expected one of {sorted(PRESET_SCENARIOS)}"
        )
    label, build = PRESET_SCENARIOS[name]
    return ScenarioSpec(label=label, changes=build(inputs))


def perturb_inputs(inputs: CalculationInputs, changes: dict[str, Any]) -> CalculationInputs:
    """Apply overrides and re-validate; unknown fields are rejected."""
    return parse_inputs({**inputs.model_dump(), **changes})


def compare_to_baseline(
    label: str,
    scenario: CalculationResults,
    baseline: CalculationResults,
) -> WhatIfScenario:
    """Difference and percent change of the true hourly rate.

    Percent change is measured against ``abs(baseline)`` so its sign always
    follows the direction of the difference.

    Raises:
        DegenerateComputationError: If the baseline true hourly rate is zero.
    """
    base_rate = baseline.true_hourly_rate
    if base_rate == 0:
        raise DegenerateComputationError("baseline true hourly rate is zero")
    difference = scenario.true_hourly_rate - base_rate
    return WhatIfScenario(
        label=label,
        true_hourly_rate=scenario.true_hourly_rate,
        difference=difference,
        percent_change=difference / abs(base_rate) * 100,
        results=scenario,
    )


def calculate_what_if(
    inputs: CalculationInputs,
    config: TaxScheduleConfig,
    label: str,
    baseline: CalculationResults | None = None,
    **changes: Any,
) -> WhatIfScenario:
    """Run one scenario with ``changes`` applied to ``inputs``.

    Example::

        calculate_what_if(inputs, config, "Scotland", tax_region="scotland")
    """
    if baseline is None:
        baseline = compute(inputs, config)
    scenario = compute(perturb_inputs(inputs, changes), config)
    return compare_to_baseline(label, scenario, baseline)


def _run_one(inputs: CalculationInputs, config: TaxScheduleConfig) -> CalculationResults:
    """Top-level function so it is picklable for ProcessPoolExecutor."""
    return compute(inputs, config)


def run_what_if_scenarios(
    inputs: CalculationInputs,
    config: TaxScheduleConfig,
    scenarios: Sequence[str | ScenarioSpec] | None = None,
    max_workers: int | None = 1,
) -> WhatIfReport:
    """Evaluate several scenarios against one baseline.

    Every scenario is an independent full computation, so results do not
    depend on evaluation order or on ``max_workers``.

    Args:
        inputs: Baseline inputs.
        config: Tax-year schedule.
        scenarios: Preset names and/or ScenarioSpec objects. If None, runs
            all presets.
        max_workers: ``1`` (default) runs sequentially; anything else uses a
            process pool (``None`` uses all available cores).

    Returns:
        WhatIfReport with scenarios in request order.
    """
    baseline = compute(inputs, config)

    if scenarios is None:
        scenarios = list(PRESET_SCENARIOS)
    specs = [preset_scenario(s, inputs) if isinstance(s, str) else s for s in scenarios]
    # Validate every scenario before running any
    jobs = [(spec.label, perturb_inputs(inputs, spec.changes)) for spec in specs]
    logger.debug("running %d what-if scenarios (max_workers=%s)", len(jobs), max_workers)

    if max_workers == 1:
        outcomes = [_run_one(job_inputs, config) for _, job_inputs in jobs]
    else:
        with concurrent.futures.ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(_run_one, job_inputs, config) for _, job_inputs in jobs]
            outcomes = [future.result() for future in futures]

    report = WhatIfReport(baseline=baseline)
    for (label, _), outcome in zip(jobs, outcomes, strict=True):
        report.scenarios.append(compare_to_baseline(label, outcome, baseline))
    return report
