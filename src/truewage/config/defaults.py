"""Default tax schedule and input templates for truewage."""

from __future__ import annotations

import logging
from functools import lru_cache

from truewage.config.schema import CalculationInputs, TaxScheduleConfig, parse_tax_schedule
from truewage.io.yaml_loader import list_package_tables, load_package_yaml
from truewage.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TAX_YEAR = "2025_26"


def available_tax_years() -> list[str]:
    """Tax years with a bundled schedule, e.g. ``["2025_26"]``."""
    return [name.removeprefix("uk_") for name in list_package_tables() if name.startswith("uk_")]


@lru_cache(maxsize=None)
def load_tax_schedule(tax_year: str = DEFAULT_TAX_YEAR) -> TaxScheduleConfig:
    """Load and validate a bundled tax schedule.

    The returned model is frozen, so one instance is shared per tax year.

    Args:
        tax_year: Table key such as ``"2025_26"``.

    Raises:
        ConfigError: If no table exists for ``tax_year`` or it fails validation.
    """
    if tax_year not in available_tax_years():
        raise ConfigError(
            f"no tax schedule for {tax_year!r}; available: {available_tax_years()}"
        )
    logger.debug("loading tax schedule %s", tax_year)
    return parse_tax_schedule(load_package_yaml(f"taxes/tables/uk_{tax_year}.yaml"))


def default_tax_schedule() -> TaxScheduleConfig:
    """Schedule for the current tax year (2025/26)."""
    return load_tax_schedule(DEFAULT_TAX_YEAR)


def default_inputs() -> CalculationInputs:
    """Default inputs: £35k England employee, 37.5h week, 56-minute commute."""
    return CalculationInputs(
        salary=35_000,
        tax_region="england",
        student_loan="none",
        pension_percent=5,
        contract_hours=37.5,
        commute_minutes=56,
        unpaid_break_minutes=30,
        prep_minutes=30,
        work_days=5,
        holiday_days=28,
        commute_cost=0,
        work_clothes=0,
        stress_tax=0,
    )


# --- Quick Start Templates ---


def graduate_inputs() -> CalculationInputs:
    """Recent graduate on Plan 2 with a long rail commute."""
    return CalculationInputs(
        salary=32_000,
        tax_region="england",
        student_loan="plan2",
        pension_percent=5,
        contract_hours=37.5,
        commute_minutes=90,
        unpaid_break_minutes=30,
        prep_minutes=20,
        work_days=5,
        holiday_days=25,
        commute_cost=3_600,
        work_clothes=400,
    )


def scottish_professional_inputs() -> CalculationInputs:
    """Scottish taxpayer in the higher band with a Plan 4 loan."""
    return CalculationInputs(
        salary=60_000,
        tax_region="scotland",
        student_loan="plan4",
        pension_percent=6,
        contract_hours=37.5,
        commute_minutes=50,
        unpaid_break_minutes=30,
        prep_minutes=15,
        work_days=5,
        holiday_days=30,
        commute_cost=1_800,
    )


def taper_zone_inputs() -> CalculationInputs:
    """£110k earner inside the personal-allowance taper."""
    return CalculationInputs(
        salary=110_000,
        tax_region="england",
        student_loan="none",
        pension_percent=5,
        contract_hours=40,
        commute_minutes=80,
        unpaid_break_minutes=30,
        prep_minutes=30,
        work_days=5,
        holiday_days=28,
        commute_cost=5_000,
        work_clothes=1_000,
        stress_tax=5_000,
    )
