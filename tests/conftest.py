"""Shared test fixtures."""

from __future__ import annotations

import pytest

from truewage.config.defaults import default_inputs, default_tax_schedule
from truewage.config.schema import CalculationInputs, TaxScheduleConfig


@pytest.fixture
def schedule() -> TaxScheduleConfig:
    """2025/26 tax schedule."""
    return default_tax_schedule()


@pytest.fixture
def inputs() -> CalculationInputs:
    """£35k England employee from the default template."""
    return default_inputs()
