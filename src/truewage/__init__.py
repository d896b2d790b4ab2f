"""truewage: UK true hourly wage engine."""

__version__ = "0.1.0"

from truewage.analytics.fire import FireProgress as FireProgress
from truewage.analytics.fire import calculate_fire_progress as calculate_fire_progress
from truewage.analytics.opportunity import OpportunityCostResult as OpportunityCostResult
from truewage.analytics.opportunity import calculate_opportunity_cost as calculate_opportunity_cost
from truewage.analytics.whatif import WhatIfScenario as WhatIfScenario
from truewage.analytics.whatif import calculate_what_if as calculate_what_if
from truewage.analytics.whatif import run_what_if_scenarios as run_what_if_scenarios
from truewage.config.defaults import default_inputs as default_inputs
from truewage.config.defaults import default_tax_schedule as default_tax_schedule
from truewage.config.defaults import load_tax_schedule as load_tax_schedule
from truewage.config.schema import CalculationInputs as CalculationInputs
from truewage.config.schema import TaxScheduleConfig as TaxScheduleConfig
from truewage.config.schema import parse_inputs as parse_inputs
from truewage.core.deductions import TaxBreakdown as TaxBreakdown
from truewage.core.engine import CalculationResults as CalculationResults
from truewage.core.engine import compute as compute
from truewage.core.hours import TimeBreakdown as TimeBreakdown
