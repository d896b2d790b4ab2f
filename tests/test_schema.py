"""Tests for tax schedule and input validation."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from truewage.config.defaults import available_tax_years, load_tax_schedule
from truewage.config.schema import CalculationInputs, parse_inputs, parse_tax_schedule
from truewage.io.yaml_loader import list_package_tables, load_package_yaml, load_yaml
from truewage.utils.exceptions import ConfigError, InvalidInputError


@pytest.fixture
def raw_schedule() -> dict[str, Any]:
    return copy.deepcopy(load_package_yaml("taxes/tables/uk_2025_26.yaml"))


class TestTaxSchedule:
    def test_bundled_schedule_loads(self) -> None:
        schedule = load_tax_schedule("2025_26")
        assert schedule.tax_year == "2025/26"
        assert schedule.personal_allowance == 12570
        assert len(schedule.regions["england"].bands) == 4
        assert len(schedule.regions["scotland"].bands) == 7
        assert schedule.student_loans["postgrad"].rate == 0.06

    def test_terminal_band_is_unbounded(self) -> None:
        schedule = load_tax_schedule()
        assert schedule.regions["england"].bands[-1].threshold is None
        assert schedule.regions["england"].top_rate == 0.45
        assert schedule.regions["scotland"].top_rate == 0.48

    def test_taper_end(self) -> None:
        assert load_tax_schedule().taper_end == 125_140

    def test_available_years(self) -> None:
        assert "2025_26" in available_tax_years()

    def test_unknown_year(self) -> None:
        with pytest.raises(ConfigError):
            load_tax_schedule("1999_00")

    def test_schedule_is_frozen(self) -> None:
        schedule = load_tax_schedule()
        with pytest.raises(Exception):
            schedule.personal_allowance = 0  # type: ignore[misc]

    def test_non_increasing_thresholds_rejected(self, raw_schedule: dict[str, Any]) -> None:
        raw_schedule["regions"]["england"][2] = [40_000, 0.40]
        with pytest.raises(ConfigError, match="strictly increasing"):
            parse_tax_schedule(raw_schedule)

    def test_missing_terminal_band_rejected(self, raw_schedule: dict[str, Any]) -> None:
        raw_schedule["regions"]["england"][-1] = [200_000, 0.45]
        with pytest.raises(ConfigError, match="unbounded"):
            parse_tax_schedule(raw_schedule)

    def test_unbounded_band_must_be_last(self, raw_schedule: dict[str, Any]) -> None:
        raw_schedule["regions"]["england"].insert(1, [None, 0.20])
        with pytest.raises(ConfigError):
            parse_tax_schedule(raw_schedule)

    def test_first_band_must_match_allowance(self, raw_schedule: dict[str, Any]) -> None:
        raw_schedule["regions"]["scotland"][0] = [12_000, 0.0]
        with pytest.raises(ConfigError, match="personal allowance"):
            parse_tax_schedule(raw_schedule)

    def test_missing_loan_plan_rejected(self, raw_schedule: dict[str, Any]) -> None:
        del raw_schedule["student_loans"]["plan5"]
        with pytest.raises(ConfigError, match="plan5"):
            parse_tax_schedule(raw_schedule)

    def test_ni_limits_ordered(self, raw_schedule: dict[str, Any]) -> None:
        raw_schedule["national_insurance"]["upper_earnings_limit"] = 10_000
        with pytest.raises(ConfigError):
            parse_tax_schedule(raw_schedule)


class TestYamlTables:
    def test_bundled_tables_listed(self) -> None:
        assert "uk_2025_26" in list_package_tables()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_yaml(tmp_path / "uk_1999_00.yaml")

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("personal_allowance: [12570\n")
        with pytest.raises(ConfigError, match="malformed"):
            load_yaml(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 12570\n- 50270\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_yaml(path)


class TestInputs:
    def test_defaults_fill_optional_fields(self) -> None:
        inputs = parse_inputs({"salary": 30_000, "contract_hours": 40})
        assert inputs.tax_region == "england"
        assert inputs.student_loan == "none"
        assert inputs.work_days == 5
        assert inputs.holiday_days == 28

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("salary", -1),
            ("contract_hours", 0),
            ("pension_percent", 101),
            ("pension_percent", -1),
            ("commute_minutes", -5),
            ("work_days", 0),
            ("holiday_days", -1),
            ("stress_tax", -100),
            ("tax_region", "wales"),
            ("student_loan", "plan3"),
        ],
    )
    def test_invalid_field_identified(self, field: str, value: Any) -> None:
        data: dict[str, Any] = {"salary": 30_000, "contract_hours": 37.5, field: value}
        with pytest.raises(InvalidInputError) as exc_info:
            parse_inputs(data)
        assert exc_info.value.field == field

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            parse_inputs({"salary": 30_000, "contract_hours": 37.5, "bonus": 1_000})
        assert exc_info.value.field == "bonus"

    def test_unvalidated_copy_is_rechecked(self, inputs: CalculationInputs) -> None:
        bad = inputs.model_copy(update={"salary": -10})
        with pytest.raises(InvalidInputError) as exc_info:
            parse_inputs(bad)
        assert exc_info.value.field == "salary"

    def test_invalid_input_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_inputs({"salary": -1, "contract_hours": 37.5})
