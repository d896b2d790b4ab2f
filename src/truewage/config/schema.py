"""Pydantic v2 configuration and input models for truewage."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from truewage.utils.exceptions import ConfigError, InvalidInputError

TaxRegion = Literal["england", "scotland"]
StudentLoanPlan = Literal["none", "plan1", "plan2", "plan4", "plan5", "postgrad"]
LoanPlanName = Literal["plan1", "plan2", "plan4", "plan5", "postgrad"]

TAX_REGIONS: tuple[str, ...] = get_args(TaxRegion)
STUDENT_LOAN_PLANS: tuple[str, ...] = get_args(StudentLoanPlan)
LOAN_PLAN_NAMES: tuple[str, ...] = get_args(LoanPlanName)


class TaxBand(BaseModel):
    """One slice of a progressive schedule.

    ``threshold`` is the gross-income upper bound of the band; ``None`` marks
    the terminal, unbounded band.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    threshold: float | None = Field(default=None, gt=0)
    rate: float = Field(ge=0, le=1)


class BandSchedule(BaseModel):
    """Ordered band list for one tax region, validated once at load time."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    bands: tuple[TaxBand, ...] = Field(min_length=2)

    @model_validator(mode="before")
    @classmethod
    def _from_pairs(cls, data: Any) -> Any:
        # YAML tables store bands as [upper_bound, rate] pairs
        if isinstance(data, (list, tuple)):
            bands = []
            for item in data:
                if isinstance(item, (list, tuple)):
                    threshold, rate = item
                    bands.append({"threshold": threshold, "rate": rate})
                else:
                    bands.append(item)
            return {"bands": bands}
        return data

    @model_validator(mode="after")
    def _validate_bands(self) -> BandSchedule:
        if self.bands[-1].threshold is not None:
            raise ValueError("final band must be unbounded (threshold null)")
        previous = 0.0
        for i, band in enumerate(self.bands[:-1]):
            if band.threshold is None:
                raise ValueError(f"band {i} is unbounded but is not the final band")
            if band.threshold <= previous:
                raise ValueError(
                    f"band thresholds must be strictly increasing, "
                    f"got {band.threshold} after {previous}"
                )
            previous = band.threshold
        return self

    @property
    def top_rate(self) -> float:
        return self.bands[-1].rate


class NIConfig(BaseModel):
    """Class 1 employee National Insurance thresholds and rates."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    primary_threshold: float = Field(ge=0)
    upper_earnings_limit: float = Field(gt=0)
    main_rate: float = Field(ge=0, le=1)
    upper_rate: float = Field(ge=0, le=1)

    @model_validator(mode="after")
    def _validate_thresholds(self) -> NIConfig:
        if self.upper_earnings_limit <= self.primary_threshold:
            raise ValueError("upper_earnings_limit must be greater than primary_threshold")
        return self


class LoanPlanConfig(BaseModel):
    """Repayment threshold and flat rate for one student-loan plan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    threshold: float = Field(ge=0)
    rate: float = Field(ge=0, le=1)


class TaxScheduleConfig(BaseModel):
    """A full UK tax-year schedule: allowance, regional bands, NI and loans."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: str
    personal_allowance: float = Field(ge=0)
    personal_allowance_taper_threshold: float = Field(ge=0)
    regions: dict[TaxRegion, BandSchedule]
    national_insurance: NIConfig
    student_loans: dict[LoanPlanName, LoanPlanConfig]

    @model_validator(mode="after")
    def _validate_schedule(self) -> TaxScheduleConfig:
        missing_regions = set(TAX_REGIONS) - set(self.regions)
        if missing_regions:
            raise ValueError(f"missing band schedules for regions: {sorted(missing_regions)}")
        missing_plans = set(LOAN_PLAN_NAMES) - set(self.student_loans)
        if missing_plans:
            raise ValueError(f"missing student loan plans: {sorted(missing_plans)}")
        for region, schedule in self.regions.items():
            first = schedule.bands[0]
            if first.rate != 0 or first.threshold != self.personal_allowance:
                raise ValueError(
                    f"{region}: first band must be the 0% personal allowance band "
                    f"ending at {self.personal_allowance}"
                )
        return self

    @property
    def taper_end(self) -> float:
        """Salary at which the personal allowance is fully withdrawn."""
        return self.personal_allowance_taper_threshold + 2 * self.personal_allowance


class CalculationInputs(BaseModel):
    """Employment inputs for a single true-wage computation.

    ``commute_cost``, ``work_clothes`` and ``stress_tax`` are annual amounts.
    Minute fields are per working day.
    """

    model_config = ConfigDict(extra="forbid")

    salary: float = Field(ge=0, description="Gross annual salary")
    tax_region: TaxRegion = "england"
    student_loan: StudentLoanPlan = "none"
    pension_percent: float = Field(default=0.0, ge=0, le=100)
    contract_hours: float = Field(gt=0, le=168, description="Contracted hours per week")
    commute_minutes: float = Field(default=0.0, ge=0, description="Round-trip commute per day")
    unpaid_break_minutes: float = Field(default=0.0, ge=0, description="Unpaid break per day")
    prep_minutes: float = Field(default=0.0, ge=0, description="Unpaid prep time per day")
    work_days: float = Field(default=5.0, gt=0, le=7)
    holiday_days: float = Field(default=28.0, ge=0)
    commute_cost: float = Field(default=0.0, ge=0)
    work_clothes: float = Field(default=0.0, ge=0)
    stress_tax: float = Field(default=0.0, ge=0)


def _first_error(exc: ValidationError, default: str) -> tuple[str, str]:
    err = exc.errors()[0]
    field = ".".join(str(part) for part in err["loc"]) or default
    return field, err["msg"]


def parse_inputs(data: CalculationInputs | Mapping[str, Any]) -> CalculationInputs:
    """Validate raw or already-built inputs.

    Models built through ``model_copy(update=...)`` or ``model_construct``
    skip validation, so instances are re-validated from their dump.

    Raises:
        InvalidInputError: Naming the first offending field.
    """
    raw = data.model_dump() if isinstance(data, CalculationInputs) else dict(data)
    try:
        return CalculationInputs.model_validate(raw)
    except ValidationError as exc:
        field, message = _first_error(exc, "inputs")
        raise InvalidInputError(field, message) from exc


def parse_tax_schedule(data: Mapping[str, Any]) -> TaxScheduleConfig:
    """Validate a raw tax schedule mapping.

    Raises:
        ConfigError: If the schedule is malformed.
    """
    try:
        return TaxScheduleConfig.model_validate(dict(data))
    except ValidationError as exc:
        field, message = _first_error(exc, "schedule")
        raise ConfigError(f"invalid tax schedule at {field}: {message}") from exc
