"""Annualised working time, paid and unpaid."""

from __future__ import annotations

from dataclasses import dataclass

from truewage.utils.exceptions import DegenerateComputationError

WEEKS_PER_YEAR = 52


@dataclass(frozen=True)
class TimeBreakdown:
    """Weekly and annual hours derived from working-time inputs.

    Attributes:
        weekly_contract_hours: Contracted (paid) hours per week.
        weekly_commute_hours: Commute hours per week.
        weekly_break_hours: Unpaid break hours per week.
        weekly_prep_hours: Unpaid prep hours per week.
        weekly_total_hours: Paid plus unpaid hours per week.
        annual_contract_hours: Paid hours per year.
        annual_total_hours: All work-related hours per year.
        working_weeks: ``52 - holiday_days / work_days`` (may be fractional).
    """

    weekly_contract_hours: float
    weekly_commute_hours: float
    weekly_break_hours: float
    weekly_prep_hours: float
    weekly_total_hours: float
    annual_contract_hours: float
    annual_total_hours: float
    working_weeks: float

    @classmethod
    def from_inputs(
        cls,
        contract_hours: float,
        commute_minutes: float,
        unpaid_break_minutes: float,
        prep_minutes: float,
        work_days: float,
        holiday_days: float,
    ) -> TimeBreakdown:
        """Create a TimeBreakdown from weekly hours and per-day minutes.

        Raises:
            DegenerateComputationError: If holidays consume the whole year.
        """
        working_weeks = WEEKS_PER_YEAR - holiday_days / work_days
        if working_weeks <= 0:
            raise DegenerateComputationError(
                f"working weeks resolves to {working_weeks:.2f}; "
                f"{holiday_days} holiday days at {work_days} days/week leaves no working time"
            )

        commute = commute_minutes * work_days / 60
        unpaid_break = unpaid_break_minutes * work_days / 60
        prep = prep_minutes * work_days / 60
        weekly_total = contract_hours + commute + unpaid_break + prep

        return cls(
            weekly_contract_hours=contract_hours,
            weekly_commute_hours=commute,
            weekly_break_hours=unpaid_break,
            weekly_prep_hours=prep,
            weekly_total_hours=weekly_total,
            annual_contract_hours=contract_hours * working_weeks,
            annual_total_hours=weekly_total * working_weeks,
            working_weeks=working_weeks,
        )

    @property
    def weekly_unpaid_hours(self) -> float:
        return self.weekly_total_hours - self.weekly_contract_hours

    @property
    def annual_unpaid_hours(self) -> float:
        return self.annual_total_hours - self.annual_contract_hours
