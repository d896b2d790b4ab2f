"""FIRE (Financial Independence, Retire Early) progress tracking."""

from __future__ import annotations

from dataclasses import dataclass, field

from truewage.core.engine import CalculationResults
from truewage.utils.exceptions import InvalidInputError

DEFAULT_EXPENSE_MULTIPLE = 25.0  # the 4% rule
DEFAULT_YEARS_TO_FI = 15
DEFAULT_ANNUAL_RETURN = 0.07

# (lower bound of percent complete, zone name, colour), ascending
FIRE_ZONES: list[tuple[float, str, str]] = [
    (0.0, "Starting Out", "#ef4444"),
    (25.0, "Building", "#f59e0b"),
    (50.0, "Halfway", "#eab308"),
    (75.0, "Almost There", "#84cc16"),
    (100.0, "Financially Independent", "#10b981"),
]


@dataclass(frozen=True)
class Milestone:
    """A named net-worth target on the way to FI."""

    name: str
    target: float
    icon: str


@dataclass(frozen=True)
class FireProgress:
    """Progress toward a FIRE number."""

    fire_number: float
    percent_complete: float
    amount_remaining: float
    savings_rate_needed: float  # % of annual expenses saved per year
    current_passive_income: float
    zone: str
    zone_color: str
    milestones: list[Milestone] = field(default_factory=list)
    achieved_milestones: list[Milestone] = field(default_factory=list)
    next_milestone: Milestone | None = None


def build_milestones(fire_number: float) -> list[Milestone]:
    """Milestone ladder ordered by target.

    Round sums plus fractions of the FIRE number; with a small FIRE number the
    fractional milestones sort ahead of the round sums.
    """
    ladder = [
        Milestone(name="First £10K", target=10_000, icon="🌱"),
        Milestone(name="£25K", target=25_000, icon="📈"),
        Milestone(name="£50K", target=50_000, icon="🎯"),
        Milestone(name="£100K", target=100_000, icon="💪"),
        Milestone(name="Coast FI", target=fire_number * 0.5, icon="⛵"),
        Milestone(name="Lean FI", target=fire_number * 0.75, icon="🏃"),
        Milestone(name="Full FI", target=fire_number, icon="🎉"),
    ]
    return sorted(ladder, key=lambda m: m.target)


def classify_zone(percent_complete: float) -> tuple[str, str]:
    """Return ``(zone, colour)`` for a percent-complete figure."""
    zone, color = FIRE_ZONES[0][1], FIRE_ZONES[0][2]
    for lower, name, zone_color in FIRE_ZONES:
        if percent_complete >= lower:
            zone, color = name, zone_color
    return zone, color


def annual_expenses_from_results(results: CalculationResults, savings_rate: float = 0.0) -> float:
    """Estimate annual spending as disposable income not saved.

    Args:
        results: A computed true-wage result.
        savings_rate: Fraction of disposable income saved (0-1).
    """
    if not 0 <= savings_rate < 1:
        raise InvalidInputError("savings_rate", "must be in [0, 1)")
    return max(0.0, results.disposable_income * (1 - savings_rate))


def calculate_fire_progress(
    net_worth: float,
    annual_expenses: float,
    expense_multiple: float = DEFAULT_EXPENSE_MULTIPLE,
    years_to_fi: int = DEFAULT_YEARS_TO_FI,
    annual_return: float = DEFAULT_ANNUAL_RETURN,
) -> FireProgress:
    """Measure progress toward financial independence.

    ``savings_rate_needed`` is the level annual saving (as % of expenses)
    that, with the current pot compounding at ``annual_return``, reaches the
    FIRE number in ``years_to_fi`` years.

    Args:
        net_worth: Current invested net worth.
        annual_expenses: Annual spending to replace.
        expense_multiple: FIRE number as a multiple of expenses (25 = 4% rule).
        years_to_fi: Horizon for the savings-rate estimate.
        annual_return: Assumed real annual return.

    Returns:
        FireProgress with zone, milestones and the savings estimate.
    """
    if annual_expenses <= 0:
        raise InvalidInputError("annual_expenses", "must be positive")
    if expense_multiple <= 0:
        raise InvalidInputError("expense_multiple", "must be positive")
    if years_to_fi <= 0:
        raise InvalidInputError("years_to_fi", "must be positive")
    if annual_return <= -1:
        raise InvalidInputError("annual_return", "must be greater than -1")

    fire_number = annual_expenses * expense_multiple
    percent_complete = min(100.0, net_worth / fire_number * 100)
    amount_remaining = max(0.0, fire_number - net_worth)
    current_passive_income = net_worth / expense_multiple

    growth = (1 + annual_return) ** years_to_fi
    shortfall = fire_number - net_worth * growth
    if shortfall <= 0:
        annual_saving = 0.0
    elif annual_return == 0:
        annual_saving = shortfall / years_to_fi
    else:
        annual_saving = shortfall * annual_return / (growth - 1)
    savings_rate_needed = max(0.0, annual_saving / annual_expenses * 100)

    milestones = build_milestones(fire_number)
    achieved = [m for m in milestones if m.target <= net_worth]
    upcoming = [m for m in milestones if m.target > net_worth]
    zone, zone_color = classify_zone(percent_complete)

    return FireProgress(
        fire_number=fire_number,
        percent_complete=percent_complete,
        amount_remaining=amount_remaining,
        savings_rate_needed=savings_rate_needed,
        current_passive_income=current_passive_income,
        zone=zone,
        zone_color=zone_color,
        milestones=milestones,
        achieved_milestones=achieved,
        next_milestone=upcoming[0] if upcoming else None,
    )


def fire_progress_for_results(
    results: CalculationResults,
    net_worth: float,
    savings_rate: float = 0.0,
    expense_multiple: float = DEFAULT_EXPENSE_MULTIPLE,
) -> FireProgress:
    """FIRE progress with expenses derived from a true-wage result."""
    expenses = annual_expenses_from_results(results, savings_rate)
    return calculate_fire_progress(net_worth, expenses, expense_multiple=expense_multiple)
