"""CLI entry point for truewage."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click

from truewage import __version__
from truewage.analytics.curve import deductions_curve, salary_grid
from truewage.analytics.fire import calculate_fire_progress
from truewage.analytics.opportunity import calculate_opportunity_cost
from truewage.analytics.tax_trap import check_tax_trap
from truewage.analytics.whatif import PRESET_SCENARIOS, run_what_if_scenarios
from truewage.config.defaults import DEFAULT_TAX_YEAR, default_inputs, load_tax_schedule
from truewage.config.schema import (
    STUDENT_LOAN_PLANS,
    TAX_REGIONS,
    CalculationInputs,
    TaxScheduleConfig,
    parse_inputs,
)
from truewage.core.engine import compute
from truewage.io.serialize import (
    decode_share_token,
    dump_results_summary,
    encode_share_token,
    load_inputs,
)
from truewage.utils.exceptions import TruewageError


def _input_options(func: Any) -> Any:
    """Shared options for commands that build CalculationInputs."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, path_type=Path),
            default=None,
            help="Path to JSON inputs file. Uses defaults if not provided.",
        ),
        click.option("--token", default=None, help="Share token to load inputs from."),
        click.option("--salary", default=None, type=float, help="Gross annual salary."),
        click.option("--region", default=None, type=click.Choice(TAX_REGIONS)),
        click.option("--loan", default=None, type=click.Choice(STUDENT_LOAN_PLANS)),
        click.option("--pension", default=None, type=float, help="Pension percent (0-100)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_inputs(
    config_path: Path | None,
    token: str | None,
    salary: float | None,
    region: str | None,
    loan: str | None,
    pension: float | None,
) -> CalculationInputs:
    if config_path is not None:
        inputs = load_inputs(config_path.read_text())
    elif token is not None:
        inputs = decode_share_token(token)
    else:
        inputs = default_inputs()

    # CLI overrides
    overrides: dict[str, Any] = {}
    if salary is not None:
        overrides["salary"] = salary
    if region is not None:
        overrides["tax_region"] = region
    if loan is not None:
        overrides["student_loan"] = loan
    if pension is not None:
        overrides["pension_percent"] = pension
    if overrides:
        inputs = parse_inputs({**inputs.model_dump(), **overrides})
    return inputs


def _schedule(tax_year: str) -> TaxScheduleConfig:
    return load_tax_schedule(tax_year)


@click.group()
@click.version_option(version=__version__, prog_name="truewage")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """truewage: UK true hourly wage calculator."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")


@cli.command()
@_input_options
@click.option("--tax-year", default=DEFAULT_TAX_YEAR, show_default=True)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to write results JSON.",
)
def calc(
    config_path: Path | None,
    token: str | None,
    salary: float | None,
    region: str | None,
    loan: str | None,
    pension: float | None,
    tax_year: str,
    output_path: Path | None,
) -> None:
    """Compute the true hourly wage."""
    try:
        inputs = _build_inputs(config_path, token, salary, region, loan, pension)
        schedule = _schedule(tax_year)
        results = compute(inputs, schedule)
    except (TruewageError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    tax = results.tax_breakdown
    hours = results.time_breakdown
    click.echo(f"Tax year {schedule.tax_year}, region {results.region}")
    click.echo(f"Gross salary:        {tax.gross_salary:,.2f}")
    click.echo(f"  Pension:           {tax.pension_contribution:,.2f}")
    click.echo(f"  Income tax:        {tax.income_tax:,.2f}")
    click.echo(f"  National Insurance:{tax.national_insurance:,.2f}")
    click.echo(f"  Student loan:      {tax.student_loan:,.2f}")
    click.echo(f"Net salary:          {tax.net_salary:,.2f}")
    click.echo(f"Effective rate:      {tax.effective_tax_rate:.1%}")
    click.echo(f"Marginal rate:       {tax.effective_marginal_rate:.1%}")
    click.echo(f"Working weeks:       {hours.working_weeks:.2f}")
    click.echo(
        f"Annual hours:        {hours.annual_contract_hours:,.1f} paid, "
        f"{hours.annual_total_hours:,.1f} total"
    )
    click.echo(f"\nAssumed hourly rate: {results.assumed_hourly_rate:.2f}")
    click.echo(f"True hourly rate:    {results.true_hourly_rate:.2f}")
    click.echo(f"Percent of assumed:  {results.percent_of_assumed:.1f}%")

    trap = check_tax_trap(results, schedule)
    if trap is not None:
        click.echo(
            f"\nPersonal allowance taper: {trap.allowance_lost:,.0f} allowance lost, "
            f"{trap.extra_tax:,.2f} extra tax; sacrifice {trap.sacrifice_to_escape:,.2f} "
            "more into pension to escape"
        )

    if output_path is not None:
        output_path.write_text(dump_results_summary(results, inputs))
        click.echo(f"\nResults written to {output_path}")


@cli.command()
@_input_options
@click.option("--tax-year", default=DEFAULT_TAX_YEAR, show_default=True)
@click.option(
    "--scenario",
    "scenario_names",
    multiple=True,
    type=click.Choice(sorted(PRESET_SCENARIOS)),
    help="Preset scenario to run (repeatable). Runs all presets if omitted.",
)
@click.option("--workers", default=1, type=int, help="Parallel workers (1 = sequential).")
def whatif(
    config_path: Path | None,
    token: str | None,
    salary: float | None,
    region: str | None,
    loan: str | None,
    pension: float | None,
    tax_year: str,
    scenario_names: tuple[str, ...],
    workers: int,
) -> None:
    """Compare the true hourly wage under preset what-if scenarios."""
    try:
        inputs = _build_inputs(config_path, token, salary, region, loan, pension)
        report = run_what_if_scenarios(
            inputs,
            _schedule(tax_year),
            scenarios=list(scenario_names) or None,
            max_workers=workers,
        )
    except (TruewageError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Baseline true hourly rate: {report.baseline.true_hourly_rate:.2f}")
    for s in report.scenarios:
        click.echo(
            f"  {s.label:<20} {s.true_hourly_rate:8.2f}  "
            f"{s.difference:+8.2f}  {s.percent_change:+6.1f}%"
        )


@cli.command()
@click.option("--net-worth", required=True, type=float, help="Current invested net worth.")
@click.option("--expenses", required=True, type=float, help="Annual expenses.")
@click.option("--multiple", default=25.0, show_default=True, type=float)
def fire(net_worth: float, expenses: float, multiple: float) -> None:
    """Show progress toward financial independence."""
    try:
        progress = calculate_fire_progress(net_worth, expenses, expense_multiple=multiple)
    except TruewageError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"FIRE number:      {progress.fire_number:,.2f}")
    click.echo(f"Complete:         {progress.percent_complete:.1f}% ({progress.zone})")
    click.echo(f"Remaining:        {progress.amount_remaining:,.2f}")
    click.echo(f"Passive income:   {progress.current_passive_income:,.2f}")
    click.echo(f"Savings needed:   {progress.savings_rate_needed:.1f}% of expenses per year")
    if progress.next_milestone is not None:
        click.echo(
            f"Next milestone:   {progress.next_milestone.name} "
            f"({progress.next_milestone.target:,.0f})"
        )


@cli.command()
@click.argument("amount", type=float)
@click.option("--years", required=True, type=float, help="Years until the money is needed.")
@click.option("--rate", default=0.07, show_default=True, type=float, help="Annual real return.")
@click.option(
    "--period",
    default="once",
    show_default=True,
    type=click.Choice(["once", "month", "year"]),
)
@click.option("--hourly", default=None, type=float, help="True hourly rate, to price in hours.")
def opportunity(
    amount: float,
    years: float,
    rate: float,
    period: str,
    hourly: float | None,
) -> None:
    """Show what a spend would grow into if invested instead."""
    try:
        result = calculate_opportunity_cost(
            amount,
            years,
            annual_return=rate,
            true_hourly_rate=hourly,
            period=period,  # type: ignore[arg-type]
        )
    except TruewageError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Cost today:         {result.today_cost:,.2f}")
    click.echo(f"Future value:       {result.future_value:,.2f}")
    click.echo(f"Growth multiplier:  {result.growth_multiplier:.2f}x")
    click.echo(f"Retirement income:  {result.annual_retirement_income:,.2f} per year")
    if result.hours_of_life is not None:
        click.echo(f"Hours of work:      {result.hours_of_life:,.1f}")


@cli.command()
@click.option("--start", default=10_000.0, show_default=True, type=float)
@click.option("--stop", default=150_000.0, show_default=True, type=float)
@click.option("--step", default=10_000.0, show_default=True, type=float)
@click.option("--region", default="england", type=click.Choice(TAX_REGIONS))
@click.option("--loan", default="none", type=click.Choice(STUDENT_LOAN_PLANS))
@click.option("--pension", default=0.0, type=float)
@click.option("--tax-year", default=DEFAULT_TAX_YEAR, show_default=True)
def curve(
    start: float,
    stop: float,
    step: float,
    region: str,
    loan: str,
    pension: float,
    tax_year: str,
) -> None:
    """Print deductions across a range of salaries."""
    try:
        result = deductions_curve(
            salary_grid(start, stop, step),
            region,  # type: ignore[arg-type]
            loan,  # type: ignore[arg-type]
            pension,
            _schedule(tax_year),
        )
    except TruewageError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"{'salary':>12} {'tax':>12} {'ni':>10} {'loan':>10} {'net':>12} {'eff':>6}")
    rates = result.effective_rates()
    for i, gross in enumerate(result.salaries):
        click.echo(
            f"{gross:12,.0f} {result.income_tax[i]:12,.2f} "
            f"{result.national_insurance[i]:10,.2f} {result.student_loan[i]:10,.2f} "
            f"{result.net_salary[i]:12,.2f} {rates[i]:6.1%}"
        )


@cli.command()
@_input_options
def share(
    config_path: Path | None,
    token: str | None,
    salary: float | None,
    region: str | None,
    loan: str | None,
    pension: float | None,
) -> None:
    """Print a share token for the given inputs."""
    try:
        inputs = _build_inputs(config_path, token, salary, region, loan, pension)
    except (TruewageError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(encode_share_token(inputs))


if __name__ == "__main__":
    cli()
