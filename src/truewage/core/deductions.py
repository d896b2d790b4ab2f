"""Net pay aggregation: pension, income tax, NI and student loan."""

from __future__ import annotations

from dataclasses import dataclass

from truewage.config.schema import StudentLoanPlan, TaxRegion, TaxScheduleConfig
from truewage.taxes.base import DeductionCalculator
from truewage.taxes.income_tax import IncomeTaxCalculator
from truewage.taxes.national_insurance import NationalInsuranceCalculator
from truewage.taxes.student_loan import StudentLoanCalculator

CURRENCY_PLACES = 2


@dataclass(frozen=True)
class TaxBreakdown:
    """Annual deductions for one salary.

    Monetary fields are rounded to the penny. Rates are fractions
    (0.28, not 28%).

    Attributes:
        gross_salary: Salary before any deduction.
        pension_contribution: Pre-tax (salary sacrifice) pension amount.
        personal_allowance: Effective allowance after taper.
        income_tax: Income tax owed.
        national_insurance: Employee Class 1 NI owed.
        student_loan: Student loan repayment.
        total_deductions: Sum of the four deductions above.
        net_salary: ``gross_salary - total_deductions``.
        effective_tax_rate: ``total_deductions / gross_salary`` (0 when gross is 0).
        effective_marginal_rate: Tax + NI + loan rate on the next pound.
    """

    gross_salary: float
    pension_contribution: float
    personal_allowance: float
    income_tax: float
    national_insurance: float
    student_loan: float
    total_deductions: float
    net_salary: float
    effective_tax_rate: float
    effective_marginal_rate: float

    @property
    def taxable_salary(self) -> float:
        """Salary after pension sacrifice, the base for tax, NI and loan."""
        return round(self.gross_salary - self.pension_contribution, CURRENCY_PLACES)


def calculate_all_deductions(
    gross_salary: float,
    region: TaxRegion,
    student_loan_plan: StudentLoanPlan,
    pension_percent: float,
    config: TaxScheduleConfig,
) -> TaxBreakdown:
    """Compute the full deduction breakdown for one salary.

    Pension is taken before tax, so income tax, NI and student loan are all
    computed on ``gross_salary - pension_contribution``.

    Args:
        gross_salary: Gross annual salary.
        region: Income tax region (``"england"`` also covers Wales and NI).
        student_loan_plan: Active repayment plan, or ``"none"``.
        pension_percent: Salary-sacrifice pension rate, 0-100.
        config: Tax-year schedule.

    Returns:
        TaxBreakdown with amounts, effective rate and marginal rate.
    """
    income_tax_calc = IncomeTaxCalculator(config, region)
    ni_calc = NationalInsuranceCalculator(config.national_insurance)
    loan_calc = StudentLoanCalculator(config, student_loan_plan)

    pension = round(gross_salary * pension_percent / 100, CURRENCY_PLACES)
    working_salary = gross_salary - pension

    income_tax = round(income_tax_calc.amount(working_salary), CURRENCY_PLACES)
    national_insurance = round(ni_calc.amount(working_salary), CURRENCY_PLACES)
    student_loan = round(loan_calc.amount(working_salary), CURRENCY_PLACES)

    total = round(pension + income_tax + national_insurance + student_loan, CURRENCY_PLACES)
    net = round(gross_salary - total, CURRENCY_PLACES)

    statutory: tuple[DeductionCalculator, ...] = (income_tax_calc, ni_calc, loan_calc)
    marginal = sum(calc.marginal_rate(working_salary) for calc in statutory)

    return TaxBreakdown(
        gross_salary=gross_salary,
        pension_contribution=pension,
        personal_allowance=income_tax_calc.personal_allowance(working_salary),
        income_tax=income_tax,
        national_insurance=national_insurance,
        student_loan=student_loan,
        total_deductions=total,
        net_salary=net,
        effective_tax_rate=total / gross_salary if gross_salary > 0 else 0.0,
        effective_marginal_rate=marginal,
    )
