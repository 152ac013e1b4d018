"""W2 wage calculators: annual employee tax and per-paycheck withholding."""

from __future__ import annotations

from dataclasses import dataclass

from fincalc.backend.config.year_config import FederalConfig, PayrollConfig

from .self_employment import PayrollTaxBreakdown, calculate_payroll_taxes
from .utils import calculate_progressive_tax, effective_rate, round_cents, round_currency


@dataclass(frozen=True)
class W2TaxResult:
    """Annual employee-side tax on a W2 salary."""

    gross_income: float
    fica: int
    federal_tax: int
    total_tax: int
    net_pay: int
    effective_rate: str


@dataclass(frozen=True)
class PaycheckResult:
    """Withholding for a single pay period."""

    pay_periods: int
    gross_pay: float
    social_security: float
    medicare: float
    federal_tax: float
    total_deductions: float
    net_pay: float
    annual_gross: float
    annual_net: int
    effective_rate: str


def _employee_taxes(
    salary: float, payroll: PayrollConfig, federal: FederalConfig
) -> tuple[PayrollTaxBreakdown, float]:
    fica = calculate_payroll_taxes(salary, payroll.fica)
    taxable_income = max(0.0, salary - federal.standard_deduction)
    federal_tax = calculate_progressive_tax(taxable_income, federal.brackets).tax
    return fica, federal_tax


def calculate_w2_tax(
    salary: float, payroll: PayrollConfig, federal: FederalConfig
) -> W2TaxResult:
    """Return employee FICA and federal tax for an annual W2 ``salary``."""

    salary = max(0.0, salary)
    fica, federal_tax = _employee_taxes(salary, payroll, federal)
    total_tax = fica.total + federal_tax

    return W2TaxResult(
        gross_income=salary,
        fica=round_currency(fica.total),
        federal_tax=round_currency(federal_tax),
        total_tax=round_currency(total_tax),
        net_pay=round_currency(salary - total_tax),
        effective_rate=effective_rate(total_tax, salary),
    )


def calculate_paycheck(
    salary: float,
    pay_periods: int,
    payroll: PayrollConfig,
    federal: FederalConfig,
) -> PaycheckResult:
    """Split annual W2 taxes evenly over ``pay_periods`` paychecks."""

    salary = max(0.0, salary)
    if pay_periods <= 0:
        pay_periods = payroll.periods_for(None)

    fica, federal_tax = _employee_taxes(salary, payroll, federal)

    gross_per_period = salary / pay_periods
    fica_per_period = fica.total / pay_periods
    social_security_per_period = fica.social_security / pay_periods
    medicare_per_period = (fica.medicare + fica.additional_medicare) / pay_periods
    federal_per_period = federal_tax / pay_periods
    total_deductions = fica_per_period + federal_per_period
    net_pay = gross_per_period - total_deductions

    return PaycheckResult(
        pay_periods=pay_periods,
        gross_pay=round_cents(gross_per_period),
        social_security=round_cents(social_security_per_period),
        medicare=round_cents(medicare_per_period),
        federal_tax=round_cents(federal_per_period),
        total_deductions=round_cents(total_deductions),
        net_pay=round_cents(net_pay),
        annual_gross=salary,
        annual_net=round_currency(net_pay * pay_periods),
        effective_rate=effective_rate(federal_tax + fica.total, salary),
    )


__all__ = ["PaycheckResult", "W2TaxResult", "calculate_paycheck", "calculate_w2_tax"]
