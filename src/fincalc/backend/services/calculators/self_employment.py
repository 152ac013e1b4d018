"""Self-employment tax calculator.

Every tax calculator in the package reduces to two primitives defined here
and in :mod:`.utils`: Social Security and Medicare on an earnings base
(:func:`calculate_payroll_taxes`) and the federal bracket schedule
(:func:`~.utils.calculate_progressive_tax`). Self-employed filers pay both the
employer and employee shares on 92.35% of their net profit, deduct half of
that tax, and then pay federal income tax on what remains above the standard
deduction.

All intermediate values stay unrounded; rounding happens only when the
result record is built.
"""

from __future__ import annotations

from dataclasses import dataclass

from fincalc.backend.config.year_config import FederalConfig, FicaRates, SelfEmploymentConfig

from .utils import (
    BracketTaxResult,
    calculate_progressive_tax,
    effective_rate,
    rate_percentage,
    round_currency,
)


@dataclass(frozen=True)
class PayrollTaxBreakdown:
    """Unrounded Social Security and Medicare amounts for an earnings base."""

    social_security: float
    medicare: float
    additional_medicare: float

    @property
    def total(self) -> float:
        return self.social_security + self.medicare + self.additional_medicare


@dataclass(frozen=True)
class BracketLine:
    """Rounded per-bracket federal tax, with the rate as a percentage."""

    rate: float
    amount: int


@dataclass(frozen=True)
class TaxCalculationResult:
    """Full self-employment tax breakdown for one gross income."""

    gross_income: float
    net_earnings: int
    social_security_tax: int
    medicare_tax: int
    additional_medicare: int
    total_se_tax: int
    se_deduction: int
    standard_deduction: int
    taxable_income: int
    federal_tax: int
    total_tax: int
    quarterly_payment: int
    effective_rate: str
    brackets: tuple[BracketLine, ...]


@dataclass(frozen=True)
class SelfEmploymentTaxEstimate:
    """Unrounded intermediate values of the self-employment computation."""

    gross_income: float
    net_earnings: float
    se_taxes: PayrollTaxBreakdown
    se_deduction: float
    standard_deduction: float
    taxable_income: float
    federal: BracketTaxResult

    @property
    def total_se_tax(self) -> float:
        return self.se_taxes.total

    @property
    def total_tax(self) -> float:
        return self.se_taxes.total + self.federal.tax


def calculate_payroll_taxes(earnings: float, rates: FicaRates) -> PayrollTaxBreakdown:
    """Apply Social Security (capped) and Medicare (uncapped) to ``earnings``."""

    if earnings <= 0:
        return PayrollTaxBreakdown(0.0, 0.0, 0.0)

    social_security_base = earnings
    if rates.social_security_wage_base is not None:
        social_security_base = min(earnings, rates.social_security_wage_base)

    excess = max(0.0, earnings - rates.additional_medicare_threshold)

    return PayrollTaxBreakdown(
        social_security=social_security_base * rates.social_security_rate,
        medicare=earnings * rates.medicare_rate,
        additional_medicare=excess * rates.additional_medicare_rate,
    )


def estimate_self_employment_tax(
    gross_income: float,
    params: SelfEmploymentConfig,
    federal: FederalConfig,
) -> SelfEmploymentTaxEstimate:
    """Run the self-employment computation without rounding anything."""

    gross_income = max(0.0, gross_income)

    net_earnings = gross_income * params.net_earnings_multiplier
    se_taxes = calculate_payroll_taxes(net_earnings, params)

    se_deduction = se_taxes.total * params.deduction_rate
    taxable_income = max(
        0.0, gross_income - se_deduction - federal.standard_deduction
    )

    return SelfEmploymentTaxEstimate(
        gross_income=gross_income,
        net_earnings=net_earnings,
        se_taxes=se_taxes,
        se_deduction=se_deduction,
        standard_deduction=federal.standard_deduction,
        taxable_income=taxable_income,
        federal=calculate_progressive_tax(taxable_income, federal.brackets),
    )


def calculate_self_employment_tax(
    gross_income: float,
    params: SelfEmploymentConfig,
    federal: FederalConfig,
) -> TaxCalculationResult:
    """Return the self-employment and federal tax breakdown for ``gross_income``."""

    estimate = estimate_self_employment_tax(gross_income, params, federal)
    total_tax = estimate.total_tax

    return TaxCalculationResult(
        gross_income=estimate.gross_income,
        net_earnings=round_currency(estimate.net_earnings),
        social_security_tax=round_currency(estimate.se_taxes.social_security),
        medicare_tax=round_currency(estimate.se_taxes.medicare),
        additional_medicare=round_currency(estimate.se_taxes.additional_medicare),
        total_se_tax=round_currency(estimate.total_se_tax),
        se_deduction=round_currency(estimate.se_deduction),
        standard_deduction=round_currency(estimate.standard_deduction),
        taxable_income=round_currency(estimate.taxable_income),
        federal_tax=round_currency(estimate.federal.tax),
        total_tax=round_currency(total_tax),
        quarterly_payment=round_currency(total_tax / 4),
        effective_rate=effective_rate(total_tax, estimate.gross_income),
        brackets=tuple(
            BracketLine(rate=rate_percentage(line.rate), amount=round_currency(line.amount))
            for line in estimate.federal.per_bracket
        ),
    )


__all__ = [
    "BracketLine",
    "PayrollTaxBreakdown",
    "SelfEmploymentTaxEstimate",
    "TaxCalculationResult",
    "calculate_payroll_taxes",
    "calculate_self_employment_tax",
    "estimate_self_employment_tax",
]
