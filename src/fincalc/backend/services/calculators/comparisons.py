"""Side-by-side comparisons of employment and business structures."""

from __future__ import annotations

from dataclasses import dataclass

from fincalc.backend.config.year_config import (
    FederalConfig,
    PayrollConfig,
    SCorpConfig,
    SelfEmploymentConfig,
)

from .payroll import W2TaxResult, calculate_w2_tax
from .self_employment import calculate_self_employment_tax, estimate_self_employment_tax
from .utils import calculate_progressive_tax, effective_rate, format_rate, round_currency


@dataclass(frozen=True)
class ContractorTaxResult:
    """Annual 1099 tax on the same gross amount as a W2 salary."""

    gross_income: float
    se_tax: int
    federal_tax: int
    total_tax: int
    net_pay: int
    effective_rate: str


@dataclass(frozen=True)
class W2Vs1099Result:
    w2: W2TaxResult
    contractor: ContractorTaxResult
    difference: int
    break_even_rate: str


@dataclass(frozen=True)
class LLCTaxResult:
    se_tax: int
    federal_tax: int
    total_tax: int
    net_income: int


@dataclass(frozen=True)
class SCorpTaxResult:
    salary: float
    distribution: float
    employee_fica: int
    employer_fica: int
    total_fica: int
    federal_tax: int
    admin_cost: float
    total_tax: int
    net_income: int


@dataclass(frozen=True)
class LLCVsSCorpResult:
    llc: LLCTaxResult
    s_corp: SCorpTaxResult
    savings: int
    worth_it: bool


def compare_w2_vs_1099(
    gross_income: float,
    payroll: PayrollConfig,
    self_employment: SelfEmploymentConfig,
    federal: FederalConfig,
) -> W2Vs1099Result:
    """Compare take-home pay for the same gross as an employee and a contractor.

    ``difference`` is the extra annual take-home of the W2 position.
    ``break_even_rate`` is the percentage of the W2 salary a contractor has to
    bill to end up with the same take-home pay.
    """

    gross_income = max(0.0, gross_income)
    w2 = calculate_w2_tax(gross_income, payroll, federal)

    estimate = estimate_self_employment_tax(gross_income, self_employment, federal)
    total_tax = estimate.total_tax
    contractor = ContractorTaxResult(
        gross_income=gross_income,
        se_tax=round_currency(estimate.total_se_tax),
        federal_tax=round_currency(estimate.federal.tax),
        total_tax=round_currency(total_tax),
        net_pay=round_currency(gross_income - total_tax),
        effective_rate=effective_rate(total_tax, gross_income),
    )

    difference = w2.net_pay - contractor.net_pay
    if gross_income > 0:
        break_even_rate = format_rate((gross_income + difference) / gross_income, 0)
    else:
        break_even_rate = "0"

    return W2Vs1099Result(
        w2=w2,
        contractor=contractor,
        difference=difference,
        break_even_rate=break_even_rate,
    )


def default_s_corp_salary(income: float, config: SCorpConfig) -> int:
    """Return the reasonable-salary default used when none is supplied."""

    return round_currency(max(0.0, income) * config.default_salary_share)


def calculate_s_corp_tax(
    income: float,
    salary: float,
    config: SCorpConfig,
    federal: FederalConfig,
) -> SCorpTaxResult:
    """Tax an S-Corp owner paying themselves ``salary`` out of ``income``.

    Only the salary bears payroll tax (both halves). What is left after the
    salary and the employer share is taken as a distribution.
    """

    employee_fica = salary * config.employee_fica_rate
    employer_fica = salary * config.employer_fica_rate
    total_fica = employee_fica + employer_fica

    distribution = income - salary - employer_fica
    taxable_income = max(0.0, salary + distribution - federal.standard_deduction)
    federal_tax = calculate_progressive_tax(taxable_income, federal.brackets).tax

    total_tax = total_fica + federal_tax + config.admin_cost

    return SCorpTaxResult(
        salary=salary,
        distribution=max(0.0, distribution),
        employee_fica=round_currency(employee_fica),
        employer_fica=round_currency(employer_fica),
        total_fica=round_currency(total_fica),
        federal_tax=round_currency(federal_tax),
        admin_cost=config.admin_cost,
        total_tax=round_currency(total_tax),
        net_income=round_currency(income - total_tax),
    )


def compare_llc_vs_s_corp(
    income: float,
    salary: float | None,
    self_employment: SelfEmploymentConfig,
    s_corp: SCorpConfig,
    federal: FederalConfig,
) -> LLCVsSCorpResult:
    """Compare a default single-member LLC with an S-Corp election.

    The S-Corp total already includes the admin cost, and the election is
    only reported as worthwhile when the savings also exceed that cost.
    """

    income = max(0.0, income)
    if not salary or salary <= 0:
        salary = default_s_corp_salary(income, s_corp)

    se_result = calculate_self_employment_tax(income, self_employment, federal)
    llc = LLCTaxResult(
        se_tax=se_result.total_se_tax,
        federal_tax=se_result.federal_tax,
        total_tax=se_result.total_tax,
        net_income=round_currency(income - se_result.total_tax),
    )
    s_corp_result = calculate_s_corp_tax(income, salary, s_corp, federal)

    savings = llc.total_tax - s_corp_result.total_tax
    return LLCVsSCorpResult(
        llc=llc,
        s_corp=s_corp_result,
        savings=savings,
        worth_it=savings > s_corp.admin_cost,
    )


__all__ = [
    "ContractorTaxResult",
    "LLCTaxResult",
    "LLCVsSCorpResult",
    "SCorpTaxResult",
    "W2Vs1099Result",
    "calculate_s_corp_tax",
    "compare_llc_vs_s_corp",
    "compare_w2_vs_1099",
    "default_s_corp_salary",
]
