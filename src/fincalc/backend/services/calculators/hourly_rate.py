"""Freelance hourly rate needed to reach a take-home income target."""

from __future__ import annotations

from dataclasses import dataclass

from fincalc.backend.config.year_config import (
    FederalConfig,
    HourlyRateConfig,
    SelfEmploymentConfig,
)

from .self_employment import calculate_self_employment_tax
from .utils import format_rate, round_currency

MAX_WEEKS_PER_YEAR = 52
MAX_HOURS_PER_WEEK = 168


@dataclass(frozen=True)
class HourlyRateResult:
    target_income: float
    total_tax: int
    effective_tax_rate: str
    billable_hours: int
    gross_needed: int
    break_even_rate: int
    min_hourly_rate: int
    recommended_rate: int
    annual_at_recommended: int


def _schedule_value(value: int | None, default: int, ceiling: int) -> int:
    """Missing or non-positive values use ``default``; larger ones stop at ``ceiling``."""

    if not value or value <= 0:
        return default
    return min(value, ceiling)


def calculate_hourly_rate(
    target_income: float,
    weeks_per_year: int | None,
    hours_per_week: int | None,
    config: HourlyRateConfig,
    self_employment: SelfEmploymentConfig,
    federal: FederalConfig,
) -> HourlyRateResult:
    """Estimate the hourly rate that nets ``target_income`` after tax and expenses.

    The effective tax rate is taken at the target income itself rather than
    at the gross that is being solved for, so the result is an estimate that
    understates tax slightly at higher brackets.
    """

    target_income = max(0.0, target_income)
    weeks = _schedule_value(weeks_per_year, config.default_weeks, MAX_WEEKS_PER_YEAR)
    hours = _schedule_value(hours_per_week, config.default_hours, MAX_HOURS_PER_WEEK)

    total_tax = calculate_self_employment_tax(target_income, self_employment, federal).total_tax
    tax_rate = total_tax / target_income if target_income > 0 else 0.0

    billable_hours = weeks * hours * config.utilization_rate

    retained_share = 1 - tax_rate - config.expense_rate
    gross_needed = target_income / retained_share if retained_share > 0 else 0.0

    if billable_hours > 0:
        min_hourly_rate = gross_needed / billable_hours
        break_even_rate = target_income / billable_hours
    else:
        min_hourly_rate = 0.0
        break_even_rate = 0.0

    recommended_rate = min_hourly_rate * config.recommended_buffer

    return HourlyRateResult(
        target_income=target_income,
        total_tax=total_tax,
        effective_tax_rate=format_rate(tax_rate),
        billable_hours=round_currency(billable_hours),
        gross_needed=round_currency(gross_needed),
        break_even_rate=round_currency(break_even_rate),
        min_hourly_rate=round_currency(min_hourly_rate),
        recommended_rate=round_currency(recommended_rate),
        annual_at_recommended=round_currency(recommended_rate * billable_hours),
    )


__all__ = ["HourlyRateResult", "calculate_hourly_rate"]
