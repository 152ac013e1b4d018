"""Quarterly estimated tax payments for the rest of the year."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from fincalc.backend.config.year_config import (
    FederalConfig,
    QuarterlyConfig,
    QuarterlyDeadline,
    SelfEmploymentConfig,
)

from .self_employment import calculate_self_employment_tax


@dataclass(frozen=True)
class QuarterlyTaxResult:
    total_tax: int
    already_paid: float
    remaining_tax: float
    quarterly_payment: int
    remaining_payment: int
    current_quarter: int
    payments_left: int
    upcoming_deadlines: tuple[QuarterlyDeadline, ...]


def current_quarter(as_of: date) -> int:
    """Return the calendar quarter (1-4) containing ``as_of``."""

    month_index = as_of.month - 1
    if month_index < 3:
        return 1
    if month_index < 6:
        return 2
    if month_index < 9:
        return 3
    return 4


def remaining_quarters(as_of: date) -> int:
    """Quarters left in the year, the current one included."""

    return 5 - current_quarter(as_of)


def calculate_quarterly_tax(
    gross_income: float,
    already_paid: float,
    as_of: date,
    config: QuarterlyConfig,
    self_employment: SelfEmploymentConfig,
    federal: FederalConfig,
) -> QuarterlyTaxResult:
    """Spread the unpaid annual tax evenly over the remaining quarters.

    Payments round up so the installments never fall short of the balance.
    """

    tax_result = calculate_self_employment_tax(gross_income, self_employment, federal)
    already_paid = max(0.0, already_paid)
    remaining_tax = max(0.0, tax_result.total_tax - already_paid)
    payments_left = remaining_quarters(as_of)

    return QuarterlyTaxResult(
        total_tax=tax_result.total_tax,
        already_paid=already_paid,
        remaining_tax=remaining_tax,
        quarterly_payment=tax_result.quarterly_payment,
        remaining_payment=math.ceil(remaining_tax / payments_left),
        current_quarter=current_quarter(as_of),
        payments_left=payments_left,
        upcoming_deadlines=tuple(
            deadline for deadline in config.deadlines if deadline.due >= as_of
        ),
    )


__all__ = [
    "QuarterlyTaxResult",
    "calculate_quarterly_tax",
    "current_quarter",
    "remaining_quarters",
]
