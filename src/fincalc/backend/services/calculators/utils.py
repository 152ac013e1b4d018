"""Utility helpers for calculator modules."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal

from fincalc.backend.config.year_config import TaxBracket


@dataclass(frozen=True)
class BracketAmount:
    """Tax attributed to a single bracket."""

    rate: float
    amount: float


@dataclass(frozen=True)
class BracketTaxResult:
    """Total progressive tax plus the per-bracket breakdown."""

    tax: float = 0.0
    per_bracket: tuple[BracketAmount, ...] = field(default_factory=tuple)


def calculate_progressive_tax(
    amount: float, brackets: Sequence[TaxBracket]
) -> BracketTaxResult:
    """Calculate progressive tax for ``amount`` using ``brackets``.

    Brackets are consumed in ascending order and each receives only the
    portion of ``amount`` that falls inside it. Brackets above the income are
    skipped entirely, so the breakdown lists only the brackets actually used.
    Callers clamp negative income to zero before calling.
    """

    if amount <= 0:
        return BracketTaxResult()

    total = 0.0
    remaining = amount
    applied: list[BracketAmount] = []

    for bracket in brackets:
        if remaining <= 0:
            break
        taxable = min(remaining, bracket.width)
        tax = taxable * bracket.rate
        total += tax
        applied.append(BracketAmount(rate=bracket.rate, amount=tax))
        remaining -= taxable

    return BracketTaxResult(tax=total, per_bracket=tuple(applied))


def round_currency(value: float) -> int:
    """Round to whole currency units, halves toward positive infinity."""

    if not math.isfinite(value):
        return 0
    rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    return int(Decimal(value).quantize(Decimal(1), rounding=rounding))


def round_cents(value: float) -> float:
    """Round to cents using the same half-up rule as :func:`round_currency`."""

    return round_currency(value * 100) / 100


def format_rate(value: float, decimals: int = 1) -> str:
    """Return ``value`` (a fraction) as a percentage string, e.g. ``"26.2"``."""

    if not math.isfinite(value):
        return format_rate(0.0, decimals)
    quantum = Decimal(1).scaleb(-decimals)
    percentage = Decimal(value * 100).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{percentage:.{decimals}f}"


def effective_rate(tax: float, income: float) -> str:
    """Return ``tax / income`` as a percentage string, guarding zero income."""

    if income <= 0:
        return format_rate(0.0)
    return format_rate(tax / income)


def rate_percentage(rate: float) -> float:
    """Express a bracket rate as a percentage (``0.22`` becomes ``22.0``)."""

    return round(rate * 100, 4)


__all__ = [
    "BracketAmount",
    "BracketTaxResult",
    "calculate_progressive_tax",
    "effective_rate",
    "format_rate",
    "rate_percentage",
    "round_cents",
    "round_currency",
]
