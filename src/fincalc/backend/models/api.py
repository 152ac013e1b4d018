"""Pydantic models describing the public API surface."""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "CalculatorRequest",
    "HourlyRateRequest",
    "InsuranceImpactRequest",
    "LLCVsSCorpRequest",
    "PaycheckRequest",
    "QuarterlyTaxRequest",
    "SelfEmploymentRequest",
    "W2Vs1099Request",
    "coerce_amount",
    "format_validation_error",
]

_DIGITS = frozenset("0123456789")


def coerce_amount(value: Any) -> float:
    """Normalise raw calculator input into a non-negative number.

    Strings keep only their digits, matching the formatted amount fields of
    the calculator forms (``"85,000"`` becomes ``85000``). Anything unusable
    becomes ``0``.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        digits = "".join(character for character in value if character in _DIGITS)
        try:
            value = int(digits) if digits else 0
        except ValueError:
            # Longer than the interpreter allows for int parsing.
            return 0.0
    if not isinstance(value, (int, float)):
        return 0.0

    try:
        number = float(value)
    except OverflowError:
        # Integers beyond the float range.
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


class CalculatorRequest(BaseModel):
    """Fields shared by every calculator payload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int | None = Field(default=None, ge=1900, le=2100)


class SelfEmploymentRequest(CalculatorRequest):
    """Gross 1099 income for the self-employment tax calculator."""

    gross_income: float = 0.0

    @field_validator("gross_income", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)


class W2Vs1099Request(SelfEmploymentRequest):
    """Same gross amount evaluated as a W2 salary and as 1099 income."""


class PaycheckRequest(CalculatorRequest):
    salary: float = 0.0
    frequency: str | None = None

    @field_validator("salary", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("frequency", mode="before")
    @classmethod
    def _normalise_frequency(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip().lower().replace("-", "")
        return text or None


class LLCVsSCorpRequest(CalculatorRequest):
    income: float = 0.0
    salary: float = 0.0

    @field_validator("income", "salary", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)


class HourlyRateRequest(CalculatorRequest):
    target_income: float = 0.0
    weeks_per_year: int = Field(default=0, ge=0, le=52)
    hours_per_week: int = Field(default=0, ge=0, le=168)

    @field_validator("target_income", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("weeks_per_year", "hours_per_week", mode="before")
    @classmethod
    def _coerce_counts(cls, value: Any) -> int:
        return int(coerce_amount(value))


class QuarterlyTaxRequest(CalculatorRequest):
    gross_income: float = 0.0
    already_paid: float = 0.0
    as_of: date | None = None

    @field_validator("gross_income", "already_paid", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)


class InsuranceImpactRequest(CalculatorRequest):
    current_premium: float = 0.0
    offense: Literal["first", "second", "third"] = "first"

    @field_validator("current_premium", mode="before")
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("offense", mode="before")
    @classmethod
    def _normalise_offense(cls, value: Any) -> Any:
        if value is None:
            return "first"
        if isinstance(value, str):
            return value.strip().lower() or "first"
        return value


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
