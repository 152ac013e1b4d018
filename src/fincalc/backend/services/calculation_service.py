"""Orchestrate request validation, year resolution, and calculator dispatch.

Each calculator module only does arithmetic on plain numbers and year
configuration objects. This service owns everything around that: validating
the raw payload into a request model, picking the tax year, withholding a
result when the primary input is not positive, serialising the result, and
optional profiling of each step.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from fincalc.backend.config.year_config import (
    YearConfiguration,
    available_years,
    default_year,
    load_year_configuration,
)
from fincalc.backend.models import (
    CalculatorRequest,
    HourlyRateRequest,
    InsuranceImpactRequest,
    LLCVsSCorpRequest,
    PaycheckRequest,
    QuarterlyTaxRequest,
    SelfEmploymentRequest,
    W2Vs1099Request,
    format_validation_error,
)

from .calculators import (
    calculate_hourly_rate,
    calculate_insurance_impact,
    calculate_paycheck,
    calculate_quarterly_tax,
    calculate_self_employment_tax,
    compare_llc_vs_s_corp,
    compare_w2_vs_1099,
)
from .response_builder import serialise_result

_LOGGER = logging.getLogger(__name__)

Runner = Callable[[Any, YearConfiguration, date], Any]


class UnknownCalculatorError(LookupError):
    """Raised when a calculator identifier is not registered."""


@dataclass(frozen=True)
class CalculatorDefinition:
    """Catalog entry binding a calculator id to its request model and runner."""

    id: str
    name: str
    short_name: str
    description: str
    category: str
    keywords: tuple[str, ...]
    request_model: type[CalculatorRequest]
    runner: Runner
    primary_field: str | None = None

    def describe(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "description": self.description,
            "category": self.category,
            "keywords": list(self.keywords),
        }


def _run_self_employment(
    request: SelfEmploymentRequest, config: YearConfiguration, today: date
) -> Any:
    return calculate_self_employment_tax(
        request.gross_income, config.self_employment, config.federal
    )


def _run_paycheck(request: PaycheckRequest, config: YearConfiguration, today: date) -> Any:
    payroll = config.payroll
    if request.frequency is not None and request.frequency not in payroll.frequencies:
        allowed = ", ".join(payroll.frequencies)
        raise ValueError(f"Field 'frequency' must be one of: {allowed}")

    return calculate_paycheck(
        request.salary,
        payroll.periods_for(request.frequency),
        payroll,
        config.federal,
    )


def _run_w2_vs_1099(request: W2Vs1099Request, config: YearConfiguration, today: date) -> Any:
    return compare_w2_vs_1099(
        request.gross_income, config.payroll, config.self_employment, config.federal
    )


def _run_llc_vs_s_corp(
    request: LLCVsSCorpRequest, config: YearConfiguration, today: date
) -> Any:
    return compare_llc_vs_s_corp(
        request.income,
        request.salary,
        config.self_employment,
        config.s_corp,
        config.federal,
    )


def _run_hourly_rate(request: HourlyRateRequest, config: YearConfiguration, today: date) -> Any:
    return calculate_hourly_rate(
        request.target_income,
        request.weeks_per_year,
        request.hours_per_week,
        config.hourly_rate,
        config.self_employment,
        config.federal,
    )


def _run_quarterly(request: QuarterlyTaxRequest, config: YearConfiguration, today: date) -> Any:
    return calculate_quarterly_tax(
        request.gross_income,
        request.already_paid,
        request.as_of or today,
        config.quarterly,
        config.self_employment,
        config.federal,
    )


def _run_insurance(
    request: InsuranceImpactRequest, config: YearConfiguration, today: date
) -> Any:
    return calculate_insurance_impact(request.current_premium, request.offense, config.insurance)


CALCULATORS: tuple[CalculatorDefinition, ...] = (
    CalculatorDefinition(
        id="1099-tax",
        name="1099 Tax Calculator",
        short_name="1099 Tax",
        description="Self-employment tax, federal income tax and quarterly payments for freelancers.",
        category="tax",
        keywords=("1099", "self employment", "freelance", "quarterly tax", "SE tax"),
        request_model=SelfEmploymentRequest,
        runner=_run_self_employment,
        primary_field="gross_income",
    ),
    CalculatorDefinition(
        id="paycheck",
        name="Paycheck Calculator",
        short_name="Paycheck",
        description="Take-home pay per paycheck after FICA and federal withholding.",
        category="tax",
        keywords=("paycheck", "take home pay", "W2", "withholding"),
        request_model=PaycheckRequest,
        runner=_run_paycheck,
        primary_field="salary",
    ),
    CalculatorDefinition(
        id="quarterly-tax",
        name="Quarterly Tax Calculator",
        short_name="Quarterly",
        description="Estimated tax payments still due for the rest of the year.",
        category="tax",
        keywords=("quarterly tax", "estimated tax", "1040-ES"),
        request_model=QuarterlyTaxRequest,
        runner=_run_quarterly,
        primary_field="gross_income",
    ),
    CalculatorDefinition(
        id="w2-vs-1099",
        name="W2 vs 1099 Calculator",
        short_name="W2 vs 1099",
        description="Compare take-home pay as an employee and as a contractor.",
        category="tax",
        keywords=("W2", "1099", "contractor", "employee"),
        request_model=W2Vs1099Request,
        runner=_run_w2_vs_1099,
        primary_field="gross_income",
    ),
    CalculatorDefinition(
        id="llc-vs-scorp",
        name="LLC vs S-Corp Calculator",
        short_name="LLC vs S-Corp",
        description="Estimate whether an S-Corp election saves more than it costs.",
        category="tax",
        keywords=("LLC", "S-Corp", "reasonable salary", "distribution"),
        request_model=LLCVsSCorpRequest,
        runner=_run_llc_vs_s_corp,
        primary_field="income",
    ),
    CalculatorDefinition(
        id="hourly-rate",
        name="Freelance Hourly Rate Calculator",
        short_name="Hourly Rate",
        description="Hourly rate needed to reach a take-home income goal.",
        category="tax",
        keywords=("hourly rate", "freelance rate", "billable hours"),
        request_model=HourlyRateRequest,
        runner=_run_hourly_rate,
        primary_field="target_income",
    ),
    CalculatorDefinition(
        id="dui-insurance",
        name="DUI Insurance Cost Calculator",
        short_name="DUI Insurance",
        description="Projected car insurance increase after a DUI conviction.",
        category="insurance",
        keywords=("DUI", "SR-22", "car insurance"),
        request_model=InsuranceImpactRequest,
        runner=_run_insurance,
    ),
)

_REGISTRY: Mapping[str, CalculatorDefinition] = {
    definition.id: definition for definition in CALCULATORS
}


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("FINCALC_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def list_calculators() -> list[dict[str, Any]]:
    """Return catalog metadata for every registered calculator."""

    return [definition.describe() for definition in CALCULATORS]


def get_calculator(calculator_id: str) -> CalculatorDefinition:
    try:
        return _REGISTRY[calculator_id]
    except KeyError as exc:
        raise UnknownCalculatorError(f"Unknown calculator '{calculator_id}'") from exc


def _resolve_year(requested: int | None) -> int:
    if requested is None:
        year = default_year()
        if year is None:
            raise ValueError("No tax years are configured")
        return year

    if requested not in available_years():
        supported = ", ".join(str(year) for year in available_years())
        raise ValueError(f"Unsupported tax year {requested} (supported: {supported})")
    return requested


def calculate(
    calculator_id: str,
    payload: Mapping[str, Any],
    *,
    today: date | None = None,
) -> dict[str, Any]:
    """Validate ``payload`` and run the calculator registered as ``calculator_id``."""

    definition = get_calculator(calculator_id)

    if not isinstance(payload, Mapping):
        raise ValueError("Payload must be a mapping")

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    with _profile_section("validate", timings):
        try:
            request = definition.request_model.model_validate(dict(payload))
        except ValidationError as exc:
            raise ValueError(format_validation_error(exc)) from exc

    year = _resolve_year(request.year)
    with _profile_section("load_configuration", timings):
        config = load_year_configuration(year)

    result: dict[str, Any] | None = None
    primary = getattr(request, definition.primary_field) if definition.primary_field else None
    if primary is None or primary > 0:
        with _profile_section("calculate", timings):
            outcome = definition.runner(request, config, today or date.today())
            result = serialise_result(outcome)
    else:
        _LOGGER.debug(
            "Skipping %s calculation: %s is not positive", calculator_id, definition.primary_field
        )

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "%s timings (ms): %s",
            calculator_id,
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    return {"calculator": calculator_id, "year": year, "result": result}


__all__ = [
    "CALCULATORS",
    "CalculatorDefinition",
    "UnknownCalculatorError",
    "calculate",
    "get_calculator",
    "list_calculators",
]
