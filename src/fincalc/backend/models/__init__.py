"""Typed request models shared by the HTTP routes and calculation service.

Calculators themselves take plain numbers and configuration objects; these
models sit at the boundary and turn loosely formatted input into those
numbers before anything is computed.
"""

from .api import (
    CalculatorRequest,
    HourlyRateRequest,
    InsuranceImpactRequest,
    LLCVsSCorpRequest,
    PaycheckRequest,
    QuarterlyTaxRequest,
    SelfEmploymentRequest,
    W2Vs1099Request,
    coerce_amount,
    format_validation_error,
)

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
