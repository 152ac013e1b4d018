"""Service-layer helpers for the FinCalc backend."""

from .calculation_service import (
    UnknownCalculatorError,
    calculate,
    get_calculator,
    list_calculators,
)
from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response

__all__ = [
    "UnknownCalculatorError",
    "build_calculation_response",
    "calculate",
    "get_calculator",
    "list_calculators",
    "parse_calculation_payload",
]
