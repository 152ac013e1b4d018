"""REST endpoints for the calculator catalog and calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from fincalc.backend.app.http import not_found
from fincalc.backend.services import (
    UnknownCalculatorError,
    build_calculation_response,
    calculate,
    list_calculators,
    parse_calculation_payload,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.get("/calculators")
def get_calculators() -> Any:
    """List the available calculators."""

    return jsonify({"calculators": list_calculators()})


@blueprint.post("/calculations/<calculator_id>")
def create_calculation(calculator_id: str) -> tuple[Any, int]:
    """Run ``calculator_id`` against the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    try:
        result = calculate(calculator_id, payload)
    except UnknownCalculatorError as exc:
        return not_found(str(exc))

    return build_calculation_response(result)
