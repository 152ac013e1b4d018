"""Utilities for serialising calculation responses."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from datetime import date
from typing import Any, Tuple

from flask import jsonify

ResponseTuple = Tuple[Any, int]


def serialise_result(value: Any) -> Any:
    """Convert result dataclasses and config models into JSON-ready structures."""

    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True)

    if is_dataclass(value) and not isinstance(value, type):
        return {field.name: serialise_result(getattr(value, field.name)) for field in fields(value)}

    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, Mapping):
        return {str(key): serialise_result(item) for key, item in value.items()}

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [serialise_result(item) for item in value]

    return value


def build_calculation_response(payload: Mapping[str, Any]) -> ResponseTuple:
    """Return a Flask JSON response for the calculation ``payload``."""

    return jsonify(payload), 200


__all__ = ["build_calculation_response", "serialise_result"]
