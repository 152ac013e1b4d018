"""Helpers for normalising incoming calculation requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest


def parse_calculation_payload(req: Request) -> dict[str, Any]:
    """Extract and validate a JSON payload from ``req``.

    A ``year`` query parameter is honoured when the body does not name one.
    """

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)

    year_param = req.args.get("year")
    if year_param and payload.get("year") is None:
        try:
            payload["year"] = int(year_param)
        except ValueError as exc:
            raise BadRequest("Query parameter 'year' must be an integer") from exc

    return payload
