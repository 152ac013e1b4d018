"""Integration tests for the calculator REST endpoints."""

from __future__ import annotations

import json
from http import HTTPStatus
from pathlib import Path
from typing import Any

import pytest
from flask.testing import FlaskClient

DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


def _load_scenarios() -> list[dict[str, Any]]:
    with DATA_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def test_catalog_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/calculators")

    assert response.status_code == HTTPStatus.OK
    ids = [entry["id"] for entry in response.get_json()["calculators"]]
    assert "1099-tax" in ids
    assert "dui-insurance" in ids


@pytest.mark.parametrize("scenario", _load_scenarios(), ids=lambda item: item["name"])
def test_calculation_endpoint_matches_regression_scenarios(
    client: FlaskClient, scenario: dict[str, Any]
) -> None:
    """Each regression scenario should remain stable over HTTP as well."""

    response = client.post(
        f"/api/v1/calculations/{scenario['calculator']}", json=scenario["payload"]
    )
    assert response.status_code == HTTPStatus.OK

    body = response.get_json()
    assert body["calculator"] == scenario["calculator"]
    result = body["result"]
    for key, expected in scenario["expectations"].items():
        value: Any = result
        for part in key.split("."):
            value = value[part]
        if isinstance(expected, bool):
            assert value is expected, key
        else:
            assert value == pytest.approx(expected), key


def test_year_query_parameter_is_honoured(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations/1099-tax?year=2024", json={"gross_income": 100_000}
    )

    assert response.status_code == HTTPStatus.OK
    body = response.get_json()
    assert body["year"] == 2024
    assert body["result"]["standard_deduction"] == 14_600


def test_zero_input_returns_null_result(client: FlaskClient) -> None:
    response = client.post("/api/v1/calculations/paycheck", json={"salary": 0})

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["result"] is None


def test_unknown_calculator_returns_not_found(client: FlaskClient) -> None:
    response = client.post("/api/v1/calculations/mortgage", json={})

    assert response.status_code == HTTPStatus.NOT_FOUND
    payload = response.get_json()
    assert payload["error"] == "not_found"
    assert "mortgage" in payload["message"]
    assert payload["status"] == 404


def test_non_json_body_returns_bad_request(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations/1099-tax",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "bad_request"
    assert "JSON" in payload["message"]


def test_unknown_field_returns_validation_error(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations/1099-tax", json={"gross_income": 1, "bonus": 5}
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "bonus" in payload["message"]


def test_unsupported_year_returns_validation_error(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations/1099-tax", json={"gross_income": 1, "year": 2001}
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "Unsupported tax year" in response.get_json()["message"]


def test_unknown_pay_frequency_returns_validation_error(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations/paycheck", json={"salary": 50_000, "frequency": "daily"}
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "validation_error"


def test_amount_beyond_float_range_is_treated_as_zero(client: FlaskClient) -> None:
    response = client.post("/api/v1/calculations/1099-tax", json={"gross_income": "9" * 400})

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["result"] is None


def test_hourly_schedule_beyond_calendar_returns_validation_error(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations/hourly-rate",
        json={"target_income": 100_000, "weeks_per_year": 1e308, "hours_per_week": 1e308},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "weeks_per_year" in payload["message"]
