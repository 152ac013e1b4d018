"""Expose year configuration tables to calculator front-ends.

UI forms read pay frequencies, offense tiers and bracket tables from here
instead of duplicating the YAML constants.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from fincalc.backend.app.http import not_found
from fincalc.backend.config.year_config import (
    TaxBracket,
    YearConfiguration,
    available_years,
    load_manifest,
    load_year_configuration,
)
from fincalc.backend.services.response_builder import serialise_result
from fincalc.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    supported_years = list(manifest.supported_years)
    default_year = supported_years[-1] if supported_years else None
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "default_year": default_year,
    }


def _serialise_bracket(bracket: TaxBracket) -> dict[str, Any]:
    return {
        "min": bracket.lower_bound,
        "max": bracket.upper_bound,
        "rate": bracket.rate,
    }


def _serialise_year(config: YearConfiguration) -> dict[str, Any]:
    manifest_entry = load_manifest().get_entry(config.year)
    return {
        "year": config.year,
        "status": manifest_entry.status,
        "notes_url": manifest_entry.notes_url,
        "meta": dict(config.meta),
        "federal": {
            "filing_status": config.federal.filing_status,
            "standard_deduction": config.federal.standard_deduction,
            "brackets": [_serialise_bracket(bracket) for bracket in config.federal.brackets],
        },
        "self_employment": serialise_result(config.self_employment),
        "payroll": {
            "fica": serialise_result(config.payroll.fica),
            "frequencies": dict(config.payroll.frequencies),
            "default_frequency": config.payroll.default_frequency,
        },
        "s_corp": serialise_result(config.s_corp),
        "hourly_rate": serialise_result(config.hourly_rate),
        "quarterly": serialise_result(config.quarterly),
        "insurance": serialise_result(config.insurance),
    }


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    return jsonify(get_configuration_metadata()), 200


@blueprint.get("/years")
def list_years() -> tuple[Any, int]:
    """Return all configured years with their configuration tables."""

    years = [_serialise_year(load_year_configuration(year)) for year in available_years()]
    metadata = get_configuration_metadata()
    payload = {
        "years": years,
        "default_year": metadata["default_year"],
        "supported_years": metadata["supported_years"],
    }
    return jsonify(payload), 200


@blueprint.get("/<int:year>")
def get_year(year: int) -> tuple[Any, int]:
    """Return the configuration tables for a single year."""

    try:
        configuration = load_year_configuration(year)
    except FileNotFoundError as exc:
        return not_found(str(exc))

    return jsonify(_serialise_year(configuration)), 200
