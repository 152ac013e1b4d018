"""Read tax year constants from the YAML files under ``data/``.

``manifest.yaml`` decides which years exist. Each declared year is parsed
into an immutable :class:`YearConfiguration` and cached, so calculators can
call :func:`load_year_configuration` on every request.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .schema import (
    ConfigurationError,
    FederalConfig,
    FicaRates,
    HourlyRateConfig,
    InsuranceConfig,
    OffenseRates,
    PayrollConfig,
    QuarterlyConfig,
    QuarterlyDeadline,
    SCorpConfig,
    SelfEmploymentConfig,
    TaxBracket,
    TaxYearManifest,
    TaxYearManifestEntry,
    YearConfiguration,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
MANIFEST_FILE = CONFIG_DIRECTORY / "manifest.yaml"

_LOGGER = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _read_mapping(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        document = yaml.safe_load(handle)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigurationError(f"{path.name} must contain a mapping at the top level")
    return document


def _parse(model: type[_ModelT], raw: dict[str, Any], label: str) -> _ModelT:
    try:
        return model.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"{label} validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_manifest() -> TaxYearManifest:
    """Return the parsed manifest of declared tax years."""

    if not MANIFEST_FILE.exists():
        raise FileNotFoundError(f"Tax year manifest not found at {MANIFEST_FILE}")
    return _parse(TaxYearManifest, _read_mapping(MANIFEST_FILE), "Manifest")


def config_path_for(year: int) -> Path:
    """Return the YAML file declared for ``year``."""

    try:
        entry = load_manifest().get_entry(year)
    except KeyError as exc:
        raise FileNotFoundError(f"Tax year {year} is not declared in the manifest") from exc
    return CONFIG_DIRECTORY / entry.resolved_filename


@lru_cache(maxsize=8)
def load_year_configuration(year: int) -> YearConfiguration:
    """Parse and cache the constants for ``year``."""

    path = config_path_for(year)
    if not path.exists():
        raise FileNotFoundError(f"Tax year {year} file is missing: {path.name}")

    raw = _read_mapping(path)
    raw.setdefault("year", year)
    configuration = _parse(YearConfiguration, raw, f"Configuration for {year}")

    if configuration.year != year:
        raise ConfigurationError(
            f"{path.name} describes tax year {configuration.year}, expected {year}"
        )

    _LOGGER.debug("Loaded tax year %s from %s", year, path.name)
    return configuration


def available_years() -> Sequence[int]:
    return load_manifest().supported_years


def default_year() -> int | None:
    """Return the newest configured tax year, if any."""

    years = available_years()
    return years[-1] if years else None


def clear_configuration_cache() -> None:
    """Forget cached manifest and year data, e.g. after editing the YAML."""

    load_year_configuration.cache_clear()
    load_manifest.cache_clear()


__all__ = [
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "FederalConfig",
    "FicaRates",
    "HourlyRateConfig",
    "InsuranceConfig",
    "MANIFEST_FILE",
    "OffenseRates",
    "PayrollConfig",
    "QuarterlyConfig",
    "QuarterlyDeadline",
    "SCorpConfig",
    "SelfEmploymentConfig",
    "TaxBracket",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "YearConfiguration",
    "available_years",
    "clear_configuration_cache",
    "config_path_for",
    "default_year",
    "load_manifest",
    "load_year_configuration",
]
