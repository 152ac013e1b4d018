"""Shared fixtures for FinCalc unit and integration tests."""

import sys
from pathlib import Path

# Make ``src`` importable so ``pytest`` works from a plain checkout.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from fincalc.backend.app import create_app  # noqa: E402
from fincalc.backend.config.year_config import (  # noqa: E402
    YearConfiguration,
    load_year_configuration,
)


@pytest.fixture()
def app(monkeypatch: pytest.MonkeyPatch) -> Flask:
    """Return a Flask application with a single trusted origin."""

    monkeypatch.setenv("FINCALC_ALLOWED_ORIGINS", "https://fincalc.test")
    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def config_2025() -> YearConfiguration:
    """Constants for the 2025 tax year."""

    return load_year_configuration(2025)
