import pytest

from fincalc.backend.config.validator import (
    main,
    validate_all_years,
    validate_year_configuration,
)
from fincalc.backend.config.year_config import load_year_configuration


def test_current_configurations_are_valid() -> None:
    results = validate_all_years()
    assert set(results) == {2024, 2025}
    assert all(not issues for issues in results.values()), results


def test_validator_flags_decreasing_bracket_rates() -> None:
    config = load_year_configuration(2025)
    brackets = list(config.federal.brackets)
    brackets[1] = brackets[1].model_copy(update={"rate": 0.05})
    broken = config.model_copy(
        update={"federal": config.federal.model_copy(update={"brackets": brackets})}
    )

    errors = validate_year_configuration(broken)

    assert any(error.startswith("federal:") for error in errors)


def test_validator_flags_mismatched_self_employment_rate() -> None:
    config = load_year_configuration(2025)
    broken = config.model_copy(
        update={
            "self_employment": config.self_employment.model_copy(
                update={"social_security_rate": 0.15}
            )
        }
    )

    errors = validate_year_configuration(broken)

    assert any("social_security_rate" in error and "twice" in error for error in errors)


def test_validator_flags_s_corp_fica_drift() -> None:
    config = load_year_configuration(2025)
    broken = config.model_copy(
        update={"s_corp": config.s_corp.model_copy(update={"employer_fica_rate": 0.05})}
    )

    errors = validate_year_configuration(broken)

    assert errors == [
        "s_corp: employer FICA rate 0.05 does not match payroll FICA 0.0765"
    ]


def test_validator_flags_unordered_offense_tiers() -> None:
    config = load_year_configuration(2025)
    offenses = dict(config.insurance.offenses)
    offenses["first"], offenses["third"] = offenses["third"], offenses["first"]
    broken = config.model_copy(
        update={"insurance": config.insurance.model_copy(update={"offenses": offenses})}
    )

    errors = validate_year_configuration(broken)

    assert any(error.startswith("insurance:") for error in errors)


def test_cli_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["2025"]) == 0
    assert "[2025] OK" in capsys.readouterr().out


def test_cli_reports_missing_year(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1999"]) == 1
    assert "failed to load configuration" in capsys.readouterr().out
