"""Utilities for validating year configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from typing import Sequence

from .year_config import (
    FederalConfig,
    InsuranceConfig,
    PayrollConfig,
    SCorpConfig,
    SelfEmploymentConfig,
    YearConfiguration,
    available_years,
    load_year_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_federal(scope: str, federal: FederalConfig) -> list[str]:
    errors: list[str] = []

    rates = [bracket.rate for bracket in federal.brackets]
    if rates != sorted(rates):
        errors.append(_format_scope(scope, "bracket rates should not decrease"))

    for bracket in federal.brackets:
        if bracket.rate > 1:
            errors.append(
                _format_scope(scope, f"bracket rate {bracket.rate} must be between 0 and 1")
            )

    return errors


def _validate_self_employment(
    scope: str, self_employment: SelfEmploymentConfig, payroll: PayrollConfig
) -> list[str]:
    errors: list[str] = []
    fica = payroll.fica

    # Self-employed filers pay both halves of what an employee pays.
    pairs = {
        "social_security_rate": (self_employment.social_security_rate, fica.social_security_rate),
        "medicare_rate": (self_employment.medicare_rate, fica.medicare_rate),
    }
    for label, (combined, employee) in pairs.items():
        if abs(combined - 2 * employee) > 1e-9:
            errors.append(
                _format_scope(
                    scope,
                    f"{label} {combined} should be twice the employee rate {employee}",
                )
            )

    if fica.social_security_wage_base != self_employment.social_security_wage_base:
        errors.append(
            _format_scope(scope, "payroll and self-employment wage bases differ")
        )

    return errors


def _validate_payroll(scope: str, payroll: PayrollConfig) -> list[str]:
    errors: list[str] = []

    periods = list(payroll.frequencies.values())
    if len(set(periods)) != len(periods):
        errors.append(_format_scope(scope, "duplicate pay period counts detected"))
    if periods != sorted(periods, reverse=True):
        errors.append(
            _format_scope(scope, "pay frequencies should be listed from most to least frequent")
        )

    return errors


def _validate_s_corp(scope: str, s_corp: SCorpConfig, payroll: PayrollConfig) -> list[str]:
    errors: list[str] = []
    employee_fica = payroll.fica.social_security_rate + payroll.fica.medicare_rate

    for label, value in {
        "employee": s_corp.employee_fica_rate,
        "employer": s_corp.employer_fica_rate,
    }.items():
        if abs(value - employee_fica) > 1e-9:
            errors.append(
                _format_scope(
                    scope,
                    f"{label} FICA rate {value} does not match payroll FICA {employee_fica:.4f}",
                )
            )

    return errors


def _validate_insurance(scope: str, insurance: InsuranceConfig) -> list[str]:
    errors: list[str] = []

    averages = [rates.average for rates in insurance.offenses.values()]
    if averages != sorted(averages):
        errors.append(
            _format_scope(scope, "offense tiers should increase in severity")
        )

    return errors


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return human-readable issues detected in ``config``."""

    errors: list[str] = []
    errors.extend(_validate_federal("federal", config.federal))
    errors.extend(
        _validate_self_employment("self_employment", config.self_employment, config.payroll)
    )
    errors.extend(_validate_payroll("payroll", config.payroll))
    errors.extend(_validate_s_corp("s_corp", config.s_corp, config.payroll))
    errors.extend(_validate_insurance("insurance", config.insurance))
    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured tax years and report inconsistent constants."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            config = load_year_configuration(year)
        except FileNotFoundError as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
