"""Unit tests for the self-employment tax calculator."""

from __future__ import annotations

import pytest

from fincalc.backend.config.year_config import YearConfiguration
from fincalc.backend.services.calculators.self_employment import (
    BracketLine,
    calculate_payroll_taxes,
    calculate_self_employment_tax,
    estimate_self_employment_tax,
)


def run(config: YearConfiguration, gross_income: float):
    return calculate_self_employment_tax(
        gross_income, config.self_employment, config.federal
    )


def test_hundred_thousand_breakdown(config_2025: YearConfiguration) -> None:
    result = run(config_2025, 100_000)

    assert result.net_earnings == 92_350
    assert result.social_security_tax == 11_451
    assert result.medicare_tax == 2_678
    assert result.additional_medicare == 0
    assert result.total_se_tax == 14_130
    assert result.se_deduction == 7_065
    assert result.standard_deduction == 15_000
    assert result.taxable_income == 77_935
    assert result.federal_tax == 12_060
    assert result.total_tax == 26_189
    assert result.quarterly_payment == 6_547
    assert result.effective_rate == "26.2"
    assert result.brackets == (
        BracketLine(rate=10.0, amount=1_193),
        BracketLine(rate=12.0, amount=4_386),
        BracketLine(rate=22.0, amount=6_481),
    )


def test_zero_income_returns_all_zero_breakdown(config_2025: YearConfiguration) -> None:
    result = run(config_2025, 0)

    assert result.total_tax == 0
    assert result.total_se_tax == 0
    assert result.taxable_income == 0
    assert result.brackets == ()
    assert result.effective_rate == "0.0"


def test_income_below_standard_deduction_pays_only_se_tax(
    config_2025: YearConfiguration,
) -> None:
    result = run(config_2025, 10_000)

    assert result.taxable_income == 0
    assert result.federal_tax == 0
    assert result.brackets == ()
    assert result.total_se_tax == result.total_tax
    assert result.total_se_tax == 1_413


def test_negative_income_is_treated_as_zero(config_2025: YearConfiguration) -> None:
    result = run(config_2025, -25_000)

    assert result.gross_income == 0
    assert result.total_tax == 0


def test_social_security_is_capped_at_wage_base(config_2025: YearConfiguration) -> None:
    estimate = estimate_self_employment_tax(
        250_000, config_2025.self_employment, config_2025.federal
    )

    assert estimate.net_earnings == pytest.approx(230_875)
    assert estimate.se_taxes.social_security == pytest.approx(176_100 * 0.124)
    assert estimate.se_taxes.medicare == pytest.approx(6_695.375)
    assert estimate.se_taxes.additional_medicare == pytest.approx(277.875)


def test_additional_medicare_starts_above_threshold(config_2025: YearConfiguration) -> None:
    rates = config_2025.self_employment

    assert calculate_payroll_taxes(200_000, rates).additional_medicare == 0
    assert calculate_payroll_taxes(210_000, rates).additional_medicare == pytest.approx(90)


def test_unrounded_totals_reconcile(config_2025: YearConfiguration) -> None:
    for gross in (1_234, 55_555, 100_000, 333_333):
        estimate = estimate_self_employment_tax(
            gross, config_2025.self_employment, config_2025.federal
        )
        assert estimate.total_tax == pytest.approx(estimate.total_se_tax + estimate.federal.tax)
        assert estimate.se_deduction == pytest.approx(estimate.total_se_tax / 2)


def test_rounded_totals_stay_within_a_dollar(config_2025: YearConfiguration) -> None:
    for gross in (1_234, 55_555, 100_000, 333_333):
        result = run(config_2025, gross)
        assert abs(result.total_tax - (result.total_se_tax + result.federal_tax)) <= 1
        assert abs(result.quarterly_payment * 4 - result.total_tax) <= 2


def test_total_tax_increases_with_income(config_2025: YearConfiguration) -> None:
    totals = [run(config_2025, gross).total_tax for gross in range(0, 500_001, 20_000)]

    assert totals == sorted(totals)


def test_payroll_taxes_without_wage_base_are_uncapped(config_2025: YearConfiguration) -> None:
    rates = config_2025.payroll.fica.model_copy(update={"social_security_wage_base": None})

    breakdown = calculate_payroll_taxes(1_000_000, rates)

    assert breakdown.social_security == pytest.approx(62_000)


def test_repeated_calls_are_identical(config_2025: YearConfiguration) -> None:
    first = run(config_2025, 87_654)
    second = run(config_2025, 87_654)

    assert first == second
