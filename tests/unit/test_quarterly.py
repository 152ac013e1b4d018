"""Unit tests for quarterly estimated tax scheduling."""

from __future__ import annotations

from datetime import date

import pytest

from fincalc.backend.config.year_config import YearConfiguration
from fincalc.backend.services.calculators.quarterly import (
    calculate_quarterly_tax,
    current_quarter,
    remaining_quarters,
)


def run(config: YearConfiguration, gross: float, paid: float, as_of: date):
    return calculate_quarterly_tax(
        gross, paid, as_of, config.quarterly, config.self_employment, config.federal
    )


@pytest.mark.parametrize(
    ("as_of", "quarter", "left"),
    [
        (date(2025, 1, 1), 1, 4),
        (date(2025, 3, 31), 1, 4),
        (date(2025, 4, 1), 2, 3),
        (date(2025, 6, 30), 2, 3),
        (date(2025, 7, 1), 3, 2),
        (date(2025, 10, 1), 4, 1),
        (date(2025, 12, 31), 4, 1),
    ],
)
def test_quarter_boundaries(as_of: date, quarter: int, left: int) -> None:
    assert current_quarter(as_of) == quarter
    assert remaining_quarters(as_of) == left


def test_early_year_spreads_tax_over_four_payments(config_2025: YearConfiguration) -> None:
    result = run(config_2025, 100_000, 0, date(2025, 2, 1))

    assert result.total_tax == 26_189
    assert result.current_quarter == 1
    assert result.payments_left == 4
    assert result.quarterly_payment == 6_547
    # Installments round up so four of them cover the balance.
    assert result.remaining_payment == 6_548
    assert [deadline.quarter for deadline in result.upcoming_deadlines] == [
        "Q1",
        "Q2",
        "Q3",
        "Q4",
    ]


def test_fourth_quarter_leaves_single_payment(config_2025: YearConfiguration) -> None:
    result = run(config_2025, 100_000, 0, date(2025, 10, 20))

    assert result.current_quarter == 4
    assert result.payments_left == 1
    assert result.remaining_payment == 26_189
    assert [deadline.due for deadline in result.upcoming_deadlines] == [date(2026, 1, 15)]


def test_payments_already_made_reduce_remaining_tax(config_2025: YearConfiguration) -> None:
    result = run(config_2025, 100_000, 10_000, date(2025, 7, 1))

    assert result.remaining_tax == 16_189
    assert result.payments_left == 2
    assert result.remaining_payment == 8_095
    assert [deadline.quarter for deadline in result.upcoming_deadlines] == ["Q3", "Q4"]


def test_overpayment_leaves_nothing_due(config_2025: YearConfiguration) -> None:
    result = run(config_2025, 50_000, 60_000, date(2025, 5, 1))

    assert result.remaining_tax == 0
    assert result.remaining_payment == 0


def test_deadline_on_as_of_date_is_still_upcoming(config_2025: YearConfiguration) -> None:
    result = run(config_2025, 100_000, 0, date(2025, 9, 15))

    assert result.upcoming_deadlines[0].quarter == "Q3"
