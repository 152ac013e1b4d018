"""Car insurance cost projection after a DUI conviction."""

from __future__ import annotations

from dataclasses import dataclass

from fincalc.backend.config.year_config import InsuranceConfig

from .utils import rate_percentage, round_currency

OFFENSE_TIERS = ("first", "second", "third")


@dataclass(frozen=True)
class InsuranceImpactResult:
    current_annual: float
    offense: str
    increase_percent: float
    increase_range: tuple[float, float]
    new_annual: int
    sr22_fee: float
    yearly_increase: float
    three_year_total: float
    five_year_total: float
    total_extra_cost: float


def calculate_insurance_impact(
    current_premium: float, offense: str, config: InsuranceConfig
) -> InsuranceImpactResult:
    """Project the extra premium cost over the SR-22 and rate-impact periods.

    A zero premium falls back to the configured national average. Unknown
    offense tiers are treated as the most severe configured tier.
    """

    if current_premium <= 0:
        current_premium = config.average_annual_premium

    rates = config.offenses.get(offense)
    if rates is None:
        offense = list(config.offenses)[-1]
        rates = config.offenses[offense]

    new_annual = round_currency(current_premium * (1 + rates.average))
    yearly_increase = new_annual - current_premium
    sr22_fee = config.sr22_monthly_fee * 12

    three_year_total = (yearly_increase + sr22_fee) * config.sr22_years
    five_year_total = yearly_increase * config.impact_years + sr22_fee * config.sr22_years

    return InsuranceImpactResult(
        current_annual=current_premium,
        offense=offense,
        increase_percent=rate_percentage(rates.average),
        increase_range=(rate_percentage(rates.minimum), rate_percentage(rates.maximum)),
        new_annual=new_annual,
        sr22_fee=sr22_fee,
        yearly_increase=yearly_increase,
        three_year_total=three_year_total,
        five_year_total=five_year_total,
        total_extra_cost=five_year_total,
    )


__all__ = ["OFFENSE_TIERS", "InsuranceImpactResult", "calculate_insurance_impact"]
