"""Pydantic models describing the tax year configuration schema."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _validate_rate(value: float, label: str) -> None:
    if value < 0 or value > 1:
        raise ConfigurationError(f"{label} must be between 0 and 1")


class TaxBracket(ImmutableModel):
    """A half-open income interval ``[min, max)`` taxed at ``rate``."""

    lower_bound: float = Field(default=0.0, alias="min")
    upper_bound: float | None = Field(default=None, alias="max")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if self.rate < 0:
            raise ConfigurationError("Tax rates must be non-negative")
        if self.lower_bound < 0:
            raise ConfigurationError("Lower bounds must be non-negative")
        if self.upper_bound is not None and self.upper_bound <= self.lower_bound:
            raise ConfigurationError("Upper bounds must exceed the lower bound")
        return self

    @property
    def width(self) -> float:
        if self.upper_bound is None:
            return float("inf")
        return self.upper_bound - self.lower_bound


class FederalConfig(ImmutableModel):
    """Federal income tax schedule for a single filing status."""

    filing_status: str = "single"
    standard_deduction: float
    brackets: Sequence[TaxBracket]

    @model_validator(mode="after")
    def _validate_schedule(self) -> FederalConfig:
        if self.standard_deduction < 0:
            raise ConfigurationError("Standard deduction must be non-negative")
        if not self.brackets:
            raise ConfigurationError("At least one tax bracket must be defined")

        expected_lower = 0.0
        for bracket in self.brackets:
            if bracket.lower_bound != expected_lower:
                raise ConfigurationError(
                    "Tax brackets must be contiguous and start at zero"
                )
            if bracket.upper_bound is None:
                break
            expected_lower = bracket.upper_bound

        if self.brackets[-1].upper_bound is not None:
            raise ConfigurationError("Final tax bracket must have an open upper bound")
        if any(bracket.upper_bound is None for bracket in self.brackets[:-1]):
            raise ConfigurationError("Only the final tax bracket may be unbounded")
        return self


class FicaRates(ImmutableModel):
    """Social Security and Medicare rates applied to an earnings base."""

    social_security_rate: float
    social_security_wage_base: float | None = None
    medicare_rate: float
    additional_medicare_rate: float
    additional_medicare_threshold: float

    @model_validator(mode="after")
    def _validate_rates(self) -> FicaRates:
        _validate_rate(self.social_security_rate, "Social Security rate")
        _validate_rate(self.medicare_rate, "Medicare rate")
        _validate_rate(self.additional_medicare_rate, "Additional Medicare rate")
        if self.social_security_wage_base is not None and self.social_security_wage_base <= 0:
            raise ConfigurationError("Social Security wage base must be positive")
        if self.additional_medicare_threshold < 0:
            raise ConfigurationError("Additional Medicare threshold must be non-negative")
        return self


class SelfEmploymentConfig(FicaRates):
    """Self-employment tax parameters (both employer and employee shares)."""

    social_security_wage_base: float
    net_earnings_multiplier: float
    deduction_rate: float

    @model_validator(mode="after")
    def _validate_multipliers(self) -> SelfEmploymentConfig:
        _validate_rate(self.net_earnings_multiplier, "Net earnings multiplier")
        _validate_rate(self.deduction_rate, "SE tax deduction rate")
        return self


class PayrollConfig(ImmutableModel):
    """Employee-side FICA rates and supported pay frequencies."""

    fica: FicaRates
    frequencies: Mapping[str, int]
    default_frequency: str

    @field_validator("frequencies", mode="before")
    @classmethod
    def _coerce_frequencies(cls, value: Any) -> Mapping[str, int]:
        if isinstance(value, Mapping):
            return {str(key): int(periods) for key, periods in value.items()}
        raise ConfigurationError("Pay frequencies must be a mapping of id to periods")

    @model_validator(mode="after")
    def _validate_frequencies(self) -> PayrollConfig:
        if not self.frequencies:
            raise ConfigurationError("At least one pay frequency must be defined")
        for frequency, periods in self.frequencies.items():
            if periods <= 0:
                raise ConfigurationError(
                    f"Pay frequency '{frequency}' must have a positive period count"
                )
        if self.default_frequency not in self.frequencies:
            raise ConfigurationError("Default pay frequency must be a declared frequency")
        return self

    def periods_for(self, frequency: str | None) -> int:
        if frequency and frequency in self.frequencies:
            return self.frequencies[frequency]
        return self.frequencies[self.default_frequency]


class SCorpConfig(ImmutableModel):
    """Payroll tax rates and overheads for an S-Corp election."""

    employee_fica_rate: float
    employer_fica_rate: float
    admin_cost: float
    default_salary_share: float

    @model_validator(mode="after")
    def _validate_values(self) -> SCorpConfig:
        _validate_rate(self.employee_fica_rate, "Employee FICA rate")
        _validate_rate(self.employer_fica_rate, "Employer FICA rate")
        _validate_rate(self.default_salary_share, "Default salary share")
        if self.admin_cost < 0:
            raise ConfigurationError("S-Corp admin cost must be non-negative")
        return self


class HourlyRateConfig(ImmutableModel):
    """Assumptions used when converting an income goal to an hourly rate."""

    default_weeks: int
    default_hours: int
    utilization_rate: float
    expense_rate: float
    recommended_buffer: float

    @model_validator(mode="after")
    def _validate_values(self) -> HourlyRateConfig:
        if self.default_weeks <= 0 or self.default_weeks > 52:
            raise ConfigurationError("Default weeks must be between 1 and 52")
        if self.default_hours <= 0 or self.default_hours > 168:
            raise ConfigurationError("Default hours must be between 1 and 168")
        _validate_rate(self.utilization_rate, "Utilization rate")
        _validate_rate(self.expense_rate, "Expense rate")
        if self.recommended_buffer < 1:
            raise ConfigurationError("Recommended buffer must be at least 1")
        return self


class QuarterlyDeadline(ImmutableModel):
    """Estimated tax due date for a calendar quarter."""

    quarter: str
    period: str
    due: date


class QuarterlyConfig(ImmutableModel):
    """Estimated tax payment schedule."""

    deadlines: Sequence[QuarterlyDeadline]

    @model_validator(mode="after")
    def _validate_deadlines(self) -> QuarterlyConfig:
        if len(self.deadlines) != 4:
            raise ConfigurationError("Exactly four quarterly deadlines must be defined")
        due_dates = [deadline.due for deadline in self.deadlines]
        if due_dates != sorted(due_dates):
            raise ConfigurationError("Quarterly deadlines must be in chronological order")
        return self


class OffenseRates(ImmutableModel):
    """Premium increase range observed for an offense tier."""

    minimum: float = Field(alias="min")
    maximum: float = Field(alias="max")
    average: float

    @model_validator(mode="after")
    def _validate_range(self) -> OffenseRates:
        if self.minimum < 0:
            raise ConfigurationError("Premium increase rates must be non-negative")
        if not self.minimum <= self.average <= self.maximum:
            raise ConfigurationError(
                "Average premium increase must fall within the min/max range"
            )
        return self


class InsuranceConfig(ImmutableModel):
    """Insurance premium model for DUI convictions."""

    average_annual_premium: float
    sr22_monthly_fee: float
    sr22_years: int
    impact_years: int
    offenses: Mapping[str, OffenseRates]

    @model_validator(mode="after")
    def _validate_values(self) -> InsuranceConfig:
        if self.average_annual_premium <= 0:
            raise ConfigurationError("Average annual premium must be positive")
        if self.sr22_monthly_fee < 0:
            raise ConfigurationError("SR-22 fee must be non-negative")
        if self.sr22_years <= 0 or self.impact_years < self.sr22_years:
            raise ConfigurationError(
                "Impact years must be at least as long as the SR-22 period"
            )
        if not self.offenses:
            raise ConfigurationError("At least one offense tier must be defined")
        return self


class YearConfiguration(ImmutableModel):
    """Complete set of constants for one tax year."""

    year: int
    meta: Mapping[str, Any] = Field(default_factory=dict)
    federal: FederalConfig
    self_employment: SelfEmploymentConfig
    payroll: PayrollConfig
    s_corp: SCorpConfig
    hourly_rate: HourlyRateConfig
    quarterly: QuarterlyConfig
    insurance: InsuranceConfig

    @model_validator(mode="before")
    @classmethod
    def _share_wage_base(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise ConfigurationError("Year configuration must be a mapping")

        prepared = dict(data)
        payroll = prepared.get("payroll")
        self_employment = prepared.get("self_employment")
        if isinstance(payroll, Mapping) and isinstance(self_employment, Mapping):
            fica = payroll.get("fica")
            if isinstance(fica, Mapping) and "social_security_wage_base" not in fica:
                wage_base = self_employment.get("social_security_wage_base")
                prepared["payroll"] = {
                    **payroll,
                    "fica": {**fica, "social_security_wage_base": wage_base},
                }

        if prepared.get("meta") is None:
            prepared["meta"] = {}
        return prepared

    @model_validator(mode="after")
    def _validate_year(self) -> Self:
        for deadline in self.quarterly.deadlines:
            if deadline.due.year not in (self.year, self.year + 1):
                raise ConfigurationError(
                    f"Quarterly deadline {deadline.quarter} falls outside tax year {self.year}"
                )
        return self


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported tax year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available tax year configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> TaxYearManifest:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "ConfigurationError",
    "FederalConfig",
    "FicaRates",
    "HourlyRateConfig",
    "ImmutableModel",
    "InsuranceConfig",
    "OffenseRates",
    "PayrollConfig",
    "QuarterlyConfig",
    "QuarterlyDeadline",
    "SCorpConfig",
    "SelfEmploymentConfig",
    "TaxBracket",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "ValidationError",
    "YearConfiguration",
]
