"""Domain-specific calculation helpers."""

from .comparisons import compare_llc_vs_s_corp, compare_w2_vs_1099
from .hourly_rate import calculate_hourly_rate
from .insurance import calculate_insurance_impact
from .payroll import calculate_paycheck, calculate_w2_tax
from .quarterly import calculate_quarterly_tax
from .self_employment import calculate_payroll_taxes, calculate_self_employment_tax
from .utils import (
    calculate_progressive_tax,
    effective_rate,
    format_rate,
    round_cents,
    round_currency,
)

__all__ = [
    "calculate_hourly_rate",
    "calculate_insurance_impact",
    "calculate_paycheck",
    "calculate_payroll_taxes",
    "calculate_progressive_tax",
    "calculate_quarterly_tax",
    "calculate_self_employment_tax",
    "calculate_w2_tax",
    "compare_llc_vs_s_corp",
    "compare_w2_vs_1099",
    "effective_rate",
    "format_rate",
    "round_cents",
    "round_currency",
]
