#!/usr/bin/env python3
"""Time every registered calculator against a representative payload."""

from __future__ import annotations

import json
import os
import sys
from datetime import date
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fincalc.backend.services.calculation_service import (  # noqa: E402
    CALCULATORS,
    calculate,
)

SAMPLE_PAYLOADS = {
    "1099-tax": {"gross_income": 85_000},
    "paycheck": {"salary": 72_000, "frequency": "semimonthly"},
    "quarterly-tax": {"gross_income": 85_000, "already_paid": 6_000},
    "w2-vs-1099": {"gross_income": 95_000},
    "llc-vs-scorp": {"income": 140_000, "salary": 60_000},
    "hourly-rate": {"target_income": 90_000, "weeks_per_year": 46, "hours_per_week": 35},
    "dui-insurance": {"current_premium": 1_650, "offense": "second"},
}

# Fixed so quarterly timings do not depend on the calendar.
SNAPSHOT_DATE = date(2025, 5, 1)


def measure_calculator(calculator_id: str, iterations: int) -> dict[str, float]:
    """Return timing statistics for repeated runs of one calculator."""

    payload = SAMPLE_PAYLOADS.get(calculator_id, {})
    calculate(calculator_id, payload, today=SNAPSHOT_DATE)  # Warm configuration cache
    start = perf_counter()
    for _ in range(iterations):
        calculate(calculator_id, payload, today=SNAPSHOT_DATE)
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("FINCALC_PROFILE_ITERATIONS", "200"))
    report = {
        definition.id: measure_calculator(definition.id, iterations)
        for definition in CALCULATORS
    }
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
