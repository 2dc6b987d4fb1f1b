"""
src/analytics/thresholds.py
────────────────────────────
Two-tier zone threshold engine.

Each reading is checked on two independent sides:
  low  side: v < min2 → critical, else v < min → warning
  high side: v > max2 → critical, else v > max → warning

With ordered thresholds (min2 ≤ min ≤ max ≤ max2) at most one side fires.
An inconsistent configuration can flag both sides for the same reading;
that is kept, and reported through `ZoneThresholds.is_ordered()`.
"""
from __future__ import annotations

import pandas as pd

from config.scoring import ExcursionSeverity
from src.data.models import ExcursionCounts, ZoneThresholds


def _low_severity(value: float, thr: ZoneThresholds) -> ExcursionSeverity | None:
    if thr.min2 is not None and value < thr.min2:
        return ExcursionSeverity.CRITICAL
    if thr.min is not None and value < thr.min:
        return ExcursionSeverity.WARNING
    return None


def _high_severity(value: float, thr: ZoneThresholds) -> ExcursionSeverity | None:
    if thr.max2 is not None and value > thr.max2:
        return ExcursionSeverity.CRITICAL
    if thr.max is not None and value > thr.max:
        return ExcursionSeverity.WARNING
    return None


def classify_reading(value: float, thresholds: ZoneThresholds) -> list[ExcursionSeverity]:
    """
    Classify one reading against a zone.

    Returns the severities that fired: [] when in range, one entry
    normally, two only for inconsistent thresholds.
    """
    return [
        severity
        for severity in (_low_severity(value, thresholds), _high_severity(value, thresholds))
        if severity is not None
    ]


def count_excursions(values: pd.Series, thresholds: ZoneThresholds) -> ExcursionCounts:
    """Count warning and critical flags over a numeric series."""
    flags = [severity for v in values for severity in classify_reading(float(v), thresholds)]
    return ExcursionCounts(
        warning=flags.count(ExcursionSeverity.WARNING),
        critical=flags.count(ExcursionSeverity.CRITICAL),
    )


def valid_values(raw: list) -> pd.Series:
    """Numeric readings only; None, NaN, booleans, objects and non-numeric strings are dropped."""
    kept = [v for v in raw if isinstance(v, (int, float, str)) and not isinstance(v, bool)]
    series = pd.to_numeric(pd.Series(kept, dtype=object), errors="coerce")
    return series.dropna().astype(float).reset_index(drop=True)
