"""
src/analytics/risk.py
─────────────────────
Shipment risk score.

Additive rules (each fires independently):
  +2  any critical excursion
  +1  any warning excursion
  +1  total excursion minutes > 30
  +2  an excursion named "...new product alarm..."
  +1  product label mentions vaccine / frozen
  +1  an excursion recorded within the last 12 h

Level: score ≥ 5 → High, ≥ 3 → Moderate, else Low.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from config.scoring import (
    EXCURSION_WINDOW_HOURS,
    HIGH_RISK_SCORE,
    LONG_EXCURSION_MINUTES,
    MODERATE_RISK_SCORE,
    NEW_PRODUCT_ALARM,
    RISK_WEIGHTS,
    SENSITIVE_PRODUCT_KEYWORDS,
    RiskLevel,
)
from src.data.models import ExcursionCounts, ExcursionRecord, RiskAssessment, as_utc


def risk_level(score: int) -> RiskLevel:
    if score >= HIGH_RISK_SCORE:
        return RiskLevel.HIGH
    if score >= MODERATE_RISK_SCORE:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def is_sensitive_product(product_label: str | None) -> bool:
    label = (product_label or "").lower()
    return any(keyword in label for keyword in SENSITIVE_PRODUCT_KEYWORDS)


def has_new_product_alarm(records: list[ExcursionRecord]) -> bool:
    return any(NEW_PRODUCT_ALARM in (r.excursion_name or "").lower() for r in records)


def has_recent_excursion(records: list[ExcursionRecord], now: datetime) -> bool:
    window_start = now - timedelta(hours=EXCURSION_WINDOW_HOURS)
    return any(
        r.timestamp is not None and window_start <= r.timestamp <= now for r in records
    )


def score_risk(
    counts: ExcursionCounts,
    total_excursion_minutes: int,
    records: list[ExcursionRecord],
    product_label: str | None,
    now: datetime | None = None,
) -> RiskAssessment:
    """Compute the risk score, its level and the rules that fired."""
    now = as_utc(now) if now else datetime.now(tz=UTC)

    rules = {
        "critical_excursions": counts.critical > 0,
        "warning_excursions": counts.warning > 0,
        "long_excursions": total_excursion_minutes > LONG_EXCURSION_MINUTES,
        "new_product_alarm": has_new_product_alarm(records),
        "sensitive_product": is_sensitive_product(product_label),
        "recent_excursion": has_recent_excursion(records, now),
    }
    factors = [name for name, fired in rules.items() if fired]
    score = sum(RISK_WEIGHTS[name] for name in factors)

    return RiskAssessment(score=score, level=risk_level(score), factors=factors)
