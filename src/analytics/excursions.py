"""
src/analytics/excursions.py
────────────────────────────
Per-sensor excursion detection and the cross-sensor rollup.

Each sensor evaluation returns its own counts; the rollup is a separate
reduction over the summaries, so sensor order never affects the totals.

Duration is a heuristic: every flagged reading is assumed to represent
MINUTES_PER_EXCURSION minutes, regardless of actual timestamps.
"""
from __future__ import annotations

import logging
from functools import reduce

from config.scoring import EXCURSION_WINDOW_HOURS, MINUTES_PER_EXCURSION
from config.sensors import SensorType
from src.analytics.thresholds import count_excursions, valid_values
from src.analytics.units import format_sensor_value, round_half_up
from src.data.models import (
    ExcursionCounts,
    ExcursionRecord,
    ExcursionRollup,
    SensorStream,
    SensorSummary,
    ZoneThresholds,
)

logger = logging.getLogger(__name__)

NO_RECORDED_EXCURSIONS = "No excursions recorded"


def excursion_minutes(counts: ExcursionCounts) -> int:
    return counts.total * MINUTES_PER_EXCURSION


def detect_excursions(
    stream: SensorStream,
    thresholds: ZoneThresholds,
    unit: str,
    is_temperature: bool | None = None,
) -> SensorSummary:
    """
    Evaluate one sensor stream against its zone thresholds.

    Args:
        stream: Readings for a single sensor type (temperature in °F)
        thresholds: Two-tier zone for this sensor
        unit: Display unit (formatting only; detection uses raw values)
        is_temperature: Override for temperature formatting; inferred
            from the stream type when None

    Returns:
        SensorSummary with counts, minutes and the status sentence.
    """
    if is_temperature is None:
        is_temperature = stream.sensor_type == SensorType.TEMPERATURE
    label = stream.sensor_type.value

    values = valid_values([r.value for r in stream.readings])
    if values.empty:
        return SensorSummary(
            sensor_type=stream.sensor_type,
            display_unit=unit,
            data_available=False,
            status_text=f"{label}: data unavailable",
        )

    ordered = thresholds.is_ordered()
    if not ordered:
        logger.warning(
            "Inconsistent %s thresholds (expected min2 <= min <= max <= max2): %s",
            label,
            thresholds.model_dump(),
        )

    counts = count_excursions(values, thresholds)
    minutes = excursion_minutes(counts)
    average = round_half_up(float(values.mean()))

    display_avg = format_sensor_value(average, unit, is_temperature)
    display_ideal = (
        format_sensor_value(thresholds.ideal, unit, is_temperature)
        if thresholds.ideal is not None
        else None
    )

    if counts.total == 0:
        excursion_text = f"No excursions in past {EXCURSION_WINDOW_HOURS}h"
    else:
        excursion_text = (
            f"{counts.critical} critical, {counts.warning} warning excursions ({minutes} min)"
        )
    ideal_text = f"Ideal: {display_ideal}" if display_ideal is not None else "Ideal not defined"

    return SensorSummary(
        sensor_type=stream.sensor_type,
        display_unit=unit,
        data_available=True,
        average_display_value=display_avg,
        counts=counts,
        excursion_minutes=minutes,
        ideal_display_value=display_ideal,
        status_text=f"{label}: avg {display_avg}, {excursion_text}. {ideal_text}",
        thresholds_ordered=ordered,
    )


# ── Rollup ────────────────────────────────────────────────────────────────────

def _describe_record(record: ExcursionRecord) -> str:
    name = record.excursion_name or "Unnamed excursion"
    location = record.location_address or "unknown location"
    when = record.timestamp.isoformat() if record.timestamp else "unknown time"
    return f"- {name} at {location} ({when}): {record.historical_pattern}"


def excursion_list_text(records: list[ExcursionRecord]) -> str:
    if not records:
        return NO_RECORDED_EXCURSIONS
    return "\n".join(_describe_record(r) for r in records)


def summarize_excursions(
    summaries: list[SensorSummary],
    records: list[ExcursionRecord] | None = None,
) -> ExcursionRollup:
    """Sum per-sensor counts and minutes and build the rollup sentences."""
    counts = reduce(lambda acc, s: acc + s.counts, summaries, ExcursionCounts())
    minutes = sum(s.excursion_minutes for s in summaries)

    if counts.total == 0:
        rollup = f"No excursions detected in the past {EXCURSION_WINDOW_HOURS} hours."
    else:
        rollup = (
            f"Overall: {counts.critical} critical and {counts.warning} warning excursions "
            f"across all sensors, totaling {minutes} minutes."
        )

    return ExcursionRollup(
        counts=counts,
        excursion_minutes=minutes,
        rollup_text=rollup,
        excursion_list_text=excursion_list_text(records or []),
    )
