"""
src/analytics/analysis.py
─────────────────────────
Analysis pipeline for one shipment request.

  detect (per sensor) → summarize → predict ETA + score risk → assemble

Pure: no I/O and no state kept between calls. Excursion records are
expected to be enriched already (see src/services/enrichment.py).
"""
from __future__ import annotations

from datetime import UTC, datetime

from config.sensors import SENSOR_ORDER, SensorType
from src.analytics.eta import predict_eta, start_time_candidates
from src.analytics.excursions import detect_excursions, summarize_excursions
from src.analytics.risk import score_risk
from src.data.models import (
    AnalysisResult,
    ETAPrediction,
    ExcursionRecord,
    ExcursionRollup,
    RiskAssessment,
    SensorSummary,
    TripMetadata,
    as_utc,
)
from src.data.payload import AnalysisRequest


def _as_text(value) -> str | None:
    return None if value is None else str(value)


def trip_metadata(request: AnalysisRequest) -> TripMetadata:
    details = request.trip_details
    return TripMetadata(
        id=_as_text(details.trip_id),
        program_id=_as_text(details.program_id),
        product_label=request.product_label,
        current_location=details.current_location,
        declared_eta=details.trip_eta,
        actual_arrival_time=details.trip_actual_arrival_time,
        start_time_candidates=start_time_candidates(request),
    )


def sensor_summaries(request: AnalysisRequest) -> list[SensorSummary]:
    """Evaluate every sensor type independently."""
    return [
        detect_excursions(
            request.stream(sensor_type),
            request.thresholds(sensor_type),
            request.trip_preferences.display_unit(sensor_type),
            is_temperature=sensor_type == SensorType.TEMPERATURE,
        )
        for sensor_type in SENSOR_ORDER
    ]


def assemble_analysis(
    trip: TripMetadata,
    sensors: list[SensorSummary],
    rollup: ExcursionRollup,
    eta: ETAPrediction,
    risk: RiskAssessment,
    excursions: list[ExcursionRecord],
    generated_at: datetime,
) -> AnalysisResult:
    return AnalysisResult(
        trip=trip,
        sensors=sensors,
        rollup=rollup,
        eta=eta,
        risk=risk,
        excursions=excursions,
        generated_at=generated_at,
    )


def build_analysis(
    request: AnalysisRequest,
    now: datetime | None = None,
    excursions: list[ExcursionRecord] | None = None,
) -> AnalysisResult:
    """
    Run the full analysis for a validated request.

    Args:
        request: Parsed request payload
        now: Evaluation instant (defaults to current UTC time)
        excursions: Enriched excursion records; defaults to the raw
            `excursionsList` of the request
    """
    now = as_utc(now) if now else datetime.now(tz=UTC)
    records = request.excursions_list if excursions is None else excursions

    trip = trip_metadata(request)
    sensors = sensor_summaries(request)
    rollup = summarize_excursions(sensors, records)

    eta = predict_eta(
        trip.start_time_candidates,
        request.segments,
        request.trip_details.destinations,
        rollup.counts,
        rollup.excursion_minutes,
        now=now,
    )
    risk = score_risk(
        rollup.counts,
        rollup.excursion_minutes,
        records,
        trip.product_label,
        now=now,
    )

    return assemble_analysis(trip, sensors, rollup, eta, risk, records, generated_at=now)
