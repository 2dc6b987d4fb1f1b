"""
src/analytics/eta.py
────────────────────
Arrival time prediction from route segments.

  predicted = start + remaining + stop_delay + excursion_buffer

  start      : first present candidate in START_TIME_EXTRACTORS,
               else the evaluation instant
  remaining  : mean completed-segment duration × open segments
               (DEFAULT_SEGMENT_MINUTES when nothing has completed)
  stop_delay : Σ max(0, departure − arrival) over destinations,
               missing timestamps read as the epoch
  buffer     : 30 min per critical + 10 min per warning excursion

Confidence starts High, drops to Moderate on excursion severity, and to
Low on long excursions or a long remaining route (Low wins).
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Callable

import numpy as np

from config.scoring import (
    CRITICAL_BUFFER_MINUTES,
    DEFAULT_SEGMENT_MINUTES,
    LOW_EXCURSION_MINUTES_LIMIT,
    LOW_REMAINING_SEGMENTS_LIMIT,
    MODERATE_WARNING_LIMIT,
    WARNING_BUFFER_MINUTES,
    Confidence,
)
from src.data.models import (
    Destination,
    ETAPrediction,
    ExcursionCounts,
    Segment,
    StartTimeCandidate,
    as_utc,
)

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
NOW_SOURCE = "now"


# ── Start time resolution ─────────────────────────────────────────────────────

def _trip_started(request) -> datetime | None:
    return request.trip_details.trip_start


def _origin_departure(request) -> datetime | None:
    origin = request.trip_details.trip_origin
    return origin.actual_departure_time if origin else None


def _first_segment_start(request) -> datetime | None:
    return request.segments[0].start_time if request.segments else None


def _first_destination_arrival(request) -> datetime | None:
    destinations = request.trip_details.destinations
    return destinations[0].arrival_time if destinations else None


def _trip_created(request) -> datetime | None:
    return request.trip_details.create_date


# Precedence order: first extractor returning a timestamp wins
START_TIME_EXTRACTORS: list[tuple[str, Callable]] = [
    ("trip_start", _trip_started),
    ("origin_departure", _origin_departure),
    ("first_segment_start", _first_segment_start),
    ("first_destination_arrival", _first_destination_arrival),
    ("trip_created", _trip_created),
]


def start_time_candidates(request) -> list[StartTimeCandidate]:
    """Evaluate every extractor against an AnalysisRequest, in precedence order."""
    return [
        StartTimeCandidate(source=source, timestamp=extract(request))
        for source, extract in START_TIME_EXTRACTORS
    ]


def resolve_start_time(
    candidates: list[StartTimeCandidate],
    now: datetime,
) -> tuple[datetime, str]:
    """First present candidate, falling back to `now`. Never absent."""
    for candidate in candidates:
        if candidate.timestamp is not None:
            return candidate.timestamp, candidate.source
    return now, NOW_SOURCE


# ── Segment timing ────────────────────────────────────────────────────────────

def average_segment_minutes(segments: list[Segment]) -> float:
    durations = [
        d for s in segments if s.is_completed and (d := s.duration_minutes()) is not None
    ]
    if not durations:
        return DEFAULT_SEGMENT_MINUTES
    return float(np.mean(durations))


def remaining_segment_count(segments: list[Segment]) -> int:
    return sum(1 for s in segments if not s.is_completed)


def stop_delay_minutes(destinations: list[Destination]) -> float:
    total = timedelta()
    for dest in destinations:
        arrival = dest.arrival_time or EPOCH
        departure = dest.departure_time or EPOCH
        total += max(timedelta(), departure - arrival)
    return total.total_seconds() / 60.0


def excursion_buffer_minutes(counts: ExcursionCounts) -> int:
    return counts.critical * CRITICAL_BUFFER_MINUTES + counts.warning * WARNING_BUFFER_MINUTES


def eta_confidence(
    counts: ExcursionCounts,
    total_excursion_minutes: int,
    remaining_segments: int,
) -> Confidence:
    confidence = Confidence.HIGH
    if counts.critical > 0 or counts.warning > MODERATE_WARNING_LIMIT:
        confidence = Confidence.MODERATE
    if (
        total_excursion_minutes > LOW_EXCURSION_MINUTES_LIMIT
        or remaining_segments > LOW_REMAINING_SEGMENTS_LIMIT
    ):
        confidence = Confidence.LOW
    return confidence


# ── Main API ──────────────────────────────────────────────────────────────────

def predict_eta(
    candidates: list[StartTimeCandidate],
    segments: list[Segment],
    destinations: list[Destination],
    counts: ExcursionCounts,
    total_excursion_minutes: int,
    now: datetime | None = None,
) -> ETAPrediction:
    """
    Predict the arrival timestamp and attach a confidence label.

    Args:
        candidates: Start time candidates in precedence order
        segments: Route segments (Completed ones provide timing history)
        destinations: Declared stops, used for dwell-time delay
        counts: Overall excursion counts from the rollup
        total_excursion_minutes: Overall excursion minutes from the rollup
        now: Evaluation instant (defaults to current UTC time)
    """
    now = as_utc(now) if now else datetime.now(tz=UTC)
    start, source = resolve_start_time(candidates, now)

    avg_minutes = average_segment_minutes(segments)
    remaining = remaining_segment_count(segments)
    remaining_minutes = avg_minutes * remaining
    delay_minutes = stop_delay_minutes(destinations)
    buffer_minutes = excursion_buffer_minutes(counts)

    predicted = start + timedelta(minutes=remaining_minutes + delay_minutes + buffer_minutes)

    return ETAPrediction(
        predicted_timestamp=predicted,
        confidence=eta_confidence(counts, total_excursion_minutes, remaining),
        start_time=start,
        start_time_source=source,
        remaining_segments=remaining,
        average_segment_minutes=round(avg_minutes, 2),
        estimated_remaining_minutes=round(remaining_minutes, 2),
        stop_delay_minutes=round(delay_minutes, 2),
        excursion_buffer_minutes=buffer_minutes,
    )
