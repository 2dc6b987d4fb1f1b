"""
src/services/handler.py
───────────────────────
Request handling around the analysis pipeline.

  validate → enrich excursions → build analysis → (optional) narrative

`analyze_trip()` is the Python API and raises AnalysisError subclasses.
`handle_request()` is the transport-facing wrapper returning
(status_code, body) with the error envelope {"error", "details"?}.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Protocol

from src.analytics.analysis import build_analysis
from src.data.models import AnalysisResult
from src.data.payload import parse_request
from src.services.enrichment import HistoricalPatternLookup, enrich_excursions
from src.services.errors import AnalysisError, ExternalServiceError

logger = logging.getLogger(__name__)


class NarrativeGenerator(Protocol):
    """External summary step consuming the structured analysis."""

    def generate(self, result: AnalysisResult) -> dict[str, Any]: ...


def analyze_trip(
    payload: Any,
    lookup: HistoricalPatternLookup | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """
    Validate a raw payload and run the analysis.

    Raises:
        PayloadValidationError: the payload is empty or incomplete.
    """
    request = parse_request(payload)
    records = enrich_excursions(request.excursions_list, lookup)
    result = build_analysis(request, now=now, excursions=records)
    logger.info(
        "Trip %s analysed: risk=%s (%d), eta_confidence=%s, excursions=%d",
        result.trip.id,
        result.risk.level.value,
        result.risk.score,
        result.eta.confidence.value,
        result.rollup.counts.total,
    )
    return result


def generate_narrative(narrator: NarrativeGenerator, result: AnalysisResult) -> dict[str, Any]:
    """Call the narrative collaborator, wrapping any failure."""
    try:
        return narrator.generate(result)
    except Exception as e:
        logger.exception("Narrative generation failed for trip %s", result.trip.id)
        raise ExternalServiceError("Narrative generation failed.", details=str(e)) from e


def handle_request(
    payload: Any,
    lookup: HistoricalPatternLookup | None = None,
    narrator: NarrativeGenerator | None = None,
    now: datetime | None = None,
) -> tuple[int, dict[str, Any]]:
    """Run a request end to end and shape the response body."""
    try:
        result = analyze_trip(payload, lookup=lookup, now=now)
        body: dict[str, Any] = {"analysis": result.model_dump(mode="json")}
        if narrator is not None:
            body["narrative"] = generate_narrative(narrator, result)
    except AnalysisError as e:
        logger.warning("Request rejected (%d): %s", e.status_code, e.message)
        return e.status_code, e.to_response()
    return 200, body
