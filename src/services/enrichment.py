"""
src/services/enrichment.py
──────────────────────────
Historical-pattern enrichment for excursion records.

Each record gets one lookup through a caller-supplied collaborator (for
example a query against the excursion history store). Lookups run as an
ordered batch on a thread pool; any lookup that fails, times out or
returns nothing leaves the record with NO_HISTORICAL_PATTERN. Failures
never abort the analysis.

The per-record timeout bounds how long a request waits, not how long a
lookup runs: a worker thread cannot be interrupted, so a timed-out lookup
keeps its thread until it returns. Lookups must enforce their own I/O
timeouts (socket or query timeouts) so abandoned threads finish.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Protocol

from config.settings import settings
from src.data.models import NO_HISTORICAL_PATTERN, ExcursionRecord

logger = logging.getLogger(__name__)


class HistoricalPatternLookup(Protocol):
    """
    Returns a short description of past occurrences, or None.

    Implementations must bound their own I/O with a timeout; the batch
    stops waiting after `ENRICHMENT_TIMEOUT_SECONDS` but cannot stop the call.
    """

    def __call__(self, record: ExcursionRecord) -> str | None: ...


def _merge(record: ExcursionRecord, pattern: str | None) -> ExcursionRecord:
    return record.model_copy(update={"historical_pattern": pattern or NO_HISTORICAL_PATTERN})


def enrich_excursions(
    records: list[ExcursionRecord],
    lookup: HistoricalPatternLookup | None,
    max_workers: int | None = None,
    timeout_seconds: float | None = None,
) -> list[ExcursionRecord]:
    """
    Attach a historical pattern to every record, preserving input order.

    Args:
        records: Raw excursion records from the request
        lookup: Collaborator called once per record; None skips enrichment
        max_workers: Thread pool size (settings default)
        timeout_seconds: Per-record wait limit (settings default)
    """
    if lookup is None or not records:
        return list(records)

    workers = max(1, min(max_workers or settings.ENRICHMENT_MAX_WORKERS, len(records)))
    timeout = timeout_seconds if timeout_seconds is not None else settings.ENRICHMENT_TIMEOUT_SECONDS

    pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="enrichment")
    try:
        futures = [pool.submit(lookup, record) for record in records]
        enriched: list[ExcursionRecord] = []
        for record, future in zip(records, futures):
            try:
                pattern = future.result(timeout=timeout)
            except FutureTimeout:
                logger.warning(
                    "Historical lookup timed out after %.1fs for excursion %r",
                    timeout,
                    record.excursion_name,
                )
                future.cancel()
                pattern = None
            except Exception as e:
                logger.warning(
                    "Historical lookup failed for excursion %r: %s", record.excursion_name, e
                )
                pattern = None
            enriched.append(_merge(record, pattern))
    finally:
        # Do not block the request on lookups that already timed out
        pool.shutdown(wait=False, cancel_futures=True)

    logger.info("Enriched %d excursion record(s)", len(enriched))
    return enriched
