"""
src/services/errors.py
──────────────────────
Error types surfaced by the analysis handler.

Only two boundaries can fail a request: payload validation and calls to
external collaborators. Everything in src/analytics is total.
"""
from __future__ import annotations

from typing import Any


class AnalysisError(Exception):
    """Base error carrying an HTTP-style status and optional diagnostics."""

    status_code: int = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class PayloadValidationError(AnalysisError):
    """Required request fields are missing or malformed."""

    status_code = 400


class ExternalServiceError(AnalysisError):
    """A collaborator (narrative generation, enrichment) failed."""

    status_code = 500
