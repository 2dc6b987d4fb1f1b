"""
src/data/models.py
──────────────────
Pydantic v2 data models for shipment telemetry and the derived analysis.

Input-side models (readings, excursion records, segments, destinations)
accept the camelCase keys of the request payload via aliases. Derived
models are frozen: they are rebuilt on every request and never mutated.
"""
from __future__ import annotations

import math
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

import pandas as pd
from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from config.scoring import Confidence, RiskLevel
from config.sensors import SensorType

NO_HISTORICAL_PATTERN = "No historical pattern"


# ── Lenient field coercion ────────────────────────────────────────────────────

def _coerce_timestamp(value: Any) -> datetime | None:
    """
    Parse ISO strings, datetimes and epoch numbers (s or ms) into aware UTC
    datetimes. Unparseable values become None instead of failing the request.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    if not isinstance(value, (str, int, float, datetime)):
        return None
    try:
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return None
            unit = "ms" if abs(value) > 1e11 else "s"
            ts = pd.to_datetime(value, unit=unit, utc=True, errors="coerce")
        else:
            ts = pd.to_datetime(value, utc=True, errors="coerce")
        if ts is None or pd.isna(ts):
            return None
        return ts.to_pydatetime()
    except (OverflowError, ValueError, pd.errors.OutOfBoundsDatetime):
        return None


def _coerce_number(value: Any) -> float | None:
    """Numeric threshold or None; blanks and junk mean 'no bound'."""
    if value is None or isinstance(value, bool):
        return None
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number):
        return None
    return float(number)


def _coerce_reading_value(value: Any) -> float | str | None:
    """Keep numbers and strings for the detector; booleans, objects and lists mean 'no value'."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str)):
        return value
    return None


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


Timestamp = Annotated[datetime | None, BeforeValidator(_coerce_timestamp)]
OptionalNumber = Annotated[float | None, BeforeValidator(_coerce_number)]


class _PayloadModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ── Input models ──────────────────────────────────────────────────────────────

class SegmentStatus(str, Enum):
    COMPLETED = "Completed"
    OTHER = "Other"


class Reading(_PayloadModel):
    # Raw value: non-numeric entries are kept and dropped by the detector
    value: Annotated[float | str | None, BeforeValidator(_coerce_reading_value)] = None
    timestamp: Timestamp = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_value(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return data
        return {"value": data}


class SensorStream(BaseModel):
    sensor_type: SensorType
    readings: list[Reading] = Field(default_factory=list)


class ZoneThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: OptionalNumber = None
    max: OptionalNumber = None
    min2: OptionalNumber = None   # critical-low
    max2: OptionalNumber = None   # critical-high
    ideal: OptionalNumber = None

    def is_ordered(self) -> bool:
        """True when the defined bounds respect min2 ≤ min ≤ max ≤ max2."""
        bounds = [b for b in (self.min2, self.min, self.max, self.max2) if b is not None]
        return all(lo <= hi for lo, hi in zip(bounds, bounds[1:]))


class ExcursionRecord(_PayloadModel):
    excursion_name: str = Field(
        default="", validation_alias=AliasChoices("excursionName", "excursion_name")
    )
    location_address: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LocationAddress", "locationAddress", "location_address"),
    )
    alarm_type_id: int | str | None = Field(
        default=None, validation_alias=AliasChoices("AlarmTypeId", "alarmTypeId", "alarm_type_id")
    )
    timestamp: Timestamp = Field(
        default=None, validation_alias=AliasChoices("timestamp", "time", "eventTime")
    )
    historical_pattern: str = Field(
        default=NO_HISTORICAL_PATTERN,
        validation_alias=AliasChoices("historicalPattern", "historical_pattern"),
    )


class Segment(_PayloadModel):
    name: str | None = Field(default=None, validation_alias=AliasChoices("segmentName", "name"))
    status: SegmentStatus = Field(
        default=SegmentStatus.OTHER, validation_alias=AliasChoices("segmentStatus", "status")
    )
    start_time: Timestamp = Field(
        default=None, validation_alias=AliasChoices("segmentStartTime", "start_time")
    )
    end_time: Timestamp = Field(
        default=None, validation_alias=AliasChoices("segmentEndTime", "end_time")
    )
    excursion_count: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("excursions", "excursion_count")
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("segmentStatus", "status"):
            if key in data:
                raw = str(data[key] or "").strip().lower()
                data[key] = SegmentStatus.COMPLETED if raw == "completed" else SegmentStatus.OTHER
        for key in ("excursions", "excursion_count"):
            if isinstance(data.get(key), list):
                data[key] = len(data[key])
            elif data.get(key) is None and key in data:
                data[key] = 0
        return data

    @property
    def is_completed(self) -> bool:
        return self.status == SegmentStatus.COMPLETED

    def duration_minutes(self) -> float | None:
        """Elapsed minutes, or None when timing is missing or reversed."""
        if self.start_time is None or self.end_time is None or self.end_time < self.start_time:
            return None
        return (self.end_time - self.start_time).total_seconds() / 60.0


class Destination(_PayloadModel):
    name: str | None = None
    arrival_time: Timestamp = Field(
        default=None, validation_alias=AliasChoices("arrivalTime", "startTime", "arrival_time")
    )
    departure_time: Timestamp = Field(
        default=None, validation_alias=AliasChoices("departureTime", "endTime", "departure_time")
    )


class TripOrigin(_PayloadModel):
    name: str | None = None
    actual_departure_time: Timestamp = Field(
        default=None,
        validation_alias=AliasChoices("actualDepartureTime", "actualDeparture", "actual_departure_time"),
    )


# ── Derived models ────────────────────────────────────────────────────────────

class ExcursionCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    warning: int = Field(default=0, ge=0)
    critical: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.warning + self.critical

    def __add__(self, other: ExcursionCounts) -> ExcursionCounts:
        return ExcursionCounts(
            warning=self.warning + other.warning,
            critical=self.critical + other.critical,
        )


class SensorSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    sensor_type: SensorType
    display_unit: str
    data_available: bool
    average_display_value: str = "N/A"
    counts: ExcursionCounts = Field(default_factory=ExcursionCounts)
    excursion_minutes: int = Field(default=0, ge=0)
    ideal_display_value: str | None = None
    status_text: str
    thresholds_ordered: bool = True


class ExcursionRollup(BaseModel):
    model_config = ConfigDict(frozen=True)

    counts: ExcursionCounts
    excursion_minutes: int = Field(ge=0)
    rollup_text: str
    excursion_list_text: str


class StartTimeCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    timestamp: Timestamp = None


class TripMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    program_id: str | None = None
    product_label: str | None = None
    current_location: str | None = None
    declared_eta: datetime | None = None
    actual_arrival_time: datetime | None = None
    start_time_candidates: list[StartTimeCandidate] = Field(default_factory=list)


class ETAPrediction(BaseModel):
    model_config = ConfigDict(frozen=True)

    predicted_timestamp: datetime
    confidence: Confidence
    start_time: datetime
    start_time_source: str
    remaining_segments: int = Field(ge=0)
    average_segment_minutes: float = Field(ge=0.0)
    estimated_remaining_minutes: float = Field(ge=0.0)
    stop_delay_minutes: float = Field(ge=0.0)
    excursion_buffer_minutes: int = Field(ge=0)


class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0)
    level: RiskLevel
    factors: list[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    trip: TripMetadata
    sensors: list[SensorSummary]
    rollup: ExcursionRollup
    eta: ETAPrediction
    risk: RiskAssessment
    excursions: list[ExcursionRecord] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
