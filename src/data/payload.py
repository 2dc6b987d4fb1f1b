"""
src/data/payload.py
───────────────────
Request payload models and validation.

A request is rejected before any computation when the body is empty or
when `tripDetails`, a non-empty `sensorDetails`, or `tripPreferences` is
missing. Only the first element of `sensorDetails` and `zoneProducts` is
used by the analysis.
"""
from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from config.sensors import FAHRENHEIT, SENSOR_FIELDS, THRESHOLD_BOUNDS, SensorType
from src.analytics.units import normalize_temperature_unit
from src.data.models import (
    Destination,
    ExcursionRecord,
    Reading,
    Segment,
    SensorStream,
    Timestamp,
    TripOrigin,
    ZoneThresholds,
)
from src.services.errors import PayloadValidationError

REQUIRED_FIELDS = ("tripDetails", "sensorDetails", "tripPreferences")


class _RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: Any, info) -> Any:
        field = cls.model_fields.get(info.field_name)
        if value is None and field is not None and field.default_factory is list:
            return []
        return value


class TripDetails(_RequestModel):
    program_id: int | str | None = Field(default=None, alias="programId")
    trip_id: int | str | None = Field(default=None, alias="tripID")
    trip_eta: Timestamp = Field(default=None, alias="tripETA")
    trip_actual_arrival_time: Timestamp = Field(default=None, alias="tripActualArrivalTime")
    trip_recent_data: dict[str, Any] | None = Field(default=None, alias="tripRecentData")
    trip_start: Timestamp = Field(default=None, alias="tripStart")
    trip_origin: TripOrigin | None = Field(default=None, alias="tripOrigin")
    destinations: list[Destination] = Field(default_factory=list)
    create_date: Timestamp = Field(default=None, alias="createDate")

    @property
    def current_location(self) -> str | None:
        recent = self.trip_recent_data or {}
        for key in ("location", "address", "currentLocation"):
            if recent.get(key):
                return str(recent[key])
        return None


class SensorDetails(_RequestModel):
    temperature_data: list[Reading] = Field(default_factory=list, alias="temperatureData")
    humidity_data: list[Reading] = Field(default_factory=list, alias="humidityData")
    light_data: list[Reading] = Field(default_factory=list, alias="lightData")
    co2_data: list[Reading] = Field(default_factory=list, alias="co2Data")

    def stream(self, sensor_type: SensorType) -> SensorStream:
        readings = {
            SensorType.TEMPERATURE: self.temperature_data,
            SensorType.HUMIDITY: self.humidity_data,
            SensorType.LIGHT: self.light_data,
            SensorType.CO2: self.co2_data,
        }[sensor_type]
        return SensorStream(sensor_type=sensor_type, readings=readings)


class TripPreferences(_RequestModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    temperature_unit: str | None = Field(default=None, alias="temperatureUnit")
    humidity_unit: str | None = Field(default=None, alias="humidityUnit")
    light_unit: str | None = Field(default=None, alias="lightUnit")
    co2_unit: str | None = Field(
        default=None, validation_alias=AliasChoices("cO2Unit", "co2Unit", "co2_unit")
    )

    def display_unit(self, sensor_type: SensorType) -> str:
        """Preferred unit for a sensor, falling back to its default."""
        raw = {
            SensorType.TEMPERATURE: self.temperature_unit,
            SensorType.HUMIDITY: self.humidity_unit,
            SensorType.LIGHT: self.light_unit,
            SensorType.CO2: self.co2_unit,
        }[sensor_type]
        if sensor_type == SensorType.TEMPERATURE:
            return normalize_temperature_unit(raw) if raw else FAHRENHEIT
        return raw or SENSOR_FIELDS[sensor_type].default_unit


class ZoneProduct(_RequestModel):
    """Product zone: `productName` plus `<bound><Suffix>` threshold keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    product_name: str | None = Field(default=None, alias="productName")

    def thresholds(self, sensor_type: SensorType) -> ZoneThresholds:
        suffix = SENSOR_FIELDS[sensor_type].threshold_suffix
        extra = self.model_extra or {}
        return ZoneThresholds(**{bound: extra.get(f"{bound}{suffix}") for bound in THRESHOLD_BOUNDS})


class AnalysisRequest(_RequestModel):
    trip_details: TripDetails = Field(alias="tripDetails")
    sensor_details: list[SensorDetails] = Field(alias="sensorDetails", min_length=1)
    trip_preferences: TripPreferences = Field(alias="tripPreferences")
    zone_products: list[ZoneProduct] = Field(default_factory=list, alias="zoneProducts")
    excursions_list: list[ExcursionRecord] = Field(default_factory=list, alias="excursionsList")
    segments: list[Segment] = Field(default_factory=list)

    @property
    def sensors(self) -> SensorDetails:
        return self.sensor_details[0]

    @property
    def zone_product(self) -> ZoneProduct:
        return self.zone_products[0] if self.zone_products else ZoneProduct()

    @property
    def product_label(self) -> str | None:
        return self.zone_product.product_name

    def stream(self, sensor_type: SensorType) -> SensorStream:
        return self.sensors.stream(sensor_type)

    def thresholds(self, sensor_type: SensorType) -> ZoneThresholds:
        return self.zone_product.thresholds(sensor_type)


# ── Validation entry point ────────────────────────────────────────────────────

def missing_required_fields(payload: dict) -> list[str]:
    """Names of required top-level fields that are absent or empty."""
    missing = []
    for name in REQUIRED_FIELDS:
        value = payload.get(name)
        if value is None:
            missing.append(name)
        elif name == "sensorDetails" and (not isinstance(value, list) or not value):
            missing.append(name)
    return missing


def parse_request(payload: Any) -> AnalysisRequest:
    """
    Validate a raw JSON body and build an AnalysisRequest.

    Raises:
        PayloadValidationError: empty body, missing required fields, or
            fields pydantic cannot coerce (errors kept in `details`).
    """
    if not payload or not isinstance(payload, dict):
        raise PayloadValidationError("Missing or empty trip data in request body.")

    missing = missing_required_fields(payload)
    if missing:
        raise PayloadValidationError(
            f"Missing required field(s): {', '.join(missing)}.",
            details={"missing": missing},
        )

    try:
        return AnalysisRequest.model_validate(payload)
    except ValidationError as exc:
        errors = [
            {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
            for err in exc.errors()
        ]
        raise PayloadValidationError("Invalid trip data in request body.", details=errors) from exc
