"""
config/sensors.py
─────────────────
Sensor type definitions and payload field mapping.

Each sensor type has:
  - a stream key in sensorDetails[0]        (e.g. "temperatureData")
  - a unit key in tripPreferences           (e.g. "temperatureUnit")
  - a default display unit                  (°F, %, lux, ppm)
  - a threshold suffix in zoneProducts[0]   (min2Temperature, idealCO2, ...)

Temperature readings and thresholds are always Fahrenheit on the wire.
"""
from dataclasses import dataclass
from enum import Enum


class SensorType(str, Enum):
    TEMPERATURE = "Temperature"
    HUMIDITY = "Humidity"
    LIGHT = "Light"
    CO2 = "CO2"


@dataclass(frozen=True)
class SensorFields:
    stream_key: str
    unit_key: str
    default_unit: str
    threshold_suffix: str


SENSOR_FIELDS: dict[SensorType, SensorFields] = {
    SensorType.TEMPERATURE: SensorFields(
        stream_key="temperatureData",
        unit_key="temperatureUnit",
        default_unit="°F",
        threshold_suffix="Temperature",
    ),
    SensorType.HUMIDITY: SensorFields(
        stream_key="humidityData",
        unit_key="humidityUnit",
        default_unit="%",
        threshold_suffix="Humidity",
    ),
    SensorType.LIGHT: SensorFields(
        stream_key="lightData",
        unit_key="lightUnit",
        default_unit="lux",
        threshold_suffix="Light",
    ),
    SensorType.CO2: SensorFields(
        stream_key="co2Data",
        unit_key="cO2Unit",
        default_unit="ppm",
        threshold_suffix="CO2",
    ),
}

# Evaluation order for summaries and UI cards
SENSOR_ORDER: list[SensorType] = list(SENSOR_FIELDS.keys())

# zoneProducts threshold prefixes, in ZoneThresholds field order
THRESHOLD_BOUNDS = ("min", "max", "min2", "max2", "ideal")

CELSIUS = "°C"
FAHRENHEIT = "°F"
