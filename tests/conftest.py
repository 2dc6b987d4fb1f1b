"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the shipment analytics test suite.
"""
import os
import pytest
from datetime import datetime, timedelta, timezone

os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ENRICHMENT_TIMEOUT_SECONDS", "2")


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def temperature_zone():
    from src.data.models import ZoneThresholds
    return ZoneThresholds(min=36.0, max=46.0, min2=32.0, max2=50.0, ideal=41.0)


@pytest.fixture
def sample_payload(now) -> dict:
    from src.data.samples import build_sample_payload
    return build_sample_payload(now)


def _readings(values, now):
    start = now - timedelta(minutes=30 * len(values))
    return [
        {"value": v, "timestamp": (start + timedelta(minutes=30 * i)).isoformat()}
        for i, v in enumerate(values)
    ]


@pytest.fixture
def calm_payload(now) -> dict:
    """All four sensors inside their zones, no excursions, one leg done and one open."""
    return {
        "tripDetails": {
            "programId": 7,
            "tripID": "TRP-CALM",
            "tripStart": (now - timedelta(hours=2)).isoformat(),
        },
        "sensorDetails": [
            {
                "temperatureData": _readings([40.0, 41.0, 42.0], now),
                "humidityData": _readings([45.0, 46.0, 44.0], now),
                "lightData": _readings([0.0, 5.0, 0.0], now),
                "co2Data": _readings([420.0, 430.0, 410.0], now),
            }
        ],
        "tripPreferences": {"temperatureUnit": "°F"},
        "zoneProducts": [
            {
                "productName": "Fresh produce",
                "minTemperature": 36, "maxTemperature": 46, "min2Temperature": 32, "max2Temperature": 50,
                "idealTemperature": 41,
                "minHumidity": 30, "maxHumidity": 60, "min2Humidity": 20, "max2Humidity": 70,
                "maxLight": 50, "max2Light": 200,
                "minCO2": 300, "maxCO2": 1000, "max2CO2": 2000,
            }
        ],
        "excursionsList": [],
        "segments": [
            {
                "segmentName": "Leg 1",
                "segmentStatus": "Completed",
                "segmentStartTime": (now - timedelta(hours=2)).isoformat(),
                "segmentEndTime": (now - timedelta(hours=1, minutes=30)).isoformat(),
            },
            {"segmentName": "Leg 2", "segmentStatus": "In Transit"},
        ],
    }
