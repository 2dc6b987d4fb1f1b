"""
src/data/samples.py
───────────────────
Sample shipment payloads.

Used to pre-fill the analysis page and as test fixtures. Timestamps are
generated relative to a reference instant so the "last 12 hours" rules
behave the same whenever the sample is built.
"""
from __future__ import annotations

import copy
from datetime import UTC, datetime, timedelta

READING_INTERVAL_MINUTES = 30

# Refrigerated vaccine lane: 36–46 °F warning band, 32–50 °F critical band
VACCINE_ZONE: dict = {
    "productName": "COVID Vaccine (refrigerated)",
    "minTemperature": 36.0,
    "maxTemperature": 46.0,
    "min2Temperature": 32.0,
    "max2Temperature": 50.0,
    "idealTemperature": 41.0,
    "minHumidity": 30.0,
    "maxHumidity": 60.0,
    "min2Humidity": 20.0,
    "max2Humidity": 70.0,
    "idealHumidity": 45.0,
    "maxLight": 50.0,
    "max2Light": 200.0,
    "minCO2": 300.0,
    "maxCO2": 1_000.0,
    "max2CO2": 2_000.0,
    "idealCO2": 400.0,
}


def _iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def _series(values: list, end: datetime) -> list[dict]:
    """Evenly spaced readings ending at `end`."""
    start = end - timedelta(minutes=READING_INTERVAL_MINUTES * (len(values) - 1))
    return [
        {"value": v, "timestamp": _iso(start + timedelta(minutes=READING_INTERVAL_MINUTES * i))}
        for i, v in enumerate(values)
    ]


def build_sample_payload(now: datetime | None = None) -> dict:
    """A vaccine shipment mid-route with a few temperature excursions."""
    now = now or datetime.now(tz=UTC)
    departed = now - timedelta(hours=6)

    return {
        "tripDetails": {
            "programId": 101,
            "tripID": "TRP-2024-0042",
            "tripETA": _iso(now + timedelta(hours=3)),
            "tripActualArrivalTime": None,
            "tripRecentData": {"location": "Memphis, TN"},
            "tripStart": _iso(departed),
            "tripOrigin": {"name": "Indianapolis DC", "actualDepartureTime": _iso(departed)},
            "destinations": [
                {
                    "name": "Memphis Cross-dock",
                    "arrivalTime": _iso(now - timedelta(hours=1, minutes=20)),
                    "departureTime": _iso(now - timedelta(hours=1)),
                },
                {"name": "Jackson Hospital Pharmacy"},
            ],
            "createDate": _iso(now - timedelta(days=1)),
        },
        "sensorDetails": [
            {
                "temperatureData": _series([40.1, 41.3, 44.8, 47.2, 51.0, 45.5, 42.0, 40.6], now),
                "humidityData": _series([44.0, 46.5, 48.0, 52.0, 55.0, 49.5, None, 47.0], now),
                "lightData": _series([0.0, 0.0, 0.0, 120.0, 0.0, 0.0, 0.0, 0.0], now),
                "co2Data": [],
            }
        ],
        "tripPreferences": {
            "temperatureUnit": "°C",
            "humidityUnit": "%",
            "lightUnit": "lux",
            "cO2Unit": "ppm",
        },
        "zoneProducts": [copy.deepcopy(VACCINE_ZONE)],
        "excursionsList": [
            {
                "excursionName": "Temperature High - Reefer door open",
                "LocationAddress": "I-40 W, Jackson, TN",
                "AlarmTypeId": 3,
                "timestamp": _iso(now - timedelta(hours=2)),
            },
            {
                "excursionName": "Light Exposure",
                "LocationAddress": "Memphis Cross-dock",
                "AlarmTypeId": 7,
                "eventTime": _iso(now - timedelta(hours=1, minutes=10)),
            },
        ],
        "segments": [
            {
                "segmentName": "Indianapolis → Memphis",
                "segmentStatus": "Completed",
                "segmentStartTime": _iso(departed),
                "segmentEndTime": _iso(now - timedelta(hours=1, minutes=20)),
                "excursions": 1,
            },
            {
                "segmentName": "Memphis → Jackson",
                "segmentStatus": "InProgress",
                "segmentStartTime": _iso(now - timedelta(hours=1)),
            },
        ],
    }
