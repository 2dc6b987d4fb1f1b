"""
src/analytics/units.py
──────────────────────
Unit conversion and display formatting.

Temperatures arrive in Fahrenheit and are only converted for display.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any

from config.sensors import CELSIUS, FAHRENHEIT

NOT_AVAILABLE = "N/A"


def to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32.0) * 5.0 / 9.0


def to_fahrenheit(celsius: float) -> float:
    return celsius * 9.0 / 5.0 + 32.0


def round_half_up(value: float, places: int = 1) -> float:
    """Round halves away from zero on the decimal text, so 40.25 becomes 40.3."""
    if not math.isfinite(value):
        return value
    step = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(step, rounding=ROUND_HALF_UP))


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not math.isnan(float(value))


def normalize_temperature_unit(raw: str | None) -> str:
    """Map user preference strings ("C", "°C", "celsius") to °C, else °F."""
    if raw is None:
        return FAHRENHEIT
    cleaned = raw.strip().lower().replace("°", "").replace("º", "")
    return CELSIUS if cleaned in ("c", "celsius") else FAHRENHEIT


def format_value(value: Any, unit: str) -> str:
    """
    Format a Fahrenheit temperature for display.

    °C converts first; any other unit keeps the Fahrenheit value.
    Absent or non-numeric values render as "N/A".
    """
    if not _is_number(value):
        return NOT_AVAILABLE
    if unit == CELSIUS:
        return f"{round_half_up(to_celsius(float(value))):.1f}{CELSIUS}"
    return f"{round_half_up(float(value)):.1f}{FAHRENHEIT}"


def format_sensor_value(value: Any, unit: str, is_temperature: bool) -> str:
    """Format a reading of any sensor type in its display unit."""
    if is_temperature:
        return format_value(value, unit)
    if not _is_number(value):
        return NOT_AVAILABLE
    separator = "" if unit == "%" else " "
    return f"{round_half_up(float(value)):.1f}{separator}{unit}"
