"""
config/scoring.py
─────────────────
Excursion severities, risk / confidence levels, and scoring constants.
"""

from enum import Enum


class ExcursionSeverity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"


class RiskLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class Confidence(str, Enum):
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


# ── Excursion detection ───────────────────────────────────────────────────────
EXCURSION_WINDOW_HOURS = 12
MINUTES_PER_EXCURSION = 5          # assumed duration per flagged reading

# ── ETA prediction ────────────────────────────────────────────────────────────
DEFAULT_SEGMENT_MINUTES = 45.0     # used when no segment has completed
CRITICAL_BUFFER_MINUTES = 30
WARNING_BUFFER_MINUTES = 10
MODERATE_WARNING_LIMIT = 2         # > 2 warnings → Moderate
LOW_EXCURSION_MINUTES_LIMIT = 60   # > 60 min → Low
LOW_REMAINING_SEGMENTS_LIMIT = 2   # > 2 remaining segments → Low

# ── Risk scoring ──────────────────────────────────────────────────────────────
RISK_WEIGHTS: dict[str, int] = {
    "critical_excursions": 2,
    "warning_excursions": 1,
    "long_excursions": 1,
    "new_product_alarm": 2,
    "sensitive_product": 1,
    "recent_excursion": 1,
}

LONG_EXCURSION_MINUTES = 30
NEW_PRODUCT_ALARM = "new product alarm"
SENSITIVE_PRODUCT_KEYWORDS = ("vaccine", "frozen")

HIGH_RISK_SCORE = 5
MODERATE_RISK_SCORE = 3

# ── Display ───────────────────────────────────────────────────────────────────
RISK_COLORS: dict[str, str] = {
    RiskLevel.LOW: "#2ea44f",
    RiskLevel.MODERATE: "#e8a020",
    RiskLevel.HIGH: "#da3633",
}

CONFIDENCE_COLORS: dict[str, str] = {
    Confidence.HIGH: "#2ea44f",
    Confidence.MODERATE: "#e8a020",
    Confidence.LOW: "#da3633",
}

SEVERITY_COLORS: dict[str, str] = {
    ExcursionSeverity.WARNING: "#e8a020",
    ExcursionSeverity.CRITICAL: "#da3633",
}

# Upper bound of the risk gauge (sum of all weights)
MAX_RISK_SCORE = sum(RISK_WEIGHTS.values())
