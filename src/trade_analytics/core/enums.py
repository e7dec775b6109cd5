"""Enumerations used across the analytics engine."""

from enum import Enum


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"


class ClosureType(str, Enum):
    TAKE_PROFIT = "take_profit"
    STOP_LOSS = "stop_loss"
    BREAK_EVEN = "break_even"
    MANUAL_CLOSE = "manual_close"


class Session(str, Enum):
    """UTC trading session windows."""

    ASIA = "Asia"      # 00:00-08:00 UTC
    LONDON = "London"  # 08:00-16:00 UTC
    NY = "NY"          # 16:00-24:00 UTC


class VolatilityBucket(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class HTFBias(str, Enum):
    """Higher-timeframe directional bias inferred from a model."""

    BULLISH = "Bullish"
    BEARISH = "Bearish"
    UNKNOWN = "Unknown"


class ToolZone(str, Enum):
    NARRATIVE = "narrative"
    FRAMEWORK = "framework"
    EXECUTION = "execution"


WEEKDAY_NAMES = [
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
]

# Sentinels accepted by the scope filter
ALL_MODELS = "all"
ALL_SESSIONS = "All"
