"""Custom exception hierarchy for the analytics engine.

The analytics functions themselves are total: empty inputs, zero divisors
and malformed tool properties all resolve to neutral results.  These
exceptions cover the edges of the system (configuration and input loading).
"""


class AnalyticsError(Exception):
    """Base exception for all trade-analytics errors."""


# --- Configuration ---
class ConfigError(AnalyticsError):
    """Invalid or missing configuration."""


# --- Data ---
class DataError(AnalyticsError):
    """Input data could not be used."""


class TradeLoadError(DataError):
    """A trade or model file could not be read or validated."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load {path}: {reason}")
