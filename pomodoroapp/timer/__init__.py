"""Timer package."""

from .intervals import (
    CATALOG,
    IntervalCatalog,
    IntervalType,
    UnknownIntervalIdentity,
)
from .engine import (
    TimerEngine,
    Alert,
    PendingNotification,
    TICK_INTERVAL_MS,
    format_remaining,
)

__all__ = [
    "CATALOG",
    "IntervalCatalog",
    "IntervalType",
    "UnknownIntervalIdentity",
    "TimerEngine",
    "Alert",
    "PendingNotification",
    "TICK_INTERVAL_MS",
    "format_remaining",
]
