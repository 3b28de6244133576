"""The fixed catalog of interval types.

Catalog
-------
    TaskTimer    25 min   Tomato        (work session)
    ShortBreak    5 min   HotBeverage
    LongBreak    20 min   GreenApple

Identities are persisted by the reminder scheduler and matched on the next
launch, so they must never be renamed.
"""

from __future__ import annotations

import re
from datetime import timedelta
from enum import Enum


class UnknownIntervalIdentity(LookupError):
    """Raised when an identity string does not name a catalog entry."""

    def __init__(self, identity: str) -> None:
        super().__init__(f"unknown interval identity: {identity!r}")
        self.identity = identity


class IntervalType(Enum):
    TASK_TIMER = "TaskTimer"
    SHORT_BREAK = "ShortBreak"
    LONG_BREAK = "LongBreak"

    @property
    def identity(self) -> str:
        return self.value

    @property
    def minutes(self) -> int:
        return INTERVAL_MINUTES[self]

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=INTERVAL_MINUTES[self])

    @property
    def display_name(self) -> str:
        """``"ShortBreak"`` → ``"Short Break"``."""
        return " ".join(_WORD_RE.findall(self.value))

    @property
    def resource(self) -> str:
        return INTERVAL_RESOURCES[self]

    @property
    def colors(self) -> tuple[str, str]:
        """(upper, lower) gradient pair."""
        return INTERVAL_COLORS[self]

    def __str__(self) -> str:
        return self.display_name


# ── constants ─────────────────────────────────────────────────────────────

_WORD_RE = re.compile(r"[A-Z][a-z]*")

INTERVAL_MINUTES: dict[IntervalType, int] = {
    IntervalType.TASK_TIMER: 25,
    IntervalType.SHORT_BREAK: 5,
    IntervalType.LONG_BREAK: 20,
}

INTERVAL_RESOURCES: dict[IntervalType, str] = {
    IntervalType.TASK_TIMER: "Tomato",
    IntervalType.SHORT_BREAK: "HotBeverage",
    IntervalType.LONG_BREAK: "GreenApple",
}

INTERVAL_COLORS: dict[IntervalType, tuple[str, str]] = {
    IntervalType.TASK_TIMER: ("#F03A17", "#EF6950"),
    IntervalType.SHORT_BREAK: ("#83BEEC", "#B3DBD4"),
    IntervalType.LONG_BREAK: ("#BAD80A", "#E4F577"),
}


# ── catalog ───────────────────────────────────────────────────────────────


class IntervalCatalog:
    """Ordered, read-only view over every ``IntervalType``."""

    def __init__(self) -> None:
        self._items: tuple[IntervalType, ...] = (
            IntervalType.TASK_TIMER,
            IntervalType.SHORT_BREAK,
            IntervalType.LONG_BREAK,
        )
        self._by_identity: dict[str, IntervalType] = {
            item.identity: item for item in self._items
        }

    def all(self) -> tuple[IntervalType, ...]:
        return self._items

    def first(self) -> IntervalType:
        return self._items[0]

    def lookup(self, identity: str) -> IntervalType:
        try:
            return self._by_identity[identity]
        except KeyError:
            raise UnknownIntervalIdentity(identity) from None

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


# Module-level singleton
CATALOG = IntervalCatalog()
