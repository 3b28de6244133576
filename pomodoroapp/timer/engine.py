"""Timer state machine for the Pomodoro app.

States
------
IDLE      No alert; the selected interval shows its full duration.
RUNNING   An alert is in flight; the display counts down to its finish.

Transitions
-----------
IDLE → RUNNING      (start / toggle, or construction from a pending reminder)
RUNNING → IDLE      (stop / toggle, emits ``cancelled``)
RUNNING → IDLE      (tick sees finish ≤ now, emits ``completed``)

Remaining time is always ``alert.finish - clock()``.  Nothing is counted
down per tick, so the display stays right after the process was suspended
or ticks were missed.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .intervals import CATALOG, IntervalType, UnknownIntervalIdentity

logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 100


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_remaining(remaining: timedelta) -> str:
    """Whole seconds left as ``mm:ss`` (floored, never negative)."""
    seconds = max(0, math.floor(remaining.total_seconds()))
    m, s = divmod(seconds, 60)
    return f"{m:02d}:{s:02d}"


# ── records ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Alert:
    """One countdown: when it started, when it finishes, and for what."""

    start: datetime
    finish: datetime
    interval: IntervalType

    def __str__(self) -> str:
        # local wall-clock time for the user
        start, finish = self.start.astimezone(), self.finish.astimezone()
        return f"Started {start:%H:%M} Finished {finish:%H:%M}"


@dataclass(frozen=True)
class PendingNotification:
    """A reminder that was scheduled by an earlier run."""

    identity: str
    completion: datetime


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Single-countdown timer driven by wall-clock time.

    Signals
    -------
    started(alert: Alert)
        A new countdown began.
    cancelled(alert: Alert)
        The countdown was stopped before it finished.
    completed(alert: Alert)
        The countdown reached zero.  Emitted once per alert.
    display_changed(text: str)
        The ``mm:ss`` string changed.
    interval_changed(interval: IntervalType)
        The active selection changed.
    running_changed(running: bool)
        Emitted on every IDLE ↔ RUNNING transition.
    selection_rejected(interval: IntervalType)
        ``select()`` was called while running; carries the running interval.

    The alert slot is always cleared *before* ``cancelled``/``completed`` are
    emitted, so slots observe the engine as IDLE.
    """

    started = pyqtSignal(object)
    cancelled = pyqtSignal(object)
    completed = pyqtSignal(object)
    display_changed = pyqtSignal(str)
    interval_changed = pyqtSignal(object)
    running_changed = pyqtSignal(bool)
    selection_rejected = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        seed: PendingNotification | None = None,
        clock: Callable[[], datetime] | None = None,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._clock: Callable[[], datetime] = clock or utc_now

        self._interval: IntervalType = CATALOG.first()
        self._display: str = format_remaining(self._interval.duration)
        self._alert: Alert | None = None

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(tick_interval_ms)
        self._qt_timer.timeout.connect(self.tick)

        if seed is not None:
            self._adopt(seed)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def items(self) -> tuple[IntervalType, ...]:
        return CATALOG.all()

    @property
    def current(self) -> IntervalType:
        """The active selection (the running interval while RUNNING)."""
        return self._interval

    @property
    def display(self) -> str:
        return self._display

    @property
    def alert(self) -> Alert | None:
        return self._alert

    @property
    def is_running(self) -> bool:
        return self._alert is not None

    @property
    def ticking(self) -> bool:
        """True while the periodic tick source is active."""
        return self._qt_timer.isActive()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def select(self, interval: IntervalType) -> bool:
        """Make *interval* the active selection.

        Refused while running: nothing changes, ``selection_rejected`` is
        emitted and ``False`` returned.  Deciding what to tell the user is
        left to the host.
        """
        if self.is_running:
            logger.debug("select(%s) refused while %s runs", interval, self._interval)
            self.selection_rejected.emit(self._interval)
            return False
        self._set_interval(interval)
        self._set_display(format_remaining(interval.duration))
        return True

    def toggle(self) -> None:
        if self.is_running:
            self.stop()
        else:
            self.start()

    def start(self) -> None:
        """Begin a countdown for the active selection.

        While already running this keeps the existing alert and only
        refreshes the display.
        """
        created = None
        if self._alert is None:
            start = self._clock()
            created = Alert(start, start + self._interval.duration, self._interval)
            self._alert = created
            logger.info("%s started, finishing %s", self._interval, created.finish)
        self._set_display(format_remaining(self._alert.finish - self._clock()))
        self._qt_timer.start()
        if created is not None:
            self.running_changed.emit(True)
            self.started.emit(created)

    def stop(self) -> None:
        """Cancel the running countdown.  No-op (no event) when idle."""
        alert = self._alert
        if alert is None:
            return
        self._reset()
        logger.info("%s cancelled", alert.interval)
        self.cancelled.emit(alert)

    def tick(self) -> None:
        """Recompute the remaining time; complete the alert when it is due."""
        alert = self._alert
        if alert is None:
            self._qt_timer.stop()
            return

        remaining = alert.finish - self._clock()
        if math.floor(remaining.total_seconds()) > 0:
            self._set_display(format_remaining(remaining))
            return

        self._reset()
        logger.info("%s completed", alert.interval)
        self.completed.emit(alert)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _adopt(self, seed: PendingNotification) -> None:
        """Resume the countdown described by a reminder from an earlier run."""
        try:
            interval = CATALOG.lookup(seed.identity)
        except UnknownIntervalIdentity:
            logger.warning(
                "Ignoring pending reminder with unknown identity %r", seed.identity,
            )
            return

        finish = seed.completion
        if finish.tzinfo is None:
            finish = finish.replace(tzinfo=timezone.utc)
        self._interval = interval
        self._alert = Alert(finish - interval.duration, finish, interval)
        self._display = format_remaining(finish - self._clock())
        self._qt_timer.start()
        logger.info("Resumed %s from pending reminder due %s", interval, finish)

    def _reset(self) -> None:
        self._alert = None
        self._qt_timer.stop()
        self._set_display(format_remaining(self._interval.duration))
        self.running_changed.emit(False)

    def _set_interval(self, interval: IntervalType) -> None:
        if interval is self._interval:
            return
        self._interval = interval
        self.interval_changed.emit(interval)

    def _set_display(self, text: str) -> None:
        if text == self._display:
            return
        self._display = text
        self.display_changed.emit(text)
