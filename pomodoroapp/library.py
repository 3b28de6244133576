"""Host-side glue between the timer engine and the outside world.

The engine only emits events.  ``Library`` decides what they mean for the
rest of the app:

- ``started``   → schedule a reminder for ``alert.finish`` (always; it is
  what lets the next launch resume the countdown)
- ``cancelled`` → drop every scheduled reminder
- ``completed`` → drop the (now delivered) reminder, announce it
- choosing an interval while one runs → tell the user to toggle first

User-facing text leaves through ``message_requested`` so the window can
show it however it likes.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from .audio.sounds import SoundManager
from .reminders import ReminderScheduler
from .timer.engine import Alert, TimerEngine
from .timer.intervals import IntervalType

logger = logging.getLogger(__name__)

TITLE = "Pomodoro App"
SWITCH_MESSAGE = "To Switch you need to Toggle"
COMPLETED_MESSAGE = "Completed"


class Library(QObject):
    """Owns the engine and reacts to its lifecycle events.

    Signals
    -------
    message_requested(interval: IntervalType, messages: list[str])
        Something should be shown to the user, illustrated by *interval*.
    """

    message_requested = pyqtSignal(object, object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        scheduler: ReminderScheduler | None = None,
        sounds: SoundManager | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(parent)
        self._scheduler = scheduler or ReminderScheduler()
        self._sounds = sounds

        seed = self._scheduler.first_pending()
        if seed is not None:
            logger.info("Found pending %s reminder due %s", seed.identity, seed.completion)
        self._timer = TimerEngine(self, seed=seed, clock=clock)
        if seed is not None and not self._timer.is_running:
            # The engine refused the seed; only its own rows are stale.
            self._scheduler.remove(seed.identity)

        self._timer.started.connect(self._on_started)
        self._timer.cancelled.connect(self._on_cancelled)
        self._timer.completed.connect(self._on_completed)
        self._timer.selection_rejected.connect(self._on_selection_rejected)

    # ── public API ────────────────────────────────────────────────────

    @property
    def timer(self) -> TimerEngine:
        return self._timer

    def toggle(self) -> None:
        self._timer.toggle()

    def choose(self, interval: IntervalType) -> bool:
        """Select *interval*; a refusal is announced via ``message_requested``."""
        return self._timer.select(interval)

    # ── engine slots ──────────────────────────────────────────────────

    def _on_started(self, alert: Alert) -> None:
        self._scheduler.schedule(alert)
        self._play("session_start")

    def _on_cancelled(self, alert: Alert) -> None:
        self._scheduler.remove_all()
        self._play("session_cancel")

    def _on_completed(self, alert: Alert) -> None:
        self._scheduler.remove_all()
        self._play("session_complete")
        self.message_requested.emit(
            alert.interval, [COMPLETED_MESSAGE, str(alert.interval), str(alert)],
        )

    def _on_selection_rejected(self, running: IntervalType) -> None:
        self.message_requested.emit(running, [SWITCH_MESSAGE, str(running)])

    def _play(self, name: str) -> None:
        if self._sounds is not None:
            self._sounds.play(name)
