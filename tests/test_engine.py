"""Comprehensive tests for the timer engine.

Covers: idle/running transitions, lifecycle events, wall-clock countdown,
completion exactly once, selection while idle/running, and resuming from
a pending reminder left by an earlier run.
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from pomodoroapp.timer.engine import (
    Alert, PendingNotification, TimerEngine, format_remaining,
)
from pomodoroapp.timer.intervals import CATALOG, IntervalType

from helpers import SignalCollector


def collect(engine: TimerEngine) -> dict[str, SignalCollector]:
    signals = {}
    for name in (
        "started", "cancelled", "completed", "display_changed",
        "interval_changed", "running_changed", "selection_rejected",
    ):
        c = SignalCollector()
        getattr(engine, name).connect(c)
        signals[name] = c
    return signals


def lifecycle_count(signals: dict[str, SignalCollector]) -> int:
    return sum(len(signals[n]) for n in ("started", "cancelled", "completed"))


# ═══════════════════════════════════════════════════════════════════════════
#  DEFAULT CONSTRUCTION
# ═══════════════════════════════════════════════════════════════════════════


class TestInitialState:

    def test_idle(self, engine):
        assert engine.is_running is False
        assert engine.alert is None
        assert engine.ticking is False

    def test_first_interval_selected(self, engine):
        assert engine.current is IntervalType.TASK_TIMER
        assert engine.display == "25:00"

    def test_items_in_display_order(self, engine):
        assert list(engine.items) == [
            IntervalType.TASK_TIMER,
            IntervalType.SHORT_BREAK,
            IntervalType.LONG_BREAK,
        ]
        assert [i.minutes for i in engine.items] == [25, 5, 20]


# ═══════════════════════════════════════════════════════════════════════════
#  TOGGLE / START / STOP
# ═══════════════════════════════════════════════════════════════════════════


class TestToggle:

    def test_toggle_starts_work_countdown(self, engine, clock):
        signals = collect(engine)
        engine.toggle()

        assert engine.is_running
        assert len(signals["started"]) == 1
        alert = signals["started"].last
        assert isinstance(alert, Alert)
        assert alert.start == clock.now
        assert alert.finish - alert.start == timedelta(minutes=25)
        assert alert.interval is IntervalType.TASK_TIMER
        assert engine.alert is alert
        assert engine.display == "25:00"

    def test_toggle_again_cancels_same_alert(self, engine, clock):
        signals = collect(engine)
        engine.toggle()
        clock.advance(seconds=42)
        engine.tick()
        engine.toggle()

        assert len(signals["cancelled"]) == 1
        assert signals["cancelled"].last is signals["started"].last
        assert engine.is_running is False
        assert engine.alert is None
        assert engine.display == "25:00"
        assert len(signals["completed"]) == 0

    def test_running_changed_on_transitions(self, engine):
        signals = collect(engine)
        engine.toggle()
        engine.toggle()
        assert signals["running_changed"].items == [True, False]

    def test_tick_source_follows_state(self, engine):
        engine.start()
        assert engine.ticking
        engine.stop()
        assert not engine.ticking

    def test_start_is_idempotent_while_running(self, engine, clock):
        signals = collect(engine)
        engine.start()
        first = engine.alert
        clock.advance(seconds=10)
        engine.start()

        assert len(signals["started"]) == 1
        assert engine.alert is first
        assert engine.alert.start == first.start
        assert engine.alert.finish == first.finish
        assert engine.display == "24:50"

    def test_stop_while_idle_is_noop(self, engine):
        signals = collect(engine)
        engine.stop()
        assert lifecycle_count(signals) == 0
        assert len(signals["running_changed"]) == 0
        assert engine.display == "25:00"

    def test_cancel_near_zero_is_still_cancel(self, engine, clock):
        signals = collect(engine)
        engine.start()
        clock.advance(minutes=24, seconds=59)
        engine.tick()
        assert engine.display == "00:01"
        engine.toggle()
        assert len(signals["cancelled"]) == 1
        assert len(signals["completed"]) == 0

    def test_restart_after_cancel_creates_new_alert(self, engine, clock):
        signals = collect(engine)
        engine.toggle()
        engine.toggle()
        clock.advance(minutes=3)
        engine.toggle()
        assert len(signals["started"]) == 2
        first, second = signals["started"].items
        assert second is not first
        assert second.start == first.start + timedelta(minutes=3)


# ═══════════════════════════════════════════════════════════════════════════
#  TICK / COUNTDOWN
# ═══════════════════════════════════════════════════════════════════════════


class TestCountdown:

    def test_tick_uses_wall_clock(self, engine, clock):
        engine.start()
        clock.advance(minutes=1, seconds=1)
        engine.tick()
        assert engine.display == "23:59"

    def test_remaining_is_floored(self, engine, clock):
        engine.start()
        clock.advance(milliseconds=500)
        engine.tick()
        assert engine.display == "24:59"

    def test_display_changed_only_when_text_changes(self, engine, clock):
        signals = collect(engine)
        engine.start()
        for _ in range(5):
            clock.advance(milliseconds=100)
            engine.tick()
        assert signals["display_changed"].items == ["24:59"]

    def test_missed_ticks_do_not_drift(self, engine, clock):
        """Only one tick after ten minutes still shows the right time."""
        engine.start()
        clock.advance(minutes=10)
        engine.tick()
        assert engine.display == "15:00"

    def test_tick_while_idle_is_noop(self, engine, clock):
        signals = collect(engine)
        clock.advance(hours=1)
        engine.tick()
        assert lifecycle_count(signals) == 0
        assert len(signals["display_changed"]) == 0

    def test_tick_after_stop_is_noop(self, engine, clock):
        signals = collect(engine)
        engine.start()
        engine.stop()
        clock.advance(minutes=30)
        engine.tick()
        assert len(signals["completed"]) == 0
        assert engine.display == "25:00"


# ═══════════════════════════════════════════════════════════════════════════
#  COMPLETION
# ═══════════════════════════════════════════════════════════════════════════


class TestCompletion:

    def test_completes_when_finish_reached(self, engine, clock):
        signals = collect(engine)
        engine.start()
        clock.advance(minutes=25)
        engine.tick()

        assert len(signals["completed"]) == 1
        assert signals["completed"].last is signals["started"].last
        assert engine.is_running is False
        assert engine.alert is None
        assert engine.display == "25:00"
        assert not engine.ticking

    def test_last_second_shows_one(self, engine, clock):
        signals = collect(engine)
        engine.start()
        clock.advance(minutes=24, seconds=59)
        engine.tick()
        assert engine.display == "00:01"
        assert len(signals["completed"]) == 0

    def test_under_one_second_completes(self, engine, clock):
        signals = collect(engine)
        engine.start()
        clock.advance(minutes=24, seconds=59, milliseconds=500)
        engine.tick()
        assert len(signals["completed"]) == 1

    def test_completes_after_suspension(self, engine, clock):
        signals = collect(engine)
        engine.start()
        clock.advance(hours=3)
        engine.tick()
        assert len(signals["completed"]) == 1

    def test_subsequent_tick_is_noop(self, engine, clock):
        signals = collect(engine)
        engine.start()
        clock.advance(minutes=26)
        engine.tick()
        engine.tick()
        clock.advance(minutes=5)
        engine.tick()
        assert len(signals["completed"]) == 1
        assert engine.display == "25:00"

    def test_reentrant_tick_cannot_complete_twice(self, engine, clock):
        completed = SignalCollector()

        def on_completed(alert):
            completed(alert)
            engine.tick()

        engine.completed.connect(on_completed)
        engine.start()
        clock.advance(minutes=25)
        engine.tick()
        assert len(completed) == 1

    def test_slots_observe_idle(self, engine, clock):
        seen = []
        engine.completed.connect(lambda alert: seen.append(engine.is_running))
        engine.cancelled.connect(lambda alert: seen.append(engine.is_running))
        engine.start()
        engine.stop()
        engine.start()
        clock.advance(minutes=25)
        engine.tick()
        assert seen == [False, False]

    def test_selection_kept_after_completion(self, engine, clock):
        engine.select(IntervalType.SHORT_BREAK)
        engine.start()
        clock.advance(minutes=5)
        engine.tick()
        assert engine.current is IntervalType.SHORT_BREAK
        assert engine.display == "05:00"


# ═══════════════════════════════════════════════════════════════════════════
#  SELECTION
# ═══════════════════════════════════════════════════════════════════════════


class TestSelect:

    def test_select_while_idle_updates_display(self, engine):
        signals = collect(engine)
        assert engine.select(IntervalType.SHORT_BREAK) is True
        assert engine.current is IntervalType.SHORT_BREAK
        assert engine.display == "05:00"
        assert signals["interval_changed"].items == [IntervalType.SHORT_BREAK]
        assert lifecycle_count(signals) == 0

    def test_select_long_break(self, engine):
        engine.select(IntervalType.LONG_BREAK)
        assert engine.display == "20:00"

    def test_select_same_interval_emits_nothing(self, engine):
        signals = collect(engine)
        engine.select(IntervalType.TASK_TIMER)
        assert len(signals["interval_changed"]) == 0
        assert len(signals["display_changed"]) == 0

    def test_selected_interval_drives_next_start(self, engine):
        engine.select(IntervalType.SHORT_BREAK)
        engine.start()
        alert = engine.alert
        assert alert.interval is IntervalType.SHORT_BREAK
        assert alert.finish - alert.start == timedelta(minutes=5)

    def test_select_while_running_is_rejected(self, engine, clock):
        engine.start()
        clock.advance(seconds=30)
        engine.tick()
        alert = engine.alert
        signals = collect(engine)

        assert engine.select(IntervalType.LONG_BREAK) is False

        assert signals["selection_rejected"].items == [IntervalType.TASK_TIMER]
        assert engine.current is IntervalType.TASK_TIMER
        assert engine.alert is alert
        assert engine.display == "24:30"
        assert lifecycle_count(signals) == 0
        assert len(signals["interval_changed"]) == 0

    def test_select_after_stop_is_accepted(self, engine):
        engine.start()
        engine.stop()
        assert engine.select(IntervalType.LONG_BREAK) is True
        assert engine.display == "20:00"


# ═══════════════════════════════════════════════════════════════════════════
#  RESUMING FROM A PENDING REMINDER
# ═══════════════════════════════════════════════════════════════════════════


class TestSeededConstruction:

    def test_seed_adopts_running_alert(self, qapp, clock):
        due = clock.now + timedelta(minutes=2)
        engine = TimerEngine(
            seed=PendingNotification("ShortBreak", due), clock=clock,
        )
        assert engine.is_running
        assert engine.current is IntervalType.SHORT_BREAK
        assert engine.alert.finish == due
        assert engine.alert.start == due - timedelta(minutes=5)
        assert engine.alert.interval is IntervalType.SHORT_BREAK
        assert engine.display == "02:00"
        assert engine.ticking

    def test_seed_past_due_completes_on_first_tick(self, qapp, clock):
        due = clock.now
        engine = TimerEngine(
            seed=PendingNotification("ShortBreak", due), clock=clock,
        )
        signals = collect(engine)
        clock.set(due + timedelta(seconds=1))
        engine.tick()
        engine.tick()

        assert len(signals["completed"]) == 1
        alert = signals["completed"].last
        assert alert.finish == due
        assert alert.start == due - timedelta(minutes=5)
        assert engine.is_running is False
        assert engine.current is IntervalType.SHORT_BREAK
        assert engine.display == "05:00"

    def test_seed_can_be_cancelled(self, qapp, clock):
        due = clock.now + timedelta(minutes=10)
        engine = TimerEngine(
            seed=PendingNotification("LongBreak", due), clock=clock,
        )
        signals = collect(engine)
        engine.toggle()
        assert len(signals["cancelled"]) == 1
        assert signals["cancelled"].last.finish == due
        assert len(signals["started"]) == 0
        assert engine.display == "20:00"

    def test_seed_start_is_idempotent(self, qapp, clock):
        due = clock.now + timedelta(minutes=10)
        engine = TimerEngine(
            seed=PendingNotification("TaskTimer", due), clock=clock,
        )
        signals = collect(engine)
        seeded = engine.alert
        engine.start()
        assert engine.alert is seeded
        assert len(signals["started"]) == 0

    def test_naive_completion_is_utc(self, qapp, clock):
        due = datetime(2024, 3, 1, 9, 3)
        engine = TimerEngine(
            seed=PendingNotification("ShortBreak", due), clock=clock,
        )
        assert engine.alert.finish == due.replace(tzinfo=timezone.utc)
        assert engine.display == "03:00"

    def test_unknown_identity_falls_back_to_idle(self, qapp, clock, caplog):
        with caplog.at_level(logging.WARNING, logger="pomodoroapp.timer.engine"):
            engine = TimerEngine(
                seed=PendingNotification("Siesta", clock.now), clock=clock,
            )
        assert engine.is_running is False
        assert engine.alert is None
        assert engine.current is CATALOG.first()
        assert engine.display == "25:00"
        assert "Siesta" in caplog.text

    def test_unknown_identity_engine_still_works(self, qapp, clock):
        engine = TimerEngine(
            seed=PendingNotification("Siesta", clock.now), clock=clock,
        )
        signals = collect(engine)
        engine.toggle()
        assert len(signals["started"]) == 1


# ═══════════════════════════════════════════════════════════════════════════
#  INVARIANTS
# ═══════════════════════════════════════════════════════════════════════════


class TestInvariants:

    def test_running_iff_alert(self, engine, clock):
        def check():
            assert engine.is_running == (engine.alert is not None)

        check()
        engine.toggle()
        check()
        engine.select(IntervalType.LONG_BREAK)
        check()
        clock.advance(minutes=12)
        engine.tick()
        check()
        clock.advance(minutes=13)
        engine.tick()
        check()
        engine.toggle()
        check()
        engine.toggle()
        check()

    def test_running_alert_matches_selection(self, engine):
        engine.select(IntervalType.LONG_BREAK)
        engine.start()
        engine.select(IntervalType.SHORT_BREAK)
        assert engine.alert.interval is engine.current


# ═══════════════════════════════════════════════════════════════════════════
#  FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


class TestFormatting:

    @pytest.mark.parametrize("remaining, text", [
        (timedelta(minutes=25), "25:00"),
        (timedelta(minutes=5), "05:00"),
        (timedelta(seconds=59, milliseconds=900), "00:59"),
        (timedelta(seconds=0.4), "00:00"),
        (timedelta(seconds=-3), "00:00"),
    ])
    def test_format_remaining(self, remaining, text):
        assert format_remaining(remaining) == text

    def test_alert_str(self):
        start = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
        alert = Alert(start, start + timedelta(minutes=25), IntervalType.TASK_TIMER)
        text = str(alert)
        assert text.startswith("Started ")
        assert " Finished " in text
