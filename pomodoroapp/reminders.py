"""Persistent reminder schedule.

A reminder is written when a countdown starts and deleted when it is
cancelled or delivered.  Because the schedule lives in SQLite it outlasts
the process: on the next launch ``first_pending()`` hands the engine the
countdown that was still in flight.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .database.db import get_session
from .database.models import ScheduledReminder
from .timer.engine import Alert, PendingNotification

logger = logging.getLogger(__name__)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _to_aware_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


class ReminderScheduler:
    """Schedules, lists and removes reminders in the ``scheduled_reminders`` table."""

    def schedule(self, alert: Alert) -> int:
        """Store a reminder firing at ``alert.finish``.  Returns its row id."""
        with get_session() as db:
            record = ScheduledReminder(
                identity=alert.interval.identity,
                delivery_time=_to_naive_utc(alert.finish),
                title=alert.interval.display_name,
                body=str(alert),
            )
            db.add(record)
            db.flush()
            reminder_id = record.id
        logger.debug("Scheduled %s reminder for %s", alert.interval.identity, alert.finish)
        return reminder_id

    def remove_all(self) -> int:
        """Delete every scheduled reminder.  Returns how many were removed."""
        with get_session() as db:
            removed = db.query(ScheduledReminder).delete()
        if removed:
            logger.debug("Removed %d scheduled reminder(s)", removed)
        return removed

    def remove(self, identity: str) -> int:
        """Delete the reminders scheduled for *identity*.  Returns how many."""
        with get_session() as db:
            removed = (
                db.query(ScheduledReminder)
                .filter(ScheduledReminder.identity == identity)
                .delete()
            )
        if removed:
            logger.debug("Removed %d %r reminder(s)", removed, identity)
        return removed

    def scheduled(self) -> list[ScheduledReminder]:
        with get_session() as db:
            return (
                db.query(ScheduledReminder)
                .order_by(ScheduledReminder.delivery_time)
                .all()
            )

    def first_pending(self) -> PendingNotification | None:
        """The earliest scheduled reminder, or ``None`` when nothing is scheduled."""
        with get_session() as db:
            record = (
                db.query(ScheduledReminder)
                .order_by(ScheduledReminder.delivery_time)
                .first()
            )
            if record is None:
                return None
            return PendingNotification(
                identity=record.identity,
                completion=_to_aware_utc(record.delivery_time),
            )
