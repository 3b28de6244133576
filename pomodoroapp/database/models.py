"""SQLAlchemy ORM models for the Pomodoro app."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class ScheduledReminder(Base):
    """A reminder waiting to be delivered when its countdown finishes.

    ``identity`` is the interval identity string; ``delivery_time`` is
    naive UTC.
    """

    __tablename__ = "scheduled_reminders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    identity = Column(String(32), nullable=False)
    delivery_time = Column(DateTime, nullable=False)
    title = Column(String(64), nullable=False, default="")
    body = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return (
            f"<ScheduledReminder id={self.id} identity={self.identity} "
            f"delivery={self.delivery_time}>"
        )
