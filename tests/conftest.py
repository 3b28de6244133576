"""Shared pytest fixtures for Pomodoro App tests."""

import os
import sys
from datetime import datetime, timezone

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pomodoroapp.database.db import configure_engine, init_db
from pomodoroapp.timer.engine import TimerEngine

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def app_support(tmp_path, monkeypatch):
    """Keep settings and the sound cache out of the real home directory."""
    monkeypatch.setattr("pomodoroapp.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("pomodoroapp.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")
    yield tmp_path


@pytest.fixture
def clock():
    """Controllable UTC wall clock starting at 2024-03-01 09:00."""
    return FakeClock(datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def engine(qapp, clock):
    """Fresh idle TimerEngine on the fake clock."""
    return TimerEngine(parent=None, clock=clock)
