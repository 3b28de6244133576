"""Pomodoro App: a single-timer countdown cycling work and break intervals."""

__version__ = "0.1.0"
