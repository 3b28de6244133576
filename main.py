#!/usr/bin/env python3
"""Pomodoro App — entry point.

Run with:
    python main.py
    python -m pomodoroapp
"""

from pomodoroapp.__main__ import main


if __name__ == "__main__":
    main()
