"""Where the app keeps its files.

Defaults to ``~/Library/Application Support/PomodoroApp``; set
``POMODORO_HOME`` to use another directory.
"""

import os
from pathlib import Path

APP_SUPPORT_DIR = Path(
    os.environ.get("POMODORO_HOME")
    or Path.home() / "Library" / "Application Support" / "PomodoroApp"
)
