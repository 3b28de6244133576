"""Allow running the app as a module: python -m pomodoroapp."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import PomodoroWindow
from .timer.intervals import CATALOG
from .ui.icons import make_interval_icon


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("POMODORO_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("PomodoroApp")
    app.setOrganizationName("PomodoroApp")
    app.setWindowIcon(make_interval_icon(CATALOG.first(), 256))

    window = PomodoroWindow()
    window.show()
    logging.getLogger(__name__).info("Pomodoro App ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
