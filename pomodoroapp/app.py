"""Main application window for the Pomodoro app."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QSystemTrayIcon, QMenu

from .audio.sounds import SoundManager
from .library import Library, TITLE
from .settings import Settings, load_settings, save_settings
from .timer.engine import Alert
from .timer.intervals import IntervalType
from .ui.icons import make_interval_icon, make_interval_pixmap, make_toggle_icon
from .ui.styles import build_stylesheet, get_palette
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


class PomodoroWindow(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        library: Library | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(TITLE)
        self.setMinimumSize(320, 360)

        # ── geometry save timer ───────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()

        # ── library (engine + reminders + sounds) ─────────────────────
        if library is None:
            sounds = SoundManager(parent=self)
            sounds.set_volume(self._settings.sound_volume)
            sounds.set_enabled(self._settings.sound_enabled)
            library = Library(self, sounds=sounds)
        self._library = library
        self._dialog: QMessageBox | None = None

        # ── central widget ────────────────────────────────────────────
        self._timer_widget = TimerWidget(self._library, self)
        self.setCentralWidget(self._timer_widget)
        self.setStyleSheet(build_stylesheet(get_palette()))

        # ── tray icon (delivers reminders while the window is hidden) ─
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(make_toggle_icon(self._library.timer.is_running))
        self._tray_icon.setToolTip(TITLE)
        self._build_tray_menu()
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        self._build_menu_bar()
        self._connect_signals()
        self._restore_geometry()
        if self._settings.always_on_top:
            self._apply_always_on_top(True)

    # ══════════════════════════════════════════════════════════════════
    #  SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _connect_signals(self) -> None:
        timer = self._library.timer
        self._library.message_requested.connect(self.show_message)
        timer.completed.connect(self._on_completed)
        timer.running_changed.connect(self._on_running_changed)
        timer.display_changed.connect(self._on_display_changed)
        timer.interval_changed.connect(self._on_interval_changed)
        self._on_interval_changed(timer.current)
        self._refresh_title()

    def _on_completed(self, alert: Alert) -> None:
        if self._settings.notifications_enabled and self._tray_icon.isVisible():
            self._tray_icon.showMessage(
                str(alert.interval), str(alert),
                make_interval_icon(alert.interval),
            )

    def _on_running_changed(self, running: bool) -> None:
        self._tray_icon.setIcon(make_toggle_icon(running))
        self._tray_toggle_action.setText("Stop" if running else "Start")
        self._refresh_title()

    def _on_display_changed(self, text: str) -> None:
        self._refresh_title()

    def _refresh_title(self) -> None:
        timer = self._library.timer
        if timer.is_running:
            self.setWindowTitle(f"{timer.display} · {timer.current}")
        else:
            self.setWindowTitle(TITLE)

    def _on_interval_changed(self, interval: IntervalType) -> None:
        self.setWindowIcon(make_interval_icon(interval))

    # ══════════════════════════════════════════════════════════════════
    #  DIALOGS
    # ══════════════════════════════════════════════════════════════════

    def show_message(self, interval: IntervalType, messages: list[str]) -> QMessageBox:
        """Show *messages* in a dialog, replacing any dialog already open."""
        if self._dialog is not None:
            self._dialog.hide()
            self._dialog.deleteLater()
        msg = QMessageBox(self)
        msg.setWindowTitle(TITLE)
        msg.setText("\n".join(messages))
        msg.setIconPixmap(make_interval_pixmap(interval))
        msg.setStandardButtons(QMessageBox.StandardButton.Ok)
        msg.setWindowModality(Qt.WindowModality.WindowModal)
        msg.open()
        self._dialog = msg
        return msg

    @property
    def current_dialog(self) -> QMessageBox | None:
        return self._dialog

    # ══════════════════════════════════════════════════════════════════
    #  TRAY + MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        self._tray_toggle_action = menu.addAction(
            "Stop" if self._library.timer.is_running else "Start"
        )
        self._tray_toggle_action.triggered.connect(self._library.toggle)

        menu.addSeparator()

        show_action = menu.addAction(f"Show {TITLE}")
        show_action.triggered.connect(self._show_window)

        self._tray_icon.setContextMenu(menu)

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        timer_menu = menu_bar.addMenu("Timer")
        toggle_action = QAction("Toggle", self)
        toggle_action.setShortcut("Space")
        toggle_action.triggered.connect(self._library.toggle)
        timer_menu.addAction(toggle_action)

        timer_menu.addSeparator()
        for interval in self._library.timer.items:
            action = QAction(make_interval_icon(interval), str(interval), self)
            action.triggered.connect(
                lambda _checked=False, item=interval: self._library.choose(item)
            )
            timer_menu.addAction(action)

        view_menu = menu_bar.addMenu("View")
        self._aot_action = QAction("Always on Top", self)
        self._aot_action.setCheckable(True)
        self._aot_action.setChecked(self._settings.always_on_top)
        self._aot_action.triggered.connect(self._toggle_always_on_top)
        view_menu.addAction(self._aot_action)

        self._notify_action = QAction("Reminders", self)
        self._notify_action.setCheckable(True)
        self._notify_action.setChecked(self._settings.notifications_enabled)
        self._notify_action.triggered.connect(self._toggle_notifications)
        view_menu.addAction(self._notify_action)

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves; restart 500ms timer on each move/resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    def _toggle_always_on_top(self) -> None:
        new_val = not self._settings.always_on_top
        self._settings.always_on_top = new_val
        save_settings(self._settings)
        self._aot_action.setChecked(new_val)
        self._apply_always_on_top(new_val)

    def _apply_always_on_top(self, on_top: bool) -> None:
        flags = self.windowFlags()
        if on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        else:
            flags &= ~Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.show()  # Required: setWindowFlags hides the window

    def _toggle_notifications(self) -> None:
        new_val = not self._settings.notifications_enabled
        self._settings.notifications_enabled = new_val
        save_settings(self._settings)
        self._notify_action.setChecked(new_val)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        # A running countdown stays scheduled; the next launch resumes it.
        self._save_geometry()
        self._tray_icon.hide()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()
