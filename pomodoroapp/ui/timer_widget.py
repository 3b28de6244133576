"""Countdown display plus the button bar.

Layout (top → bottom):
    - Display card: interval name and ``mm:ss``, painted in the
      interval's gradient
    - Button bar: Toggle, then one button per interval type
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QSize
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)

from ..library import Library
from ..timer.intervals import IntervalType
from .icons import make_interval_icon, make_toggle_icon
from .styles import display_background

TOGGLE_LABEL = "Toggle"


class TimerWidget(QWidget):
    """The main timer card."""

    def __init__(self, library: Library, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._library = library
        self._engine = library.timer
        self._interval_buttons: dict[IntervalType, QPushButton] = {}
        self._build_ui()
        self._connect_signals()
        self._on_interval_changed(self._engine.current)
        self._on_display_changed(self._engine.display)
        self._on_running_changed(self._engine.is_running)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)
        root.setSpacing(16)

        self._card = QFrame(self)
        self._card.setObjectName("display")
        card_layout = QVBoxLayout(self._card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._interval_label = QLabel(self._card)
        self._interval_label.setObjectName("intervalLabel")
        self._interval_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        card_layout.addWidget(self._interval_label)

        self._time_label = QLabel(self._card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        card_layout.addWidget(self._time_label)

        root.addWidget(self._card, stretch=1)

        # ── button bar ───────────────────────────────────────────────
        bar = QHBoxLayout()
        bar.setSpacing(8)
        bar.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._toggle_btn = QPushButton(TOGGLE_LABEL, self)
        self._toggle_btn.setObjectName("toggleButton")
        self._toggle_btn.setIconSize(QSize(24, 24))
        bar.addWidget(self._toggle_btn)

        for interval in self._engine.items:
            btn = QPushButton(str(interval), self)
            btn.setObjectName(f"interval_{interval.identity}")
            btn.setIcon(make_interval_icon(interval))
            btn.setIconSize(QSize(24, 24))
            btn.setCheckable(True)
            btn.setToolTip(f"{interval} ({interval.minutes} min)")
            self._interval_buttons[interval] = btn
            bar.addWidget(btn)

        root.addLayout(bar)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._toggle_btn.clicked.connect(self._library.toggle)
        for interval, btn in self._interval_buttons.items():
            btn.clicked.connect(
                lambda _checked=False, item=interval: self._on_choose(item)
            )

        self._engine.display_changed.connect(self._on_display_changed)
        self._engine.interval_changed.connect(self._on_interval_changed)
        self._engine.running_changed.connect(self._on_running_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_choose(self, interval: IntervalType) -> None:
        self._library.choose(interval)
        # A refused choice must not leave its button checked.
        self._sync_checked(self._engine.current)

    def _on_display_changed(self, text: str) -> None:
        self._time_label.setText(text)

    def _on_interval_changed(self, interval: IntervalType) -> None:
        self._interval_label.setText(str(interval))
        self._card.setStyleSheet(
            f"QFrame#display {{ background: {display_background(interval)}; }}"
        )
        self._sync_checked(interval)

    def _on_running_changed(self, running: bool) -> None:
        self._toggle_btn.setIcon(make_toggle_icon(running))
        self._toggle_btn.setToolTip("Stop the countdown" if running else "Start the countdown")

    def _sync_checked(self, current: IntervalType) -> None:
        for interval, btn in self._interval_buttons.items():
            btn.setChecked(interval is current)

    # ── accessors used by the window and tests ────────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def interval_text(self) -> str:
        return self._interval_label.text()

    def interval_button(self, interval: IntervalType) -> QPushButton:
        return self._interval_buttons[interval]

    @property
    def toggle_button(self) -> QPushButton:
        return self._toggle_btn
