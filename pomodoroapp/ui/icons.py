"""Painted icons for the button bar, window and dialogs.

Each interval's resource key maps to a small drawing in its own colours,
so the app ships without image assets.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QColor, QIcon, QPainter, QPen, QPixmap, QPolygonF

from ..timer.intervals import IntervalType

ICON_SIZE = 64


def _canvas(size: int) -> tuple[QPixmap, QPainter]:
    pixmap = QPixmap(size, size)
    pixmap.fill(QColor(0, 0, 0, 0))
    p = QPainter(pixmap)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    return pixmap, p


def _draw_tomato(p: QPainter, size: int, upper: QColor, lower: QColor) -> None:
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(upper)
    p.drawEllipse(QRectF(size * 0.1, size * 0.2, size * 0.8, size * 0.72))
    p.setBrush(QColor("#4CAF50"))
    p.drawEllipse(QRectF(size * 0.4, size * 0.1, size * 0.2, size * 0.18))


def _draw_hot_beverage(p: QPainter, size: int, upper: QColor, lower: QColor) -> None:
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(upper)
    p.drawRoundedRect(QRectF(size * 0.18, size * 0.35, size * 0.5, size * 0.5), 6, 6)
    p.setPen(QPen(lower, size * 0.07))
    p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(QRectF(size * 0.6, size * 0.45, size * 0.22, size * 0.24))
    p.drawLine(int(size * 0.35), int(size * 0.1), int(size * 0.35), int(size * 0.28))
    p.drawLine(int(size * 0.5), int(size * 0.1), int(size * 0.5), int(size * 0.28))


def _draw_green_apple(p: QPainter, size: int, upper: QColor, lower: QColor) -> None:
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(upper)
    p.drawEllipse(QRectF(size * 0.12, size * 0.22, size * 0.76, size * 0.7))
    p.setBrush(lower)
    p.drawEllipse(QRectF(size * 0.52, size * 0.06, size * 0.22, size * 0.14))


_PAINTERS = {
    "Tomato": _draw_tomato,
    "HotBeverage": _draw_hot_beverage,
    "GreenApple": _draw_green_apple,
}


def make_interval_pixmap(interval: IntervalType, size: int = ICON_SIZE) -> QPixmap:
    upper, lower = (QColor(c) for c in interval.colors)
    pixmap, p = _canvas(size)
    _PAINTERS[interval.resource](p, size, upper, lower)
    p.end()
    return pixmap


def make_interval_icon(interval: IntervalType, size: int = ICON_SIZE) -> QIcon:
    return QIcon(make_interval_pixmap(interval, size))


def make_toggle_icon(running: bool, size: int = ICON_SIZE) -> QIcon:
    """Clock face; a square stop mark while running, a play triangle when idle."""
    pixmap, p = _canvas(size)
    colour = QColor("#FFFFFF")
    p.setPen(QPen(colour, 4))
    p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(4, 4, size - 8, size - 8)
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(colour)
    c = size // 2
    if running:
        p.drawRect(c - 9, c - 9, 18, 18)
    else:
        p.drawPolygon(QPolygonF([
            QPointF(c - 7, c - 11), QPointF(c - 7, c + 11), QPointF(c + 12, c),
        ]))
    p.end()
    return QIcon(pixmap)
