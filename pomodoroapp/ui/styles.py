"""QSS stylesheet and per-interval colours."""

from __future__ import annotations

from ..timer.intervals import IntervalType

_PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#F03A17",
    "text":         "#FFFFFF",
    "text_muted":   "#7A7A9A",
    "border":       "#313154",
}


def get_palette() -> dict[str, str]:
    return dict(_PALETTE)


def display_background(interval: IntervalType) -> str:
    """Vertical gradient from the interval's upper to lower colour."""
    upper, lower = interval.colors
    return (
        "qlineargradient(x1:0, y1:0, x2:0, y2:1, "
        f"stop:0 {upper}, stop:1 {lower})"
    )


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QFrame#display {{
        border-radius: 16px;
    }}

    QLabel#timeLabel {{
        background: transparent;
        font-size: 72px;
        font-weight: 700;
    }}

    QLabel#intervalLabel {{
        background: transparent;
        font-size: 18px;
        font-weight: 600;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 14px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton:checked {{
        border: 2px solid {p['accent']};
    }}

    QPushButton#toggleButton {{
        background-color: {p['accent']};
        border: none;
    }}
    """
