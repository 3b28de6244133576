"""UI package."""

from .timer_widget import TimerWidget
from .icons import make_interval_icon, make_interval_pixmap, make_toggle_icon

__all__ = [
    "TimerWidget",
    "make_interval_icon",
    "make_interval_pixmap",
    "make_toggle_icon",
]
