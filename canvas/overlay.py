"""
canvas/overlay.py

Hint overlay shown over the chart (e.g. "Use Ctrl + scroll to zoom").
"""

from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import QObject, QPropertyAnimation, Qt, QTimer
from PyQt6.QtWidgets import QGraphicsOpacityEffect, QLabel, QWidget

OVERLAY_STYLE = """
QLabel#chartOverlay {
    background-color: rgba(0, 0, 0, 110);
    color: #FFFFFF;
    font-size: 20px;
    padding: 12px;
}
"""


class ScheduledTask(QObject):
    """
    A cancellable deferred callback running on the GUI thread.

    Starting the task again replaces the pending callback.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._callback: Optional[Callable[[], None]] = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def start(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.cancel()
        self._callback = callback
        self._timer.start(max(0, int(delay_ms)))

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None

    def _fire(self):
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()


class ChartOverlay(QObject):
    """
    Semi-transparent hint label covering the chart view.

    ``show`` fades the label in, ``hide`` fades it out after an optional
    delay. A new ``show`` cancels a pending delayed hide, so a hint that is
    requested again stays visible instead of flickering.
    """

    def __init__(self, parent_widget: QWidget):
        super().__init__(parent_widget)
        self._parent_widget = parent_widget

        self._label = QLabel(parent_widget)
        self._label.setObjectName("chartOverlay")
        self._label.setStyleSheet(OVERLAY_STYLE)
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setWordWrap(True)
        self._label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)

        self._effect = QGraphicsOpacityEffect(self._label)
        self._effect.setOpacity(0.0)
        self._label.setGraphicsEffect(self._effect)
        self._label.hide()

        self._animation = QPropertyAnimation(self._effect, b"opacity", self)
        self._animation.finished.connect(self._on_animation_finished)
        self._on_finished: Optional[Callable[[], None]] = None

        self._hide_task = ScheduledTask(self)

    @property
    def text(self) -> str:
        return self._label.text()

    @property
    def opacity(self) -> float:
        return self._effect.opacity()

    @property
    def is_shown(self) -> bool:
        return not self._label.isHidden()

    @property
    def hide_pending(self) -> bool:
        return self._hide_task.is_pending

    def show(self, text: str, duration: int = 0, on_shown: Optional[Callable[[], None]] = None) -> None:
        """
        Show the overlay with the given text.

        Args:
            text: The hint text
            duration: Fade-in duration in milliseconds (0 = immediately)
            on_shown: Called once the overlay is fully visible
        """
        self._hide_task.cancel()
        self._animation.stop()
        self._on_finished = None

        self._label.setText(text)
        self._label.setGeometry(self._parent_widget.rect())
        self._label.show()
        self._label.raise_()

        if duration <= 0:
            self._effect.setOpacity(1.0)
            if on_shown is not None:
                on_shown()
            return

        self._fade(1.0, duration, on_shown)

    def hide(self, delay: int = 0, duration: int = 0) -> None:
        """
        Hide the overlay.

        Args:
            delay: Milliseconds to wait before starting to fade out
            duration: Fade-out duration in milliseconds (0 = immediately)
        """
        if delay > 0:
            self._hide_task.start(delay, lambda: self._fade_out(duration))
            return
        self._hide_task.cancel()
        self._fade_out(duration)

    def _fade_out(self, duration: int) -> None:
        self._animation.stop()
        self._on_finished = None
        if duration <= 0:
            self._effect.setOpacity(0.0)
            self._label.hide()
            return
        self._fade(0.0, duration, self._label.hide)

    def _fade(self, end: float, duration: int, on_finished: Optional[Callable[[], None]]) -> None:
        self._on_finished = on_finished
        self._animation.setDuration(int(duration))
        self._animation.setStartValue(self._effect.opacity())
        self._animation.setEndValue(end)
        self._animation.start()

    def _on_animation_finished(self):
        callback = self._on_finished
        self._on_finished = None
        if callback is not None:
            callback()
