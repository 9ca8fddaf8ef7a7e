"""
canvas/events.py

Platform-neutral pointer/gesture events handled by the chart canvas.

Qt events arriving at the view's viewport are translated into PointerEvent
instances so the canvas handlers do not depend on Qt event classes, and so
other input sources can feed the same handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QEventPoint


class PointerEventKind:
    """Event kinds the canvas reacts to."""
    CONTEXT_MENU = "contextmenu"
    WHEEL = "wheel"
    TOUCH_END = "touchend"
    TOUCH_MOVE = "touchmove"
    CLICK = "click"

    ALL = (CONTEXT_MENU, WHEEL, TOUCH_END, TOUCH_MOVE, CLICK)


@dataclass
class PointerEvent:
    """A pointer or gesture event.

    Attributes:
        kind: One of the PointerEventKind values
        ctrl: Whether the Ctrl modifier was held
        touch_count: Number of touch points still active
        default_prevented: Whether the default action was cancelled
        propagation_stopped: Whether the event must not reach the chart items
    """
    kind: str
    ctrl: bool = False
    touch_count: int = 0
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    @property
    def consumed(self) -> bool:
        return self.default_prevented or self.propagation_stopped


def _active_touch_count(event) -> int:
    """Count touch points still on the surface (released points excluded)."""
    return sum(1 for point in event.points() if point.state() != QEventPoint.State.Released)


def pointer_event_from_qevent(event: QEvent, default_prevented: bool = False) -> Optional[PointerEvent]:
    """
    Translate a Qt event into a PointerEvent.

    Args:
        event: The Qt event delivered to the viewport
        default_prevented: Whether another handler already cancelled the
            default action (used for clicks that ended a pan)

    Returns:
        The PointerEvent, or None for events the canvas does not handle
    """
    etype = event.type()

    if etype == QEvent.Type.ContextMenu:
        return PointerEvent(PointerEventKind.CONTEXT_MENU)

    if etype == QEvent.Type.Wheel:
        ctrl = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
        return PointerEvent(PointerEventKind.WHEEL, ctrl=ctrl)

    if etype == QEvent.Type.TouchEnd:
        return PointerEvent(PointerEventKind.TOUCH_END, touch_count=_active_touch_count(event))

    if etype == QEvent.Type.TouchUpdate:
        return PointerEvent(PointerEventKind.TOUCH_MOVE, touch_count=_active_touch_count(event))

    if etype == QEvent.Type.MouseButtonRelease and event.button() == Qt.MouseButton.LeftButton:
        return PointerEvent(PointerEventKind.CLICK, default_prevented=default_prevented)

    return None
