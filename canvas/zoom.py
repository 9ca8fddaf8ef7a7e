"""
canvas/zoom.py

Pan and zoom engine for the chart's content group.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from PyQt6.QtCore import QEvent, QObject, QPointF, Qt
from PyQt6.QtGui import QEventPoint, QTransform
from PyQt6.QtWidgets import QGraphicsItem, QGraphicsView

from settings import get_settings


class ZoomEngine(QObject):
    """
    Holds the current scale and translation of the content group.

    The transform is applied to the content group item rather than to the
    view, so the view keeps an identity transform and chart coordinates can
    be exported unscaled.

    Pointer bindings (see ``bind``):
    - Ctrl + mouse wheel zooms about the cursor
    - Left-button drag pans; the release ending a drag is flagged so the
      canvas can keep it from acting as a click
    - Two-finger touch pinch zooms about the midpoint of the fingers
    """

    def __init__(self, target: QGraphicsItem, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._target = target
        self._view: Optional[QGraphicsView] = None
        self._k = 1.0
        self._tx = 0.0
        self._ty = 0.0

        # Drag tracking
        self._press_pos: Optional[QPointF] = None
        self._last_pos: Optional[QPointF] = None
        self._dragging = False
        self._suppress_click = False

        # Pinch tracking
        self._pinch_distance: Optional[float] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def scale(self) -> float:
        return self._k

    @property
    def translation(self) -> Tuple[float, float]:
        return (self._tx, self._ty)

    @property
    def scale_extent(self) -> Tuple[float, float]:
        zoom = get_settings().settings.canvas.zoom
        return (zoom.min_scale, zoom.max_scale)

    @property
    def view(self) -> Optional[QGraphicsView]:
        return self._view

    def transform(self) -> QTransform:
        return QTransform(self._k, 0.0, 0.0, self._k, self._tx, self._ty)

    def _apply(self) -> None:
        self._target.setTransform(self.transform())

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def scale_to(self, k: float, anchor: Optional[QPointF] = None) -> float:
        """
        Set the scale, keeping ``anchor`` (scene coordinates) fixed on screen.

        The scale is clamped to the configured extent.

        Returns:
            The scale actually applied
        """
        lo, hi = self.scale_extent
        new_k = min(max(k, lo), hi)
        if anchor is None:
            anchor = QPointF(0.0, 0.0)
        ratio = new_k / self._k
        self._tx = anchor.x() - (anchor.x() - self._tx) * ratio
        self._ty = anchor.y() - (anchor.y() - self._ty) * ratio
        self._k = new_k
        self._apply()
        return new_k

    def scale_by(self, factor: float, anchor: Optional[QPointF] = None) -> float:
        """Multiply the scale by ``factor`` about ``anchor``."""
        return self.scale_to(self._k * factor, anchor)

    def translate_by(self, dx: float, dy: float) -> None:
        self._tx += dx
        self._ty += dy
        self._apply()

    def reset(self) -> None:
        """Reset to 100% without translation."""
        self._k = 1.0
        self._tx = 0.0
        self._ty = 0.0
        self._apply()

    def take_click_suppression(self) -> bool:
        """Return whether the last release ended a drag, and clear the flag."""
        suppressed = self._suppress_click
        self._suppress_click = False
        return suppressed

    # ------------------------------------------------------------------
    # Pointer bindings
    # ------------------------------------------------------------------

    def bind(self, view: QGraphicsView) -> None:
        """Listen to the pointer events of the view's viewport."""
        self._view = view
        view.viewport().installEventFilter(self)

    def _to_scene(self, pos: QPointF) -> QPointF:
        if self._view is None:
            return QPointF(pos)
        return self._view.mapToScene(pos.toPoint())

    def eventFilter(self, obj, event):
        etype = event.type()

        if etype == QEvent.Type.Wheel:
            if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
                return self._on_wheel(event)
            return False

        if etype == QEvent.Type.MouseButtonPress and event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.position()
            self._last_pos = event.position()
            self._dragging = False
            return False

        if etype == QEvent.Type.MouseMove and self._press_pos is not None:
            return self._on_drag(event.position())

        if etype == QEvent.Type.MouseButtonRelease and event.button() == Qt.MouseButton.LeftButton:
            self._suppress_click = self._dragging
            self._press_pos = None
            self._last_pos = None
            self._dragging = False
            return False

        if etype in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate, QEvent.Type.TouchEnd):
            return self._on_touch(event)

        return False

    def _on_wheel(self, event) -> bool:
        delta = event.angleDelta().y()
        if delta == 0:
            return True
        # Zoom factor from settings. Default: 1.15 (15% per scroll step)
        zoom_factor = get_settings().settings.canvas.zoom.wheel_factor
        factor = zoom_factor if delta > 0 else 1 / zoom_factor
        self.scale_by(factor, self._to_scene(event.position()))
        event.accept()
        return True

    def _on_drag(self, pos: QPointF) -> bool:
        if not self._dragging:
            threshold = get_settings().settings.canvas.zoom.drag_threshold
            moved = pos - self._press_pos
            if math.hypot(moved.x(), moved.y()) < threshold:
                return False
            self._dragging = True
        start = self._to_scene(self._last_pos)
        end = self._to_scene(pos)
        self.translate_by(end.x() - start.x(), end.y() - start.y())
        self._last_pos = pos
        return True

    def _touch_position(self, point: QEventPoint) -> QPointF:
        if self._view is None:
            return point.position()
        return self._view.viewport().mapFromGlobal(point.globalPosition())

    def _on_touch(self, event) -> bool:
        if event.type() == QEvent.Type.TouchBegin:
            # Accept the sequence, otherwise no touch updates are delivered
            self.end_pinch()
            event.accept()
            return True

        points = [p for p in event.points() if p.state() != QEventPoint.State.Released]
        if len(points) < 2:
            self.end_pinch()
            return False

        self.pinch(self._touch_position(points[0]), self._touch_position(points[1]))
        # The canvas reacts to the same gesture with its hints
        return False

    def pinch(self, a: QPointF, b: QPointF) -> None:
        """
        Follow a two-finger pinch with fingers at ``a`` and ``b`` (viewport coordinates).

        The first call of a gesture records the finger distance; later calls
        scale by the change of distance about the midpoint of the fingers.
        """
        distance = math.hypot(b.x() - a.x(), b.y() - a.y())
        if self._pinch_distance and distance > 0:
            midpoint = QPointF((a.x() + b.x()) / 2, (a.y() + b.y()) / 2)
            self.scale_by(distance / self._pinch_distance, self._to_scene(midpoint))
        self._pinch_distance = distance or None

    def end_pinch(self) -> None:
        self._pinch_distance = None
