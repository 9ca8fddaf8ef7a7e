"""
canvas/chart_canvas.py

The chart's drawing surface: graphics view and scene, definitions registry,
content group with pan/zoom, hint overlay wiring and export.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from PyQt6.QtCore import QEvent, QObject, QRectF, Qt
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import (
    QGraphicsItem,
    QGraphicsScene,
    QGraphicsView,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from canvas.defs import ChartDefs
from canvas.events import PointerEvent, PointerEventKind, pointer_event_from_qevent
from canvas.export import ChartExport, ExportFactory
from canvas.zoom import ZoomEngine
from debug_trace import trace, trace_call
from models import ChartConfiguration
from settings import get_settings

PointerHandler = Callable[[PointerEvent], None]


class CanvasStateError(RuntimeError):
    """Raised when a canvas operation is used in the wrong lifecycle state."""


class CanvasState:
    """Lifecycle states of the chart canvas."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    INTERACTION_READY = "interaction-ready"


class ContentGroup(QGraphicsItem):
    """Transformable container of all chart nodes. Paints nothing itself."""

    def __init__(self, parent: Optional[QGraphicsItem] = None):
        super().__init__(parent)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemHasNoContents, True)

    def boundingRect(self) -> QRectF:
        return QRectF()

    def paint(self, painter, option, widget=None):
        pass

    def add(self, item: QGraphicsItem) -> QGraphicsItem:
        """Reparent a chart node into the group."""
        item.setParentItem(self)
        return item


class ChartCanvas(QObject):
    """
    Owns the root drawing surface of a chart.

    Lifecycle: ``initialize()`` attaches the view to its container,
    ``initialize_interaction(overlay)`` creates the content group and wires
    the pointer events. The orchestrator draws the chart nodes into
    ``visual`` and registers shared paints in ``defs`` beforehand.

    The overlay passed to ``initialize_interaction`` needs two methods:
    ``show(text, duration=0, on_shown=None)`` and ``hide(delay=0, duration=0)``
    (see ``canvas.overlay.ChartOverlay``).
    """

    def __init__(self, container: QWidget, configuration: ChartConfiguration):
        super().__init__(container)
        self._container = container
        self._configuration = configuration

        self._scene = QGraphicsScene(self)
        self._element = QGraphicsView(self._scene)
        self._element.setObjectName("pedigreeChart")
        self._defs = ChartDefs()

        self._visual: Optional[ContentGroup] = None
        self._zoom: Optional[ZoomEngine] = None
        self._overlay = None
        self._state = CanvasState.UNINITIALIZED

        self._handlers: Dict[str, PointerHandler] = {
            PointerEventKind.CONTEXT_MENU: self._on_context_menu,
            PointerEventKind.WHEEL: self._on_wheel,
            PointerEventKind.TOUCH_END: self._on_touch_end,
            PointerEventKind.TOUCH_MOVE: self._on_touch_move,
            PointerEventKind.CLICK: self._on_click,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @trace_call("CANVAS")
    def initialize(self) -> None:
        """
        Attach the view to the container and set up rendering.

        Meant to be called once; calling it again re-applies the settings.
        """
        view = self._element
        view.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        view.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        view.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
        view.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        view.setDragMode(QGraphicsView.DragMode.NoDrag)
        view.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        view.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout = self._container.layout()
        if layout is None:
            layout = QVBoxLayout(self._container)
            layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(view)

        self._state = CanvasState.INITIALIZED

    @trace_call("CANVAS")
    def initialize_interaction(self, overlay) -> None:
        """
        Wire pointer and gesture events and create the zoomable content group.

        Calling it a second time creates another content group; that is not
        supported.

        Args:
            overlay: Hint overlay with ``show``/``hide`` methods

        Raises:
            CanvasStateError: If ``initialize()`` was not called before
        """
        if self._state == CanvasState.UNINITIALIZED:
            raise CanvasStateError("initialize() must be called before initialize_interaction()")

        self._overlay = overlay
        viewport = self._element.viewport()
        viewport.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        viewport.installEventFilter(self)

        if self._configuration.rtl:
            self._element.setProperty("rtl", True)
            self._element.setLayoutDirection(Qt.LayoutDirection.RightToLeft)

        self._visual = ContentGroup()
        self._scene.addItem(self._visual)

        # Installed after the canvas filter, so it sees the events first
        self._zoom = ZoomEngine(self._visual, self)
        self._zoom.bind(self._element)

        self._state = CanvasState.INTERACTION_READY
        trace(f"canvas interaction ready (rtl={self._configuration.rtl})", "CANVAS")

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def set_handler(self, kind: str, handler: PointerHandler) -> None:
        """Replace the handler of one pointer event kind."""
        if kind not in PointerEventKind.ALL:
            raise ValueError(f"Unknown pointer event kind: {kind!r}")
        self._handlers[kind] = handler

    def dispatch(self, event: PointerEvent) -> PointerEvent:
        """Run the handler registered for the event's kind."""
        trace(f"{event.kind} ctrl={event.ctrl} touches={event.touch_count}", "EVENT")
        handler = self._handlers.get(event.kind)
        if handler is not None:
            handler(event)
        return event

    def eventFilter(self, obj, event):
        default_prevented = False
        if self._zoom is not None and event.type() == QEvent.Type.MouseButtonRelease:
            default_prevented = self._zoom.take_click_suppression()

        pointer = pointer_event_from_qevent(event, default_prevented)
        if pointer is None:
            return False
        consumed = self.dispatch(pointer).consumed
        if consumed and pointer.kind == PointerEventKind.CLICK:
            # The press reached the scene, so the item under it holds the grab
            grabber = self._scene.mouseGrabberItem()
            if grabber is not None:
                grabber.ungrabMouse()
        return consumed

    def _on_context_menu(self, event: PointerEvent) -> None:
        event.prevent_default()

    def _on_wheel(self, event: PointerEvent) -> None:
        if event.ctrl:
            return
        timing = get_settings().settings.canvas.overlay
        overlay = self._overlay
        overlay.show(
            self._configuration.labels.zoom,
            timing.show_duration,
            lambda: overlay.hide(timing.hide_delay, timing.hide_duration),
        )

    def _on_touch_end(self, event: PointerEvent) -> None:
        if event.touch_count < 2:
            self._overlay.hide(0, get_settings().settings.canvas.overlay.hide_duration)

    def _on_touch_move(self, event: PointerEvent) -> None:
        if event.touch_count >= 2:
            # Pinch zoom in progress
            self._overlay.hide()
        else:
            self._overlay.show(self._configuration.labels.move)

    def _on_click(self, event: PointerEvent) -> None:
        if event.default_prevented:
            event.stop_propagation()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, kind: str) -> ChartExport:
        """
        Create the exporter for the requested format.

        Args:
            kind: "png" or "svg"

        Raises:
            CanvasStateError: If the canvas was not initialized
            UnsupportedExportFormatError: For unknown formats
        """
        if self._state == CanvasState.UNINITIALIZED:
            raise CanvasStateError("initialize() must be called before export()")
        return ExportFactory().create_export(kind)

    def chart_rect(self, margin: float = 0.0) -> QRectF:
        """
        Scene rectangle enclosing the drawn chart at 100% zoom, grown by ``margin``.

        The current pan and zoom of the content group are not applied.
        """
        if self._visual is not None:
            rect = self._visual.childrenBoundingRect().translated(self._visual.pos())
        else:
            rect = self._scene.itemsBoundingRect()
        if rect.isEmpty():
            return QRectF(0, 0, 1, 1)
        return rect.adjusted(-margin, -margin, margin, margin)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> str:
        return self._state

    @property
    def configuration(self) -> ChartConfiguration:
        return self._configuration

    @property
    def root_element(self) -> QGraphicsView:
        return self._element

    @property
    def scene(self) -> QGraphicsScene:
        return self._scene

    @property
    def defs(self) -> ChartDefs:
        return self._defs

    @property
    def zoom(self) -> Optional[ZoomEngine]:
        return self._zoom

    @property
    def visual(self) -> Optional[ContentGroup]:
        """The content group all chart nodes are drawn into."""
        return self._visual

