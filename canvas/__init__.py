"""
canvas package

PyQt6 drawing surface, pan/zoom, hint overlay and export for the pedigree chart.
"""

from canvas.chart_canvas import CanvasState, CanvasStateError, ChartCanvas, ContentGroup
from canvas.defs import ChartDefs
from canvas.events import PointerEvent, PointerEventKind
from canvas.export import ChartExport, ExportFactory, PngExport, SvgExport, UnsupportedExportFormatError
from canvas.overlay import ChartOverlay, ScheduledTask
from canvas.zoom import ZoomEngine

__all__ = [
    "CanvasState",
    "CanvasStateError",
    "ChartCanvas",
    "ContentGroup",
    "ChartDefs",
    "PointerEvent",
    "PointerEventKind",
    "ChartExport",
    "ExportFactory",
    "PngExport",
    "SvgExport",
    "UnsupportedExportFormatError",
    "ChartOverlay",
    "ScheduledTask",
    "ZoomEngine",
]
