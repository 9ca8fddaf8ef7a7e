"""
canvas/export.py

Export the drawn chart as PNG image or SVG file.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, Type, Union

from PyQt6.QtCore import QBuffer, QIODevice, QRectF, QSize
from PyQt6.QtGui import QColor, QImage, QPainter, QTransform
from PyQt6.QtSvg import QSvgGenerator

from settings import get_settings

if TYPE_CHECKING:
    from canvas.chart_canvas import ChartCanvas


class UnsupportedExportFormatError(ValueError):
    """Raised when an export is requested for an unknown format."""


@contextmanager
def _unzoomed(canvas: "ChartCanvas") -> Iterator[None]:
    """Render the content group at 100% without pan, restoring the user's view afterwards."""
    visual = canvas.visual
    if visual is None:
        yield
        return
    saved = visual.transform()
    visual.setTransform(QTransform())
    try:
        yield
    finally:
        visual.setTransform(saved)


class ChartExport:
    """Base class of the chart exporters."""

    file_extension = ""
    mime_type = ""

    def render(self, canvas: "ChartCanvas") -> bytes:
        """Render the chart of ``canvas`` and return the encoded file content."""
        raise NotImplementedError

    def save(self, canvas: "ChartCanvas", path: Union[str, Path]) -> Path:
        """
        Render the chart and write it to ``path``.

        The format's extension is appended if the path has none.

        Returns:
            The path written
        """
        path = Path(path)
        if not path.suffix:
            path = path.with_suffix(self.file_extension)
        path.write_bytes(self.render(canvas))
        return path

    @staticmethod
    def _target_size(source: QRectF, scale: float = 1.0) -> QSize:
        return QSize(max(1, math.ceil(source.width() * scale)), max(1, math.ceil(source.height() * scale)))

    @staticmethod
    def _paint(canvas: "ChartCanvas", painter: QPainter, size: QSize, source: QRectF) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        canvas.scene.render(painter, QRectF(0, 0, size.width(), size.height()), source)


class PngExport(ChartExport):
    """Rasterizes the chart into a PNG image."""

    file_extension = ".png"
    mime_type = "image/png"

    def render(self, canvas: "ChartCanvas") -> bytes:
        cfg = get_settings().settings.canvas.export
        source = canvas.chart_rect(cfg.margin)
        size = self._target_size(source, cfg.png_scale)

        image = QImage(size, QImage.Format.Format_ARGB32)
        image.fill(QColor(cfg.background))
        painter = QPainter(image)
        try:
            with _unzoomed(canvas):
                self._paint(canvas, painter, size, source)
        finally:
            painter.end()

        buffer = QBuffer()
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        image.save(buffer, "PNG")
        buffer.close()
        return bytes(buffer.data())


class SvgExport(ChartExport):
    """Writes the chart as an SVG vector file."""

    file_extension = ".svg"
    mime_type = "image/svg+xml"

    def render(self, canvas: "ChartCanvas") -> bytes:
        cfg = get_settings().settings.canvas.export
        source = canvas.chart_rect(cfg.margin)
        size = self._target_size(source)

        buffer = QBuffer()
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)

        generator = QSvgGenerator()
        generator.setOutputDevice(buffer)
        generator.setSize(size)
        generator.setViewBox(QRectF(0, 0, size.width(), size.height()))
        generator.setTitle(cfg.svg_title)

        painter = QPainter(generator)
        try:
            with _unzoomed(canvas):
                self._paint(canvas, painter, size, source)
        finally:
            painter.end()

        buffer.close()
        return bytes(buffer.data())


class ExportFactory:
    """
    Creates the exporter for a requested format.

    This is the single place new formats are added, see ``register``.
    """

    _exports: Dict[str, Type[ChartExport]] = {
        "png": PngExport,
        "svg": SvgExport,
    }

    @classmethod
    def register(cls, kind: str, export_class: Type[ChartExport]) -> None:
        """Register an exporter class for a format key."""
        cls._exports = {**cls._exports, kind.lower(): export_class}

    @classmethod
    def formats(cls):
        return sorted(cls._exports)

    def create_export(self, kind: str) -> ChartExport:
        """
        Create a new exporter instance.

        Args:
            kind: The export format, "png" or "svg" (case-insensitive)

        Raises:
            UnsupportedExportFormatError: If no exporter is registered for ``kind``
        """
        export_class = self._exports.get(str(kind).lower())
        if export_class is None:
            raise UnsupportedExportFormatError(f"Unsupported export format: {kind!r}")
        return export_class()
