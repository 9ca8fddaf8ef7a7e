"""
canvas/defs.py

Registry of reusable paint definitions (gradients, brushes, pens, clip
paths, image patterns) referenced by id from the drawn chart nodes.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple, Union

from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import QBrush, QColor, QGradient, QLinearGradient, QPainterPath, QPen, QPixmap

Definition = Union[QGradient, QBrush, QPen, QPainterPath, QPixmap]


class ChartDefs:
    """
    Append-only table of paint definitions.

    Definitions are registered once during the drawing phase, before any
    node refers to them; ids cannot be reassigned or removed.
    """

    def __init__(self):
        self._definitions: Dict[str, Definition] = {}

    def add(self, def_id: str, definition: Definition) -> Definition:
        """
        Register a definition.

        Args:
            def_id: Unique id the nodes use to refer to the definition
            definition: The gradient, brush, pen, path or pixmap

        Returns:
            The registered definition

        Raises:
            ValueError: If the id is empty or already registered
        """
        if not def_id:
            raise ValueError("Definition id must not be empty")
        if def_id in self._definitions:
            raise ValueError(f"Definition {def_id!r} is already registered")
        self._definitions[def_id] = definition
        return definition

    def get(self, def_id: str) -> Definition:
        try:
            return self._definitions[def_id]
        except KeyError:
            raise KeyError(f"No definition registered with id {def_id!r}") from None

    def brush(self, def_id: str) -> QBrush:
        """Return a brush painting with the given gradient, pixmap or brush definition."""
        definition = self.get(def_id)
        if isinstance(definition, QBrush):
            return definition
        if isinstance(definition, (QGradient, QPixmap)):
            return QBrush(definition)
        raise TypeError(f"Definition {def_id!r} ({type(definition).__name__}) cannot be used as a brush")

    def add_linear_gradient(
        self,
        def_id: str,
        start: QPointF,
        stop: QPointF,
        stops: Iterable[Tuple[float, Union[str, QColor]]],
    ) -> QLinearGradient:
        """Register a linear gradient from ``(position, color)`` stops."""
        gradient = QLinearGradient(start, stop)
        for position, color in stops:
            gradient.setColorAt(position, QColor(color))
        self.add(def_id, gradient)
        return gradient

    def add_clip_path(self, def_id: str, rect: QRectF, radius: float = 0.0) -> QPainterPath:
        """Register a (rounded) rectangular clip path, e.g. for person images."""
        path = QPainterPath()
        if radius > 0:
            path.addRoundedRect(rect, radius, radius)
        else:
            path.addRect(rect)
        self.add(def_id, path)
        return path

    def ids(self) -> List[str]:
        return list(self._definitions)

    def __contains__(self, def_id: object) -> bool:
        return def_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
