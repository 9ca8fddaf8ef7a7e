"""Tests for the paint definitions registry."""
from __future__ import annotations

import pytest
from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import QBrush, QColor, QLinearGradient, QPainterPath, QPen

from canvas.defs import ChartDefs


@pytest.fixture()
def defs(qapp):
    return ChartDefs()


class TestChartDefs:
    def test_add_and_get(self, defs):
        pen = QPen(QColor("#333"))
        assert defs.add("outline", pen) is pen
        assert defs.get("outline") is pen
        assert "outline" in defs
        assert len(defs) == 1

    def test_duplicate_id_rejected(self, defs):
        defs.add("fill", QBrush(QColor("red")))
        with pytest.raises(ValueError):
            defs.add("fill", QBrush(QColor("blue")))
        assert defs.brush("fill").color() == QColor("red")

    def test_empty_id_rejected(self, defs):
        with pytest.raises(ValueError):
            defs.add("", QPen())

    def test_unknown_id(self, defs):
        with pytest.raises(KeyError):
            defs.get("missing")

    def test_linear_gradient(self, defs):
        gradient = defs.add_linear_gradient(
            "male", QPointF(0, 0), QPointF(0, 1), [(0.0, "#b3d9ff"), (1.0, QColor("#0066cc"))]
        )
        assert isinstance(gradient, QLinearGradient)
        assert [stop[0] for stop in gradient.stops()] == [0.0, 1.0]
        assert defs.brush("male").gradient() is not None

    def test_clip_path(self, defs):
        path = defs.add_clip_path("image-clip", QRectF(0, 0, 40, 50), radius=5)
        assert isinstance(path, QPainterPath)
        assert path.boundingRect() == QRectF(0, 0, 40, 50)

    def test_pen_is_not_a_brush(self, defs):
        defs.add("outline", QPen())
        with pytest.raises(TypeError):
            defs.brush("outline")

    def test_ids_keep_registration_order(self, defs):
        defs.add("b", QPen())
        defs.add("a", QPen())
        assert defs.ids() == ["b", "a"]
