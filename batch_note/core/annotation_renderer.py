"""
Annotation renderer - burn freehand strokes into a copy of a source image
"""

from typing import TYPE_CHECKING, Iterable, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPainter, QColor, QPen, QPainterPath

if TYPE_CHECKING:
    from ..models.stroke import Stroke


def draw_stroke(painter: QPainter, stroke: 'Stroke'):
    """Render a single stroke as a round-capped polyline."""
    if not stroke.is_drawable:
        return

    pen = QPen(QColor(stroke.color), stroke.width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    painter.setPen(pen)

    points = stroke.points
    path = QPainterPath()
    path.moveTo(points[0][0], points[0][1])
    for x, y in points[1:]:
        path.lineTo(x, y)
    painter.drawPath(path)


def render_strokes(source: Optional[QImage], strokes: Iterable['Stroke']) -> Optional[QImage]:
    """
    Render strokes on top of a copy of source.

    Args:
        source: Original image (left untouched)
        strokes: Strokes in drawing order

    Returns:
        New annotated image, or None if there is no source or nothing drawable
    """
    drawable = [stroke for stroke in strokes if stroke.is_drawable]
    if source is None or source.isNull() or not drawable:
        return None

    # Implicitly shared with source until the painter detaches it
    annotated = source.convertToFormat(QImage.Format.Format_ARGB32)

    painter = QPainter(annotated)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    for stroke in drawable:
        draw_stroke(painter, stroke)
    painter.end()

    return annotated


__all__ = ['draw_stroke', 'render_strokes']
