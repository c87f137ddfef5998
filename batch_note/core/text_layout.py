"""
Text layout helpers shared by the composite sizing and drawing passes.

Both passes must go through make_font() and measure_text_height() with
the same width and size, otherwise drawn comments clip.
"""

import math

from PyQt6.QtCore import Qt, QRect, QRectF
from PyQt6.QtGui import QFont, QFontMetrics, QPainter, QColor

from ..config import Config

WRAP_FLAGS = (
    Qt.AlignmentFlag.AlignLeft.value
    | Qt.AlignmentFlag.AlignTop.value
    | Qt.TextFlag.TextWordWrap.value
)

# Upper bound for the measuring rectangle; comments never get this tall
_MEASURE_HEIGHT = 1_000_000


def make_font(size: float, bold: bool = False) -> QFont:
    """Create the composite font at a pixel size."""
    font = QFont(Config.FONT_FAMILY)
    font.setPixelSize(max(1, int(round(size))))
    font.setBold(bold)
    return font


def measure_text_height(text: str, width: int, font_size: float) -> int:
    """
    Height of text word-wrapped to width.

    Args:
        text: Comment text
        width: Available content width in pixels
        font_size: Pixel font size

    Returns:
        Block height in pixels, 0 for blank text
    """
    if not text or not text.strip():
        return 0

    metrics = QFontMetrics(make_font(font_size))
    bounds = metrics.boundingRect(QRect(0, 0, max(1, width), _MEASURE_HEIGHT), WRAP_FLAGS, text)
    return max(
        int(font_size * Config.MIN_TEXT_HEIGHT_FACTOR),
        int(math.ceil(bounds.height())) + Config.TEXT_HEIGHT_PADDING
    )


def draw_wrapped_text(
    painter: QPainter,
    text: str,
    x: int,
    y: int,
    width: int,
    font_size: float,
    color: QColor
) -> int:
    """
    Draw word-wrapped text and return the height it occupies.

    The height comes from measure_text_height(), so it matches the
    sizing pass exactly.
    """
    height = measure_text_height(text, width, font_size)
    if height == 0:
        return 0

    painter.setFont(make_font(font_size))
    painter.setPen(color)
    painter.drawText(QRectF(x, y, width, height), WRAP_FLAGS, text)
    return height


__all__ = ['make_font', 'measure_text_height', 'draw_wrapped_text', 'WRAP_FLAGS']
