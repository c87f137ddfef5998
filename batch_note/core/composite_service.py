"""
CompositeService - render checked entries into one tall image

Layout per entry, top to bottom:
    title band  [index] on a light-blue gradient with an accent bar
    image       natural resolution, 1 px grey border
    comment     word-wrapped on a near-white block
    separator   gradient band, then spacing before the next entry

Requires a QGuiApplication (fonts) to exist before composite() is called.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

from PyQt6.QtCore import Qt, QRect
from PyQt6.QtGui import QImage, QPainter, QColor, QPen, QLinearGradient, QBrush

from .text_layout import make_font, measure_text_height, draw_wrapped_text
from ..config import Config
from ..events.event_bus import EventBus, get_event_bus

if TYPE_CHECKING:
    from ..models.entry import Entry


logger = logging.getLogger(__name__)


# Palette
TITLE_GRADIENT_TOP = QColor(240, 248, 255)
TITLE_GRADIENT_BOTTOM = QColor(220, 235, 252)
ACCENT_COLOR = QColor(0, 122, 204)
INDEX_TEXT_COLOR = QColor(0, 100, 180)
IMAGE_BORDER_COLOR = QColor(200, 200, 200)
COMMENT_BACKGROUND = QColor(252, 252, 252)
COMMENT_TEXT_COLOR = QColor(40, 40, 40)
SEPARATOR_TOP = QColor(230, 230, 230)
SEPARATOR_BOTTOM = QColor(200, 200, 200)
SEPARATOR_LINE = QColor(180, 180, 180)

LABEL_FLAGS = Qt.AlignmentFlag.AlignLeft.value | Qt.AlignmentFlag.AlignVCenter.value


@dataclass(frozen=True)
class CompositeLayout:
    """Sizing decisions shared by the measure and draw passes."""
    canvas_width: int
    content_width: int
    base_font_size: float
    title_font_size: float
    title_height: int

    @property
    def padding(self) -> int:
        return Config.COMPOSITE_PADDING


class CompositeService:
    """
    Lays out a list of entries into a single raster

    Usage:
        service = CompositeService()
        image = service.composite(entry_list.checked_entries())
        if image is None:
            ...  # nothing selected to compose
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._event_bus = event_bus or get_event_bus()

    # ==================== Public API ====================

    def composite(self, entries: Sequence['Entry']) -> Optional[QImage]:
        """
        Compose checked entries into one image.

        Args:
            entries: Entries in display order; unchecked ones are skipped

        Returns:
            Composite image, or None when no entry is checked
        """
        checked = [entry for entry in entries if entry.is_checked]
        if not checked:
            logger.debug("Composite skipped: no checked entries")
            return None

        layout = self.compute_layout(checked)
        total_height = self.compute_canvas_height(checked, layout)

        result = QImage(layout.canvas_width, total_height, QImage.Format.Format_ARGB32)
        result.fill(QColor(255, 255, 255))

        painter = QPainter(result)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)

        try:
            current_y = Config.COMPOSITE_PADDING
            for entry in checked:
                current_y = self._draw_entry(painter, entry, current_y, layout)

                current_y += Config.SEPARATOR_GAP
                self._draw_separator(painter, current_y, layout.canvas_width)
                current_y += Config.SEPARATOR_HEIGHT + Config.ENTRY_SPACING
        finally:
            painter.end()

        logger.info(f"Composed {len(checked)} entries into {result.width()}x{result.height()} image")
        self._event_bus.composite_created.emit(result.width(), result.height())
        return result

    # ==================== Measure pass ====================

    def compute_layout(self, checked: List['Entry']) -> CompositeLayout:
        """
        Derive canvas width and font sizes from the checked entries.

        Text-only entries do not influence width or font size.
        """
        max_image_width = 0
        max_image_dimension = 0

        for entry in checked:
            if entry.has_image:
                image = entry.display_image
                max_image_width = max(max_image_width, image.width())
                max_image_dimension = max(max_image_dimension, image.width(), image.height())

        content_width = max(max_image_width, Config.COMPOSITE_MIN_CONTENT_WIDTH)
        canvas_width = content_width + Config.COMPOSITE_PADDING * 2

        base_font_size = max(Config.MIN_FONT_SIZE, max_image_dimension * Config.FONT_SIZE_RATIO)
        title_font_size = base_font_size + Config.TITLE_FONT_DELTA
        title_height = int(title_font_size * Config.TITLE_HEIGHT_FACTOR)

        return CompositeLayout(
            canvas_width=canvas_width,
            content_width=content_width,
            base_font_size=base_font_size,
            title_font_size=title_font_size,
            title_height=title_height,
        )

    def compute_entry_height(self, entry: 'Entry', layout: CompositeLayout) -> int:
        """Height of one entry section, excluding its separator band."""
        height = layout.title_height + Config.TITLE_GAP

        if entry.has_image:
            height += entry.display_image.height() + Config.IMAGE_GAP

        if entry.has_comment:
            text_height = measure_text_height(entry.comment, layout.content_width, layout.base_font_size)
            height += text_height + Config.COMMENT_GAP

        return height

    def compute_canvas_height(self, checked: List['Entry'], layout: CompositeLayout) -> int:
        separator_band = Config.SEPARATOR_GAP + Config.SEPARATOR_HEIGHT + Config.ENTRY_SPACING
        total_height = Config.COMPOSITE_PADDING
        for entry in checked:
            total_height += self.compute_entry_height(entry, layout) + separator_band
        return total_height

    # ==================== Draw pass ====================

    def _draw_entry(self, painter: QPainter, entry: 'Entry', y: int, layout: CompositeLayout) -> int:
        """Draw one entry section starting at y; returns the y below it."""
        x = layout.padding

        # 1. Title band with index label
        gradient = QLinearGradient(0, y, 0, y + layout.title_height)
        gradient.setColorAt(0.0, TITLE_GRADIENT_TOP)
        gradient.setColorAt(1.0, TITLE_GRADIENT_BOTTOM)
        painter.fillRect(QRect(0, y, layout.canvas_width, layout.title_height), QBrush(gradient))
        painter.fillRect(QRect(0, y, Config.ACCENT_BAR_WIDTH, layout.title_height), ACCENT_COLOR)

        painter.setFont(make_font(layout.title_font_size, bold=True))
        painter.setPen(INDEX_TEXT_COLOR)
        label_rect = QRect(x + Config.ACCENT_BAR_WIDTH, y, layout.content_width, layout.title_height)
        painter.drawText(label_rect, LABEL_FLAGS, f"[{entry.index}]")
        y += layout.title_height + Config.TITLE_GAP

        # 2. Image at natural resolution
        if entry.has_image:
            image = entry.display_image
            painter.setPen(QPen(IMAGE_BORDER_COLOR, 1))
            painter.drawRect(x - 1, y - 1, image.width() + 1, image.height() + 1)
            painter.drawImage(x, y, image)
            y += image.height() + Config.IMAGE_GAP

        # 3. Comment block
        if entry.has_comment:
            text_height = measure_text_height(entry.comment, layout.content_width, layout.base_font_size)
            painter.fillRect(
                QRect(x - 5, y - 5, layout.content_width + 10, text_height + 10),
                COMMENT_BACKGROUND
            )
            draw_wrapped_text(
                painter, entry.comment, x, y,
                layout.content_width, layout.base_font_size, COMMENT_TEXT_COLOR
            )
            y += text_height + Config.COMMENT_GAP

        return y

    def _draw_separator(self, painter: QPainter, y: int, width: int):
        """Gradient band with a line on each edge."""
        height = Config.SEPARATOR_HEIGHT
        gradient = QLinearGradient(0, y, 0, y + height)
        gradient.setColorAt(0.0, SEPARATOR_TOP)
        gradient.setColorAt(1.0, SEPARATOR_BOTTOM)
        painter.fillRect(QRect(0, y, width, height), QBrush(gradient))

        painter.setPen(QPen(SEPARATOR_LINE, 1))
        painter.drawLine(0, y, width, y)
        painter.drawLine(0, y + height - 1, width, y + height - 1)


__all__ = ['CompositeService', 'CompositeLayout']
