"""
Entry model - one screenshot or text block in a working set

An entry owns its rasters. The annotated image is always derived from
the source image and the stroke list; display_image is computed on
access and never stored.
"""

from typing import Iterable, List, Optional

from PyQt6.QtGui import QImage

from .stroke import Stroke
from ..core.annotation_renderer import render_strokes


class Entry:
    """
    Single unit of content contributed by the user

    Attributes:
        index: 1-based display number, reassigned by the owning EntryList
        is_text_only: True for comment-only entries (no image fields)
        comment: Free text, may be empty
        is_checked: Only checked entries are composed and saved
    """

    def __init__(
        self,
        index: int = 0,
        is_text_only: bool = False,
        source_image: Optional[QImage] = None,
        comment: str = '',
        is_checked: bool = True
    ):
        self.index = index
        self.is_text_only = is_text_only
        self.comment = comment or ''
        self.is_checked = is_checked
        self._source_image: Optional[QImage] = None
        self._annotated_image: Optional[QImage] = None
        self._strokes: List[Stroke] = []

        if source_image is not None:
            self.set_source_image(source_image)

    def __repr__(self) -> str:
        kind = 'text' if self.is_text_only else 'image'
        return f"Entry(index={self.index}, {kind}, checked={self.is_checked})"

    # ==================== Images ====================

    @property
    def source_image(self) -> Optional[QImage]:
        return self._source_image

    @property
    def annotated_image(self) -> Optional[QImage]:
        return self._annotated_image

    @property
    def display_image(self) -> Optional[QImage]:
        """Annotated image if there is one, otherwise the source image."""
        if self.is_text_only:
            return None
        if self._annotated_image is not None:
            return self._annotated_image
        return self._source_image

    @property
    def has_image(self) -> bool:
        image = self.display_image
        return image is not None and not image.isNull()

    def set_source_image(self, image: Optional[QImage]):
        """Replace the source image and re-derive the annotated image."""
        if self.is_text_only and image is not None:
            raise ValueError("Text-only entries cannot hold an image")
        self._source_image = image
        self._annotated_image = render_strokes(self._source_image, self._strokes)

    # ==================== Annotation ====================

    @property
    def strokes(self) -> List[Stroke]:
        return list(self._strokes)

    def apply_strokes(self, strokes: Iterable[Stroke]):
        """
        Replace the stroke list wholesale and regenerate the annotated image.

        The previous annotated image is released. With no drawable
        stroke left, the entry falls back to its source image.
        """
        self._strokes = list(strokes)
        self._annotated_image = render_strokes(self._source_image, self._strokes)

    # ==================== Comment ====================

    @property
    def has_comment(self) -> bool:
        return bool(self.comment and self.comment.strip())

    # ==================== Lifecycle ====================

    def release_images(self):
        """Drop owned rasters when the entry leaves its working set."""
        self._source_image = None
        self._annotated_image = None


__all__ = ['Entry']
