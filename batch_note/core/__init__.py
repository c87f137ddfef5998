"""Core rendering logic for BatchNote"""

from .annotation_renderer import render_strokes
from .annotation_session import AnnotationSession
from .composite_service import CompositeService, CompositeLayout
from .text_layout import measure_text_height
from .thumbnail_generator import ThumbnailGenerator

__all__ = [
    'render_strokes',
    'AnnotationSession',
    'CompositeService',
    'CompositeLayout',
    'measure_text_height',
    'ThumbnailGenerator',
]
