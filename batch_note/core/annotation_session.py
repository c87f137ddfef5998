"""
AnnotationSession - freehand drawing on one entry with undo

The session edits a private copy of the entry's strokes. Nothing on the
entry changes until commit(), which replaces the stroke list wholesale
and regenerates the annotated image.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from PyQt6.QtGui import QUndoStack

from .annotation_commands import AddStrokeCommand, ClearStrokesCommand
from ..config import Config
from ..events.event_bus import EventBus, get_event_bus
from ..models.stroke import Stroke

if TYPE_CHECKING:
    from ..models.entry import Entry


logger = logging.getLogger(__name__)


class AnnotationSession:
    """
    Stroke editing session for a single image entry

    Usage:
        session = AnnotationSession(entry)
        session.begin_stroke(10, 10)
        session.extend_stroke(40, 25)
        session.end_stroke()
        session.undo()
        session.commit()
    """

    def __init__(
        self,
        entry: 'Entry',
        color: str = Config.DEFAULT_STROKE_COLOR,
        width: float = Config.DEFAULT_STROKE_WIDTH,
        simplify_epsilon: float = Config.STROKE_SIMPLIFY_EPSILON,
        event_bus: Optional[EventBus] = None
    ):
        if entry.is_text_only:
            raise ValueError("Text-only entries cannot be annotated")

        self._entry = entry
        self._strokes: List[Stroke] = entry.strokes
        self._current: Optional[Stroke] = None
        self._undo_stack = QUndoStack()
        self._event_bus = event_bus or get_event_bus()

        self.color = color
        self.width = width
        self.simplify_epsilon = simplify_epsilon

    @property
    def undo_stack(self) -> QUndoStack:
        return self._undo_stack

    @property
    def strokes(self) -> List[Stroke]:
        """Committed strokes of this session, in drawing order."""
        return list(self._strokes)

    @property
    def current_stroke(self) -> Optional[Stroke]:
        return self._current

    # ==================== Drawing ====================

    def begin_stroke(self, x: float, y: float):
        """Start a new stroke, discarding any unfinished one."""
        self._current = Stroke(color=self.color, width=self.width)
        self._current.add_point(x, y)

    def extend_stroke(self, x: float, y: float):
        if self._current is not None:
            self._current.add_point(x, y)

    def end_stroke(self) -> Optional[Stroke]:
        """
        Finish the current stroke.

        Returns:
            The committed stroke, or None if it had fewer than 2 points
        """
        stroke, self._current = self._current, None
        if stroke is None or not stroke.is_drawable:
            return None

        stroke = stroke.simplified(self.simplify_epsilon)
        self._undo_stack.push(AddStrokeCommand(self, stroke))
        return stroke

    # ==================== Undo / clear ====================

    def undo(self):
        self._undo_stack.undo()

    def redo(self):
        self._undo_stack.redo()

    def clear(self):
        """Remove all strokes (undoable)."""
        if self._strokes:
            self._undo_stack.push(ClearStrokesCommand(self))

    # ==================== Commit ====================

    def commit(self) -> 'Entry':
        """Write strokes back to the entry and regenerate its annotated image."""
        self._entry.apply_strokes(self._strokes)
        logger.debug(f"Annotated entry {self._entry.index} with {len(self._strokes)} strokes")
        self._event_bus.entry_annotated.emit(self._entry.index)
        return self._entry


__all__ = ['AnnotationSession']
