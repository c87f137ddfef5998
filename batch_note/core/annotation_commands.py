"""
Undo commands for annotation session operations.

Provides QUndoCommand subclasses for stroke add/clear operations.
"""

from typing import TYPE_CHECKING, List

from PyQt6.QtGui import QUndoCommand

if TYPE_CHECKING:
    from .annotation_session import AnnotationSession
    from ..models.stroke import Stroke


class AddStrokeCommand(QUndoCommand):
    """Undo command for adding a stroke."""

    def __init__(self, session: 'AnnotationSession', stroke: 'Stroke'):
        super().__init__("Add Stroke")
        self._session = session
        self._stroke = stroke

    def redo(self):
        self._session._strokes.append(self._stroke)

    def undo(self):
        if self._session._strokes and self._session._strokes[-1] is self._stroke:
            self._session._strokes.pop()


class ClearStrokesCommand(QUndoCommand):
    """Undo command for clearing all strokes."""

    def __init__(self, session: 'AnnotationSession'):
        super().__init__("Clear Strokes")
        self._session = session
        self._cleared: List['Stroke'] = []

    def redo(self):
        self._cleared = list(self._session._strokes)
        self._session._strokes = []

    def undo(self):
        self._session._strokes = list(self._cleared)


__all__ = ['AddStrokeCommand', 'ClearStrokesCommand']
