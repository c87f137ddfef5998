"""
EventBus - Central event system for entry and history notifications

Pattern: Observer/Publisher-Subscriber
"""

from PyQt6.QtCore import QObject, pyqtSignal
from typing import Optional


class EventBus(QObject):
    """
    Central event bus for decoupled communication between the core and a host UI

    The working set and the history store only emit; the host connects
    whatever widgets it owns.

    Usage:
        event_bus = get_event_bus()
        event_bus.history_saved.connect(refresh_history_panel)
    """

    # Working set events
    entries_changed = pyqtSignal(int)  # entry count after the change
    entry_annotated = pyqtSignal(int)  # entry index

    # Composition events
    composite_created = pyqtSignal(int, int)  # width, height

    # History events
    history_saved = pyqtSignal(str)  # record id
    history_deleted = pyqtSignal(str)  # record id
    history_evicted = pyqtSignal(list)  # List[record id]

    # Error events
    error_occurred = pyqtSignal(str, str)  # error_type, error_message

    def report_error(self, error_type: str, message: str):
        """
        Report an error to the host UI

        Args:
            error_type: Type of error (e.g., "history", "composite")
            message: Human-readable error message
        """
        self.error_occurred.emit(error_type, message)


# Singleton instance (lazy initialization)
_event_bus_instance: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """
    Get global EventBus singleton instance

    Returns:
        Global EventBus instance
    """
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = EventBus()
    return _event_bus_instance


# Export
__all__ = ['EventBus', 'get_event_bus']
