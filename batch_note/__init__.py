"""
BatchNote

Collect screenshots and notes, annotate them, and render the batch into
one tall image with a restorable history.
"""

__version__ = "1.0.0"

from .config import Config
from .events.event_bus import EventBus, get_event_bus

__all__ = [
    'Config',
    'EventBus',
    'get_event_bus',
]
