"""
EntryList - ordered working set of entries

Entries keep their identity across reorders; the 1..N index is
recomputed from list order after every structural change.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from PyQt6.QtGui import QImage

from .entry import Entry
from ..events.event_bus import EventBus, get_event_bus


logger = logging.getLogger(__name__)


class EntryList:
    """
    Working set owned by one editing session

    Usage:
        entries = EntryList()
        first = entries.add_image_entry(screenshot)
        entries.add_text_entry("Check the header spacing")
        entries.move(first, 1)
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._entries: List[Entry] = []
        self._event_bus = event_bus or get_event_bus()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __getitem__(self, position: int) -> Entry:
        return self._entries[position]

    def __contains__(self, entry: object) -> bool:
        return any(existing is entry for existing in self._entries)

    # ==================== Adding ====================

    def add_image_entry(self, image: QImage, comment: str = '') -> Entry:
        """Append a screenshot entry."""
        entry = Entry(is_text_only=False, source_image=image, comment=comment)
        return self._append(entry)

    def add_text_entry(self, comment: str = '') -> Entry:
        """Append a comment-only entry."""
        entry = Entry(is_text_only=True, comment=comment)
        return self._append(entry)

    def _append(self, entry: Entry) -> Entry:
        self._entries.append(entry)
        self._changed()
        return entry

    # ==================== Structural changes ====================

    def remove(self, entry: Entry):
        """Remove an entry and release its images."""
        position = self._position_of(entry)
        removed = self._entries.pop(position)
        removed.release_images()
        self._changed()

    def move(self, entry: Entry, position: int):
        """
        Move an entry to a new position (drag-and-drop reorder).

        Args:
            entry: Entry to move
            position: 0-based target position, clamped to the list bounds
        """
        current = self._position_of(entry)
        position = max(0, min(position, len(self._entries) - 1))
        if current == position:
            return

        self._entries.pop(current)
        self._entries.insert(position, entry)
        self._changed()

    def clear(self):
        """Remove every entry."""
        for entry in self._entries:
            entry.release_images()
        self._entries = []
        self._changed()

    def replace_all(self, entries: Iterable[Entry]):
        """Replace the working set, e.g. with entries restored from history."""
        new_entries = list(entries)
        for entry in self._entries:
            if not any(entry is new for new in new_entries):
                entry.release_images()
        self._entries = new_entries
        self._changed()

    def renumber(self):
        """Reassign dense 1-based indexes from current order."""
        for position, entry in enumerate(self._entries, start=1):
            entry.index = position

    # ==================== Queries ====================

    def checked_entries(self) -> List[Entry]:
        return [entry for entry in self._entries if entry.is_checked]

    @property
    def checked_count(self) -> int:
        return len(self.checked_entries())

    def _position_of(self, entry: Entry) -> int:
        for position, existing in enumerate(self._entries):
            if existing is entry:
                return position
        raise ValueError(f"{entry!r} is not in this working set")

    def _changed(self):
        self.renumber()
        logger.debug(f"Working set changed: {len(self._entries)} entries")
        self._event_bus.entries_changed.emit(len(self._entries))


__all__ = ['EntryList']
