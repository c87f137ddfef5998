"""
HistoryService - folder-per-record storage of composed images

File structure:
    history/{id}/
    ├── composite.png      # Full composite
    ├── thumbnail.png      # 80x80 preview for history lists
    ├── entry_{index}.png  # Display image of each checked image entry
    ├── meta.json          # HistoryRecord document
    └── summary.txt        # Human-readable recap

Saves are staged in a hidden sibling folder and renamed into place when
every file is written, so listings never see a half-written record.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from PyQt6.QtGui import QImage

from ..config import Config
from ..core.thumbnail_generator import ThumbnailGenerator
from ..events.event_bus import EventBus, get_event_bus
from ..models.entry import Entry
from ..models.history_record import EntryMeta, HistoryRecord
from ..utils.file_utils import staged_directory, safe_remove_tree, get_unique_path
from ..utils.image_utils import configure_image_reader, load_image_as_qimage, save_qimage
from ..utils.json_utils import safe_json_load, json_save


logger = logging.getLogger(__name__)


class HistorySaveError(Exception):
    """Raised when a history record could not be written completely."""
    pass


class HistoryService:
    """
    Persists composites with their source entries and restores them

    Features:
    - Save composite + per-entry images + metadata as one record folder
    - List valid records newest first, skipping corrupt ones
    - Restore records into editable entries
    - Evict the oldest records beyond the retention cap
    """

    def __init__(
        self,
        history_dir: Optional[Path] = None,
        max_history_count: int = Config.MAX_HISTORY_COUNT,
        clock: Callable[[], datetime] = datetime.now,
        event_bus: Optional[EventBus] = None
    ):
        """
        Initialize history service

        Args:
            history_dir: Root folder for records (defaults to Config.get_history_dir())
            max_history_count: Retention cap enforced after every save
            clock: Source of record timestamps
            event_bus: Event bus instance (uses singleton if not provided)
        """
        if max_history_count < 1:
            raise ValueError(f"max_history_count must be at least 1, got {max_history_count}")

        self._history_dir = Path(history_dir) if history_dir else Config.get_history_dir()
        self._history_dir.mkdir(parents=True, exist_ok=True)
        self._max_history_count = max_history_count
        self._clock = clock
        self._event_bus = event_bus or get_event_bus()
        self._thumbnails = ThumbnailGenerator()

        configure_image_reader()
        self.purge_incomplete_saves()

    @property
    def history_directory(self) -> Path:
        return self._history_dir

    @property
    def max_history_count(self) -> int:
        return self._max_history_count

    def get_record_folder(self, record_id: str) -> Optional[Path]:
        """Folder of a record, or None for ids that are not plain folder names."""
        if not record_id or record_id in ('.', '..') or Path(record_id).name != record_id:
            return None
        if record_id.startswith('.'):
            return None
        return self._history_dir / record_id

    # ==================== Save ====================

    def save(self, composite_image: QImage, entries: Sequence[Entry]) -> HistoryRecord:
        """
        Save a composite and its checked entries as a new record.

        Args:
            composite_image: Rendered composite
            entries: Working set in display order; unchecked entries are ignored

        Returns:
            The persisted HistoryRecord

        Raises:
            ValueError: composite_image is None or empty
            HistorySaveError: Any file could not be written (nothing is kept)
        """
        if composite_image is None or composite_image.isNull():
            raise ValueError("Cannot save history without a composite image")

        created_at = self._clock()
        folder_path = get_unique_path(self._history_dir / created_at.strftime(Config.HISTORY_ID_FORMAT))
        checked = [entry for entry in entries if entry.is_checked]

        record = HistoryRecord(
            id=folder_path.name,
            created_at=created_at,
            entry_count=len(checked),
        )

        try:
            with staged_directory(folder_path, Config.STAGING_PREFIX) as staging:
                save_qimage(composite_image, staging / Config.COMPOSITE_FILE_NAME)

                thumbnail = self._thumbnails.create_thumbnail(
                    staging / Config.COMPOSITE_FILE_NAME,
                    staging / Config.THUMBNAIL_FILE_NAME
                )
                if thumbnail is None:
                    # Regenerated on first load_thumbnail()
                    logger.warning(f"Thumbnail not created for history record {record.id}")

                for entry in checked:
                    meta = EntryMeta(
                        index=entry.index,
                        is_text_only=entry.is_text_only,
                        comment=entry.comment or '',
                        is_checked=entry.is_checked,
                    )
                    if not entry.is_text_only and entry.has_image:
                        meta.image_file_name = Config.ENTRY_FILE_TEMPLATE.format(index=entry.index)
                        save_qimage(entry.display_image, staging / meta.image_file_name)
                    record.entries.append(meta)

                json_save(staging / Config.META_FILE_NAME, record.to_dict())
                (staging / Config.SUMMARY_FILE_NAME).write_text(
                    self.build_summary(record), encoding='utf-8'
                )

        except (OSError, TypeError) as e:
            logger.error(f"Failed to save history record {record.id}: {e}")
            self._event_bus.report_error("history", f"Failed to save history: {e}")
            raise HistorySaveError(f"Could not save history record {record.id}: {e}") from e

        record.folder_path = folder_path
        logger.info(f"Saved history record {record.id} ({record.entry_count} entries)")
        self._event_bus.history_saved.emit(record.id)

        self.cleanup_old_history()
        return record

    @staticmethod
    def build_summary(record: HistoryRecord) -> str:
        """Plain-text recap written next to the metadata."""
        lines = [
            f"{Config.APP_NAME} annotation record",
            f"Created: {record.created_at:%Y-%m-%d %H:%M:%S}",
            f"Entries: {record.entry_count}",
            '=' * 50,
            '',
        ]

        for meta in record.entries:
            lines.append(f"[{meta.index}]")
            if not meta.is_text_only:
                lines.append(f"Image: {meta.image_file_name or '(none)'}")
            if meta.comment and meta.comment.strip():
                lines.append(f"Comment: {meta.comment}")
            lines.append('')

        return '\n'.join(lines) + '\n'

    # ==================== List / load ====================

    def get_history_list(self) -> List[HistoryRecord]:
        """
        Get valid records, newest first.

        Folders with missing or unreadable metadata, or whose composite
        image is gone, are skipped.
        """
        records = []

        for folder in self._history_dir.iterdir():
            if not folder.is_dir() or folder.name.startswith('.'):
                continue

            record = self._read_record(folder)
            if record is not None:
                records.append(record)

        records.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return records

    def _read_record(self, folder: Path) -> Optional[HistoryRecord]:
        data = safe_json_load(folder / Config.META_FILE_NAME)
        if not isinstance(data, dict):
            logger.debug(f"Skipping history folder without valid metadata: {folder.name}")
            return None

        try:
            record = HistoryRecord.from_dict(data, folder_path=folder)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed history metadata in {folder.name}: {e}")
            return None

        # The folder is the record; a copied or renamed folder keeps a stale id in meta.json
        if record.id != folder.name:
            logger.debug(f"History folder {folder.name} carries id {record.id}, using folder name")
            record.id = folder.name

        if not record.composite_image_path.is_file():
            logger.debug(f"Skipping history record without composite image: {folder.name}")
            return None

        return record

    def get_record(self, record_id: str) -> Optional[HistoryRecord]:
        """Load a single valid record by id."""
        folder = self.get_record_folder(record_id)
        if folder is None or not folder.is_dir():
            return None
        return self._read_record(folder)

    def load_composite_image(self, record_id: str) -> Optional[QImage]:
        """Load a record's composite image."""
        record = self.get_record(record_id)
        if record is None:
            return None
        return load_image_as_qimage(record.composite_image_path)

    def load_thumbnail(self, record_id: str) -> Optional[QImage]:
        """
        Load a record's thumbnail.

        Records without a thumbnail get one generated from the composite
        and cached next to it.
        """
        record = self.get_record(record_id)
        if record is None:
            return None

        thumbnail_path = record.folder_path / Config.THUMBNAIL_FILE_NAME
        thumbnail = load_image_as_qimage(thumbnail_path)
        if thumbnail is not None:
            return thumbnail

        logger.debug(f"Generating missing thumbnail for history record {record_id}")
        if self._thumbnails.create_thumbnail(record.composite_image_path, thumbnail_path) is None:
            return None
        return load_image_as_qimage(thumbnail_path)

    def load_entry_image(self, record_id: str, image_file_name: str) -> Optional[QImage]:
        """Load one persisted entry image."""
        folder = self.get_record_folder(record_id)
        if folder is None or not image_file_name:
            return None
        return load_image_as_qimage(folder / Path(image_file_name).name)

    # ==================== Restore ====================

    def restore_entries(self, record: HistoryRecord) -> List[Entry]:
        """
        Rebuild editable entries from a record.

        Index, comment and checked state are restored verbatim. The saved
        display image becomes the source image; strokes are not restored.
        """
        entries = []

        for meta in record.entries:
            entry = Entry(
                index=meta.index,
                is_text_only=meta.is_text_only,
                comment=meta.comment,
                is_checked=meta.is_checked,
            )

            if not meta.is_text_only and meta.image_file_name:
                image = self.load_entry_image(record.id, meta.image_file_name)
                if image is None:
                    logger.warning(f"Missing image {meta.image_file_name} in history record {record.id}")
                entry.set_source_image(image)

            entries.append(entry)

        logger.info(f"Restored {len(entries)} entries from history record {record.id}")
        return entries

    # ==================== Delete / eviction ====================

    def delete(self, record_id: str) -> bool:
        """
        Delete a record folder recursively.

        Returns:
            True if the folder no longer exists, False on failure
        """
        folder = self.get_record_folder(record_id)
        if folder is None:
            logger.warning(f"Refusing to delete invalid history id: {record_id!r}")
            return False

        if not safe_remove_tree(folder):
            return False

        logger.debug(f"Deleted history record {record_id}")
        self._event_bus.history_deleted.emit(record_id)
        return True

    def cleanup_old_history(self) -> List[str]:
        """
        Delete the oldest records beyond the retention cap.

        Returns:
            Ids of evicted records
        """
        records = self.get_history_list()
        if len(records) <= self._max_history_count:
            return []

        evicted = []
        for record in records[self._max_history_count:]:
            if self.delete(record.id):
                evicted.append(record.id)

        if evicted:
            logger.info(f"Evicted {len(evicted)} old history records")
            self._event_bus.history_evicted.emit(evicted)
        return evicted

    def purge_incomplete_saves(self) -> int:
        """Remove staging folders left behind by an interrupted save."""
        removed = 0
        for folder in self._history_dir.glob(f"{Config.STAGING_PREFIX}*"):
            if folder.is_dir() and safe_remove_tree(folder):
                logger.info(f"Removed incomplete history save: {folder.name}")
                removed += 1
        return removed


# ==================== Singleton ====================

_history_service_instance: Optional[HistoryService] = None


def get_history_service() -> HistoryService:
    """Get singleton HistoryService instance."""
    global _history_service_instance
    if _history_service_instance is None:
        _history_service_instance = HistoryService()
    return _history_service_instance


__all__ = [
    'HistoryService',
    'HistorySaveError',
    'get_history_service',
]
