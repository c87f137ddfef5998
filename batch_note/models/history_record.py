"""
History record models - metadata snapshot of one saved composite
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import Config


@dataclass
class EntryMeta:
    """Per-entry metadata captured at save time."""
    index: int
    is_text_only: bool
    image_file_name: Optional[str] = None
    comment: str = ''
    is_checked: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'index': self.index,
            'is_text_only': self.is_text_only,
            'image_file_name': self.image_file_name,
            'comment': self.comment,
            'is_checked': self.is_checked,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EntryMeta':
        return cls(
            index=int(data['index']),
            is_text_only=bool(data['is_text_only']),
            image_file_name=data.get('image_file_name'),
            comment=data.get('comment') or '',
            is_checked=bool(data.get('is_checked', True)),
        )


@dataclass
class HistoryRecord:
    """
    One persisted composite operation.

    folder_path is runtime-only: it is filled in by the history service
    and never written to meta.json.
    """
    id: str
    created_at: datetime
    entry_count: int
    entries: List[EntryMeta] = field(default_factory=list)
    composite_image: str = Config.COMPOSITE_FILE_NAME
    folder_path: Optional[Path] = field(default=None, compare=False)

    JSON_VERSION = "1.0"

    @property
    def composite_image_path(self) -> Optional[Path]:
        if self.folder_path is None:
            return None
        return self.folder_path / Path(self.composite_image).name

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': self.JSON_VERSION,
            'id': self.id,
            'created_at': self.created_at.isoformat(),
            'entry_count': self.entry_count,
            'composite_image': self.composite_image,
            'entries': [meta.to_dict() for meta in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], folder_path: Optional[Path] = None) -> 'HistoryRecord':
        """
        Build a record from meta.json content.

        Raises:
            KeyError, TypeError, ValueError: If the document is malformed
        """
        created_at = datetime.fromisoformat(data['created_at'])
        if created_at.tzinfo is not None:
            # Records are compared against naive local timestamps
            created_at = created_at.astimezone().replace(tzinfo=None)

        return cls(
            id=str(data['id']),
            created_at=created_at,
            entry_count=int(data['entry_count']),
            entries=[EntryMeta.from_dict(item) for item in data.get('entries', [])],
            composite_image=str(data.get('composite_image') or Config.COMPOSITE_FILE_NAME),
            folder_path=folder_path,
        )


__all__ = ['EntryMeta', 'HistoryRecord']
