"""Data models for BatchNote"""

from .stroke import Stroke, simplify_points
from .entry import Entry
from .entry_list import EntryList
from .history_record import EntryMeta, HistoryRecord

__all__ = [
    'Stroke',
    'simplify_points',
    'Entry',
    'EntryList',
    'EntryMeta',
    'HistoryRecord',
]
