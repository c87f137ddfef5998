"""Services for BatchNote"""

from .history_service import HistoryService, HistorySaveError, get_history_service

__all__ = [
    'HistoryService',
    'HistorySaveError',
    'get_history_service',
]
