"""
Global configuration for BatchNote

Layout constants for the composite renderer, history storage settings
and user data directory resolution.
"""

import os
import sys
from pathlib import Path
from typing import Final


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "BatchNote"
    APP_VERSION: Final[str] = "1.0.0"

    # Paths
    APP_ROOT: Final[Path] = Path(__file__).parent

    # Composite layout (pixels)
    COMPOSITE_PADDING: Final[int] = 30
    COMPOSITE_MIN_CONTENT_WIDTH: Final[int] = 600
    SEPARATOR_HEIGHT: Final[int] = 8
    SEPARATOR_GAP: Final[int] = 15  # Space between entry content and its separator
    ENTRY_SPACING: Final[int] = 40
    TITLE_GAP: Final[int] = 15
    IMAGE_GAP: Final[int] = 20
    COMMENT_GAP: Final[int] = 15
    ACCENT_BAR_WIDTH: Final[int] = 5

    # Composite fonts (pixel sizes, keeps layout independent of screen DPI)
    FONT_FAMILY: Final[str] = "Microsoft YaHei"
    MIN_FONT_SIZE: Final[float] = 16.0
    FONT_SIZE_RATIO: Final[float] = 0.02  # Of the largest image dimension
    TITLE_FONT_DELTA: Final[float] = 8.0
    TITLE_HEIGHT_FACTOR: Final[float] = 2.0
    MIN_TEXT_HEIGHT_FACTOR: Final[float] = 1.8
    TEXT_HEIGHT_PADDING: Final[int] = 8

    # Annotation defaults
    DEFAULT_STROKE_COLOR: Final[str] = "#FF0000"
    DEFAULT_STROKE_WIDTH: Final[float] = 3.0
    STROKE_SIMPLIFY_EPSILON: Final[float] = 0.0  # 0 keeps every captured point

    # History storage
    HISTORY_FOLDER_NAME: Final[str] = "history"
    MAX_HISTORY_COUNT: Final[int] = 100
    THUMBNAIL_SIZE: Final[int] = 80  # Bounding box for history thumbnails
    IMAGE_FORMAT: Final[str] = "PNG"
    COMPOSITE_FILE_NAME: Final[str] = "composite.png"
    THUMBNAIL_FILE_NAME: Final[str] = "thumbnail.png"
    META_FILE_NAME: Final[str] = "meta.json"
    SUMMARY_FILE_NAME: Final[str] = "summary.txt"
    ENTRY_FILE_TEMPLATE: Final[str] = "entry_{index}.png"
    STAGING_PREFIX: Final[str] = ".staging-"  # In-progress saves, hidden from listings
    HISTORY_ID_FORMAT: Final[str] = "%Y-%m-%d_%H%M%S_%f"

    # Image decoding; composites of many screenshots exceed Qt's 256 MB default
    IMAGE_ALLOCATION_LIMIT_MB: Final[int] = 0  # 0 disables the limit

    # Logging
    LOG_FILE_NAME: Final[str] = "batch_note.log"
    LOG_FILE_FORMAT: Final[str] = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    LOG_DATE_FORMAT: Final[str] = '%Y-%m-%d %H:%M:%S'
    LOG_CONSOLE_FORMAT: Final[str] = '[%(levelname)s] %(message)s'

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows) or .local/share (Linux)
        so history survives application updates.
        """
        # Portable mode: 'portable.txt' next to the package keeps data local
        portable_flag = cls.APP_ROOT.parent / 'portable.txt'
        if portable_flag.exists():
            user_dir = cls.APP_ROOT.parent / 'data'
        else:
            if sys.platform == 'win32':
                base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
                user_dir = base_path / cls.APP_NAME
            elif sys.platform == 'darwin':
                user_dir = Path.home() / 'Library' / 'Application Support' / cls.APP_NAME
            else:
                # Linux / Unix
                user_dir = Path.home() / '.local' / 'share' / cls.APP_NAME

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_history_dir(cls) -> Path:
        """Get the history root folder (one sub-folder per record)"""
        history_dir = cls.get_user_data_dir() / cls.HISTORY_FOLDER_NAME
        history_dir.mkdir(parents=True, exist_ok=True)
        return history_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get log directory"""
        return cls.get_user_data_dir() / 'logs'


# Export for convenient imports
__all__ = ['Config']
