"""Utility functions for BatchNote"""

from .image_utils import configure_image_reader, load_image_as_qimage, save_qimage
from .logging_config import LoggingConfig

# JSON utilities
from .json_utils import (
    safe_json_load,
    json_save,
)

# File utilities
from .file_utils import (
    staged_directory,
    safe_remove_tree,
    get_unique_path,
)

__all__ = [
    'configure_image_reader',
    'load_image_as_qimage',
    'save_qimage',
    'LoggingConfig',
    # JSON utilities
    'safe_json_load',
    'json_save',
    # File utilities
    'staged_directory',
    'safe_remove_tree',
    'get_unique_path',
]
