"""
JSON Utilities - JSON file operations for history metadata

Provides:
- Tolerant JSON loading (corrupt files read as a default)
- Strict JSON writing (errors propagate to the caller)
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


def safe_json_load(path: Union[str, Path], default: Any = None) -> Any:
    """
    Safely load JSON from a file with error handling.

    Args:
        path: Path to JSON file
        default: Value to return if file doesn't exist or is invalid

    Returns:
        Parsed JSON data, or default value on error

    Examples:
        >>> meta = safe_json_load(record_dir / "meta.json", default=None)
    """
    try:
        file_path = Path(path)
        if not file_path.exists():
            return default

        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in {path}: {e}")
        return default
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return default


def json_save(path: Union[str, Path], data: Any,
              indent: int = 2, ensure_ascii: bool = False):
    """
    Save data to a JSON file, raising on failure.

    Args:
        path: Path to JSON file
        data: Data to serialize to JSON
        indent: Indentation level for pretty printing
        ensure_ascii: If False, allow non-ASCII characters

    Raises:
        OSError: File could not be written
        TypeError: Data is not JSON serializable
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=ensure_ascii)


__all__ = [
    'safe_json_load',
    'json_save',
]
