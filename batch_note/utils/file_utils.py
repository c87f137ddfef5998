"""
File Utilities - Safe file and folder operations

Provides centralized functions for:
- Staged folder writes (write everything, then rename into place)
- Safe recursive removal
- Unique path generation
"""

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

logger = logging.getLogger(__name__)


@contextmanager
def staged_directory(final_path: Path, staging_prefix: str = '.staging-') -> Generator[Path, None, None]:
    """
    Context manager for all-or-nothing folder creation.

    Yields a hidden staging folder next to final_path. When the block
    completes, the staging folder is renamed to final_path. If an
    exception occurs, the staging folder is removed and the exception
    re-raised, so final_path never exists half-written.

    Args:
        final_path: Folder that should exist once the block succeeds
        staging_prefix: Name prefix for the temporary sibling folder

    Yields:
        Path to the staging folder to write into

    Examples:
        >>> with staged_directory(history_dir / record_id) as tmp_dir:
        ...     image.save(str(tmp_dir / "composite.png"))
        ...     json_save(tmp_dir / "meta.json", meta)
    """
    staging_path = final_path.parent / f"{staging_prefix}{final_path.name}"
    if staging_path.exists():
        shutil.rmtree(staging_path)
    staging_path.mkdir(parents=True)

    try:
        yield staging_path

        # Rename staging to target (atomic on one filesystem)
        staging_path.rename(final_path)

    except Exception:
        if staging_path.exists():
            try:
                shutil.rmtree(staging_path)
                logger.debug(f"Cleaned up {staging_path} after error")
            except OSError as cleanup_error:
                logger.warning(f"Could not clean up {staging_path}: {cleanup_error}")
        raise


def safe_remove_tree(path: Path, ignore_errors: bool = True) -> bool:
    """
    Safely remove a directory tree.

    Args:
        path: Path to directory to remove
        ignore_errors: If True, log errors but don't raise

    Returns:
        True if removal succeeded or path didn't exist
    """
    if not path.exists():
        return True

    try:
        shutil.rmtree(path)
        return True
    except PermissionError as e:
        if ignore_errors:
            logger.warning(f"Permission denied removing {path}: {e}")
            return False
        raise
    except OSError as e:
        if ignore_errors:
            logger.warning(f"Could not remove {path}: {e}")
            return False
        raise


def get_unique_path(path: Path) -> Path:
    """
    Get a unique path by appending a number if path exists.

    Args:
        path: Desired path

    Returns:
        Unique path (original if doesn't exist, or with _2, _3, etc.)

    Examples:
        >>> get_unique_path(Path("2026-01-01_120000_000000"))
        Path('2026-01-01_120000_000000_2')  # if the first one exists
    """
    if not path.exists():
        return path

    counter = 2
    stem = path.stem
    suffix = path.suffix
    parent = path.parent

    while True:
        new_path = parent / f"{stem}_{counter}{suffix}"
        if not new_path.exists():
            return new_path
        counter += 1

        # Safety limit
        if counter > 1000:
            raise ValueError(f"Could not find unique path for {path}")


__all__ = [
    'staged_directory',
    'safe_remove_tree',
    'get_unique_path',
]
