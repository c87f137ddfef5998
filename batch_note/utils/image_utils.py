"""
Image utilities for loading and saving rasters

Pattern: QImage file helpers
"""

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtGui import QImage, QImageReader

from ..config import Config


logger = logging.getLogger(__name__)


def configure_image_reader(allocation_limit_mb: int = Config.IMAGE_ALLOCATION_LIMIT_MB):
    """
    Set the process-wide decode limit used by QImageReader

    Qt refuses to decode images above 256 MB by default, which tall
    composites easily exceed.

    Args:
        allocation_limit_mb: Limit in megabytes, 0 for no limit
    """
    QImageReader.setAllocationLimit(allocation_limit_mb)


def load_image_as_qimage(image_path: Path) -> Optional[QImage]:
    """
    Load image file as QImage

    Args:
        image_path: Path to image file

    Returns:
        QImage or None if load failed
    """
    if not image_path.exists():
        return None

    reader = QImageReader(str(image_path))
    image = reader.read()
    if image.isNull():
        logger.debug(f"Could not decode {image_path}: {reader.errorString()}")
        return None

    return image


def save_qimage(image: QImage, image_path: Path, image_format: str = Config.IMAGE_FORMAT):
    """
    Save QImage to disk in a lossless format

    Args:
        image: Image to write
        image_path: Destination path
        image_format: Qt image format name

    Raises:
        OSError: If Qt could not encode or write the file
    """
    if image is None or image.isNull():
        raise OSError(f"Cannot save empty image to {image_path}")

    if not image.save(str(image_path), image_format):
        raise OSError(f"Failed to write image: {image_path}")


__all__ = [
    'configure_image_reader',
    'load_image_as_qimage',
    'save_qimage',
]
