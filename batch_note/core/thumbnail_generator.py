"""
ThumbnailGenerator - Generate small previews of composite images

Pattern: Image processing with Pillow
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from ..config import Config


logger = logging.getLogger(__name__)


class ThumbnailGenerator:
    """
    Generate aspect-preserving PNG thumbnails

    Usage:
        generator = ThumbnailGenerator()
        thumbnail_path = generator.create_thumbnail(composite_path, output_path)
    """

    def __init__(self, thumbnail_size: Optional[int] = None):
        self.thumbnail_size = thumbnail_size or Config.THUMBNAIL_SIZE

    def create_thumbnail(
        self,
        source_image_path: Path,
        output_path: Path,
        size: Optional[int] = None
    ) -> Optional[Path]:
        """
        Create thumbnail from source image

        Args:
            source_image_path: Path to source image
            output_path: Destination path for thumbnail
            size: Max dimension (defaults to Config.THUMBNAIL_SIZE)

        Returns:
            Path to created thumbnail or None on error
        """
        try:
            size = size or self.thumbnail_size

            with Image.open(source_image_path) as image:
                image.load()
                thumbnail = self.fit_within(image, size)

            # Create output directory
            output_path.parent.mkdir(parents=True, exist_ok=True)

            # Save as PNG
            thumbnail.save(output_path, 'PNG', optimize=True)

            return output_path

        except (OSError, ValueError, Image.DecompressionBombError) as e:
            # Pillow refuses images above Image.MAX_IMAGE_PIXELS * 2
            logger.warning(f"Error creating thumbnail for {source_image_path}: {e}")
            return None

    @staticmethod
    def fit_within(image: Image.Image, size: int) -> Image.Image:
        """
        Scale image to fit a size x size box, keeping aspect ratio.

        Small images are scaled up as well, so every thumbnail touches
        the box on at least one side. Each side is at least 1 pixel.
        """
        ratio = min(size / image.width, size / image.height)
        new_width = max(1, round(image.width * ratio))
        new_height = max(1, round(image.height * ratio))
        return image.resize((new_width, new_height), Image.Resampling.LANCZOS)


__all__ = ['ThumbnailGenerator']
