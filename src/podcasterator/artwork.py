"""Podcast artwork conversion.

Any raster format Pillow can read is center-cropped to a square, scaled down
to the configured size and re-encoded as JPEG.
"""

import logging
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from podcasterator.utils.errors import ArtworkError

logger = logging.getLogger(__name__)

DEFAULT_ARTWORK_SIZE = 1400
JPEG_QUALITY = 90


def convert_artwork(src: Path, dst: Path, size: int = DEFAULT_ARTWORK_SIZE) -> Path:
    """Convert an image into square JPEG artwork.

    Images smaller than size are not upscaled.

    Args:
        src: Source image
        dst: Destination JPEG path
        size: Maximum edge length in pixels

    Returns:
        dst

    Raises:
        ArtworkError: If the image cannot be decoded or written
    """
    try:
        with Image.open(src) as img:
            img = ImageOps.exif_transpose(img)
            side = min(size, *img.size)
            square = ImageOps.fit(img.convert("RGB"), (side, side), Image.Resampling.LANCZOS)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ArtworkError(f"Could not read image {src}: {e}") from e

    temp_file = dst.with_suffix(".tmp")
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        square.save(temp_file, format="JPEG", quality=JPEG_QUALITY)
        temp_file.replace(dst)
    except OSError as e:
        if temp_file.exists():
            temp_file.unlink()
        raise ArtworkError(f"Could not write artwork {dst}: {e}") from e

    logger.info(f"Artwork saved ({side}x{side})")
    return dst
