"""File helpers: supported formats, content types and the copy primitive."""

import shutil
from pathlib import Path

SUPPORTED_AUDIO_EXTENSIONS = (".mp3", ".m4a", ".mp4", ".m4b")
SUPPORTED_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tiff", ".tif")

# Containers that many podcast clients refuse unless labelled .m4a
M4A_ALIASES = (".mp4", ".m4b")
CANONICAL_AUDIO_EXTENSION = ".m4a"

DEFAULT_CONTENT_TYPE = "application/octet-stream"
CONTENT_TYPES = {
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".mp4": "audio/mp4",
    ".m4b": "audio/mp4",
}

DEFAULT_DISPLAY_LENGTH = 50


def is_supported_file(path: str | Path) -> bool:
    """Check whether a path has a supported audio extension (case-insensitive)."""
    return Path(path).suffix.lower() in SUPPORTED_AUDIO_EXTENSIONS


def is_image_file(path: str | Path) -> bool:
    """Check whether a path has a supported artwork image extension."""
    return Path(path).suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS


def content_type_for(name: str | Path) -> str:
    """Look up the MIME type served for a file name.

    Args:
        name: File name or path

    Returns:
        MIME type, or application/octet-stream for unknown extensions
    """
    return CONTENT_TYPES.get(Path(name).suffix.lower(), DEFAULT_CONTENT_TYPE)


def cached_file_name(source_name: str) -> str:
    """Name a cached copy, relabelling .mp4/.m4b containers as .m4a."""
    path = Path(source_name)
    if path.suffix.lower() in M4A_ALIASES:
        return path.stem + CANONICAL_AUDIO_EXTENSION
    return path.name


def truncate_filename(name: str, max_length: int = DEFAULT_DISPLAY_LENGTH) -> str:
    """Shorten a display name to max_length characters, ending in '...'."""
    if len(name) > max_length:
        return name[: max_length - 3] + "..."
    return name


def copy_file(src: Path, dst: Path) -> None:
    """Copy src to dst byte for byte.

    Raises:
        OSError: If the source is unreadable or the destination unwritable
    """
    with src.open("rb") as source, dst.open("wb") as dest:
        shutil.copyfileobj(source, dest)
