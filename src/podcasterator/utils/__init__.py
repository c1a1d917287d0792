"""Utility functions and helpers for Podcasterator."""

from podcasterator.utils.errors import (
    ArtworkError,
    ConfigError,
    CopyError,
    InvalidConfigError,
    InvalidNameError,
    PlaylistError,
    PodcasteratorError,
    RenameError,
    SecurityError,
    ServerError,
)
from podcasterator.utils.paths import (
    get_cache_dir,
    get_config_dir,
    get_config_file,
)

__all__ = [
    # Errors
    "PodcasteratorError",
    "ConfigError",
    "InvalidConfigError",
    "PlaylistError",
    "CopyError",
    "RenameError",
    "InvalidNameError",
    "ArtworkError",
    "ServerError",
    "SecurityError",
    # Paths
    "get_config_dir",
    "get_cache_dir",
    "get_config_file",
]
