"""Custom exceptions for Podcasterator."""


class PodcasteratorError(Exception):
    """Base exception for all Podcasterator errors."""

    pass


class ConfigError(PodcasteratorError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class PlaylistError(PodcasteratorError):
    """Playlist management errors."""

    pass


class CopyError(PlaylistError):
    """Source file could not be copied into the cache."""

    pass


class RenameError(PlaylistError):
    """Cached file could not be renamed on disk."""

    pass


class InvalidNameError(PlaylistError):
    """Display name cannot be used as a file name."""

    pass


class ArtworkError(PodcasteratorError):
    """Artwork could not be decoded or written."""

    pass


class ServerError(PodcasteratorError):
    """Local podcast server failures."""

    pass


class SecurityError(PodcasteratorError):
    """Path resolved outside of an allowed directory."""

    pass
