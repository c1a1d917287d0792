"""Platform directory resolution.

Config lives in the per-user config dir, cached audio copies and artwork in
the per-user cache dir (XDG on Linux, ~/Library on macOS).
"""

from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

APP_NAME = "podcasterator"


def get_config_dir() -> Path:
    """Get the Podcasterator configuration directory."""
    return Path(user_config_dir(APP_NAME))


def get_cache_dir() -> Path:
    """Get the private cache root holding copies of audio files."""
    return Path(user_cache_dir(APP_NAME))


def get_config_file() -> Path:
    """Get path to config.yaml."""
    return get_config_dir() / "config.yaml"
