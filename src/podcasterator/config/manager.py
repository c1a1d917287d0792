"""Configuration manager for loading and saving Podcasterator config."""

from pathlib import Path

import yaml

from podcasterator.config.schema import AppConfig
from podcasterator.utils.errors import InvalidConfigError
from podcasterator.utils.paths import get_config_dir, get_config_file

DEFAULT_CONFIG_HEADER = """\
# Podcasterator configuration
#
# server.port is the port podcast clients connect to; server.host is the
# interface the listener binds (0.0.0.0 = every interface).
"""


class ConfigManager:
    """Manages the Podcasterator configuration file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Optional custom config directory. Defaults to the platform config dir.
        """
        if config_dir is None:
            self.config_dir = get_config_dir()
            self.config_file = get_config_file()
        else:
            self.config_dir = config_dir
            self.config_file = config_dir / "config.yaml"

    def load_config(self) -> AppConfig:
        """Load and validate configuration.

        Returns:
            Validated AppConfig instance

        Raises:
            InvalidConfigError: If config is invalid
        """
        if not self.config_file.exists():
            config = AppConfig()
            self.save_config(config)
            return config

        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
            return AppConfig(**data)
        except Exception as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

    def save_config(self, config: AppConfig) -> None:
        """Save configuration.

        Args:
            config: AppConfig instance to save
        """
        data = config.model_dump(mode="python")

        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w") as f:
            f.write(DEFAULT_CONFIG_HEADER)
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
