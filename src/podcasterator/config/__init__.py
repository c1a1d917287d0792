"""Configuration management for Podcasterator."""

from podcasterator.config.manager import ConfigManager
from podcasterator.config.schema import AppConfig, ServerConfig

__all__ = ["AppConfig", "ConfigManager", "ServerConfig"]
