"""Configuration schema models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_PODCAST_TITLE = "My Podcast"


class ServerConfig(BaseModel):
    """Local podcast server configuration."""

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=0, le=65535)


class AppConfig(BaseModel):
    """Global Podcasterator configuration."""

    version: str = "1"
    log_level: LogLevel = "WARNING"
    default_podcast_title: str = DEFAULT_PODCAST_TITLE
    artwork_size: int = Field(default=1400, gt=0)  # Standard podcast artwork size
    display_name_max_length: int = Field(default=50, ge=4)

    server: ServerConfig = Field(default_factory=ServerConfig)
