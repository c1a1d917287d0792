"""Data models for the playlist and its persisted state."""

import uuid
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from podcasterator.config.schema import DEFAULT_PODCAST_TITLE


def new_entry_id() -> str:
    """Allocate a fresh opaque entry identifier."""
    return str(uuid.uuid4())


class AudioEntry(BaseModel):
    """One audio file tracked by the playlist.

    Example:
        >>> entry = AudioEntry(
        ...     original_path=Path("/music/intro.mp3"),
        ...     cached_path=Path("/cache/3f2a.../intro.mp3"),
        ...     display_name="intro.mp3",
        ... )
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_entry_id, description="Stable unique identifier")
    original_path: Path = Field(..., description="User's source file, never modified")
    cached_path: Path = Field(
        ...,
        alias="temp_path",
        description="Private copy under the cache root; the only file served",
    )
    display_name: str = Field(..., description="File name shown to users and in the feed")

    @property
    def extension(self) -> str:
        """Extension of the display name, including the dot."""
        return Path(self.display_name).suffix


class PodcastMetadata(BaseModel):
    """Podcast-level metadata shown in the feed."""

    title: str = DEFAULT_PODCAST_TITLE
    artwork_path: Path | None = None

    @property
    def has_artwork(self) -> bool:
        """Whether artwork is set and still present on disk."""
        return self.artwork_path is not None and self.artwork_path.is_file()


class PersistedState(BaseModel):
    """Durable snapshot of the playlist and podcast metadata.

    Field names match the on-disk state.json record.
    """

    files: list[AudioEntry] = Field(default_factory=list)
    podcast_name: str = ""
    artwork_path: str = ""

    @field_validator("files", mode="before")
    @classmethod
    def _null_files(cls, value):
        # Older records store an empty playlist as null
        return [] if value is None else value

    @classmethod
    def snapshot(cls, entries: list[AudioEntry], metadata: PodcastMetadata) -> "PersistedState":
        """Build a snapshot from live playlist entries and metadata."""
        return cls(
            files=list(entries),
            podcast_name=metadata.title,
            artwork_path=str(metadata.artwork_path) if metadata.artwork_path else "",
        )
