"""Playlist store and state persistence."""

from podcasterator.playlist.models import AudioEntry, PersistedState, PodcastMetadata
from podcasterator.playlist.state import StateStore, apply_metadata
from podcasterator.playlist.store import PlaylistStore

__all__ = [
    "AudioEntry",
    "PersistedState",
    "PlaylistStore",
    "PodcastMetadata",
    "StateStore",
    "apply_metadata",
]
