"""State persistence for the playlist.

The whole playlist and podcast metadata are written to a single JSON record
after every mutation and read back once at startup.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from podcasterator.playlist.models import PersistedState, PodcastMetadata

logger = logging.getLogger(__name__)


class StateStore:
    """Reads and writes the persisted playlist state.

    Example:
        >>> store = StateStore(Path("~/.config/podcasterator/state.json"))
        >>> store.save(PersistedState(podcast_name="Road Trip"))
        >>> store.load().podcast_name
        'Road Trip'
    """

    def __init__(self, state_file: Path):
        """Initialize state store.

        Args:
            state_file: Path of the JSON state record
        """
        self.state_file = state_file

    def save(self, state: PersistedState) -> bool:
        """Write state to disk.

        Uses atomic write (write to temp file, then rename). Failures are
        logged and swallowed; the in-memory state stays authoritative and the
        next mutation retries.

        Args:
            state: Snapshot to persist

        Returns:
            True if the state was written
        """
        data = state.model_dump(mode="json", by_alias=True)
        temp_file = self.state_file.with_suffix(".tmp")

        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            with temp_file.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            temp_file.replace(self.state_file)
            return True
        except OSError as e:
            logger.warning(f"Failed to save state to {self.state_file}: {e}")
            if temp_file.exists():
                temp_file.unlink()
            return False

    def load(self, cache_dir: Path | None = None) -> PersistedState | None:
        """Read state from disk and drop entries that cannot be trusted.

        Entries whose cached file is gone are dropped, as are repeated ids or
        source paths (the first occurrence wins). With cache_dir, entries whose
        cached file resolves outside it are dropped too.

        Args:
            cache_dir: Cache root every cached file must live under

        Returns:
            Reconciled state, or None if the record is missing or malformed
        """
        if not self.state_file.exists():
            return None

        try:
            with self.state_file.open("r", encoding="utf-8") as f:
                data = json.load(f)
            state = PersistedState.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable state file {self.state_file}: {e}")
            return None

        root = cache_dir.resolve() if cache_dir is not None else None
        seen_ids: set[str] = set()
        seen_sources: set[Path] = set()
        valid = []

        for entry in state.files:
            if not entry.cached_path.exists():
                logger.info(f"Dropping {entry.display_name}: cached file no longer exists")
                continue
            if root is not None and not _is_inside(entry.cached_path, root):
                logger.warning(f"Dropping {entry.display_name}: {entry.cached_path} is outside the cache")
                continue
            if entry.id in seen_ids or entry.original_path in seen_sources:
                logger.warning(f"Dropping duplicate entry {entry.display_name}")
                continue

            seen_ids.add(entry.id)
            seen_sources.add(entry.original_path)
            valid.append(entry)

        state.files = valid
        return state


def _is_inside(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root)
    except (OSError, ValueError):
        return False
    return True


def apply_metadata(state: PersistedState, metadata: PodcastMetadata) -> None:
    """Copy persisted metadata onto defaults, ignoring empty fields.

    Artwork is only restored when the file still exists.
    """
    if state.podcast_name:
        metadata.title = state.podcast_name

    if state.artwork_path and Path(state.artwork_path).is_file():
        metadata.artwork_path = Path(state.artwork_path)
