"""Ordered playlist of cached audio entries.

The list order is the episode order of the feed. Every successful mutation
calls the ``on_change`` hook synchronously so state is persisted before the
command returns.
"""

import logging
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path

from podcasterator.playlist.models import AudioEntry, new_entry_id
from podcasterator.utils.errors import CopyError, InvalidNameError, RenameError
from podcasterator.utils.files import cached_file_name, copy_file, is_supported_file

logger = logging.getLogger(__name__)


class PlaylistStore:
    """In-memory ordered collection of audio entries.

    Handles:
    - Copying sources into a per-entry cache directory
    - Deduplication by original path
    - Reordering (swap, alphabetize, reverse)
    - Rename and removal of cached copies

    Example:
        >>> store = PlaylistStore(cache_dir=Path("~/.cache/podcasterator"))
        >>> store.add(Path("/music/intro.mp3"))
        >>> store.add(Path("/music/outro.m4b"))
        >>> [e.display_name for e in store]
        ['intro.mp3', 'outro.m4a']
    """

    def __init__(
        self,
        cache_dir: Path,
        entries: list[AudioEntry] | None = None,
        on_change: Callable[[], None] | None = None,
    ):
        """Initialize playlist store.

        Args:
            cache_dir: Private cache root holding copies of audio files
            entries: Initial entries (e.g. loaded from persisted state)
            on_change: Called after every successful mutation
        """
        self.cache_dir = cache_dir
        self._entries: list[AudioEntry] = list(entries or [])
        self.on_change = on_change

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AudioEntry]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> AudioEntry:
        return self._entries[index]

    @property
    def entries(self) -> list[AudioEntry]:
        """Copy of the current entries in playlist order."""
        return list(self._entries)

    def find(self, entry_id: str) -> AudioEntry | None:
        """Look up an entry by id."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def contains_source(self, path: Path) -> bool:
        """Whether a source file is already in the playlist."""
        source = path.absolute()
        return any(entry.original_path == source for entry in self._entries)

    def add(self, path: Path) -> AudioEntry | None:
        """Copy a source file into the cache and append it.

        Args:
            path: Source audio file

        Returns:
            The new entry, or None if the file is a duplicate or unsupported

        Raises:
            CopyError: If the file could not be copied (playlist unchanged)
        """
        source = path.absolute()

        if self.contains_source(source):
            logger.debug(f"Skipping duplicate {source}")
            return None

        if not is_supported_file(source):
            logger.debug(f"Skipping unsupported file {source}")
            return None

        entry_id = new_entry_id()
        file_name = cached_file_name(source.name)
        entry_dir = self.cache_dir / entry_id
        cached_path = entry_dir / file_name

        try:
            entry_dir.mkdir(parents=True, exist_ok=True)
            copy_file(source, cached_path)
        except OSError as e:
            shutil.rmtree(entry_dir, ignore_errors=True)
            raise CopyError(f"Could not copy {source}: {e}") from e

        entry = AudioEntry(
            id=entry_id,
            original_path=source,
            cached_path=cached_path,
            display_name=file_name,
        )
        self._entries.append(entry)
        logger.info(f"Added {file_name}")

        self._changed()
        return entry

    def remove(self, index: int) -> AudioEntry | None:
        """Remove an entry and delete its cached copy.

        Out-of-range indices are ignored. Disk cleanup is best effort.

        Args:
            index: Playlist position

        Returns:
            The removed entry, or None if index was out of range
        """
        if not self._in_range(index):
            return None

        entry = self._entries.pop(index)
        self._delete_cached(entry)
        logger.info(f"Removed {entry.display_name}")

        self._changed()
        return entry

    def move_up(self, index: int) -> bool:
        """Swap the entry at index with its predecessor."""
        if index <= 0 or index >= len(self._entries):
            return False

        self._swap(index, index - 1)
        return True

    def move_down(self, index: int) -> bool:
        """Swap the entry at index with its successor."""
        if index < 0 or index >= len(self._entries) - 1:
            return False

        self._swap(index, index + 1)
        return True

    def alphabetize(self) -> None:
        """Sort entries by display name, ignoring case.

        The sort is stable: names that compare equal keep their relative order.
        """
        if len(self._entries) <= 1:
            return

        self._entries.sort(key=lambda entry: entry.display_name.lower())
        self._changed()

    def reverse(self) -> None:
        """Reverse the playlist order in place."""
        if len(self._entries) <= 1:
            return

        self._entries.reverse()
        self._changed()

    def rename(self, index: int, new_name: str) -> AudioEntry | None:
        """Rename an entry and its cached file.

        If the new name lacks a playable extension the current extension is
        appended, so "Chapter 1" becomes "Chapter 1.mp3".

        Args:
            index: Playlist position
            new_name: New display name

        Returns:
            The renamed entry, or None if nothing changed

        Raises:
            InvalidNameError: If the name contains a path separator or '..'
            RenameError: If the file could not be renamed (entry unchanged)
        """
        if not self._in_range(index):
            return None

        entry = self._entries[index]
        new_name = new_name.strip()

        if not new_name or new_name == entry.display_name:
            return None

        if "/" in new_name or "\\" in new_name or ".." in new_name or "\0" in new_name:
            raise InvalidNameError(f"Invalid file name: {new_name!r}")

        if not is_supported_file(new_name):
            new_name = new_name + entry.extension
            if new_name == entry.display_name:
                return None

        new_path = entry.cached_path.parent / new_name

        try:
            entry.cached_path.rename(new_path)
        except OSError as e:
            raise RenameError(f"Could not rename {entry.display_name}: {e}") from e

        logger.info(f"Renamed {entry.display_name} to {new_name}")
        entry.display_name = new_name
        entry.cached_path = new_path

        self._changed()
        return entry

    def clear_all(self) -> None:
        """Delete every cached copy and empty the playlist."""
        if not self._entries:
            return

        for entry in self._entries:
            self._delete_cached(entry)

        count = len(self._entries)
        self._entries = []
        logger.info(f"Cleared {count} entries")

        self._changed()

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._entries)

    def _swap(self, a: int, b: int) -> None:
        self._entries[a], self._entries[b] = self._entries[b], self._entries[a]
        self._changed()

    def _delete_cached(self, entry: AudioEntry) -> None:
        """Delete an entry's cached file and its per-entry directory.

        Failures are logged and ignored; list consistency wins over disk cleanliness.
        """
        try:
            entry.cached_path.unlink(missing_ok=True)
            entry_dir = entry.cached_path.parent
            if entry_dir != self.cache_dir and entry_dir.parent == self.cache_dir:
                entry_dir.rmdir()
        except OSError as e:
            logger.debug(f"Could not delete {entry.cached_path}: {e}")

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
