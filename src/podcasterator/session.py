"""Command interface for a podcast session.

``PodcastSession`` wires the playlist store, podcast metadata, state
persistence, artwork conversion and the server controller together. The CLI
only talks to this class.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from podcasterator.artwork import convert_artwork
from podcasterator.config.schema import AppConfig
from podcasterator.playlist.models import AudioEntry, PersistedState, PodcastMetadata
from podcasterator.playlist.state import StateStore, apply_metadata
from podcasterator.playlist.store import PlaylistStore
from podcasterator.server.lifecycle import ServerController
from podcasterator.utils.errors import CopyError
from podcasterator.utils.files import is_image_file, is_supported_file
from podcasterator.utils.paths import get_cache_dir, get_config_dir

logger = logging.getLogger(__name__)

ARTWORK_FILE_NAME = "artwork.jpg"
STATE_FILE_NAME = "state.json"


@dataclass
class AddResult:
    """Outcome of adding files, folders or artwork."""

    added: list[AudioEntry] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)  # duplicates and unsupported files
    failed: list[Path] = field(default_factory=list)  # copy errors
    artwork: Path | None = None

    def merge(self, other: "AddResult") -> None:
        self.added.extend(other.added)
        self.skipped.extend(other.skipped)
        self.failed.extend(other.failed)
        if other.artwork is not None:
            self.artwork = other.artwork


class PodcastSession:
    """The playlist, its metadata and the server for one user.

    State is loaded once on construction and written after every mutation.

    Example:
        >>> session = PodcastSession()
        >>> session.add_path(Path("~/Audiobooks/Dune"))
        >>> session.set_title("Dune")
        >>> session.launch()
        'http://192.168.1.20:8080/feed.xml'
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        cache_dir: Path | None = None,
        config_dir: Path | None = None,
    ):
        """Initialize session and load persisted state.

        Args:
            config: App configuration (defaults if None)
            cache_dir: Cache root (defaults to the platform cache dir)
            config_dir: Directory holding state.json (defaults to the platform config dir)
        """
        self.config = config or AppConfig()
        self.cache_dir = (cache_dir or get_cache_dir()).absolute()
        self.config_dir = config_dir or get_config_dir()

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.state_store = StateStore(self.config_dir / STATE_FILE_NAME)
        self.metadata = PodcastMetadata(title=self.config.default_podcast_title)

        entries: list[AudioEntry] = []
        loaded = self.state_store.load(self.cache_dir)
        if loaded is not None:
            entries = loaded.files
            apply_metadata(loaded, self.metadata)

        self.playlist = PlaylistStore(self.cache_dir, entries, on_change=self.save)
        self.controller = ServerController(
            host=self.config.server.host,
            port=self.config.server.port,
        )

    @property
    def artwork_file(self) -> Path:
        return self.cache_dir / ARTWORK_FILE_NAME

    def save(self) -> bool:
        """Persist the playlist and metadata."""
        return self.state_store.save(
            PersistedState.snapshot(self.playlist.entries, self.metadata)
        )

    def add_path(self, path: Path) -> AddResult:
        """Add a file, a folder or an artwork image.

        Folders are walked recursively. Images set the artwork.

        Args:
            path: File or directory

        Returns:
            What was added, skipped or failed

        Raises:
            ArtworkError: If an image could not be converted
        """
        if path.is_dir():
            return self.add_folder(path)

        if is_image_file(path):
            return AddResult(artwork=self.set_artwork(path))

        return self.add_file(path)

    def add_file(self, path: Path) -> AddResult:
        """Add one audio file, recording copy failures instead of raising."""
        result = AddResult()

        try:
            entry = self.playlist.add(path)
        except CopyError as e:
            logger.warning(str(e))
            result.failed.append(path)
            return result

        if entry is None:
            result.skipped.append(path)
        else:
            result.added.append(entry)
        return result

    def add_folder(self, folder: Path) -> AddResult:
        """Add every supported audio file under a folder.

        Best effort: unreadable directories and failed copies are skipped
        and reported, the rest of the folder is still added.
        """
        result = AddResult()

        def _walk_error(error: OSError) -> None:
            logger.warning(f"Could not read {error.filename}: {error.strerror}")

        for dirpath, dirnames, filenames in os.walk(folder, onerror=_walk_error):
            dirnames.sort()
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if not is_supported_file(path):
                    continue
                result.merge(self.add_file(path))

        logger.info(
            f"Folder {folder}: {len(result.added)} added, "
            f"{len(result.skipped)} skipped, {len(result.failed)} failed"
        )
        return result

    def set_title(self, title: str) -> bool:
        """Set the podcast title. Blank titles are ignored and return False."""
        title = title.strip()
        if not title:
            return False

        self.metadata.title = title
        self.save()
        return True

    def set_artwork(self, path: Path) -> Path:
        """Convert an image into the podcast artwork.

        Raises:
            ArtworkError: If the image cannot be decoded (playlist unaffected)
        """
        artwork = convert_artwork(path, self.artwork_file, self.config.artwork_size)
        self.metadata.artwork_path = artwork
        self.save()
        return artwork

    def delete_artwork(self) -> bool:
        """Remove the artwork. Returns False if none was set."""
        if self.metadata.artwork_path is None:
            return False

        try:
            self.metadata.artwork_path.unlink(missing_ok=True)
        except OSError as e:
            logger.debug(f"Could not delete artwork: {e}")

        self.metadata.artwork_path = None
        self.save()
        return True

    def launch(self) -> str | None:
        """Start serving the feed. Returns the feed URL, or None if not launched."""
        return self.controller.launch(self.playlist, self.metadata)

    def stop(self) -> None:
        """Stop serving the feed."""
        self.controller.stop()
