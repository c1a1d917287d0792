"""Flask application serving the feed, episode files and artwork."""

import logging
from pathlib import Path

from flask import Flask, Response, abort, current_app, send_file

from podcasterator.feed.synthesizer import FeedSynthesizer
from podcasterator.playlist.models import PodcastMetadata
from podcasterator.playlist.store import PlaylistStore
from podcasterator.utils.errors import SecurityError
from podcasterator.utils.files import content_type_for

logger = logging.getLogger(__name__)

RSS_CONTENT_TYPE = "application/rss+xml"
ARTWORK_CONTENT_TYPE = "image/jpeg"


def _has_traversal(segment: str) -> bool:
    return ".." in segment or "/" in segment or "\\" in segment or "\0" in segment


def resolve_cached_file(cache_dir: Path, entry_id: str, name: str) -> Path:
    """Resolve a requested file inside the cache root.

    Args:
        cache_dir: Cache root
        entry_id: Entry id path segment
        name: Decoded display name segment

    Returns:
        Absolute resolved path

    Raises:
        ValueError: If either segment is empty or contains a traversal token
        SecurityError: If the resolved path is outside the cache root
    """
    if not entry_id or not name or _has_traversal(entry_id) or _has_traversal(name):
        raise ValueError(f"Invalid path segment: {entry_id!r}/{name!r}")

    root = cache_dir.resolve()
    resolved = (root / entry_id / name).resolve()

    try:
        resolved.relative_to(root)
    except ValueError:
        raise SecurityError(f"Resolved path {resolved} is outside the cache directory")

    return resolved


def create_app(
    store: PlaylistStore,
    metadata: PodcastMetadata,
    synthesizer: FeedSynthesizer,
    cache_dir: Path,
    base_url: str = "",
) -> Flask:
    """Create the podcast server application.

    Routes read the live playlist and metadata on every request. The base
    URL lives in ``app.config["BASE_URL"]`` so it can be filled in once the
    listener is bound.

    Args:
        store: Playlist to serve
        metadata: Podcast title and artwork
        synthesizer: Feed builder
        cache_dir: Cache root; the only directory files are served from
        base_url: Externally reachable base URL

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    app.config["BASE_URL"] = base_url

    @app.route("/feed.xml", methods=["GET"])
    def feed():
        """Podcast RSS feed."""
        xml = synthesizer.build(store.entries, metadata, current_app.config["BASE_URL"])
        return Response(xml, mimetype=RSS_CONTENT_TYPE)

    @app.route("/files/<path:subpath>", methods=["GET"])
    def episode_file(subpath: str):
        """Serve a cached episode file."""
        parts = subpath.split("/", 1)
        if len(parts) != 2:
            abort(400, description="Invalid path")

        entry_id, name = parts

        try:
            file_path = resolve_cached_file(cache_dir, entry_id, name)
        except ValueError:
            logger.warning(f"Rejected file request: {subpath!r}")
            abort(400, description="Invalid path")
        except SecurityError as e:
            logger.warning(str(e))
            abort(403, description="Access denied")
        except OSError as e:
            logger.debug(f"Cannot resolve requested file {subpath!r}: {e}")
            abort(404, description="File not found")

        if store.find(entry_id) is None:
            abort(404, description="File not found")

        try:
            found = file_path.is_file()
        except OSError as e:
            # e.g. a name longer than the filesystem allows
            logger.debug(f"Cannot stat requested file {subpath!r}: {e}")
            found = False

        if not found:
            abort(404, description="File not found")

        try:
            return send_file(file_path, mimetype=content_type_for(name), conditional=True)
        except FileNotFoundError:
            # Removed or renamed between the check and the open
            abort(404, description="File not found")

    @app.route("/artwork.jpg", methods=["GET"])
    def artwork():
        """Serve podcast artwork."""
        if not metadata.has_artwork:
            abort(404, description="Artwork not found")

        try:
            return send_file(metadata.artwork_path, mimetype=ARTWORK_CONTENT_TYPE)
        except FileNotFoundError:
            abort(404, description="Artwork not found")

    return app
