"""Start/stop control for the local podcast server.

Stopped -> Running -> Stopped. A single lock serializes launch and stop,
since a stop may arrive while a launch is still completing.
"""

import logging
import threading
from pathlib import Path

from werkzeug.serving import BaseWSGIServer, make_server

from podcasterator.feed.synthesizer import FEED_ROUTE, FeedSynthesizer
from podcasterator.playlist.models import PodcastMetadata
from podcasterator.playlist.store import PlaylistStore
from podcasterator.server.app import create_app
from podcasterator.server.network import get_local_ip
from podcasterator.utils.errors import ServerError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


class ServerController:
    """Owns the HTTP listener for one podcast session at a time.

    Example:
        >>> controller = ServerController(port=8080)
        >>> controller.launch(store, metadata)
        'http://192.168.1.20:8080/feed.xml'
        >>> controller.stop()
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        synthesizer: FeedSynthesizer | None = None,
    ):
        """Initialize the controller.

        Args:
            host: Interface to bind
            port: Port to bind (0 picks a free port)
            synthesizer: Feed builder (creates one if None)
        """
        self.host = host
        self.port = port
        self.synthesizer = synthesizer or FeedSynthesizer()

        self._lock = threading.Lock()
        self._server: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None
        self._base_url: str | None = None

    @property
    def is_running(self) -> bool:
        return self._server is not None

    @property
    def base_url(self) -> str | None:
        return self._base_url

    @property
    def feed_url(self) -> str | None:
        """Externally reachable feed URL while running."""
        if self._base_url is None:
            return None
        return f"{self._base_url}{FEED_ROUTE}"

    def launch(self, store: PlaylistStore, metadata: PodcastMetadata) -> str | None:
        """Stamp episode order, bind the listener and start serving.

        Does nothing if already running or the playlist is empty.

        Args:
            store: Playlist to serve
            metadata: Podcast title and artwork

        Returns:
            Feed URL, or None if nothing was launched

        Raises:
            ServerError: If the listener could not be bound
        """
        with self._lock:
            if self._server is not None:
                logger.debug("Server already running")
                return None

            if len(store) == 0:
                logger.info("Playlist is empty, nothing to serve")
                return None

            if not 0 <= self.port <= 65535:
                raise ServerError(f"Invalid port {self.port}: must be 0-65535")

            self.synthesizer.assign_publish_order(store.entries)

            app = create_app(store, metadata, self.synthesizer, Path(store.cache_dir))

            # werkzeug calls sys.exit on bind failure
            try:
                server = make_server(self.host, self.port, app, threaded=True)
            except (OSError, OverflowError, SystemExit) as e:
                raise ServerError(f"Could not start server on {self.host}:{self.port}: {e}") from e

            base_url = f"http://{get_local_ip()}:{server.server_port}"
            app.config["BASE_URL"] = base_url

            thread = threading.Thread(
                target=server.serve_forever, name="podcasterator-server", daemon=True
            )
            thread.start()

            self._server = server
            self._thread = thread
            self._base_url = base_url

            logger.info(f"Serving {len(store)} episodes at {self.feed_url}")
            return self.feed_url

    def stop(self) -> None:
        """Stop the listener. Safe to call when already stopped."""
        with self._lock:
            server, thread = self._server, self._thread
            self._server = None
            self._thread = None
            self._base_url = None

            if server is None:
                return

            server.shutdown()
            server.server_close()
            if thread is not None:
                thread.join(timeout=5)

            logger.info("Server stopped")

    def __enter__(self) -> "ServerController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
