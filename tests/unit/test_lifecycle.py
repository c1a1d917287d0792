"""Tests for ServerController."""

import socket
import threading
import urllib.request
import xml.etree.ElementTree as ET

import pytest

from podcasterator.playlist.models import PodcastMetadata
from podcasterator.playlist.store import PlaylistStore
from podcasterator.server import lifecycle
from podcasterator.server.lifecycle import ServerController
from podcasterator.utils.errors import ServerError


@pytest.fixture(autouse=True)
def loopback_ip(monkeypatch) -> None:
    monkeypatch.setattr(lifecycle, "get_local_ip", lambda: "127.0.0.1")


@pytest.fixture
def controller():
    controller = ServerController(host="127.0.0.1", port=0)
    yield controller
    controller.stop()


class TestLaunch:
    """Tests for launching the server."""

    def test_empty_playlist_is_noop(self, controller: ServerController, store: PlaylistStore) -> None:
        assert controller.launch(store, PodcastMetadata()) is None
        assert not controller.is_running
        assert controller.feed_url is None

    def test_launch_serves_feed(self, controller: ServerController, filled_store: PlaylistStore) -> None:
        feed_url = controller.launch(filled_store, PodcastMetadata(title="Road Trip"))

        assert controller.is_running
        assert feed_url == controller.feed_url
        assert feed_url.startswith("http://127.0.0.1:")
        assert feed_url.endswith("/feed.xml")

        with urllib.request.urlopen(feed_url, timeout=5) as response:
            channel = ET.fromstring(response.read()).find("channel")

        assert channel.findtext("title") == "Road Trip"
        enclosure_url = channel.find("item/enclosure").get("url")
        assert enclosure_url.startswith(controller.base_url)

        with urllib.request.urlopen(enclosure_url, timeout=5) as response:
            assert response.read() == filled_store[0].cached_path.read_bytes()

    def test_launch_stamps_publish_order(
        self, controller: ServerController, filled_store: PlaylistStore
    ) -> None:
        controller.launch(filled_store, PodcastMetadata())

        mtimes = [entry.cached_path.stat().st_mtime for entry in filled_store]
        assert mtimes[0] > mtimes[1] > mtimes[2]

    def test_second_launch_is_noop(self, controller: ServerController, filled_store: PlaylistStore) -> None:
        first = controller.launch(filled_store, PodcastMetadata())

        assert controller.launch(filled_store, PodcastMetadata()) is None
        assert controller.feed_url == first

    def test_bind_failure_raises_server_error(self, filled_store: PlaylistStore) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
            blocker.bind(("127.0.0.1", 0))
            blocker.listen(1)
            port = blocker.getsockname()[1]

            controller = ServerController(host="127.0.0.1", port=port)
            with pytest.raises(ServerError):
                controller.launch(filled_store, PodcastMetadata())

        assert not controller.is_running

    def test_out_of_range_port_raises_server_error(self, filled_store: PlaylistStore) -> None:
        controller = ServerController(host="127.0.0.1", port=70000)

        with pytest.raises(ServerError):
            controller.launch(filled_store, PodcastMetadata())

        assert not controller.is_running


class TestStop:
    """Tests for stopping the server."""

    def test_stop_without_session_is_noop(self, controller: ServerController) -> None:
        controller.stop()
        controller.stop()

        assert not controller.is_running

    def test_stop_releases_listener(self, controller: ServerController, filled_store: PlaylistStore) -> None:
        feed_url = controller.launch(filled_store, PodcastMetadata())

        controller.stop()

        assert not controller.is_running
        assert controller.feed_url is None
        with pytest.raises(OSError):
            urllib.request.urlopen(feed_url, timeout=2)

    def test_relaunch_after_stop(self, controller: ServerController, filled_store: PlaylistStore) -> None:
        controller.launch(filled_store, PodcastMetadata())
        controller.stop()

        assert controller.launch(filled_store, PodcastMetadata()) is not None
        assert controller.is_running

    def test_concurrent_stop_calls(self, controller: ServerController, filled_store: PlaylistStore) -> None:
        controller.launch(filled_store, PodcastMetadata())

        threads = [threading.Thread(target=controller.stop) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert not controller.is_running

    def test_context_manager_stops(self, filled_store: PlaylistStore) -> None:
        with ServerController(host="127.0.0.1", port=0) as controller:
            controller.launch(filled_store, PodcastMetadata())
            assert controller.is_running

        assert not controller.is_running
