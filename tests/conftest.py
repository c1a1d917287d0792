"""Shared pytest fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from podcasterator.playlist.store import PlaylistStore


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    path = tmp_path / "config"
    path.mkdir()
    return path


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "music"
    path.mkdir()
    return path


@pytest.fixture
def make_audio(source_dir: Path) -> Callable[..., Path]:
    """Factory creating fake audio files in the source directory."""

    def _make(name: str, content: bytes | None = None) -> Path:
        path = source_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content if content is not None else f"audio:{name}".encode())
        return path

    return _make


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating real images with Pillow."""

    def _make(name: str = "cover.png", size: tuple[int, int] = (200, 100)) -> Path:
        path = tmp_path / name
        Image.new("RGB", size, color=(200, 30, 30)).save(path)
        return path

    return _make


@pytest.fixture
def store(cache_dir: Path) -> PlaylistStore:
    return PlaylistStore(cache_dir=cache_dir)


@pytest.fixture
def filled_store(store: PlaylistStore, make_audio) -> PlaylistStore:
    """Store holding A.mp3, B.mp3, C.mp3 in that order."""
    for name in ("A.mp3", "B.mp3", "C.mp3"):
        store.add(make_audio(name))
    return store
