"""Integration tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from podcasterator.cli import app
from podcasterator.session import PodcastSession

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch) -> None:
    """Point the platform config and cache dirs at tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg-state"))


def playlist_names() -> list[str]:
    return [entry.display_name for entry in PodcastSession().playlist]


@pytest.fixture
def three_files(make_audio) -> list[Path]:
    paths = [make_audio(name) for name in ("A.mp3", "B.mp3", "C.mp3")]
    result = runner.invoke(app, ["add", *map(str, paths)])
    assert result.exit_code == 0
    return paths


class TestCLIVersion:
    """Tests for version command."""

    def test_version_command(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "Podcasterator" in result.stdout
        assert "0.1.0" in result.stdout


class TestCLIAdd:
    """Tests for add command."""

    def test_add_files(self, three_files) -> None:
        assert playlist_names() == ["A.mp3", "B.mp3", "C.mp3"]

    def test_add_reports_counts(self, make_audio) -> None:
        source = make_audio("a.mp3")
        runner.invoke(app, ["add", str(source)])

        result = runner.invoke(app, ["add", str(source), str(make_audio("b.mp3"))])

        assert result.exit_code == 0
        assert "1 added, 1 skipped, 0 failed" in result.stdout

    def test_add_folder(self, make_audio, source_dir: Path) -> None:
        make_audio("one.mp3")
        make_audio("nested/two.m4b")

        result = runner.invoke(app, ["add", str(source_dir)])

        assert result.exit_code == 0
        assert playlist_names() == ["one.mp3", "two.m4a"]

    def test_add_missing_path(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["add", str(tmp_path / "missing.mp3")])

        assert result.exit_code == 0
        assert "Not found" in result.stdout

    def test_add_image_sets_artwork(self, make_image) -> None:
        result = runner.invoke(app, ["add", str(make_image())])

        assert result.exit_code == 0
        assert "Artwork set" in result.stdout
        assert PodcastSession().metadata.has_artwork


class TestCLIList:
    """Tests for list command."""

    def test_list_empty(self) -> None:
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Playlist is empty" in result.stdout

    def test_list_entries(self, three_files) -> None:
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "A.mp3" in result.stdout
        assert "C.mp3" in result.stdout
        assert "3 files" in result.stdout


class TestCLIReorder:
    """Tests for reordering commands."""

    def test_up_and_down(self, three_files) -> None:
        assert runner.invoke(app, ["up", "3"]).exit_code == 0
        assert playlist_names() == ["A.mp3", "C.mp3", "B.mp3"]

        assert runner.invoke(app, ["down", "1"]).exit_code == 0
        assert playlist_names() == ["C.mp3", "A.mp3", "B.mp3"]

    def test_up_first_is_noop(self, three_files) -> None:
        result = runner.invoke(app, ["up", "1"])

        assert result.exit_code == 0
        assert "Already first" in result.stdout
        assert playlist_names() == ["A.mp3", "B.mp3", "C.mp3"]

    def test_reverse_then_alphabetize(self, three_files) -> None:
        runner.invoke(app, ["reverse"])
        assert playlist_names() == ["C.mp3", "B.mp3", "A.mp3"]

        runner.invoke(app, ["alphabetize"])
        assert playlist_names() == ["A.mp3", "B.mp3", "C.mp3"]

    @pytest.mark.parametrize("index", ["0", "4"])
    def test_out_of_range_index(self, three_files, index: str) -> None:
        result = runner.invoke(app, ["remove", index])

        assert result.exit_code == 1
        assert "No entry" in result.stdout
        assert playlist_names() == ["A.mp3", "B.mp3", "C.mp3"]


class TestCLIEdit:
    """Tests for remove, rename and clear."""

    def test_remove(self, three_files) -> None:
        result = runner.invoke(app, ["remove", "2"])

        assert result.exit_code == 0
        assert "Removed B.mp3" in result.stdout
        assert playlist_names() == ["A.mp3", "C.mp3"]

    def test_rename(self, three_files) -> None:
        result = runner.invoke(app, ["rename", "1", "Opening"])

        assert result.exit_code == 0
        assert playlist_names()[0] == "Opening.mp3"

    def test_rename_invalid_name(self, three_files) -> None:
        result = runner.invoke(app, ["rename", "1", "../escape.mp3"])

        assert result.exit_code == 1
        assert playlist_names()[0] == "A.mp3"

    def test_clear_force(self, three_files) -> None:
        result = runner.invoke(app, ["clear", "--force"])

        assert result.exit_code == 0
        assert playlist_names() == []

    def test_clear_cancelled(self, three_files) -> None:
        result = runner.invoke(app, ["clear"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        assert len(playlist_names()) == 3


class TestCLIMetadata:
    """Tests for title and artwork commands."""

    def test_title_set_and_show(self) -> None:
        assert runner.invoke(app, ["title", "Road Trip"]).exit_code == 0

        result = runner.invoke(app, ["title"])

        assert "Road Trip" in result.stdout

    def test_blank_title_is_ignored(self) -> None:
        runner.invoke(app, ["title", "Road Trip"])

        result = runner.invoke(app, ["title", "   "])

        assert result.exit_code == 0
        assert "Title unchanged" in result.stdout
        assert PodcastSession().metadata.title == "Road Trip"

    def test_artwork_set_and_delete(self, make_image) -> None:
        result = runner.invoke(app, ["artwork", "set", str(make_image())])
        assert result.exit_code == 0
        assert PodcastSession().metadata.has_artwork

        result = runner.invoke(app, ["artwork", "delete"])
        assert result.exit_code == 0
        assert "Artwork deleted" in result.stdout
        assert PodcastSession().metadata.artwork_path is None

    def test_artwork_set_bad_image(self, tmp_path: Path) -> None:
        fake = tmp_path / "fake.png"
        fake.write_bytes(b"nope")

        result = runner.invoke(app, ["artwork", "set", str(fake)])

        assert result.exit_code == 1
        assert "Could not read image" in result.stdout


class TestCLIServe:
    """Tests for serve command."""

    def test_serve_empty_playlist(self) -> None:
        result = runner.invoke(app, ["serve", "--port", "0"])

        assert result.exit_code == 0
        assert "nothing to serve" in result.stdout

    @pytest.mark.parametrize("port", ["70000", "65536"])
    def test_serve_rejects_out_of_range_port(self, three_files, port: str) -> None:
        result = runner.invoke(app, ["serve", "--port", port])

        assert result.exit_code == 2
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestCLIConfig:
    """Tests for config command."""

    def test_config_show(self) -> None:
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "port: 8080" in result.stdout
