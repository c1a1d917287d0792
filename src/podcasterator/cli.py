"""CLI entry point for Podcasterator."""

import sys
import time
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from podcasterator.config.logging import setup_logging
from podcasterator.config.manager import ConfigManager
from podcasterator.config.schema import AppConfig
from podcasterator.session import PodcastSession
from podcasterator.utils.errors import (
    ConfigError,
    InvalidNameError,
    PodcasteratorError,
    ServerError,
)
from podcasterator.utils.files import truncate_filename

app = typer.Typer(
    name="podcasterator",
    help="Serve an ordered set of local audio files as a podcast feed",
    no_args_is_help=True,
)
artwork_app = typer.Typer(help="Manage podcast artwork", no_args_is_help=True)
config_app = typer.Typer(help="Inspect configuration", no_args_is_help=True)
app.add_typer(artwork_app, name="artwork")
app.add_typer(config_app, name="config")

console = Console()


def _load_config() -> AppConfig:
    return ConfigManager().load_config()


def _open_session(config: AppConfig | None = None) -> PodcastSession:
    return PodcastSession(config or _load_config())


def _fail(message: str) -> None:
    console.print(f"[red]✗[/red] {escape(message)}")
    sys.exit(1)


def _check_index(session: PodcastSession, index: int) -> int:
    """Convert a 1-based CLI index to a playlist position, exiting if invalid."""
    if not 1 <= index <= len(session.playlist):
        console.print(
            f"[yellow]No entry #{index}[/yellow] "
            f"(playlist has {len(session.playlist)} entries)"
        )
        sys.exit(1)
    return index - 1


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """Podcasterator - turn local audio files into a podcast feed."""
    try:
        level = ConfigManager().load_config().log_level
    except ConfigError:
        level = "WARNING"
    setup_logging(verbose=verbose, log_file=log_file, level=level)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from podcasterator import __version__

    console.print(f"[bold cyan]Podcasterator[/bold cyan] v{__version__}")


@app.command("add")
def add_paths(
    paths: list[Path] = typer.Argument(..., help="Audio files, folders or an artwork image"),
) -> None:
    """Add audio files or folders to the playlist.

    Images set the podcast artwork. Originals are never modified.

    Examples:
        podcasterator add chapter01.mp3 chapter02.mp3

        podcasterator add ~/Audiobooks/Dune cover.png
    """
    try:
        session = _open_session()
        added = skipped = failed = 0

        for path in paths:
            if not path.exists():
                console.print(f"[yellow]⚠[/yellow] Not found: {escape(str(path))}")
                failed += 1
                continue

            result = session.add_path(path)
            added += len(result.added)
            skipped += len(result.skipped)
            failed += len(result.failed)

            for entry in result.added:
                console.print(f"[green]✓[/green] {escape(entry.display_name)}")
            if result.artwork is not None:
                console.print("[green]✓[/green] Artwork set")

        console.print(
            f"\n[dim]{added} added, {skipped} skipped, {failed} failed "
            f"({len(session.playlist)} in playlist)[/dim]"
        )

    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("list")
def list_entries() -> None:
    """Show the playlist in episode order."""
    try:
        session = _open_session()

        if len(session.playlist) == 0:
            console.print("[yellow]Playlist is empty.[/yellow]")
            console.print("\nAdd audio: [cyan]podcasterator add <file-or-folder>[/cyan]")
            return

        max_length = session.config.display_name_max_length
        table = Table(title=f"[bold]{escape(session.metadata.title)}[/bold]")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("ID", style="dim", no_wrap=True)

        for position, entry in enumerate(session.playlist, start=1):
            table.add_row(
                str(position),
                escape(truncate_filename(entry.display_name, max_length)),
                entry.id,
            )

        console.print(table)
        console.print(f"\n[dim]{len(session.playlist)} files[/dim]")
        if session.metadata.has_artwork:
            console.print("[dim]Artwork: set[/dim]")

    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("remove")
def remove_entry(
    index: int = typer.Argument(..., help="Playlist position (1-based)"),
) -> None:
    """Remove an entry and its cached copy."""
    try:
        session = _open_session()
        entry = session.playlist.remove(_check_index(session, index))
        if entry is not None:
            console.print(f"[green]✓[/green] Removed {escape(entry.display_name)}")
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("up")
def move_up(
    index: int = typer.Argument(..., help="Playlist position (1-based)"),
) -> None:
    """Move an entry one place earlier."""
    try:
        session = _open_session()
        if session.playlist.move_up(_check_index(session, index)):
            console.print(f"[green]✓[/green] Moved #{index} to #{index - 1}")
        else:
            console.print("[dim]Already first[/dim]")
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("down")
def move_down(
    index: int = typer.Argument(..., help="Playlist position (1-based)"),
) -> None:
    """Move an entry one place later."""
    try:
        session = _open_session()
        if session.playlist.move_down(_check_index(session, index)):
            console.print(f"[green]✓[/green] Moved #{index} to #{index + 1}")
        else:
            console.print("[dim]Already last[/dim]")
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("rename")
def rename_entry(
    index: int = typer.Argument(..., help="Playlist position (1-based)"),
    name: str = typer.Argument(..., help="New name (extension kept if omitted)"),
) -> None:
    """Rename an entry.

    Examples:
        podcasterator rename 3 "Chapter 3 - The Desert"
    """
    try:
        session = _open_session()
        entry = session.playlist.rename(_check_index(session, index), name)
        if entry is None:
            console.print("[dim]Name unchanged[/dim]")
        else:
            console.print(f"[green]✓[/green] Renamed to {escape(entry.display_name)}")
    except InvalidNameError as e:
        _fail(str(e))
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("alphabetize")
def alphabetize() -> None:
    """Sort the playlist by name (case-insensitive)."""
    try:
        session = _open_session()
        session.playlist.alphabetize()
        console.print("[green]✓[/green] Playlist sorted")
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("reverse")
def reverse() -> None:
    """Reverse the playlist order."""
    try:
        session = _open_session()
        session.playlist.reverse()
        console.print("[green]✓[/green] Playlist reversed")
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("clear")
def clear_all(
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmation prompt"
    ),
) -> None:
    """Remove every entry and its cached copy."""
    try:
        session = _open_session()
        count = len(session.playlist)

        if count == 0:
            console.print("[dim]Playlist is already empty[/dim]")
            return

        if not force:
            confirm = typer.confirm(f"Remove all {count} entries?")
            if not confirm:
                console.print("Cancelled.")
                return

        session.playlist.clear_all()
        console.print(f"[green]✓[/green] Removed {count} entries")
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@app.command("title")
def podcast_title(
    name: str | None = typer.Argument(None, help="New podcast title"),
) -> None:
    """Show or set the podcast title."""
    try:
        session = _open_session()
        if name is None:
            console.print(escape(session.metadata.title))
            return

        if not session.set_title(name):
            console.print("[dim]Title unchanged[/dim]")
            return
        console.print(
            f"[green]✓[/green] Title set to [bold]{escape(session.metadata.title)}[/bold]"
        )
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@artwork_app.command("set")
def set_artwork(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file"),
) -> None:
    """Set podcast artwork from an image (converted to square JPEG)."""
    try:
        session = _open_session()
        session.set_artwork(path)
        console.print("[green]✓[/green] Artwork set")
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@artwork_app.command("delete")
def delete_artwork() -> None:
    """Remove the podcast artwork."""
    try:
        session = _open_session()
        if session.delete_artwork():
            console.print("[green]✓[/green] Artwork deleted")
        else:
            console.print("[dim]No artwork set[/dim]")
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


@config_app.command("show")
def show_config() -> None:
    """Print the effective configuration."""
    try:
        manager = ConfigManager()
        config = manager.load_config()
        console.print(f"[dim]{escape(str(manager.config_file))}[/dim]\n")
        console.print(
            escape(yaml.safe_dump(config.model_dump(mode="python"), sort_keys=False))
        )
    except ConfigError as e:
        _fail(str(e))


@app.command("serve")
def serve(
    port: int | None = typer.Option(
        None, "--port", "-p", min=0, max=65535, help="Port to listen on"
    ),
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
) -> None:
    """Serve the playlist as a podcast feed until interrupted.

    Examples:
        podcasterator serve

        podcasterator serve --port 9000
    """
    try:
        config = _load_config()
        if port is not None:
            config.server.port = port
        if host is not None:
            config.server.host = host

        session = _open_session(config)
        feed_url = session.launch()

        if feed_url is None:
            console.print("[yellow]Playlist is empty, nothing to serve.[/yellow]")
            return

        console.print(
            f"[green]✓[/green] Serving [bold]{escape(session.metadata.title)}[/bold] "
            f"({len(session.playlist)} episodes)"
        )
        console.print(f"\nFeed URL: [cyan]{feed_url}[/cyan]")
        console.print("[dim]Press Ctrl+C to stop[/dim]")

        try:
            while session.controller.is_running:
                time.sleep(0.5)
        except KeyboardInterrupt:
            console.print("\nStopping...")
        finally:
            session.stop()

    except ServerError as e:
        _fail(str(e))
    except PodcasteratorError as e:
        _fail(f"Error: {e}")


if __name__ == "__main__":
    app()
