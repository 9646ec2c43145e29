# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.08
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/cli/main.py

"""
Command line front-end for theme synchronization.

Themes and remote sources are kept in the JSON store named by store_path in
themesync.yml; uploaded assets go under upload_dir.
"""

# Standard library imports
from pathlib import Path
from typing import Optional

# Third-party imports
import typer
from rich.console import Console

# Local imports
from themesync import __version__
from themesync.config.manager import SyncConfig, load_config
from themesync.core.sync import RemoteThemeSync
from themesync.data.models import RemoteSource
from themesync.storage.store import JsonFileThemeStore
from themesync.storage.uploads import FilesystemUploadCreator
from themesync.system.display import display_diff, display_theme_summary, remotes_to_table
from themesync.system.exceptions import ThemeSyncError
from themesync.system.logging_setup import setup_logging

app = typer.Typer(
    help="""themesync - Remote theme package synchronization

[bold blue]Import:[/bold blue] import-git, import-archive
[bold green]Maintenance:[/bold green] check, update, diff, status
""",
    rich_markup_mode="rich"
)

console = Console()


def handle_operation_error(operation: str, error: Exception) -> None:
    """Handle operation errors with consistent formatting."""
    console.print(f"[red]✗[/red] Error {operation}: {error}")
    raise typer.Exit(1)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"themesync version {__version__}")
        raise typer.Exit()


def _config() -> SyncConfig:
    try:
        return load_config()
    except ThemeSyncError as e:
        handle_operation_error("loading configuration", e)


def _service(config: SyncConfig) -> RemoteThemeSync:
    store = JsonFileThemeStore(config.store_path)
    uploads = FilesystemUploadCreator(config.upload_dir)
    return RemoteThemeSync(store, uploads, config)


def _source_for(service: RemoteThemeSync, theme_id: int) -> RemoteSource:
    source = service.store.remote_for_theme(theme_id)
    if source is None:
        handle_operation_error("finding theme", ValueError(f"theme {theme_id} has no remote source"))
    return source


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback,
        help="Show version and exit"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """themesync - keep themes in step with their git or archive packages."""
    setup_logging(_config(), debug=debug)


@app.command(name="import-git")
def import_git(
    url: str = typer.Argument(..., help="Git URL of the theme repository"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to track"),
    private_key_file: Optional[Path] = typer.Option(
        None, "--private-key", help="SSH private key for private repositories"
    ),
    user_id: int = typer.Option(-1, "--user-id", help="Owner of the imported theme"),
) -> None:
    """[bold blue]Import[/bold blue]: Create a theme from a git repository."""
    config = _config()
    service = _service(config)
    try:
        private_key = private_key_file.read_text() if private_key_file else None
        theme = service.import_theme(url, user_id=user_id, private_key=private_key, branch=branch)
    except (ThemeSyncError, OSError) as e:
        handle_operation_error("importing theme", e)
    display_theme_summary(console, theme, service.store.remote_for_theme(theme.id))


@app.command(name="import-archive")
def import_archive(
    filename: Path = typer.Argument(..., exists=True, dir_okay=False, help="Theme archive (.tar.gz, .tgz, .zip)"),
    theme_id: Optional[int] = typer.Option(None, "--theme-id", help="Replace the content of this theme"),
    match_theme: bool = typer.Option(False, "--match-theme", help="Reuse a theme with the same name"),
    user_id: int = typer.Option(-1, "--user-id", help="Owner of a newly created theme"),
) -> None:
    """[bold blue]Import[/bold blue]: Create or update a theme from an archive."""
    service = _service(_config())
    try:
        theme = service.import_archive(filename, user_id=user_id, match_theme=match_theme, theme_id=theme_id)
    except ThemeSyncError as e:
        handle_operation_error("importing archive", e)
    display_theme_summary(console, theme)


@app.command()
def check(
    theme_id: int = typer.Argument(..., help="Theme to check"),
) -> None:
    """[bold green]Maintenance[/bold green]: Check a theme's remote for new commits."""
    service = _service(_config())
    source = service.update_remote_version(_source_for(service, theme_id))
    if source.last_error_text:
        console.print(f"[red]✗[/red] Remote unreachable: {source.last_error_text}")
        raise typer.Exit(1)
    if source.commits_behind:
        console.print(f"[yellow]{source.commits_behind} commit(s) behind[/yellow] ({source.remote_version})")
        if source.github_diff_link:
            console.print(f"  compare: {source.github_diff_link}")
    else:
        console.print("[green]✓[/green] Up to date")


@app.command()
def update(
    theme_id: int = typer.Argument(..., help="Theme to update"),
) -> None:
    """[bold green]Maintenance[/bold green]: Pull the latest package into a theme."""
    service = _service(_config())
    try:
        source = service.update_from_remote(_source_for(service, theme_id))
    except (ThemeSyncError, ValueError) as e:
        handle_operation_error("updating theme", e)
    if source.last_error_text:
        console.print(f"[red]✗[/red] Remote unreachable: {source.last_error_text}")
        raise typer.Exit(1)
    display_theme_summary(console, service.store.get_theme(theme_id), source)


@app.command()
def diff(
    theme_id: int = typer.Argument(..., help="Theme to inspect"),
) -> None:
    """[bold green]Maintenance[/bold green]: Show local edits made since the last import."""
    service = _service(_config())
    try:
        result = service.diff_local_changes(_source_for(service, theme_id))
    except ValueError as e:
        handle_operation_error("diffing theme", e)
    if result is None:
        console.print("No local changes")
    elif "error" in result:
        console.print(f"[red]✗[/red] {result['error']}")
        raise typer.Exit(1)
    else:
        display_diff(console, result["diff"])


@app.command()
def status(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show theme versions and compare links"),
) -> None:
    """[bold green]Maintenance[/bold green]: List themes with their remote status."""
    service = _service(_config())
    pairs = service.store.themes_with_remotes()
    if not pairs:
        console.print("No themes imported yet")
        return
    console.print(remotes_to_table(pairs, verbose=verbose))
    out_of_date = service.out_of_date_themes()
    unreachable = service.unreachable_themes()
    if out_of_date or unreachable:
        console.print(f"{len(out_of_date)} out of date, {len(unreachable)} unreachable")
