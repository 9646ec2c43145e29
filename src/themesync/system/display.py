# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.08
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/system/display.py

# Third-party imports
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

# Local imports
from themesync.data.models import RemoteSource, Theme


def _short(version: str | None) -> str:
    return version[:8] if version else "-"


def remotes_to_table(pairs: list[tuple[Theme, RemoteSource]], verbose: bool = False) -> Table:
    """Convert (theme, remote source) pairs to a rich Table for display."""
    table = Table()
    table.add_column("ID", justify="right")
    table.add_column("Theme")
    table.add_column("Remote")
    table.add_column("Local")
    table.add_column("Latest")
    table.add_column("Behind", justify="right")
    table.add_column("Status")
    if verbose:
        table.add_column("Version")
        table.add_column("Compare")

    for theme, source in pairs:
        if source.last_error_text:
            status = "[red]unreachable[/red]"
        elif not source.is_git:
            status = "[dim]local[/dim]"
        elif source.commits_behind > 0 or source.local_version != source.remote_version:
            status = "[yellow]out of date[/yellow]"
        else:
            status = "[green]up to date[/green]"

        row = [
            str(theme.id),
            theme.name + (" [dim](component)[/dim]" if theme.component else ""),
            source.remote_url or "-",
            _short(source.local_version),
            _short(source.remote_version),
            str(source.commits_behind),
            status,
        ]
        if verbose:
            row.extend([source.theme_version or "-", source.github_diff_link or "-"])
        table.add_row(*row)

    return table


def display_theme_summary(console: Console, theme: Theme, source: RemoteSource | None = None) -> None:
    """Print what a sync left behind for one theme."""
    kind = "component" if theme.component else "theme"
    console.print(f"[green]✓[/green] {kind} [bold]{theme.name}[/bold] (id {theme.id})")
    console.print(f"  fields: {len(theme.fields)}, color schemes: {len(theme.color_schemes)}")
    if theme.color_scheme_name:
        console.print(f"  active color scheme: {theme.color_scheme_name}")
    if source is not None and source.local_version:
        console.print(f"  version: {source.local_version}")


def display_diff(console: Console, diff: str) -> None:
    console.print(Syntax(diff, "diff", theme="ansi_dark", word_wrap=True))
