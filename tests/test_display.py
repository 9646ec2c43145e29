# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.11
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/test_display.py

import pytest
from rich.console import Console

from themesync.data.models import FieldKind, RemoteSource, Theme
from themesync.system.display import display_diff, display_theme_summary, remotes_to_table


def _render(renderable_or_fn):
    console = Console(record=True, width=400, color_system=None)
    if callable(renderable_or_fn):
        renderable_or_fn(console)
    else:
        console.print(renderable_or_fn)
    return console.export_text()


@pytest.fixture
def theme_pairs():
    up_to_date = RemoteSource(id=1, remote_url="https://github.com/org/a", local_version="a" * 40,
                              remote_version="a" * 40)
    behind = RemoteSource(id=2, remote_url="https://github.com/org/b", local_version="b" * 40,
                          remote_version="c" * 40, commits_behind=3, theme_version="1.0.0")
    broken = RemoteSource(id=3, remote_url="https://example.org/c.git", last_error_text="unreachable host")
    local = RemoteSource(id=4)
    return [
        (Theme(id=10, name="Alpha", remote_source_id=1), up_to_date),
        (Theme(id=11, name="Beta", remote_source_id=2), behind),
        (Theme(id=12, name="Gamma", remote_source_id=3, component=True), broken),
        (Theme(id=13, name="Delta", remote_source_id=4), local),
    ]


def test_remotes_table_status_column(theme_pairs):
    table = remotes_to_table(theme_pairs)
    assert table.row_count == 4
    text = _render(table)
    assert "up to date" in text
    assert "out of date" in text
    assert "unreachable" in text
    assert "local" in text
    assert "(component)" in text
    assert "aaaaaaaa" in text
    assert "a" * 9 not in text


def test_remotes_table_verbose_columns(theme_pairs):
    table = remotes_to_table(theme_pairs, verbose=True)
    assert [c.header for c in table.columns][-2:] == ["Version", "Compare"]
    text = _render(table)
    assert "1.0.0" in text
    assert "compare/" in text


def test_display_theme_summary():
    theme = Theme(id=5, name="Foo", color_scheme_name="Dark")
    theme.set_field("common", "scss", FieldKind.SCSS, "a {}")
    source = RemoteSource(local_version="abc123")

    text = _render(lambda console: display_theme_summary(console, theme, source))
    assert "theme Foo (id 5)" in text
    assert "fields: 1, color schemes: 0" in text
    assert "active color scheme: Dark" in text
    assert "version: abc123" in text


def test_display_diff():
    diff = "--- a/common/common.scss\n+++ b/common/common.scss\n-a {}\n+b {}\n"
    text = _render(lambda console: display_diff(console, diff))
    assert "+b {}" in text
