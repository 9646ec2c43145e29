# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.09
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/conftest.py

"""
Shared test fixtures for the themesync test suite.
"""

import pytest

from themesync.config.manager import SyncConfig
from themesync.core.sync import RemoteThemeSync
from themesync.storage.store import MemoryThemeStore

from tests.fixtures.theme_packages import (
    GIT_AVAILABLE,
    GitThemeRepo,
    RecordingUploadCreator,
    basic_theme_files,
    make_tar_archive,
)


def pytest_collection_modifyitems(config, items):
    """Skip tests needing a git binary when none is installed."""
    if GIT_AVAILABLE:
        return
    skip_git = pytest.mark.skip(reason="git executable not available")
    for item in items:
        if "git" in item.keywords:
            item.add_marker(skip_git)


def pytest_configure(config):
    config.addinivalue_line("markers", "git: test creates real git repositories")


@pytest.fixture
def staging_dir(tmp_path):
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def sync_config(staging_dir, tmp_path):
    """SyncConfig pointing all on-disk state into tmp_path."""
    return SyncConfig(
        staging_dir=staging_dir,
        git_timeout=30,
        store_path=tmp_path / "store" / "themes.json",
        upload_dir=tmp_path / "uploads",
    )


@pytest.fixture
def store():
    return MemoryThemeStore()


@pytest.fixture
def uploads():
    return RecordingUploadCreator()


@pytest.fixture
def color_changes():
    """Collects (scheme name, color name, hex) for every change notification."""
    return []


@pytest.fixture
def service(store, uploads, sync_config, color_changes):
    return RemoteThemeSync(
        store,
        uploads,
        sync_config,
        on_color_change=lambda scheme, color: color_changes.append((scheme.name, color.name, color.hex)),
    )


@pytest.fixture
def theme_archive(tmp_path):
    """Factory writing a .tar.gz theme package."""
    counter = {"n": 0}

    def _make(files=None, name="theme.tar.gz"):
        counter["n"] += 1
        path = tmp_path / "archives" / f"{counter['n']}-{name}"
        path.parent.mkdir(exist_ok=True)
        return make_tar_archive(path, files if files is not None else basic_theme_files())

    return _make


@pytest.fixture
def git_theme_repo(tmp_path):
    """Factory creating a local git repository holding a theme."""
    def _make(files=None, name="theme-repo"):
        return GitThemeRepo(tmp_path / "remotes" / name, files if files is not None else basic_theme_files())

    return _make


def staged_paths(staging_dir):
    """Everything left behind in the staging directory."""
    return sorted(p.name for p in staging_dir.iterdir())
