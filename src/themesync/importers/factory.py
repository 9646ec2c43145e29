# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.04
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/importers/factory.py

"""Importer factory."""

from pathlib import Path
from typing import Optional

from loguru import logger

from themesync.config.manager import SyncConfig
from themesync.data.models import RemoteSource
from .archive import ArchiveImporter, is_archive_path
from .base import Importer
from .git import GitImporter


def create_importer(
    location: str | Path,
    private_key: Optional[str] = None,
    branch: Optional[str] = None,
    config: Optional[SyncConfig] = None,
) -> Importer:
    """Pick the importer backend for a package location.

    Local files with an archive suffix are unpacked; anything else is treated
    as a git remote.
    """
    location_str = str(location).strip()
    if is_archive_path(location_str) and Path(location_str).is_file():
        if private_key or branch:
            logger.warning(f"Ignoring git options for archive {location_str}")
        return ArchiveImporter(location_str, config=config)
    return GitImporter(location_str, private_key=private_key, branch=branch, config=config)


def importer_for_source(source: RemoteSource, config: Optional[SyncConfig] = None) -> GitImporter:
    """Git importer for a persisted remote source.

    Raises:
        ValueError: If the source has no remote URL
    """
    if not source.is_git:
        raise ValueError("Remote source has no remote URL")
    return GitImporter(source.remote_url, private_key=source.private_key, branch=source.branch, config=config)
