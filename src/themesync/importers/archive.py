# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.04
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/importers/archive.py

"""Importer for theme packages shipped as .tar.gz / .tgz / .tar / .zip files."""

import shutil
import tarfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import IO, Iterator, Optional

import xxhash
from loguru import logger

from themesync.config.manager import SyncConfig
from themesync.system.exceptions import TransportError
from .base import Importer

ARCHIVE_SUFFIXES = (".tar.gz", ".tgz", ".tar", ".zip")


def is_archive_path(value: str) -> bool:
    return value.lower().endswith(ARCHIVE_SUFFIXES)


def hash_file(path: Path) -> str:
    """Calculate xxHash for a file"""
    h = xxhash.xxh3_64()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _strip_leading_component(name: str) -> Optional[PurePosixPath]:
    """Drop the archive's top level directory, like `tar --strip 1`.

    A leading "." counts as the top level, so members written by
    `tar czf theme.tgz -C dir .` keep their paths. Returns None for members
    that are the top level itself or that would land outside the staging
    folder.
    """
    if name.startswith("/"):
        return None
    segments = name.split("/")
    if ".." in segments:
        return None
    # PurePosixPath would swallow a leading "." before stripping
    parts = [part for part in segments[1:] if part not in ("", ".")]
    if not parts:
        return None
    return PurePosixPath(*parts)


class ArchiveImporter(Importer):
    """Stages a compressed theme package by unpacking it."""

    def __init__(self, filename: str | Path, config: Optional[SyncConfig] = None) -> None:
        super().__init__(config)
        self.filename = Path(filename)
        self.url = ""

    def stage(self) -> None:
        if not self.filename.is_file():
            raise TransportError(f"Theme archive not found: {self.filename}", retry_possible=False)

        self.temp_folder.mkdir(parents=True)
        try:
            if self.filename.name.lower().endswith(".zip"):
                count = self._unpack(self._zip_members())
            else:
                count = self._unpack(self._tar_members())
        except (tarfile.TarError, zipfile.BadZipFile, EOFError, OSError) as e:
            raise TransportError(f"Failed to unpack theme archive {self.filename.name}: {e}",
                                 retry_possible=False) from e
        logger.debug(f"Unpacked {count} files from {self.filename} into {self.temp_folder}")

    def _tar_members(self) -> Iterator[tuple[str, IO[bytes]]]:
        with tarfile.open(self.filename, "r:*") as archive:
            for member in archive:
                if not member.isfile():
                    continue
                handle = archive.extractfile(member)
                if handle is not None:
                    yield member.name, handle

    def _zip_members(self) -> Iterator[tuple[str, IO[bytes]]]:
        with zipfile.ZipFile(self.filename) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                with archive.open(info) as handle:
                    yield info.filename, handle

    def _unpack(self, members: Iterator[tuple[str, IO[bytes]]]) -> int:
        count = 0
        for name, handle in members:
            rel_path = _strip_leading_component(name)
            if rel_path is None:
                logger.debug(f"Skipping archive member {name}")
                continue
            dest = self.temp_folder.joinpath(*rel_path.parts)
            dest.parent.mkdir(parents=True, exist_ok=True)
            with open(dest, "wb") as out:
                shutil.copyfileobj(handle, out)
            count += 1
        return count

    def version(self) -> str:
        return hash_file(self.filename)
