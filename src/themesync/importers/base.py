# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.04
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/importers/base.py

"""Base class and staging lifecycle shared by all importer backends."""

import contextlib
import shutil
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional

from loguru import logger

from themesync.config.manager import SyncConfig
from themesync.system.exceptions import ThemeImportError


class Importer(ABC):
    """Stages a theme package in a private temporary folder.

    Subclasses implement stage() and version(); file access is shared since
    every backend ends up with a plain directory tree.
    """

    def __init__(self, config: Optional[SyncConfig] = None) -> None:
        self.config = config or SyncConfig()
        staging_root = Path(self.config.staging_dir).resolve()
        self.temp_folder = staging_root / f"theme_{uuid.uuid4().hex}"
        self._cleaned = False

    @abstractmethod
    def stage(self) -> None:
        """Fetch the package into temp_folder. Raises ThemeImportError on failure."""
        raise NotImplementedError("stage() not implemented")

    @abstractmethod
    def version(self) -> str:
        """Opaque token identifying the staged content."""
        raise NotImplementedError("version() not implemented")

    def real_path(self, relative: str) -> Optional[Path]:
        """Resolve a package path, refusing anything outside the staging folder."""
        full_path = self.temp_folder / relative
        if not full_path.exists():
            return None
        # Symlinks in a package must not expose files outside of it
        resolved = full_path.resolve()
        if not resolved.is_relative_to(self.temp_folder):
            logger.warning(f"Ignoring {relative}: resolves outside the staged package")
            return None
        return resolved

    def all_files(self) -> Iterator[str]:
        """Yield relative POSIX paths of every regular file in the package.

        Hidden entries (.git and friends) are skipped. Each call walks the
        tree again.
        """
        if not self.temp_folder.is_dir():
            return
        for path in sorted(self.temp_folder.rglob("*")):
            rel = path.relative_to(self.temp_folder)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if path.is_file() and self.real_path(rel.as_posix()) is not None:
                yield rel.as_posix()

    def read_file(self, relative: str) -> str:
        """Return the text content of a package file.

        Raises:
            ThemeImportError: If the file does not exist in the package
        """
        full_path = self.real_path(relative)
        if full_path is None or not full_path.is_file():
            raise ThemeImportError(f"File not found in theme package: {relative}")
        return full_path.read_text(encoding="utf-8")

    def cleanup(self) -> None:
        """Remove the staging folder. Safe to call repeatedly; never raises."""
        if self._cleaned:
            return
        self._cleaned = True
        try:
            shutil.rmtree(self.temp_folder, ignore_errors=False)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed cleanup of staged theme at {self.temp_folder}: {e}")


@contextlib.contextmanager
def cleaning_up(importer: Importer):
    """Release an importer's staging folder when the with-block exits.

    Cleanup failures are logged and never replace the block's own outcome.
    """
    try:
        yield importer
    finally:
        try:
            importer.cleanup()
        except Exception as e:
            logger.warning(f"Failed cleanup of staged theme: {e}")


@contextlib.contextmanager
def staged(importer: Importer):
    """Stage a package for the duration of a with-block.

    Cleanup runs exactly once on every exit path, including a failed stage().

    Example:
        with staged(GitImporter(url)) as importer:
            manifest = extract_theme_info(importer)
    """
    with cleaning_up(importer):
        importer.stage()
        yield importer
