# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.07
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/core/sync.py

"""
Remote theme sync orchestration.

Every entry point follows the same sequence:

    stage -> parse about.json -> validate metadata -> reconcile fields
          -> reconcile color schemes (full themes only) -> commit

Work happens on a detached copy of the theme. Nothing reaches the store
until every step has succeeded, so a failed sync leaves stored themes as
they were (apart from the recorded error text on check-style operations).
Each staging folder is released exactly once, whatever the outcome.
"""

from datetime import datetime, UTC
from pathlib import Path
from typing import Optional

from loguru import logger

from themesync.config.manager import SyncConfig
from themesync.data.manifest import ThemeManifest, extract_theme_info, validate_metadata
from themesync.data.models import RemoteSource, Theme
from themesync.importers.archive import ArchiveImporter
from themesync.importers.base import Importer, cleaning_up, staged
from themesync.importers.factory import importer_for_source
from themesync.importers.git import GitImporter
from themesync.storage.protocols import ThemeStore, UploadCreator
from themesync.system.exceptions import ManifestError, ThemeImportError
from .colors import ColorChangeCallback, ColorSchemeChanges, ColorSchemeMerger
from .fields import FieldChanges, FieldReconciler


def _now() -> datetime:
    return datetime.now(UTC)


def _require_name(manifest: ThemeManifest) -> str:
    if not manifest.name:
        raise ManifestError("about.json does not name the theme")
    return manifest.name


class RemoteThemeSync:
    """Imports and refreshes themes from git remotes and archives."""

    def __init__(
        self,
        store: ThemeStore,
        uploads: UploadCreator,
        config: Optional[SyncConfig] = None,
        on_color_change: Optional[ColorChangeCallback] = None,
    ) -> None:
        self.store = store
        self.config = config or SyncConfig()
        self.field_reconciler = FieldReconciler(uploads)
        self.color_merger = ColorSchemeMerger(self.config.base_palette, on_color_change)

    # ---- initial import ----

    def import_theme(
        self,
        url: str,
        user_id: int = -1,
        private_key: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> Theme:
        """Create a theme from a git repository."""
        importer = GitImporter(url, private_key=private_key, branch=branch, config=self.config)
        with staged(importer):
            manifest = extract_theme_info(importer)
            theme = Theme(name=_require_name(manifest), user_id=user_id, component=manifest.component)
            source = RemoteSource(remote_url=importer.url, private_key=private_key, branch=branch)
            theme, _ = self._sync(source, theme, importer, manifest)
        logger.info(f"Imported theme {theme.name!r} (id {theme.id}) from {url}")
        return theme

    def import_archive(
        self,
        filename: str | Path,
        user_id: int = -1,
        match_theme: bool = False,
        theme_id: Optional[int] = None,
    ) -> Theme:
        """Create or update a theme from a compressed package.

        With theme_id the package replaces that theme's content; with
        match_theme a theme of the same name is reused. Otherwise a new theme
        is created.
        """
        importer = ArchiveImporter(filename, config=self.config)
        with staged(importer):
            manifest = extract_theme_info(importer)

            theme = None
            if match_theme and manifest.name:
                theme = self.store.find_theme_by_name(manifest.name)
            if theme_id is not None:
                theme = self.store.get_theme(theme_id)
                if theme is None:
                    logger.warning(f"Theme {theme_id} not found, importing {filename} as a new theme")
            if theme is None:
                theme = Theme(name=_require_name(manifest), user_id=user_id)
            theme.component = manifest.component

            source = None
            if theme.remote_source_id is not None:
                source = self.store.get_remote(theme.remote_source_id)
            if source is None:
                source = RemoteSource()
            source.remote_url = ""

            theme, _ = self._sync(source, theme, importer, manifest, skip_update=True)
        logger.info(f"Imported theme {theme.name!r} (id {theme.id}) from archive {filename}")
        return theme

    # ---- refresh and update ----

    def update_remote_version(self, source: RemoteSource) -> RemoteSource:
        """Record how far the stored version is behind the remote.

        Transport failures are stored in last_error_text, leaving the version
        fields alone. Local-only sources are returned untouched.
        """
        if not source.is_git:
            return source

        importer = importer_for_source(source, self.config)
        with cleaning_up(importer):
            try:
                importer.stage()
                remote_version, commits_behind = importer.commits_since(source.local_version)
            except ThemeImportError as e:
                logger.warning(f"Version check failed for {source.remote_url}: {e}")
                source.last_error_text = str(e)
            else:
                source.updated_at = _now()
                source.remote_version = remote_version
                source.commits_behind = commits_behind
                source.last_error_text = None

        if source.id is not None:
            self.store.save_remote(source)
        return source

    def update_from_remote(
        self,
        source: RemoteSource,
        theme: Optional[Theme] = None,
        importer: Optional[Importer] = None,
        skip_update: bool = False,
    ) -> RemoteSource:
        """Re-sync a theme with its package.

        A supplied importer must already be staged and stays owned by the
        caller. Otherwise the source's git remote is staged here; if that
        fails the error is recorded on the source and returned without
        raising. Manifest, metadata and upload errors propagate.
        """
        if theme is None:
            theme = self.store.theme_for_remote(source.id) if source.id is not None else None
            if theme is None:
                raise ValueError("Remote source is not attached to a theme")

        if importer is not None:
            self._sync(source, theme, importer, skip_update=skip_update)
            return source

        if not source.is_git:
            raise ValueError(f"Theme {theme.name!r} has no remote to update from")

        importer = importer_for_source(source, self.config)
        with cleaning_up(importer):
            try:
                importer.stage()
            except ThemeImportError as e:
                logger.warning(f"Update failed for {source.remote_url}: {e}")
                source.last_error_text = str(e)
                if source.id is not None:
                    self.store.save_remote(source)
                return source

            self._sync(source, theme, importer, skip_update=skip_update)
        return source

    def diff_local_changes(self, source: RemoteSource) -> Optional[dict[str, str]]:
        """Compare a theme's current fields with the version it was imported at.

        Returns {"diff": ...} when the theme was edited locally, None when it
        was not (or the source is local-only), and {"error": ...} when the
        remote could not be staged.
        """
        if not source.is_git:
            return None
        theme = self.store.theme_for_remote(source.id) if source.id is not None else None
        if theme is None:
            raise ValueError("Remote source is not attached to a theme")

        importer = importer_for_source(source, self.config)
        with cleaning_up(importer):
            try:
                importer.stage()
                changes = importer.diff_local_changes(theme, source.local_version)
            except ThemeImportError as e:
                logger.warning(f"Local diff failed for {source.remote_url}: {e}")
                return {"error": str(e)}

        if not changes.strip():
            return None
        return {"diff": changes}

    # ---- reporting ----

    def out_of_date_themes(self) -> list[tuple[str, int]]:
        return [
            (theme.name, theme.id)
            for theme, source in self.store.themes_with_remotes()
            if source.is_git and (source.commits_behind > 0 or source.remote_version != source.local_version)
        ]

    def unreachable_themes(self) -> list[tuple[str, int]]:
        return [
            (theme.name, theme.id)
            for theme, source in self.store.themes_with_remotes()
            if source.is_git and source.last_error_text is not None
        ]

    # ---- internals ----

    def _sync(
        self,
        source: RemoteSource,
        theme: Theme,
        importer: Importer,
        manifest: Optional[ThemeManifest] = None,
        skip_update: bool = False,
    ) -> tuple[Theme, RemoteSource]:
        if manifest is None:
            manifest = extract_theme_info(importer)
        metadata = validate_metadata(manifest)

        working = theme.model_copy(deep=True)
        field_changes = self.field_reconciler.reconcile(working, importer, manifest)

        if working.component:
            color_changes = ColorSchemeChanges()
        else:
            color_changes = self.color_merger.reconcile(working, manifest.color_schemes)

        source.apply_metadata(metadata)
        source.last_error_text = None
        if not skip_update:
            version = importer.version()
            source.remote_updated_at = _now()
            source.remote_version = version
            source.local_version = version
            source.commits_behind = 0

        return self._commit(working, source, field_changes, color_changes), source

    def _commit(
        self,
        theme: Theme,
        source: RemoteSource,
        field_changes: FieldChanges,
        color_changes: ColorSchemeChanges,
    ) -> Theme:
        self.store.delete_fields(field_changes.removed_ids)
        self.store.delete_color_schemes(color_changes.removed_ids)
        source = self.store.save_remote(source)
        theme.remote_source_id = source.id
        theme = self.store.save_theme(theme)
        logger.debug(f"Committed theme {theme.id} with remote source {source.id}")
        return theme
