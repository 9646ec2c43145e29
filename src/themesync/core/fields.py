# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.06
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/core/fields.py

"""
Field reconciliation: make a theme's fields mirror a staged package.

Declared assets become upload variables, convention-shaped files become
html/scss/js/yaml fields, and every previously stored field the package no
longer produces is scheduled for deletion.
"""

import uuid
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from loguru import logger

from themesync.data.field_paths import opts_from_file_path
from themesync.data.manifest import ThemeManifest
from themesync.data.models import FieldKind, Theme
from themesync.importers.base import Importer
from themesync.storage.protocols import UploadCreator
from themesync.system.exceptions import UploadError

UPLOAD_TARGET = "common"

FieldIdentity = tuple[str, str, str]


@dataclass
class FieldChanges:
    """Outcome of reconciling one theme against one package."""
    touched: set[FieldIdentity] = field(default_factory=set)
    removed_ids: set[int] = field(default_factory=set)
    uploaded: int = 0


class FieldReconciler:
    """Upserts fields from a staged package and computes which ones to destroy."""

    def __init__(self, uploads: UploadCreator) -> None:
        self.uploads = uploads

    def reconcile(self, theme: Theme, importer: Importer, manifest: ThemeManifest) -> FieldChanges:
        """Update theme.fields in place from the package.

        Stale fields are dropped from theme.fields and their ids returned in
        removed_ids; deleting them from storage is the caller's job.

        Raises:
            UploadError: If an asset cannot be stored
            ThemeImportError: If a package file cannot be read
        """
        changes = FieldChanges()

        # Uploading renames the staged file, so assets sharing a file share one upload
        upload_ids: dict[str, str] = {}
        for name, relative_path in manifest.assets.items():
            key = PurePosixPath(relative_path).as_posix()
            upload_id = upload_ids.get(key)
            if upload_id is None:
                path = importer.real_path(relative_path)
                if path is None or not path.is_file():
                    logger.warning(f"Asset {name!r} points at missing file {relative_path}, skipping")
                    continue
                upload_id = self._upload(theme, path, relative_path)
                upload_ids[key] = upload_id
                changes.uploaded += 1
            else:
                logger.debug(f"Asset {name!r} reuses the upload of {relative_path}")
            theme_field = theme.set_field(
                target=UPLOAD_TARGET, name=name, kind=FieldKind.THEME_UPLOAD_VAR, upload_id=upload_id
            )
            changes.touched.add(theme_field.identity)

        for rel_path in importer.all_files():
            placement = opts_from_file_path(rel_path)
            if placement is None:
                continue
            value = importer.read_file(rel_path)
            theme_field = theme.set_field(
                target=placement.target, name=placement.name, kind=placement.kind, value=value
            )
            changes.touched.add(theme_field.identity)

        stored_ids = {f.id for f in theme.fields if f.id is not None}
        kept_ids = {f.id for f in theme.fields if f.id is not None and f.identity in changes.touched}
        changes.removed_ids = stored_ids - kept_ids
        theme.fields = [f for f in theme.fields if f.identity in changes.touched]

        logger.info(
            f"Reconciled fields for theme {theme.name!r}: {len(changes.touched)} current, "
            f"{len(changes.removed_ids)} removed, {changes.uploaded} uploads"
        )
        return changes

    def _upload(self, theme: Theme, path: Path, relative_path: str) -> str:
        # Upload storage only accepts plain generated names
        neutral_path = path.with_name(f"{uuid.uuid4().hex}{path.suffix}")
        path.rename(neutral_path)
        declared_name = Path(relative_path).name
        try:
            with open(neutral_path, "rb") as handle:
                return self.uploads.create(theme.user_id, handle, declared_name)
        except UploadError:
            raise
        except Exception as e:
            raise UploadError(f"Failed to upload {declared_name}: {e}", asset_name=declared_name) from e
