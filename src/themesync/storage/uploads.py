# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.05
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/storage/uploads.py

"""Upload collaborator storing theme assets on the local filesystem."""

import os
import uuid
from pathlib import Path
from typing import BinaryIO

import xxhash
from loguru import logger

from themesync.system.exceptions import UploadError


class FilesystemUploadCreator:
    """Stores assets under <root>/<owner_id>/<content hash><ext>.

    The content hash doubles as the asset id, so uploading identical bytes
    twice yields the same id.
    """

    def __init__(self, root: Path, chunk_size: int = 64 * 1024) -> None:
        self.root = Path(root)
        self.chunk_size = chunk_size

    def create(self, owner_id: int, file_handle: BinaryIO, declared_name: str) -> str:
        owner_dir = self.root / str(owner_id)
        ext = Path(declared_name).suffix.lower()
        tmp_path = owner_dir / f"upload-{uuid.uuid4().hex[:8]}.tmp"
        h = xxhash.xxh3_64()
        try:
            owner_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "wb") as out:
                for chunk in iter(lambda: file_handle.read(self.chunk_size), b""):
                    h.update(chunk)
                    out.write(chunk)
            upload_id = h.hexdigest()
            os.replace(tmp_path, owner_dir / f"{upload_id}{ext}")
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise UploadError(f"Failed to store upload {declared_name}: {e}", asset_name=declared_name) from e

        logger.debug(f"Stored upload {declared_name} for owner {owner_id} as {upload_id}")
        return upload_id
