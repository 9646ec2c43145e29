# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.04
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/importers/__init__.py

"""Importer backends: fetch a theme package into a local staging folder."""

from .base import Importer, cleaning_up, staged
from .archive import ArchiveImporter
from .git import GitImporter
from .factory import create_importer, importer_for_source

__all__ = [
    "Importer",
    "staged",
    "cleaning_up",
    "ArchiveImporter",
    "GitImporter",
    "create_importer",
    "importer_for_source",
]
