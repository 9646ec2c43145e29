# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.05
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/storage/__init__.py

"""
Storage collaborators for themesync.

- ThemeStore: persistence of themes, fields, color schemes and remote sources
- UploadCreator: storage of binary theme assets
"""

from .protocols import ThemeStore, UploadCreator
from .store import MemoryThemeStore, JsonFileThemeStore
from .uploads import FilesystemUploadCreator

__all__ = [
    "ThemeStore",
    "UploadCreator",
    "MemoryThemeStore",
    "JsonFileThemeStore",
    "FilesystemUploadCreator",
]
