# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.02
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/config/__init__.py

from .manager import SyncConfig, load_config, DEFAULT_BASE_PALETTE

__all__ = ["SyncConfig", "load_config", "DEFAULT_BASE_PALETTE"]
