# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.08
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/cli/__init__.py

from .main import app

__all__ = ["app"]
