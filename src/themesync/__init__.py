# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.02
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/__init__.py

"""themesync - remote theme package synchronization."""

__version__ = "0.1.0"
