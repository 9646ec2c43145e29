# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.07
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/core/__init__.py

"""Reconciliation and orchestration of theme syncs."""

from .colors import ColorSchemeMerger, ColorSchemeChanges, normalize_override
from .fields import FieldReconciler, FieldChanges
from .sync import RemoteThemeSync

__all__ = [
    "ColorSchemeMerger",
    "ColorSchemeChanges",
    "normalize_override",
    "FieldReconciler",
    "FieldChanges",
    "RemoteThemeSync",
]
