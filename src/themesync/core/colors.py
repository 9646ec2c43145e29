# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.06
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/core/colors.py

"""Color scheme reconciliation against the palettes declared in about.json."""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Final, Optional

from loguru import logger

from themesync.data.models import ColorScheme, ColorSchemeColor, Theme

HEX_RE: Final = re.compile(r"[0-9a-f]{6}")

ColorChangeCallback = Callable[[ColorScheme, ColorSchemeColor], None]


def normalize_override(hex_value: Any) -> Optional[str]:
    """Lowercased hex if it is exactly six hex digits, else None."""
    if not isinstance(hex_value, str):
        return None
    override = hex_value.lower()
    if not HEX_RE.fullmatch(override):
        return None
    return override


@dataclass
class ColorSchemeChanges:
    created: list[str] = field(default_factory=list)
    updated: list[tuple[str, str]] = field(default_factory=list)
    removed_ids: set[int] = field(default_factory=set)
    removed_names: set[str] = field(default_factory=set)


class ColorSchemeMerger:
    """Creates, updates and removes a theme's color schemes.

    New schemes start from the base palette with declared overrides applied.
    Existing schemes only change colors whose override differs, and each such
    change is reported to on_color_change.
    """

    def __init__(self, base_palette: dict[str, str], on_color_change: Optional[ColorChangeCallback] = None) -> None:
        self.base_palette = dict(base_palette)
        self.on_color_change = on_color_change

    def reconcile(self, theme: Theme, declared: list[tuple[str, dict[str, Any]]]) -> ColorSchemeChanges:
        changes = ColorSchemeChanges()
        missing = {s.name for s in theme.color_schemes} - {name for name, _ in declared}
        ordered: list[ColorScheme] = []

        for name, colors in declared:
            existing = theme.find_color_scheme(name)
            if existing is not None:
                for color in existing.colors:
                    override = normalize_override(colors.get(color.name))
                    if override and color.hex != override:
                        color.hex = override
                        changes.updated.append((name, color.name))
                        if self.on_color_change:
                            self.on_color_change(existing, color)
                ordered.append(existing)
            else:
                scheme = ColorScheme(
                    name=name,
                    colors=[
                        ColorSchemeColor(name=color_name, hex=normalize_override(colors.get(color_name)) or base_hex)
                        for color_name, base_hex in self.base_palette.items()
                    ],
                )
                theme.color_schemes.append(scheme)
                changes.created.append(name)
                ordered.append(scheme)

        if theme.is_new:
            if ordered:
                theme.color_scheme_name = ordered[0].name
        elif missing:
            removed = [s for s in theme.color_schemes if s.name in missing]
            changes.removed_ids = {s.id for s in removed if s.id is not None}
            changes.removed_names = missing
            theme.color_schemes = [s for s in theme.color_schemes if s.name not in missing]
            if theme.color_scheme_name in missing:
                theme.color_scheme_name = None

        logger.info(
            f"Reconciled color schemes for theme {theme.name!r}: {len(changes.created)} created, "
            f"{len(changes.updated)} colors changed, {len(changes.removed_names)} removed"
        )
        return changes
