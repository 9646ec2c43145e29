# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.05
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/storage/store.py

"""In-process and JSON-file implementations of the ThemeStore protocol."""

import os
from itertools import count
from pathlib import Path
from typing import Iterable, Optional

import orjson
from loguru import logger

from themesync.data.models import ColorScheme, RemoteSource, Theme, ThemeField


class MemoryThemeStore:
    """ThemeStore keeping records in dictionaries.

    Records go in and come out as deep copies, so callers can mutate what
    they load without touching stored state until they save.
    """

    def __init__(self) -> None:
        self._themes: dict[int, Theme] = {}
        self._remotes: dict[int, RemoteSource] = {}
        self._ids = count(1)

    def _next_id(self) -> int:
        return next(self._ids)

    def _changed(self) -> None:
        """Hook for subclasses that persist after every write."""
        pass

    # ---- themes ----

    def get_theme(self, theme_id: int) -> Optional[Theme]:
        theme = self._themes.get(theme_id)
        return theme.model_copy(deep=True) if theme else None

    def find_theme_by_name(self, name: str) -> Optional[Theme]:
        for theme in self._themes.values():
            if theme.name == name:
                return theme.model_copy(deep=True)
        return None

    def save_theme(self, theme: Theme) -> Theme:
        if theme.id is None:
            theme.id = self._next_id()
        for field in theme.fields:
            if field.id is None:
                field.id = self._next_id()
        for scheme in theme.color_schemes:
            if scheme.id is None:
                scheme.id = self._next_id()
            for color in scheme.colors:
                if color.id is None:
                    color.id = self._next_id()
        self._themes[theme.id] = theme.model_copy(deep=True)
        self._changed()
        logger.debug(f"Saved theme {theme.id} ({theme.name}) with {len(theme.fields)} fields")
        return theme

    # ---- fields ----

    def get_field(self, field_id: int) -> Optional[ThemeField]:
        for theme in self._themes.values():
            for field in theme.fields:
                if field.id == field_id:
                    return field.model_copy(deep=True)
        return None

    def delete_fields(self, field_ids: Iterable[int]) -> int:
        ids = set(field_ids)
        if not ids:
            return 0
        deleted = 0
        for theme in self._themes.values():
            kept = [f for f in theme.fields if f.id not in ids]
            deleted += len(theme.fields) - len(kept)
            theme.fields = kept
        self._changed()
        return deleted

    # ---- color schemes ----

    def get_color_scheme(self, scheme_id: int) -> Optional[ColorScheme]:
        for theme in self._themes.values():
            for scheme in theme.color_schemes:
                if scheme.id == scheme_id:
                    return scheme.model_copy(deep=True)
        return None

    def find_color_scheme(self, theme_id: int, name: str) -> Optional[ColorScheme]:
        theme = self._themes.get(theme_id)
        if theme is None:
            return None
        scheme = theme.find_color_scheme(name)
        return scheme.model_copy(deep=True) if scheme else None

    def delete_color_schemes(self, scheme_ids: Iterable[int]) -> int:
        ids = set(scheme_ids)
        if not ids:
            return 0
        deleted = 0
        for theme in self._themes.values():
            kept = [s for s in theme.color_schemes if s.id not in ids]
            deleted += len(theme.color_schemes) - len(kept)
            theme.color_schemes = kept
            if theme.color_scheme_name and theme.find_color_scheme(theme.color_scheme_name) is None:
                theme.color_scheme_name = None
        self._changed()
        return deleted

    # ---- remote sources ----

    def get_remote(self, remote_id: int) -> Optional[RemoteSource]:
        source = self._remotes.get(remote_id)
        return source.model_copy(deep=True) if source else None

    def save_remote(self, source: RemoteSource) -> RemoteSource:
        if source.id is None:
            source.id = self._next_id()
        self._remotes[source.id] = source.model_copy(deep=True)
        self._changed()
        return source

    def remote_for_theme(self, theme_id: int) -> Optional[RemoteSource]:
        theme = self._themes.get(theme_id)
        if theme is None or theme.remote_source_id is None:
            return None
        return self.get_remote(theme.remote_source_id)

    def theme_for_remote(self, remote_id: int) -> Optional[Theme]:
        for theme in self._themes.values():
            if theme.remote_source_id == remote_id:
                return theme.model_copy(deep=True)
        return None

    def themes_with_remotes(self) -> list[tuple[Theme, RemoteSource]]:
        pairs = []
        for theme in self._themes.values():
            source = self._remotes.get(theme.remote_source_id) if theme.remote_source_id else None
            if source is not None:
                pairs.append((theme.model_copy(deep=True), source.model_copy(deep=True)))
        return pairs


class JsonFileThemeStore(MemoryThemeStore):
    """MemoryThemeStore written through to a JSON document after every change."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        data = orjson.loads(self.path.read_bytes())
        for raw in data.get("themes", []):
            theme = Theme.model_validate(raw)
            self._themes[theme.id] = theme
        for raw in data.get("remotes", []):
            source = RemoteSource.model_validate(raw)
            self._remotes[source.id] = source
        self._ids = count(data.get("next_id", 1))
        logger.debug(f"Loaded {len(self._themes)} themes from {self.path}")

    def _changed(self) -> None:
        # Peek at the counter without consuming an id
        next_id = self._next_id()
        self._ids = count(next_id)
        payload = {
            "next_id": next_id,
            "themes": [t.model_dump(mode="json") for t in self._themes.values()],
            "remotes": [r.model_dump(mode="json") for r in self._remotes.values()],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        os.replace(tmp_path, self.path)
