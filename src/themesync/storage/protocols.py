# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.05
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/storage/protocols.py

"""
Collaborator interfaces the sync engine depends on.

Persistence and upload storage live outside the engine; anything with these
methods can be plugged into RemoteThemeSync.
"""

from typing import BinaryIO, Iterable, Optional, Protocol

from themesync.data.models import ColorScheme, RemoteSource, Theme, ThemeField


class ThemeStore(Protocol):
    """CRUD access to themes, their fields, color schemes and remote sources.

    Returned records are detached copies; changes only reach storage through
    the save_* and delete_* methods.
    """

    def get_theme(self, theme_id: int) -> Optional[Theme]:
        ...

    def find_theme_by_name(self, name: str) -> Optional[Theme]:
        ...

    def save_theme(self, theme: Theme) -> Theme:
        """Persist a theme with its fields and schemes, assigning missing ids."""
        ...

    def get_field(self, field_id: int) -> Optional[ThemeField]:
        ...

    def delete_fields(self, field_ids: Iterable[int]) -> int:
        """Delete fields by id. Returns the number deleted."""
        ...

    def get_color_scheme(self, scheme_id: int) -> Optional[ColorScheme]:
        ...

    def find_color_scheme(self, theme_id: int, name: str) -> Optional[ColorScheme]:
        ...

    def delete_color_schemes(self, scheme_ids: Iterable[int]) -> int:
        """Delete color schemes (and their colors) by id. Returns the number deleted."""
        ...

    def get_remote(self, remote_id: int) -> Optional[RemoteSource]:
        ...

    def save_remote(self, source: RemoteSource) -> RemoteSource:
        ...

    def remote_for_theme(self, theme_id: int) -> Optional[RemoteSource]:
        ...

    def theme_for_remote(self, remote_id: int) -> Optional[Theme]:
        ...

    def themes_with_remotes(self) -> list[tuple[Theme, RemoteSource]]:
        ...


class UploadCreator(Protocol):
    """Stores an uploaded asset and returns its stable identifier."""

    def create(self, owner_id: int, file_handle: BinaryIO, declared_name: str) -> str:
        """Store the bytes read from file_handle on behalf of owner_id.

        Raises:
            UploadError: If the asset cannot be stored
        """
        ...
