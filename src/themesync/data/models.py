# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.03
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/data/models.py

"""
Persisted records for themes and their remote sources.

Records are plain pydantic models. Ids stay None until the persistence
collaborator saves them, which is how "is this theme new?" is answered.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Final, Optional

from pydantic import BaseModel, Field, field_validator

# Platform version strings, e.g. 2.3.0 or 2.4.0.beta3
VERSION_RE: Final = re.compile(r"^\d+\.\d+\.\d+(\.beta\d+)?$")

GITHUB_RE: Final = re.compile(r"^https?://github\.com/")
GITHUB_SSH_RE: Final = re.compile(r"^git@github\.com:")


class FieldKind(str, Enum):
    SCSS = "scss"
    HTML = "html"
    JS = "js"
    YAML = "yaml"
    THEME_UPLOAD_VAR = "theme_upload_var"

    @property
    def category(self) -> str:
        """Kinds sharing a category replace each other on upsert."""
        if self is FieldKind.THEME_UPLOAD_VAR:
            return "var"
        return self.value


class ThemeField(BaseModel):
    id: Optional[int] = None
    target: str
    name: str
    kind: FieldKind
    value: str = ""
    upload_id: Optional[str] = None

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.target, self.name, self.kind.category)


class ColorSchemeColor(BaseModel):
    id: Optional[int] = None
    name: str
    hex: str


class ColorScheme(BaseModel):
    id: Optional[int] = None
    name: str
    colors: list[ColorSchemeColor] = Field(default_factory=list)

    def color(self, name: str) -> Optional[ColorSchemeColor]:
        return next((c for c in self.colors if c.name == name), None)


class Theme(BaseModel):
    id: Optional[int] = None
    name: str
    user_id: int = -1
    component: bool = False
    remote_source_id: Optional[int] = None
    fields: list[ThemeField] = Field(default_factory=list)
    color_schemes: list[ColorScheme] = Field(default_factory=list)
    color_scheme_name: Optional[str] = None

    @property
    def is_new(self) -> bool:
        return self.id is None

    def find_field(self, target: str, name: str, kind: FieldKind) -> Optional[ThemeField]:
        key = (target, name, kind.category)
        return next((f for f in self.fields if f.identity == key), None)

    def set_field(
        self,
        target: str,
        name: str,
        kind: FieldKind,
        value: str = "",
        upload_id: Optional[str] = None,
    ) -> ThemeField:
        """Insert a field or replace the one with the same identity in place."""
        existing = self.find_field(target, name, kind)
        if existing is not None:
            existing.kind = kind
            existing.value = value
            existing.upload_id = upload_id
            return existing
        field = ThemeField(target=target, name=name, kind=kind, value=value, upload_id=upload_id)
        self.fields.append(field)
        return field

    def find_color_scheme(self, name: str) -> Optional[ColorScheme]:
        return next((s for s in self.color_schemes if s.name == name), None)


class ThemeMetadata(BaseModel):
    """The descriptive about.json properties kept on a RemoteSource."""
    license_url: Optional[str] = None
    about_url: Optional[str] = None
    authors: Optional[str] = None
    theme_version: Optional[str] = None
    minimum_platform_version: Optional[str] = None
    maximum_platform_version: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Optional[str]:
        """Store scalars as text; author lists become one comma separated string."""
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value)
        return str(value)

    @field_validator("minimum_platform_version", "maximum_platform_version")
    @classmethod
    def validate_version(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not VERSION_RE.match(value):
            raise ValueError("is invalid")
        return value


class RemoteSource(BaseModel):
    """Where a theme came from and how far it is from its upstream."""
    id: Optional[int] = None
    remote_url: str = ""
    branch: Optional[str] = None
    private_key: Optional[str] = None
    local_version: Optional[str] = None
    remote_version: Optional[str] = None
    commits_behind: int = Field(default=0, ge=0)
    last_error_text: Optional[str] = None
    remote_updated_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    license_url: Optional[str] = None
    about_url: Optional[str] = None
    authors: Optional[str] = None
    theme_version: Optional[str] = None
    minimum_platform_version: Optional[str] = None
    maximum_platform_version: Optional[str] = None

    @property
    def is_git(self) -> bool:
        return bool(self.remote_url and self.remote_url.strip())

    def apply_metadata(self, metadata: ThemeMetadata) -> None:
        self.license_url = metadata.license_url
        self.about_url = metadata.about_url
        self.authors = metadata.authors
        self.theme_version = metadata.theme_version
        self.minimum_platform_version = metadata.minimum_platform_version
        self.maximum_platform_version = metadata.maximum_platform_version

    @property
    def github_repo_url(self) -> Optional[str]:
        url = self.remote_url.strip()
        if GITHUB_RE.match(url):
            return url
        if GITHUB_SSH_RE.match(url):
            return "https://github.com/" + GITHUB_SSH_RE.sub("", url)
        return None

    @property
    def github_diff_link(self) -> Optional[str]:
        repo_url = self.github_repo_url
        if repo_url and self.local_version != self.remote_version:
            base = re.sub(r"\.git$", "", repo_url)
            return f"{base}/compare/{self.local_version}...{self.remote_version}"
        return None
