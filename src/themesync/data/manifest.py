# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.03
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/data/manifest.py

"""
about.json parsing.

The manifest is parsed leniently: metadata values are copied as they appear
and only checked later, when they are applied to a RemoteSource. Structural
problems (not JSON, not an object, malformed assets or color_schemes) are
reported here as ManifestError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, Optional

import orjson
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from themesync.data.models import ThemeMetadata
from themesync.system.exceptions import ManifestError, MetadataValidationError, ThemeImportError

if TYPE_CHECKING:
    from themesync.importers.base import Importer

MANIFEST_FILE: Final = "about.json"

METADATA_PROPERTIES: Final = (
    "license_url",
    "about_url",
    "authors",
    "theme_version",
    "minimum_platform_version",
    "maximum_platform_version",
)


class ThemeManifest(BaseModel):
    """Structured view of about.json."""
    name: Optional[str] = None
    component: bool = False
    assets: dict[str, str] = Field(default_factory=dict)
    color_schemes: list[tuple[str, dict[str, Any]]] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("component", mode="before")
    @classmethod
    def parse_component(cls, value: Any) -> bool:
        return value is True or value == "true"

    @field_validator("name", mode="before")
    @classmethod
    def parse_name(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError("name must be a string")
        return value

    @field_validator("assets", mode="before")
    @classmethod
    def parse_assets(cls, value: Any) -> dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
            raise ValueError("assets must map names to relative paths")
        return value

    @field_validator("color_schemes", mode="before")
    @classmethod
    def parse_color_schemes(cls, value: Any) -> list[tuple[str, dict[str, Any]]]:
        if value is None:
            return []
        if not isinstance(value, dict):
            raise ValueError("color_schemes must be an object")
        schemes = []
        # JSON object order is the declaration order
        for name, colors in value.items():
            if not isinstance(colors, dict):
                raise ValueError(f"color scheme {name!r} must map color names to hex values")
            schemes.append((name, colors))
        return schemes


def parse_manifest(raw: bytes | str) -> ThemeManifest:
    """Parse about.json content.

    Raises:
        ManifestError: If the content is not a well formed manifest object
    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise ManifestError(f"{MANIFEST_FILE} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{MANIFEST_FILE} must contain a JSON object")

    try:
        return ThemeManifest(
            name=data.get("name"),
            component=data.get("component", False),
            assets=data.get("assets"),
            color_schemes=data.get("color_schemes"),
            metadata={key: data.get(key) for key in METADATA_PROPERTIES},
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise ManifestError(f"Invalid {MANIFEST_FILE}: {messages}") from e


def extract_theme_info(importer: "Importer") -> ThemeManifest:
    """Read and parse the manifest from a staged package."""
    try:
        raw = importer.read_file(MANIFEST_FILE)
    except ThemeImportError as e:
        raise ManifestError(f"Theme package has no readable {MANIFEST_FILE}") from e

    manifest = parse_manifest(raw)
    logger.debug(
        f"Parsed {MANIFEST_FILE}: name={manifest.name!r} component={manifest.component} "
        f"assets={len(manifest.assets)} color_schemes={len(manifest.color_schemes)}"
    )
    return manifest


def validate_metadata(manifest: ThemeManifest) -> ThemeMetadata:
    """Check the manifest's metadata values and return them as a record.

    Raises:
        MetadataValidationError: Listing every property that failed validation
    """
    try:
        return ThemeMetadata.model_validate(manifest.metadata)
    except ValidationError as e:
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])} {err['msg']}"
            for err in e.errors()
        ]
        raise MetadataValidationError(messages) from e
