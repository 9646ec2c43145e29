# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.02
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/config/manager.py

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Final, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from themesync.system.exceptions import ConfigError


# ---- Constants ----

USER_CFG: Final = "themesync.yml"

_HEX_RE: Final = re.compile(r"^[0-9a-f]{6}$")

DEFAULT_BASE_PALETTE: Final[dict[str, str]] = {
    "primary": "222222",
    "secondary": "ffffff",
    "tertiary": "0088cc",
    "quaternary": "e45735",
    "header_background": "ffffff",
    "header_primary": "333333",
    "highlight": "ffff4d",
    "danger": "e45735",
    "success": "009900",
    "love": "fa6c8d",
}


def _get_config_search_paths() -> tuple[Path, ...]:
    """Get config file search paths (ordered by priority: lowest to highest).

    Evaluated at call time so environment overrides work in tests.
    """
    return (
        Path("/etc/themesync") / USER_CFG,
        Path.home() / ".config" / "themesync" / USER_CFG,
        Path(os.getenv("XDG_CONFIG_HOME", "")) / "themesync" / USER_CFG,
        Path(os.getenv("THEMESYNC_CONFIG_HOME", "")) / USER_CFG,
    )


def _load_merged_config_data(candidates: tuple[Path, ...]) -> dict:
    """Load and merge config data from candidate paths.

    Later files override earlier ones. Having no config file at all is fine,
    the defaults are complete.

    Raises:
        ConfigError: If a config file exists but cannot be parsed
    """
    merged_data = {}
    found_configs = []

    for candidate in candidates:
        # Skip paths built from unset env vars
        if candidate == Path("") / USER_CFG or candidate == Path("themesync") / USER_CFG:
            continue
        if not candidate.exists():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {candidate}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {candidate} must contain a mapping")

        merged_data.update(data)
        found_configs.append(str(candidate))
        logger.debug(f"Loaded config from {candidate}")

    if found_configs:
        logger.debug(f"Merged config from: {', '.join(found_configs)}")
    else:
        logger.debug(f"No {USER_CFG} found, using defaults")
    return merged_data


class SyncConfig(BaseModel):
    """Settings shared by importers, collaborators and the CLI."""
    staging_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    git_timeout: float = Field(default=120.0, gt=0, description="Seconds before a git command is abandoned")
    store_path: Path = Field(default_factory=lambda: Path.home() / ".local" / "share" / "themesync" / "themes.json")
    upload_dir: Path = Field(default_factory=lambda: Path.home() / ".local" / "share" / "themesync" / "uploads")
    local_log: Optional[Path] = None
    base_palette: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_BASE_PALETTE))

    @field_validator("base_palette")
    @classmethod
    def validate_palette(cls, palette: dict[str, str]) -> dict[str, str]:
        if not palette:
            raise ValueError("base_palette must define at least one color")
        normalized = {}
        for name, hex_value in palette.items():
            value = str(hex_value).lower()
            if not _HEX_RE.match(value):
                raise ValueError(f"base_palette color {name!r} is not a 6 digit hex value")
            normalized[name] = value
        return normalized


def load_config(candidates: Optional[tuple[Path, ...]] = None) -> SyncConfig:
    """Load SyncConfig from the standard locations.

    Raises:
        ConfigError: If a config file is malformed or fails validation
    """
    if candidates is None:
        candidates = _get_config_search_paths()
    data = _load_merged_config_data(candidates)
    try:
        return SyncConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid themesync configuration: {e}") from e
