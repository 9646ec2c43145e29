# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.02
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/system/exceptions.py

"""
Theme sync exception classes.

Everything that can abort a theme import derives from ThemeImportError, so
"check" style callers (version refresh, local diff) can catch a single type
and record the message instead of propagating it.
"""

from typing import Optional


class ThemeSyncError(Exception):
    """Base exception for all themesync errors."""
    pass


class ConfigError(ThemeSyncError):
    """Raised when configuration files cannot be loaded or validated."""
    pass


class ThemeImportError(ThemeSyncError):
    """Raised when a theme package cannot be staged, parsed or applied."""
    pass


# === STAGING ===

class TransportError(ThemeImportError):
    """Network, authentication or archive failures while staging a package."""

    def __init__(self, message: str, retry_possible: bool = True, command: Optional[str] = None):
        self.retry_possible = retry_possible
        self.command = command
        super().__init__(message)


class AuthenticationError(TransportError):
    """Credentials were rejected by the remote."""

    def __init__(self, message: str, **kwargs):
        kwargs['retry_possible'] = False
        super().__init__(message, **kwargs)


# === PACKAGE CONTENT ===

class ManifestError(ThemeImportError):
    """about.json is missing, is not JSON, or is not a JSON object."""
    pass


class MetadataValidationError(ThemeImportError):
    """Manifest metadata values failed format validation."""

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__(f"Invalid about.json values: {', '.join(self.messages)}")


class UploadError(ThemeImportError):
    """An asset could not be stored by the upload collaborator."""

    def __init__(self, message: str, asset_name: Optional[str] = None):
        self.asset_name = asset_name
        super().__init__(message)
