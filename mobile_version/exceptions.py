"""Exceptions raised by Mobile Version Lookup."""

from typing import Optional


class VersionLookupError(Exception):
    """Base error for every failed version lookup."""

    def __init__(self, message: str, platform: Optional[str] = None) -> None:
        super().__init__(message)
        self.platform = platform


class ConfigurationError(VersionLookupError):
    """Lookup configuration is missing or invalid."""


class ConnectionFailed(VersionLookupError):
    """The storefront could not be reached."""


class RequestFailed(VersionLookupError):
    """The storefront answered with a non-success status."""

    def __init__(
        self,
        message: str,
        platform: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, platform)
        self.status_code = status_code


class InvalidResponse(VersionLookupError):
    """The storefront response did not contain an extractable version."""
