"""Look up the latest published version of a mobile app on the App Store and Google Play."""

import logging

from .cache import FileCache
from .constants import __version__
from .exceptions import (
    ConfigurationError,
    ConnectionFailed,
    InvalidResponse,
    RequestFailed,
    VersionLookupError,
)
from .fetchers import extract_version_from_html
from .models import CacheEntry, LookupConfig, Platform
from .service import AppMobileVersion

__all__ = [
    "AppMobileVersion",
    "CacheEntry",
    "ConfigurationError",
    "ConnectionFailed",
    "FileCache",
    "InvalidResponse",
    "LookupConfig",
    "Platform",
    "RequestFailed",
    "VersionLookupError",
    "extract_version_from_html",
    "__version__",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
