"""Data models for Mobile Version Lookup."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from .constants import CACHE_TIMESTAMP_FORMAT, DEFAULT_CACHE_PERIOD, DEFAULT_HTTP_TIMEOUT
from .exceptions import ConfigurationError

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


class Platform(Enum):
    IOS = "ios"
    ANDROID = "android"


@dataclass(frozen=True)
class LookupConfig:
    bundle_id: str = ""
    use_cache: bool = False
    cache_file_path: Optional[Path] = None
    cache_period: int = DEFAULT_CACHE_PERIOD
    timeout: float = DEFAULT_HTTP_TIMEOUT
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.bundle_id, str) or not self.bundle_id.strip():
            raise ConfigurationError("A bundle id is required")
        if self.cache_file_path is not None and not isinstance(self.cache_file_path, Path):
            object.__setattr__(self, "cache_file_path", Path(self.cache_file_path))
        if isinstance(self.cache_period, bool) or not isinstance(self.cache_period, int):
            raise ConfigurationError(f"cache_period must be an integer, got {self.cache_period!r}")
        if self.cache_period <= 0:
            raise ConfigurationError(f"cache_period must be positive, got {self.cache_period}")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigurationError(f"timeout must be a number, got {self.timeout!r}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    @property
    def caching_enabled(self) -> bool:
        return self.use_cache and self.cache_file_path is not None

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "LookupConfig":
        """Build a config from an options mapping.

        Accepts both camelCase keys (``bundleId``, ``useCache``,
        ``cacheFilePath``, ``cachePeriod``) and snake_case field names.
        """
        def _get(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if options.get(key) is not None:
                    return options[key]
            return default

        def _get_bool(*keys: str, default: bool) -> bool:
            val = _get(*keys, default=default)
            if isinstance(val, bool):
                return val
            if isinstance(val, str):
                normalized = val.strip().lower()
                if normalized in _TRUE_STRINGS:
                    return True
                if normalized in _FALSE_STRINGS:
                    return False
            if isinstance(val, int):
                return val != 0
            raise ConfigurationError(f"{keys[0]} must be a boolean, got {val!r}")

        bundle_id = _get("bundleId", "bundle_id")
        if bundle_id is None:
            raise ConfigurationError("A bundle id is required")

        cache_file_path = _get("cacheFilePath", "cache_file_path")

        return cls(
            bundle_id=bundle_id,
            use_cache=_get_bool("useCache", "use_cache", default=False),
            cache_file_path=Path(cache_file_path) if cache_file_path else None,
            cache_period=_get("cachePeriod", "cache_period", default=DEFAULT_CACHE_PERIOD),
            timeout=_get("timeout", default=DEFAULT_HTTP_TIMEOUT),
            verify_ssl=_get_bool("verifySsl", "verify_ssl", default=True),
        )


@dataclass
class CacheEntry:
    application_id: str
    platform: Platform
    version: str
    expires_at: datetime

    def is_fresh(self, now: datetime) -> bool:
        return now < self.expires_at

    def to_dict(self) -> dict[str, str]:
        return {
            "expired_at": self.expires_at.strftime(CACHE_TIMESTAMP_FORMAT),
            "version": self.version,
        }

    @classmethod
    def from_dict(
        cls, application_id: str, platform: Platform, data: Any
    ) -> Optional["CacheEntry"]:
        """Parse a stored entry, returning None when it is malformed."""
        if not isinstance(data, dict):
            return None

        version = data.get("version")
        expired_at = data.get("expired_at")
        if not isinstance(version, str) or not version or not isinstance(expired_at, str):
            return None

        try:
            expires_at = datetime.strptime(expired_at, CACHE_TIMESTAMP_FORMAT)
        except ValueError:
            return None

        return cls(
            application_id=application_id,
            platform=platform,
            version=version,
            expires_at=expires_at,
        )
