"""Service layer for Mobile Version Lookup."""

from typing import Any, Mapping, Optional, Union

import httpx

from .cache import FileCache
from .constants import DEFAULT_COUNTRY
from .exceptions import ConfigurationError
from .fetchers import BaseFetcher, create_fetcher
from .logging_config import get_logger
from .models import LookupConfig, Platform

logger = get_logger(__name__)


class AppMobileVersion:
    """Look up the published version of one app on the iOS and Android stores.

    This service provides a high-level API for:
    - Fetching the iOS version from the iTunes lookup API
    - Fetching the Android version from the Play Store detail page
    - Caching results in a JSON file for ``cache_period`` seconds
    """

    def __init__(
        self,
        config: Union[LookupConfig, Mapping[str, Any]],
        client: Optional[httpx.Client] = None,
        cache: Optional[FileCache] = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: A LookupConfig, or an options mapping such as
                ``{"bundleId": ..., "useCache": True, "cacheFilePath": ...}``.
            client: HTTP client to use. One is created from the config
                (and closed by :meth:`close`) when omitted.
            cache: Cache to use instead of a FileCache on
                ``config.cache_file_path``.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if not isinstance(config, LookupConfig):
            config = LookupConfig.from_dict(config)
        self.config = config

        if client is None:
            self._client = httpx.Client(
                timeout=config.timeout,
                verify=config.verify_ssl,
                follow_redirects=True,
            )
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

        if cache is None and config.caching_enabled:
            cache = FileCache(config.cache_file_path)
        self._cache = cache if config.caching_enabled else None

        self._fetchers: dict[Platform, BaseFetcher] = {}

    def _get_fetcher(self, platform: Platform) -> BaseFetcher:
        if platform not in self._fetchers:
            fetcher = create_fetcher(platform, self._client)
            if fetcher is None:
                raise ConfigurationError(
                    f"No fetcher available for platform: {platform.value}",
                    platform=platform.value,
                )
            self._fetchers[platform] = fetcher
        return self._fetchers[platform]

    def get_version(self, platform: Platform, country: Optional[str] = None) -> str:
        """Return the latest version of the app on a platform.

        The cache is consulted first when enabled. A fetched version is
        written back to the cache; a failed write does not fail the lookup.

        Raises:
            VersionLookupError: If the version could not be fetched.
        """
        bundle_id = self.config.bundle_id

        if self._cache is not None:
            cached = self._cache.lookup(bundle_id, platform)
            if cached is not None:
                return cached

        logger.debug("Fetching %s version of %s", platform.value, bundle_id)
        version = self._get_fetcher(platform).fetch(bundle_id, country)

        if self._cache is not None:
            self._cache.store(bundle_id, platform, version, self.config.cache_period)

        return version

    def get_ios(self, country: str = DEFAULT_COUNTRY) -> str:
        """Return the latest iOS version from the given App Store country."""
        return self.get_version(Platform.IOS, country)

    def get_android(self) -> str:
        """Return the latest Android version from Google Play."""
        return self.get_version(Platform.ANDROID)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "AppMobileVersion":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
