"""Version fetchers for the supported storefronts."""

from typing import Type

import httpx

from ..models import Platform
from .app_store import AppStoreFetcher
from .base import BaseFetcher
from .play_store import PlayStoreFetcher, extract_version_from_html

__all__ = [
    "BaseFetcher",
    "AppStoreFetcher",
    "PlayStoreFetcher",
    "FetcherRegistry",
    "create_fetcher",
    "extract_version_from_html",
]


class FetcherRegistry:
    """Registry for storefront fetchers."""

    _fetchers: dict[Platform, Type[BaseFetcher]] = {}

    @classmethod
    def register(cls, platform: Platform, fetcher_class: Type[BaseFetcher]) -> None:
        """Register a fetcher for a platform.

        Args:
            platform: The platform.
            fetcher_class: The fetcher class to register.
        """
        cls._fetchers[platform] = fetcher_class

    @classmethod
    def get_fetcher_class(cls, platform: Platform) -> Type[BaseFetcher] | None:
        return cls._fetchers.get(platform)

    @classmethod
    def create_fetcher(cls, platform: Platform, client: httpx.Client) -> BaseFetcher | None:
        """Create a fetcher instance for a platform.

        Args:
            platform: The platform.
            client: HTTP client handed to the fetcher.

        Returns:
            A fetcher instance, or None if no fetcher is registered.
        """
        fetcher_class = cls.get_fetcher_class(platform)
        if fetcher_class:
            return fetcher_class(client)
        return None


FetcherRegistry.register(Platform.IOS, AppStoreFetcher)
FetcherRegistry.register(Platform.ANDROID, PlayStoreFetcher)


def create_fetcher(platform: Platform, client: httpx.Client) -> BaseFetcher | None:
    """Create a fetcher for a platform.

    Args:
        platform: The platform.
        client: HTTP client handed to the fetcher.

    Returns:
        A fetcher instance, or None if not available.
    """
    return FetcherRegistry.create_fetcher(platform, client)
