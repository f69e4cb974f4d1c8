"""Base fetcher abstract class."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from ..constants import DEFAULT_USER_AGENT
from ..exceptions import ConnectionFailed, InvalidResponse, RequestFailed
from ..logging_config import get_logger
from ..models import Platform

logger = get_logger(__name__)


class BaseFetcher(ABC):
    """Abstract base class for storefront version fetchers."""

    #: Human readable storefront name used in error messages.
    storefront: str = ""

    def __init__(self, client: httpx.Client) -> None:
        """Initialize the fetcher.

        Args:
            client: HTTP client used for every request. Timeout and TLS
                settings are the caller's responsibility.
        """
        self._client = client

    @property
    @abstractmethod
    def platform(self) -> Platform:
        """Return the platform this fetcher handles."""
        pass

    @abstractmethod
    def fetch(self, application_id: str, country: Optional[str] = None) -> str:
        """Fetch the latest published version of an application.

        Args:
            application_id: Bundle id or package name.
            country: Storefront country code, where the storefront uses one.

        Returns:
            The version string.

        Raises:
            ConnectionFailed: The storefront could not be reached.
            RequestFailed: The storefront answered with an error status.
            InvalidResponse: No version could be extracted from the response.
        """
        pass

    def _get(self, url: str, params: dict[str, str]) -> httpx.Response:
        """Issue a GET request, translating httpx errors into lookup errors."""
        headers = {"User-Agent": DEFAULT_USER_AGENT}

        try:
            response = self._client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("%s returned HTTP %s for %s", self.storefront, status, params)
            raise RequestFailed(
                f"Request to {self.storefront} failed with HTTP {status}",
                platform=self.platform.value,
                status_code=status,
            ) from e
        except httpx.TransportError as e:
            logger.error("Could not connect to %s: %s", self.storefront, e)
            raise ConnectionFailed(
                f"Failed to connect to {self.storefront}",
                platform=self.platform.value,
            ) from e
        except httpx.DecodingError as e:
            logger.error("Could not decode the %s response: %s", self.storefront, e)
            raise InvalidResponse(
                f"{self.storefront} returned a response that could not be decoded",
                platform=self.platform.value,
            ) from e
        except httpx.HTTPError as e:
            # Redirect loops and other request-level failures.
            logger.error("Request to %s failed: %s", self.storefront, e)
            raise ConnectionFailed(
                f"Failed to reach {self.storefront}: {e}",
                platform=self.platform.value,
            ) from e
