"""Apple App Store version fetcher."""

import json
from typing import Any, Optional

from ..constants import DEFAULT_COUNTRY, ITUNES_LOOKUP_URL
from ..exceptions import InvalidResponse
from ..logging_config import get_logger
from ..models import Platform
from .base import BaseFetcher

logger = get_logger(__name__)


class AppStoreFetcher(BaseFetcher):
    """Fetch iOS versions from the iTunes lookup API."""

    storefront = "iTunes"
    url = ITUNES_LOOKUP_URL

    @property
    def platform(self) -> Platform:
        return Platform.IOS

    def fetch(self, application_id: str, country: Optional[str] = None) -> str:
        params = {
            "bundleId": application_id,
            "country": country or DEFAULT_COUNTRY,
        }
        response = self._get(self.url, params)

        version = self._extract_version(response.text)
        logger.info("iTunes reports %s at version %s", application_id, version)
        return version

    def _extract_version(self, body: str) -> str:
        """Pull ``results[0].version`` out of a lookup response body."""
        if not body or not body.strip():
            raise InvalidResponse("iTunes returned an empty response", platform=self.platform.value)

        try:
            data: Any = json.loads(body)
        except json.JSONDecodeError as e:
            raise InvalidResponse(
                "iTunes returned a response that is not valid JSON",
                platform=self.platform.value,
            ) from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results:
            raise InvalidResponse(
                "Could not find the app version in the iTunes response",
                platform=self.platform.value,
            )

        first = results[0]
        version = first.get("version") if isinstance(first, dict) else None
        if not isinstance(version, str) or not version:
            raise InvalidResponse(
                "iTunes response does not contain a valid version",
                platform=self.platform.value,
            )

        return version
