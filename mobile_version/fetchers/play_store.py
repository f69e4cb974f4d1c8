"""Google Play version fetcher.

Google Play has no public version API, so the version is scraped from the
app's detail page. The page layout is undocumented and changes without notice;
all knowledge of it is confined to :func:`extract_version_from_html` and
``PLAY_STORE_VERSION_PATTERNS``.
"""

import re
from typing import Optional, Sequence

import httpx

from ..constants import GOOGLE_PLAY_DETAILS_URL, PLAY_STORE_VERSION_PATTERNS
from ..exceptions import InvalidResponse
from ..logging_config import get_logger
from ..models import Platform
from .base import BaseFetcher

logger = get_logger(__name__)


def extract_version_from_html(
    html: str, patterns: Sequence[str] = PLAY_STORE_VERSION_PATTERNS
) -> Optional[str]:
    """Extract the app version from a Play Store detail page.

    Args:
        html: Raw page content.
        patterns: Regex patterns tried in order, each capturing the version
            in group 1.

    Returns:
        The first version found, or None.
    """
    for pattern in patterns:
        try:
            match = re.search(pattern, html)
        except re.error as e:
            logger.error("Invalid version pattern '%s': %s", pattern, e)
            continue
        if match and match.groups():
            version = match.group(1).strip()
            if version:
                return version
    return None


class PlayStoreFetcher(BaseFetcher):
    """Fetch Android versions by scraping the Google Play detail page."""

    storefront = "Play Store"
    url = GOOGLE_PLAY_DETAILS_URL

    def __init__(
        self,
        client: httpx.Client,
        patterns: Optional[Sequence[str]] = None,
    ) -> None:
        """Initialize the Play Store fetcher.

        Args:
            client: HTTP client used for every request.
            patterns: Replacement extraction patterns for when the page
                markup changes.
        """
        super().__init__(client)
        self._patterns = list(patterns) if patterns else list(PLAY_STORE_VERSION_PATTERNS)

    @property
    def platform(self) -> Platform:
        return Platform.ANDROID

    def fetch(self, application_id: str, country: Optional[str] = None) -> str:
        # The detail page is not country specific.
        response = self._get(self.url, {"id": application_id})

        version = extract_version_from_html(response.text, self._patterns)
        if not version:
            logger.error("No version found on the Play Store page of %s", application_id)
            raise InvalidResponse(
                "Could not find the app version on the Play Store page",
                platform=self.platform.value,
            )

        logger.info("Play Store reports %s at version %s", application_id, version)
        return version
