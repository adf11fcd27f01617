"""
Repack provider loader.

Fetches a provider's HydraLinks feed and converts its releases into
listings for the search index.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ..config import DODI_FEED_URL, FITGIRL_FEED_URL
from ..models import IndexedListing, RawRelease, RepackProvider
from .normalizer import normalize_release

logger = logging.getLogger(__name__)

FITGIRL = RepackProvider(
    key="fitgirl",
    name="FitGirl Repacks",
    label="FitGirl",
    feed_url=FITGIRL_FEED_URL,
    search_url="https://fitgirl-repacks.site/?s={query}",
)

DODI = RepackProvider(
    key="dodi",
    name="DODI Repacks",
    label="DODI",
    feed_url=DODI_FEED_URL,
    search_url="https://dodi-repacks.site/?s={query}",
)


class RepackLoader:
    """
    Load releases for one repack provider.

    Fetching is best-effort: any network or payload problem is logged and
    results in an empty list.
    """

    def __init__(
        self,
        provider: RepackProvider,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the loader.

        Args:
            provider: Provider whose feed to load.
            transport: Optional httpx transport, used by tests.
        """
        self.provider = provider
        self.transport = transport

    @property
    def name(self) -> str:
        return self.provider.name

    async def _fetch_feed(self) -> Any:
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.get(self.provider.feed_url)
            response.raise_for_status()
            return response.json()

    async def fetch_listings(self) -> list[IndexedListing]:
        """
        Fetch and normalize every release in the provider's feed.

        Returns:
            Normalized listings, or an empty list if the feed is unavailable.
        """
        try:
            payload = await self._fetch_feed()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("[%s] Error fetching feed %s: %s", self.name, self.provider.feed_url, exc)
            return []

        downloads = payload.get("downloads") if isinstance(payload, dict) else None
        if not isinstance(downloads, list):
            logger.error("[%s] Feed has no 'downloads' list", self.name)
            return []

        listings = []
        skipped = 0
        for item in downloads:
            try:
                raw = RawRelease.model_validate(item)
                listings.append(normalize_release(raw, self.provider))
            except (ValidationError, ValueError) as exc:
                skipped += 1
                logger.debug("[%s] Skipping malformed release %r: %s", self.name, item, exc)

        if skipped:
            logger.warning("[%s] Skipped %d malformed releases", self.name, skipped)
        logger.info("[%s] Fetched %d releases", self.name, len(listings))
        return listings


def default_loaders(transport: Optional[httpx.AsyncBaseTransport] = None) -> list[RepackLoader]:
    """Loaders for every supported provider, in sync order."""
    return [RepackLoader(FITGIRL, transport=transport), RepackLoader(DODI, transport=transport)]
