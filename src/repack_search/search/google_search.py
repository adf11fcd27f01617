"""Google Programmable Search adapter for live lookups."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..config import GOOGLE_SEARCH_API_KEY, GOOGLE_SEARCH_CX, GOOGLE_SEARCH_URL
from ..ingestion.normalizer import normalize_search_hit
from ..models import LiveListing

logger = logging.getLogger(__name__)


class GoogleSearchProvider:
    """
    Live search against the Custom Search JSON API.

    Best-effort: upstream failures are logged and reported as no results.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        cx: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or GOOGLE_SEARCH_API_KEY
        self.cx = cx or GOOGLE_SEARCH_CX
        self.base_url = base_url or GOOGLE_SEARCH_URL
        self.transport = transport

    async def search(self, query: str) -> list[LiveListing]:
        """Search the web for a query and normalize the hits."""
        if not self.api_key or not self.cx:
            logger.error("Google search not configured (set GOOGLE_SEARCH_API_KEY and GOOGLE_SEARCH_CX)")
            return []

        params = {
            "key": self.api_key,
            "cx": self.cx,
            "q": query,
        }

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Google search failed for %r: %s", query, exc)
            return []

        items = (data.get("items") or []) if isinstance(data, dict) else []

        listings = []
        for item in items:
            try:
                listings.append(normalize_search_hit(item))
            except (KeyError, TypeError, ValidationError) as exc:
                logger.warning("Skipping unusable search hit %r: %s", item, exc)
        return listings
