"""
Hybrid search service.

Routes each request to the search index, the live web search, or the
provider sync, and wraps every outcome in a ServiceResponse.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol, Sequence

from ..errors import QueryValidationError
from ..ingestion import default_loaders
from ..models import IndexedListing, LiveListing, ServiceResponse
from ..storage import MeiliStore
from .google_search import GoogleSearchProvider

logger = logging.getLogger(__name__)


class ListingIndex(Protocol):
    """Persistent, searchable listing index."""

    def setup_index(self) -> None: ...

    def save_batch(self, listings: list[IndexedListing]) -> int: ...

    def search(self, query: str) -> list[IndexedListing]: ...

    def count(self) -> int: ...


class ListingSource(Protocol):
    """A provider whose releases are synced into the index."""

    name: str

    async def fetch_listings(self) -> list[IndexedListing]: ...


class LiveSearchSource(Protocol):
    """A web search queried on every request."""

    async def search(self, query: str) -> list[LiveListing]: ...


def _require_query(query: Optional[str]) -> str:
    query = (query or "").strip()
    if not query:
        raise QueryValidationError("Search query is required")
    return query


def _error_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


class HybridSearchService:
    """
    Entry point for searching and syncing game listings.

    Combines the Meilisearch index (fed by repack providers) with live
    Google search. No method raises; failures come back as envelopes.
    """

    def __init__(
        self,
        store: Optional[ListingIndex] = None,
        live_search: Optional[LiveSearchSource] = None,
        providers: Optional[Sequence[ListingSource]] = None,
    ):
        """
        Initialize the service.

        Args:
            store: Listing index. Creates a MeiliStore if not provided.
            live_search: Live search adapter. Creates a GoogleSearchProvider if not provided.
            providers: Loaders used by refresh. Defaults to FitGirl and DODI.
        """
        self.store = store if store is not None else MeiliStore()
        self.live_search = live_search if live_search is not None else GoogleSearchProvider()
        self.providers = list(providers) if providers is not None else default_loaders()

    async def search_indexed(self, query: Optional[str]) -> ServiceResponse[list[IndexedListing]]:
        """
        Search the listing index.

        Returns:
            200 with matching listings (possibly none), 400 for an empty
            query, 500 if the index cannot be searched.
        """
        try:
            query = _require_query(query)
        except QueryValidationError as exc:
            return ServiceResponse.fail(str(exc), [], exc.status_code)

        try:
            listings = await asyncio.to_thread(self.store.search, query)
        except Exception as exc:
            logger.exception("Index search failed for %r", query)
            return ServiceResponse.fail(f"Failed to search games: {_error_message(exc)}", [], 500)

        return ServiceResponse.ok("Games found", listings, 200)

    async def search_live(self, query: Optional[str]) -> ServiceResponse[list[LiveListing]]:
        """
        Search the web through the live search adapter.

        Returns:
            200 with listings, 404 when nothing was found, 400 for an empty
            query, 500 if the adapter fails unexpectedly.
        """
        try:
            query = _require_query(query)
        except QueryValidationError as exc:
            return ServiceResponse.fail(str(exc), [], exc.status_code)

        try:
            listings = await self.live_search.search(query)
        except Exception as exc:
            logger.exception("Live search failed for %r", query)
            return ServiceResponse.fail(f"Google Directory search failed: {_error_message(exc)}", [], 500)

        if not listings:
            return ServiceResponse.fail("No games found in Google Directory", [], 404)

        return ServiceResponse.ok("Games found from Google Directory", listings, 200)

    async def _collect(self) -> list[IndexedListing]:
        results = await asyncio.gather(
            *(provider.fetch_listings() for provider in self.providers),
            return_exceptions=True,
        )

        listings: list[IndexedListing] = []
        for provider, result in zip(self.providers, results):
            if isinstance(result, BaseException):
                logger.error("Provider %s failed: %s", provider.name, result)
                continue
            logger.info("Provider %s returned %d listings", provider.name, len(result))
            listings.extend(result)
        return listings

    async def refresh(self) -> ServiceResponse[None]:
        """
        Sync the index with every repack provider.

        Returns:
            200 with the synced count in the message, 502 if no provider
            returned anything, 500 if the index write fails.
        """
        listings = await self._collect()

        if not listings:
            return ServiceResponse.fail("No games fetched from external providers", None, 502)

        try:
            await asyncio.to_thread(self.store.save_batch, listings)
        except Exception as exc:
            logger.exception("Saving %d listings failed", len(listings))
            return ServiceResponse.fail(f"Sync failed: {_error_message(exc)}", None, 500)

        logger.info("Synced %d listings", len(listings))
        return ServiceResponse.ok(f"Successfully synced {len(listings)} games", None, 200)

    async def setup_index(self) -> ServiceResponse[None]:
        """Apply index settings (searchable attributes, typo tolerance, ranking)."""
        try:
            await asyncio.to_thread(self.store.setup_index)
        except Exception as exc:
            logger.error("Index setup failed: %s", exc)
            return ServiceResponse.fail(f"Index setup failed: {_error_message(exc)}", None, 500)

        return ServiceResponse.ok("Index configured", None, 200)

    async def stats(self) -> ServiceResponse[dict]:
        """Report how many listings the index holds."""
        try:
            total = await asyncio.to_thread(self.store.count)
        except Exception as exc:
            logger.error("Index stats failed: %s", exc)
            return ServiceResponse.fail(f"Failed to read index stats: {_error_message(exc)}", None, 500)

        return ServiceResponse.ok("Index stats", {"documents": total}, 200)
