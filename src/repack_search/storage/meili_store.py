"""
Meilisearch index implementation.

Handles storing and searching game listings in a Meilisearch index.
"""

import logging
from typing import Any, Optional

import meilisearch
from meilisearch.errors import MeilisearchError
from pydantic import ValidationError

from ..config import (
    INDEX_BATCH_SIZE,
    INDEX_SEARCH_LIMIT,
    MEILI_API_KEY,
    MEILI_HOST,
    MEILI_INDEX_NAME,
)
from ..errors import BackendUnavailable, PersistenceFailure
from ..models import IndexedListing

logger = logging.getLogger(__name__)

LISTING_ATTRIBUTES = ["id", "title", "source", "access_url", "size", "published_at"]

INDEX_SETTINGS = {
    "searchableAttributes": ["title"],
    "displayedAttributes": LISTING_ATTRIBUTES,
    "filterableAttributes": ["source"],
    "typoTolerance": {
        "enabled": True,
        "minWordSizeForTypos": {
            "oneTypo": 5,
            "twoTypos": 9,
        },
    },
    "rankingRules": [
        "words",
        "typo",
        "proximity",
        "attribute",
        "sort",
        "exactness",
    ],
}


class MeiliStore:
    """
    Listing index backed by Meilisearch.

    Documents are keyed by listing ID, so saving the same listing twice
    replaces it.
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        index_name: Optional[str] = None,
    ):
        """
        Initialize the store.

        Args:
            client: Meilisearch client. Creates one from config if not provided.
            index_name: Name of the index. Defaults to config value.
        """
        self.index_name = index_name or MEILI_INDEX_NAME
        self.client = client or meilisearch.Client(MEILI_HOST, MEILI_API_KEY)
        self.index = self.client.index(self.index_name)

    def setup_index(self) -> None:
        """
        Apply searchable attributes, typo tolerance and ranking rules.

        Should run once before the first sync.
        """
        try:
            self.index.update_settings(INDEX_SETTINGS)
        except MeilisearchError as exc:
            raise PersistenceFailure(f"Could not configure index '{self.index_name}': {exc}") from exc

    def save_batch(self, listings: list[IndexedListing], batch_size: Optional[int] = None) -> int:
        """
        Upsert listings into the index.

        Args:
            listings: Listings to save.
            batch_size: Documents per request.

        Returns:
            Number of documents sent.
        """
        batch_size = batch_size or INDEX_BATCH_SIZE
        documents = [listing.model_dump() for listing in listings]

        try:
            for i in range(0, len(documents), batch_size):
                batch = documents[i : i + batch_size]
                task = self.index.update_documents(batch, primary_key="id")
                logger.debug("Enqueued %d documents (task %s)", len(batch), getattr(task, "task_uid", None))
        except MeilisearchError as exc:
            raise PersistenceFailure(f"Could not save listings: {exc}") from exc

        return len(documents)

    def search(self, query: str, limit: Optional[int] = None) -> list[IndexedListing]:
        """
        Search listings by title.

        Args:
            query: The search term.
            limit: Maximum number of results.

        Returns:
            Listings in the index's relevance order.
        """
        limit = limit or INDEX_SEARCH_LIMIT

        try:
            response = self.index.search(
                query,
                {
                    "limit": limit,
                    "attributesToRetrieve": LISTING_ATTRIBUTES,
                },
            )
        except MeilisearchError as exc:
            raise BackendUnavailable(f"Search index unavailable: {exc}") from exc

        listings = []
        for hit in response.get("hits", []):
            try:
                listings.append(IndexedListing.model_validate(hit))
            except ValidationError as exc:
                logger.warning("Skipping invalid document %s: %s", hit.get("id"), exc)
        return listings

    def count(self) -> int:
        """Get the number of documents in the index."""
        try:
            return self.index.get_stats().number_of_documents
        except MeilisearchError as exc:
            raise BackendUnavailable(f"Search index unavailable: {exc}") from exc
