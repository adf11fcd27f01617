"""Shared fakes for the search service tests."""

import pytest

from repack_search.errors import BackendUnavailable
from repack_search.models import IndexedListing, LiveListing
from repack_search.search import HybridSearchService


def make_indexed(title: str = "Traditional Game", **overrides) -> IndexedListing:
    data = {
        "id": "meili-game-1",
        "title": title,
        "source": "FitGirl",
        "access_url": "https://fitgirl-repacks.site/traditional-game/",
        "size": "10 GB",
        "published_at": "2023-01-01T00:00:00.000Z",
    }
    data.update(overrides)
    return IndexedListing(**data)


def make_live(title: str = "Google Game", **overrides) -> LiveListing:
    data = {
        "title": title,
        "source": "fitgirl-repacks.site",
        "access_url": "https://fitgirl-repacks.site/google-game/",
        "snippet": "A game found via Google Directory",
    }
    data.update(overrides)
    return LiveListing(**data)


class FakeStore:
    """In-memory stand-in for MeiliStore."""

    def __init__(self, results=None, search_error=None, save_error=None):
        self.results = results if results is not None else [make_indexed()]
        self.search_error = search_error
        self.save_error = save_error
        self.search_calls = []
        self.saved_batches = []
        self.setup_calls = 0

    def setup_index(self):
        self.setup_calls += 1

    def save_batch(self, listings):
        if self.save_error:
            raise self.save_error
        self.saved_batches.append(list(listings))
        return len(listings)

    def search(self, query):
        self.search_calls.append(query)
        if self.search_error:
            raise self.search_error
        return self.results

    def count(self):
        return sum(len(batch) for batch in self.saved_batches)


class FakeLiveSearch:
    """Stand-in for GoogleSearchProvider."""

    def __init__(self, results=None, error=None):
        self.results = results if results is not None else [make_live()]
        self.error = error
        self.queries = []

    async def search(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.results


class FakeLoader:
    """Stand-in for RepackLoader."""

    def __init__(self, name, listings=None, error=None):
        self.name = name
        self.listings = listings or []
        self.error = error
        self.calls = 0

    async def fetch_listings(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.listings


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def live_search():
    return FakeLiveSearch()


@pytest.fixture
def loaders():
    return [
        FakeLoader("FitGirl Repacks", [make_indexed("Game A", id="a")]),
        FakeLoader("DODI Repacks", [make_indexed("Game B", id="b", source="DODI")]),
    ]


@pytest.fixture
def service(store, live_search, loaders):
    return HybridSearchService(store=store, live_search=live_search, providers=loaders)


@pytest.fixture
def unavailable_store():
    return FakeStore(search_error=BackendUnavailable("Search index unavailable: connection refused"))
