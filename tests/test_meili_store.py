"""Tests for the Meilisearch store wrapper."""

from types import SimpleNamespace

import pytest
from meilisearch.errors import MeilisearchError

from repack_search.errors import BackendUnavailable, PersistenceFailure
from repack_search.storage import MeiliStore
from repack_search.storage.meili_store import INDEX_SETTINGS, LISTING_ATTRIBUTES

from conftest import make_indexed


class FakeIndex:
    """Records calls the store makes against a Meilisearch index."""

    def __init__(self, hits=None, error=None):
        self.hits = hits or []
        self.error = error
        self.settings = None
        self.document_calls = []
        self.search_calls = []

    def update_settings(self, settings):
        if self.error:
            raise self.error
        self.settings = settings
        return SimpleNamespace(task_uid=1)

    def update_documents(self, documents, primary_key=None):
        if self.error:
            raise self.error
        self.document_calls.append((documents, primary_key))
        return SimpleNamespace(task_uid=len(self.document_calls))

    def search(self, query, opt_params=None):
        if self.error:
            raise self.error
        self.search_calls.append((query, opt_params))
        return {"hits": self.hits, "query": query}

    def get_stats(self):
        if self.error:
            raise self.error
        return SimpleNamespace(number_of_documents=len(self.hits))


class FakeClient:
    def __init__(self, index):
        self._index = index
        self.index_names = []

    def index(self, name):
        self.index_names.append(name)
        return self._index


@pytest.fixture
def index():
    return FakeIndex()


@pytest.fixture
def meili(index):
    return MeiliStore(client=FakeClient(index), index_name="games_test")


class TestSetupIndex:
    def test_applies_settings(self, meili, index):
        meili.setup_index()

        assert index.settings == INDEX_SETTINGS
        assert index.settings["searchableAttributes"] == ["title"]
        assert index.settings["rankingRules"][:3] == ["words", "typo", "proximity"]
        assert index.settings["typoTolerance"]["minWordSizeForTypos"] == {"oneTypo": 5, "twoTypos": 9}

    def test_failure_raises_persistence_failure(self):
        meili = MeiliStore(client=FakeClient(FakeIndex(error=MeilisearchError("boom"))))
        with pytest.raises(PersistenceFailure):
            meili.setup_index()


class TestSaveBatch:
    def test_upserts_by_id(self, meili, index):
        listings = [make_indexed("Game A", id="a"), make_indexed("Game B", id="b")]

        assert meili.save_batch(listings) == 2
        assert len(index.document_calls) == 1
        documents, primary_key = index.document_calls[0]
        assert primary_key == "id"
        assert [d["id"] for d in documents] == ["a", "b"]
        assert set(documents[0]) == set(LISTING_ATTRIBUTES)

    def test_splits_into_batches(self, meili, index):
        listings = [make_indexed(f"Game {i}", id=str(i)) for i in range(5)]

        meili.save_batch(listings, batch_size=2)

        assert [len(docs) for docs, _ in index.document_calls] == [2, 2, 1]

    def test_failure_raises_persistence_failure(self):
        meili = MeiliStore(client=FakeClient(FakeIndex(error=MeilisearchError("boom"))))
        with pytest.raises(PersistenceFailure):
            meili.save_batch([make_indexed()])


class TestSearch:
    def test_queries_with_limit_and_attributes(self, meili, index):
        meili.search("elden")

        query, params = index.search_calls[0]
        assert query == "elden"
        assert params == {"limit": 50, "attributesToRetrieve": LISTING_ATTRIBUTES}
        assert "uris" not in params["attributesToRetrieve"]

    def test_returns_listings_in_index_order(self):
        hits = [
            make_indexed("Elden Ring", id="1").model_dump(),
            make_indexed("Elden Ring Nightreign", id="2").model_dump(),
        ]
        meili = MeiliStore(client=FakeClient(FakeIndex(hits=hits)))

        listings = meili.search("elden ring")

        assert [l.id for l in listings] == ["1", "2"]
        assert all("snippet" not in l.model_dump() for l in listings)

    def test_invalid_documents_are_skipped(self):
        hits = [
            {"id": "1", "title": "Broken", "source": "FitGirl", "access_url": "ftp://x"},
            make_indexed("Fine", id="2").model_dump(),
        ]
        meili = MeiliStore(client=FakeClient(FakeIndex(hits=hits)))

        assert [l.id for l in meili.search("x")] == ["2"]

    def test_failure_raises_backend_unavailable(self):
        meili = MeiliStore(client=FakeClient(FakeIndex(error=MeilisearchError("connection refused"))))
        with pytest.raises(BackendUnavailable):
            meili.search("elden")


class TestCount:
    def test_count(self):
        meili = MeiliStore(client=FakeClient(FakeIndex(hits=[{}, {}, {}])))
        assert meili.count() == 3


def test_uses_configured_index_name(index):
    client = FakeClient(index)
    MeiliStore(client=client, index_name="games_test")
    assert client.index_names == ["games_test"]
