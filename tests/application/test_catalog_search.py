"""Tests for the debounced champion search."""
import threading
import time

from companion.application.catalog_search import SEARCH_ERROR, CatalogSearch
from tests.conftest import make_catalog_entry


class RecordingCatalog:
    def __init__(self, entries=None, fail=False):
        self.entries = entries or []
        self.fail = fail
        self.queries = []

    def search_by_name(self, query, limit=10):
        self.queries.append(query)
        if self.fail:
            raise ConnectionError("catalog offline")
        return [e for e in self.entries if query.lower() in e.name.lower()][:limit]


class TestSearchNow:
    def test_matches(self):
        repo = RecordingCatalog([make_catalog_entry(name="Kael"), make_catalog_entry(name="Athel")])
        result = CatalogSearch(repo).search_now("ka")
        assert [d["name"] for d in result["data"]] == ["Kael"]
        assert result["error"] is None

    def test_blank_query_skips_repo(self):
        repo = RecordingCatalog()
        assert CatalogSearch(repo).search_now("   ")["data"] == []
        assert repo.queries == []

    def test_failure_becomes_message(self):
        result = CatalogSearch(RecordingCatalog(fail=True)).search_now("ka")
        assert result == {"data": [], "loading": False, "error": SEARCH_ERROR}


class TestDebounce:
    def test_only_last_query_in_burst_runs(self):
        repo = RecordingCatalog([make_catalog_entry(name="Kael")])
        done = threading.Event()
        received = []

        def on_results(results):
            received.append(results)
            done.set()

        search = CatalogSearch(repo, on_results=on_results, delay=0.05)
        search.update_query("k")
        search.update_query("ka")
        search.update_query("kae")

        assert done.wait(timeout=2)
        assert repo.queries == ["kae"]
        assert received[-1]["data"][0]["name"] == "Kael"
        assert search.results["loading"] is False

    def test_pending_search_marks_loading(self):
        search = CatalogSearch(RecordingCatalog(), delay=5)
        search.update_query("kael")
        assert search.results["loading"] is True
        search.cancel()
        assert search.results["loading"] is False

    def test_cancel_prevents_search(self):
        repo = RecordingCatalog()
        search = CatalogSearch(repo, delay=0.05)
        search.update_query("kael")
        search.cancel()
        time.sleep(0.15)
        assert repo.queries == []

    def test_blank_query_clears_immediately(self):
        received = []
        search = CatalogSearch(RecordingCatalog(), on_results=received.append, delay=5)
        search.update_query("kael")
        search.update_query("")
        assert received == [{"data": [], "loading": False, "error": None}]
