"""Tests for PgCatalogRepository against in-memory SQLite."""
import pytest

from companion.infrastructure.repositories.pg_catalog_repository import PgCatalogRepository
from tests.conftest import add_champion_row


@pytest.fixture
def repo(session_factory):
    return PgCatalogRepository(session_factory)


@pytest.fixture
def ids(session_factory):
    return {
        name: add_champion_row(session_factory, name)
        for name in ("Kael", "Kaiden", "Athel", "Sir_Nicholas", "Skullcrusher")
    }


class TestLookup:
    def test_get_by_id(self, repo, ids):
        entry = repo.get_by_id(ids["Kael"])
        assert entry.name == "Kael"
        assert entry.catalog_id == ids["Kael"]

    def test_get_by_id_missing(self, repo):
        assert repo.get_by_id("nope") is None

    def test_get_by_ids_batched(self, repo, ids):
        found = repo.get_by_ids([ids["Kael"], ids["Athel"], "nope"])
        assert set(found) == {ids["Kael"], ids["Athel"]}

    def test_get_by_ids_empty(self, repo):
        assert repo.get_by_ids([]) == {}

    def test_count(self, repo, ids):
        assert repo.count() == 5


class TestSearch:
    def test_case_insensitive_substring(self, repo, ids):
        assert [e.name for e in repo.search_by_name("KA")] == ["Kael", "Kaiden"]

    def test_limit(self, repo, ids):
        assert len(repo.search_by_name("a", limit=2)) == 2

    def test_blank_query(self, repo, ids):
        assert repo.search_by_name("  ") == []

    def test_wildcards_are_literal(self, repo, ids):
        assert repo.search_by_name("K_el") == []
        assert [e.name for e in repo.search_by_name("Sir_")] == ["Sir_Nicholas"]
        assert repo.search_by_name("%") == []


class TestIncompleteRows:
    def test_blank_rarity_and_faction_default_to_unknown(self, repo, session_factory):
        odd_id = add_champion_row(session_factory, "Odd", faction="", rarity="  ")
        entry = repo.get_by_id(odd_id)
        assert (entry.rarity, entry.faction) == ("Unknown", "Unknown")
        assert [e.name for e in repo.search_by_name("od")] == ["Odd"]

    def test_nameless_row_skipped(self, repo, session_factory, ids):
        blank_id = add_champion_row(session_factory, "")
        found = repo.get_by_ids([blank_id, ids["Kael"]])
        assert list(found) == [ids["Kael"]]
        assert repo.get_by_id(blank_id) is None
