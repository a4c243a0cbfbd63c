"""Tests for PgRosterRepository against in-memory SQLite."""
import pytest

from companion.domain.roster import RosterLink
from companion.infrastructure.repositories.pg_roster_repository import PgRosterRepository
from tests.conftest import add_champion_row


@pytest.fixture
def repo(session_factory):
    return PgRosterRepository(session_factory)


@pytest.fixture
def kael_id(session_factory):
    return add_champion_row(session_factory, "Kael")


class TestUpsert:
    def test_insert(self, repo, kael_id):
        repo.upsert(RosterLink(kael_id, level=30, ascension_level=2, rarity="Rare"))
        links = repo.list_links()
        assert len(links) == 1
        assert links[0].level == 30
        assert links[0].ascension_level == 2
        assert links[0].record_id is not None
        assert links[0].last_modified is not None

    def test_upsert_keyed_by_catalog_id(self, repo, kael_id):
        repo.upsert(RosterLink(kael_id, level=10))
        repo.upsert(RosterLink(kael_id, level=55))
        links = repo.list_links()
        assert len(links) == 1
        assert links[0].level == 55


class TestUpdate:
    def test_targeted_update(self, repo, kael_id):
        repo.upsert(RosterLink(kael_id, level=10, soul_level=1))
        assert repo.update(kael_id, {"soul_level": 3, "unknown": "x"}) is True
        link = repo.list_links()[0]
        assert link.soul_level == 3
        assert link.level == 10

    def test_update_untracked(self, repo):
        assert repo.update("missing", {"level": 5}) is False


class TestDelete:
    def test_delete(self, repo, kael_id):
        repo.upsert(RosterLink(kael_id))
        assert repo.delete(kael_id) is True
        assert repo.list_links() == []

    def test_delete_untracked(self, repo):
        assert repo.delete("missing") is False


class TestListLinks:
    def test_most_recent_first(self, repo, session_factory, kael_id):
        athel_id = add_champion_row(session_factory, "Athel", faction="High Elves")
        repo.upsert(RosterLink(kael_id))
        repo.upsert(RosterLink(athel_id))
        repo.update(kael_id, {"level": 20})
        assert [link.catalog_id for link in repo.list_links()] == [kael_id, athel_id]
