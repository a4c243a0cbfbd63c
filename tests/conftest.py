"""
Shared pytest fixtures for the companion test suite.

Strategy:
- Domain tests: pure in-memory, zero I/O.
- Store / API tests: a fresh AppStore snapshotting into tmp_path.
- Remote roster tests: SQLAlchemy on an in-memory SQLite database.
  ROSTER_DATABASE_URL is cleared so nothing touches a real database.
"""
import os

import pytest

# ---------------------------------------------------------------------------
# Ensure no real database or network endpoint is touched during the test run
# ---------------------------------------------------------------------------
os.environ.pop("ROSTER_DATABASE_URL", None)

import requests
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from companion.application.state_store import create_store
from companion.domain.catalog import CatalogEntry
from companion.domain.character import Character
from companion.domain.milestone import Milestone
from companion.domain.task import Task
from companion.infrastructure.database.models import Base, ChampionModel
from companion.infrastructure.repositories.snapshot_repository import SnapshotRepository


# ---------------------------------------------------------------------------
# Domain helpers (reusable across many test modules)
# ---------------------------------------------------------------------------

def make_character(name="Arbiter", **kwargs) -> Character:
    defaults = {"faction": "High Elves", "type": "Support", "rarity": "Legendary", "level": 50}
    defaults.update(kwargs)
    return Character(name=name, **defaults)


def make_task(title="Farm Dragon 20", **kwargs) -> Task:
    return Task(title=title, **kwargs)


def make_milestone(name="Unlock Arbiter", progress=0, **kwargs) -> Milestone:
    return Milestone(name=name, progress=progress, **kwargs)


def make_catalog_entry(name="Kael", faction="Dark Elves", rarity="Rare", **kwargs) -> CatalogEntry:
    kwargs.setdefault("type", "Attack")
    return CatalogEntry(name=name, faction=faction, rarity=rarity, **kwargs)


def add_champion_row(session_factory, name, faction="Dark Elves", rarity="Rare", type="Attack") -> str:
    """Insert one catalog row and return its id."""
    with session_factory() as session:
        row = ChampionModel(name=name, faction=faction, rarity=rarity, type=type)
        session.add(row)
        session.commit()
        return row.id


# ---------------------------------------------------------------------------
# Fake HTTP layer for the catalog fetcher
# ---------------------------------------------------------------------------

class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Maps URLs to FakeResponse objects or exceptions. Records every call."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, timeout=None, headers=None):
        self.calls.append(url)
        outcome = self.routes.get(url)
        if outcome is None:
            raise requests.ConnectionError(f"No route to {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def character():
    return make_character()


@pytest.fixture
def snapshot_repo(tmp_path):
    return SnapshotRepository(data_path=str(tmp_path / "state.json"))


@pytest.fixture
def store(snapshot_repo):
    """Fresh store seeded with the sample dataset."""
    return create_store(repository=snapshot_repo)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def session_factory():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    engine.dispose()


# ---------------------------------------------------------------------------
# FastAPI TestClient wired with a tmp store (remote roster disabled)
# ---------------------------------------------------------------------------

@pytest.fixture
def test_app(store):
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware

    from companion.api.routes.store_routes import router as store_router, init_store_routes
    from companion.api.routes.catalog_routes import router as catalog_router, init_catalog_routes
    from companion.api.routes.roster_routes import router as roster_router, init_roster_routes
    from companion.api.routes.data_routes import router as data_router, init_data_routes
    from companion.application.color_scheme import ColorSchemeSignal, bind_dark_mode
    from companion.infrastructure.catalog_fetcher import CatalogFetcher

    signal = ColorSchemeSignal()
    bind_dark_mode(signal, store)
    fetcher = CatalogFetcher(
        primary_url="https://catalog.test/champions",
        mirror_url="https://mirror.test/champions",
        session=FakeSession(),
    )

    app = FastAPI()
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    init_store_routes(store, signal)
    init_catalog_routes(store, fetcher)
    init_roster_routes(None, None)
    init_data_routes(store)

    app.include_router(store_router)
    app.include_router(catalog_router)
    app.include_router(roster_router)
    app.include_router(data_router)
    return app


@pytest.fixture
def client(test_app):
    from fastapi.testclient import TestClient
    return TestClient(test_app)
