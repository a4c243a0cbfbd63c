"""Entry point. Wires the store, catalog and roster into routes.

Persistence strategy:
  - Local state (roster, resources, tasks, milestones, settings) is always
    snapshotted to COMPANION_DATA_DIR/state.json.
  - If ROSTER_DATABASE_URL is set -> remote roster (PostgreSQL / Supabase)
    with catalog search. Otherwise the remote roster routes answer 503.
"""
import logging
import os

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)
load_dotenv(os.path.join(PROJECT_DIR, ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from companion.api.routes.store_routes import router as store_router, init_store_routes
from companion.api.routes.catalog_routes import router as catalog_router, init_catalog_routes
from companion.api.routes.roster_routes import router as roster_router, init_roster_routes
from companion.api.routes.data_routes import router as data_router, init_data_routes
from companion.application.color_scheme import ColorSchemeSignal, bind_dark_mode
from companion.application.sample_data import BUNDLED_CATALOG_PATH
from companion.application.state_store import create_store
from companion.infrastructure.catalog_fetcher import CatalogFetcher
from companion.infrastructure.repositories.snapshot_repository import SnapshotRepository

log = logging.getLogger("companion.startup")

DATA_DIR = os.environ.get("COMPANION_DATA_DIR", os.path.join(BASE_DIR, "data"))
ROSTER_DATABASE_URL = os.environ.get("ROSTER_DATABASE_URL", "")

app = FastAPI(
    title="RSL Companion",
    description="Champion roster, resources, goals and catalog for Raid: Shadow Legends.",
    version="1.0.0",
)

# CORS configuration: read allowed origins from env (comma-separated).
_allowed = os.environ.get("ALLOWED_ORIGINS", "").strip()
if _allowed:
    allow_origins = [o.strip() for o in _allowed.split(",") if o.strip()]
else:
    allow_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Local store wiring
# ---------------------------------------------------------------------------

snapshot_repo = SnapshotRepository(data_path=os.path.join(DATA_DIR, "state.json"))
store = create_store(repository=snapshot_repo)
color_scheme = ColorSchemeSignal(prefers_dark=store.dark_mode)
bind_dark_mode(color_scheme, store)
fetcher = CatalogFetcher()
print(f"[COMPANION] Local state -> {snapshot_repo.data_path}")

# ---------------------------------------------------------------------------
# Remote roster wiring
# ---------------------------------------------------------------------------

roster_adapter = None
catalog_repo = None
catalog_search = None

if ROSTER_DATABASE_URL:
    from companion.application.catalog_search import CatalogSearch
    from companion.application.roster_sync import RosterSyncAdapter
    from companion.infrastructure.database.connection import (
        init_engine, create_tables, get_session_factory,
    )
    from companion.infrastructure.database.seed import seed_catalog
    from companion.infrastructure.repositories.pg_catalog_repository import PgCatalogRepository
    from companion.infrastructure.repositories.pg_roster_repository import PgRosterRepository

    if init_engine():
        create_tables()
        _sf = get_session_factory()

        # Seed the catalog table from the bundled snapshot (idempotent, non-fatal)
        try:
            seeded = seed_catalog(_sf, BUNDLED_CATALOG_PATH)
            if seeded:
                print(f"[COMPANION] Seeded {seeded} champions into the catalog table.")
        except Exception as _seed_exc:
            log.warning("Catalog seed skipped: %s: %s", type(_seed_exc).__name__, _seed_exc)

        catalog_repo = PgCatalogRepository(_sf)
        roster_adapter = RosterSyncAdapter(PgRosterRepository(_sf), catalog_repo)
        catalog_search = CatalogSearch(catalog_repo)
        _persistence = "remote"
    else:
        _persistence = "local"
else:
    print("[COMPANION] ROSTER_DATABASE_URL not set -- remote roster disabled.")
    _persistence = "local"

# Wire services into route modules
init_store_routes(store, color_scheme)
init_catalog_routes(store, fetcher, search=catalog_search)
init_roster_routes(roster_adapter, catalog_repo)
init_data_routes(store)

# Register API routes
app.include_router(store_router)
app.include_router(catalog_router)
app.include_router(roster_router)
app.include_router(data_router)


@app.get("/health")
def health():
    result = {
        "status": "online",
        "system": "RSL Companion v1.0.0",
        "persistence": _persistence,
        "characters": len(store.characters),
        "catalog": len(store.catalog),
        "catalog_fetched_at": store.catalog_fetched_at,
    }
    if roster_adapter is None:
        result["roster"] = "disabled"
    else:
        from companion.infrastructure.database.connection import check_health
        try:
            result["roster"] = "connected" if check_health() else "disconnected"
        except Exception as exc:
            result["roster"] = f"ERROR: {type(exc).__name__}"
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "companion.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
        reload=True,
        reload_excludes=["*.json", "__pycache__/*", "data/*"],
    )
