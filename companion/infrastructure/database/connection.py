"""Database engine and session factory for the remote roster store.

Environment variables:
  ROSTER_DATABASE_URL -- PostgreSQL (Supabase / Neon) connection string.
                         Any SQLAlchemy URL works; sqlite is used in tests.
"""
import os

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

_engine = None
_SessionLocal = None


def _resolve_database_url() -> str:
    """ROSTER_DATABASE_URL without surrounding quotes, with the `postgresql://` scheme."""
    url = os.environ.get("ROSTER_DATABASE_URL", "").strip().strip("'\"").strip()
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


def _roster_host(url: str) -> str:
    if "@" in url:
        return url.rsplit("@", 1)[1].split("?", 1)[0]
    return url.split("://", 1)[0] + "://<local>"


def init_engine(url: str | None = None) -> bool:
    """Initialise the engine. Returns False when no URL is configured."""
    global _engine, _SessionLocal

    url = url or _resolve_database_url()
    if not url:
        print("[COMPANION] ROSTER_DATABASE_URL is empty -- remote roster disabled.")
        return False

    print(f"[COMPANION] Roster database -> {_roster_host(url)}")
    if url.startswith("sqlite"):
        _engine = create_engine(url, connect_args={"check_same_thread": False})
    else:
        _engine = create_engine(url, pool_size=3, max_overflow=2, pool_recycle=900, pool_pre_ping=True)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)
    return True


def get_engine():
    return _engine


def get_session_factory():
    """Return the sessionmaker. Raises RuntimeError before `init_engine`."""
    if _SessionLocal is None:
        raise RuntimeError("Roster database not initialised. Call init_engine() first.")
    return _SessionLocal


def create_tables(engine=None) -> None:
    """Create the catalog and roster tables if they are missing."""
    from companion.infrastructure.database.models import Base

    engine = engine or _engine
    if engine is None:
        return
    try:
        Base.metadata.create_all(bind=engine)
        print("[COMPANION] Roster tables ready.")
    except Exception as exc:
        print(f"[COMPANION] WARNING: roster tables unavailable: {exc}")


def check_health() -> bool:
    """True when `SELECT 1` succeeds on the roster engine."""
    if _engine is None:
        return False
    try:
        with _engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
