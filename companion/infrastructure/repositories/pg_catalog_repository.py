"""PostgreSQL-backed champion catalog (read-only)."""
import logging
from typing import Dict, Iterable, List

from companion.domain.catalog import CatalogEntry
from companion.domain.roster import UNKNOWN_RARITY
from companion.infrastructure.database.models import ChampionModel

log = logging.getLogger("companion.catalog")

SEARCH_LIMIT = 10
UNKNOWN_FACTION = "Unknown"


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PgCatalogRepository:
    """Champion catalog lookups via PostgreSQL (Supabase)."""

    def __init__(self, session_factory):
        self._sf = session_factory

    def get_by_id(self, catalog_id: str) -> CatalogEntry | None:
        with self._sf() as session:
            row = session.get(ChampionModel, catalog_id)
            return self._to_domain(row) if row else None

    def get_by_ids(self, catalog_ids: Iterable[str]) -> Dict[str, CatalogEntry]:
        """One batched lookup for an identifier list. Unknown ids are absent."""
        ids = sorted({str(i) for i in catalog_ids if i})
        if not ids:
            return {}
        with self._sf() as session:
            rows = session.query(ChampionModel).filter(ChampionModel.id.in_(ids)).all()
            entries = (self._to_domain(r) for r in rows)
            return {e.catalog_id: e for e in entries if e is not None}

    def search_by_name(self, query: str, limit: int = SEARCH_LIMIT) -> List[CatalogEntry]:
        """Case-insensitive substring search on the champion name."""
        term = (query or "").strip()
        if not term:
            return []
        with self._sf() as session:
            rows = (
                session.query(ChampionModel)
                .filter(ChampionModel.name.ilike(f"%{_escape_like(term)}%", escape="\\"))
                .order_by(ChampionModel.name)
                .limit(limit)
                .all()
            )
            entries = (self._to_domain(r) for r in rows)
            return [e for e in entries if e is not None]

    def count(self) -> int:
        with self._sf() as session:
            return session.query(ChampionModel).count()

    @staticmethod
    def _to_domain(row: ChampionModel) -> CatalogEntry | None:
        """Blank faction or rarity becomes "Unknown"; a row without a name is skipped."""
        if not (row.name or "").strip():
            log.warning("Skipping catalog row %s without a name", row.id)
            return None
        return CatalogEntry(
            name=row.name,
            faction=(row.faction or "").strip() or UNKNOWN_FACTION,
            rarity=(row.rarity or "").strip() or UNKNOWN_RARITY,
            type=row.type,
            catalog_id=row.id,
            affinity=row.affinity,
            image_url=row.image_url,
        )
