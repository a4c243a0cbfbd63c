"""PostgreSQL-backed roster links (read-write)."""
from datetime import datetime, timezone
from typing import List

from companion.domain.roster import RosterLink
from companion.infrastructure.database.models import UserChampionModel

UPDATABLE_FIELDS = ("level", "ascension_level", "soul_level", "rarity")


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class PgRosterRepository:
    """Roster persistence via PostgreSQL (Supabase). Keyed by catalog id."""

    def __init__(self, session_factory):
        self._sf = session_factory

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def upsert(self, link: RosterLink) -> None:
        """Insert, or overwrite the row already tracking this catalog entry."""
        now = datetime.now(timezone.utc)
        with self._sf() as session:
            row = (
                session.query(UserChampionModel)
                .filter(UserChampionModel.champion_id == link.catalog_id)
                .one_or_none()
            )
            if row is None:
                row = UserChampionModel(champion_id=link.catalog_id, created_at=now)
                session.add(row)
            row.level = link.level
            row.ascension_level = link.ascension_level
            row.soul_level = link.soul_level
            row.rarity = link.rarity
            row.timestamp = now
            row.updated_at = now
            session.commit()

    def update(self, catalog_id: str, fields: dict) -> bool:
        """Targeted update. Returns False when the champion is not tracked."""
        now = datetime.now(timezone.utc)
        with self._sf() as session:
            row = (
                session.query(UserChampionModel)
                .filter(UserChampionModel.champion_id == catalog_id)
                .one_or_none()
            )
            if row is None:
                return False
            for key in UPDATABLE_FIELDS:
                if key in fields:
                    setattr(row, key, fields[key])
            row.timestamp = now
            row.updated_at = now
            session.commit()
            return True

    def delete(self, catalog_id: str) -> bool:
        with self._sf() as session:
            deleted = (
                session.query(UserChampionModel)
                .filter(UserChampionModel.champion_id == catalog_id)
                .delete()
            )
            session.commit()
            return deleted > 0

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_links(self) -> List[RosterLink]:
        """All roster rows, most recently modified first."""
        with self._sf() as session:
            rows = (
                session.query(UserChampionModel)
                .order_by(UserChampionModel.updated_at.desc())
                .all()
            )
            return [self._to_domain(r) for r in rows]

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _to_domain(row: UserChampionModel) -> RosterLink:
        return RosterLink(
            catalog_id=row.champion_id,
            level=row.level if row.level is not None else 1,
            ascension_level=row.ascension_level if row.ascension_level is not None else 0,
            soul_level=row.soul_level if row.soul_level is not None else 0,
            rarity=row.rarity,
            record_id=row.id,
            updated_at=_iso(row.updated_at),
            timestamp=_iso(row.timestamp),
            created_at=_iso(row.created_at),
        )
