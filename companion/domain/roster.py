"""Remote roster -- link records and their read-time join with the catalog."""
from datetime import datetime, timezone
from typing import Dict, Iterable, List

from companion.domain.catalog import CatalogEntry
from companion.domain.invariant import sanitize_level, sanitize_stars

UNKNOWN_RARITY = "Unknown"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RosterLink:
    """
    One tracked champion in the remote roster table.
    Keyed by `catalog_id`: a catalog entry is tracked at most once.
    """

    def __init__(
        self,
        catalog_id: str,
        level=1,
        ascension_level=0,
        soul_level=0,
        rarity: str | None = None,
        record_id: str | None = None,
        updated_at: str | None = None,
        timestamp: str | None = None,
        created_at: str | None = None,
    ):
        if not catalog_id:
            raise ValueError("Roster link needs a catalog reference")

        self._catalog_id = str(catalog_id)
        self._record_id = record_id
        self._level = sanitize_level(level)
        self._ascension_level = sanitize_stars(ascension_level)
        self._soul_level = sanitize_stars(soul_level)
        self._rarity = rarity
        self._updated_at = updated_at
        self._timestamp = timestamp
        self._created_at = created_at

    @property
    def catalog_id(self) -> str:
        return self._catalog_id

    @property
    def record_id(self) -> str | None:
        return self._record_id

    @property
    def level(self) -> int:
        return self._level

    @property
    def ascension_level(self) -> int:
        return self._ascension_level

    @property
    def soul_level(self) -> int:
        return self._soul_level

    @property
    def rarity(self) -> str | None:
        return self._rarity

    @property
    def last_modified(self) -> str | None:
        return self._updated_at or self._timestamp or self._created_at

    def to_dict(self) -> dict:
        return {
            "record_id": self._record_id,
            "catalog_id": self._catalog_id,
            "level": self._level,
            "ascension_level": self._ascension_level,
            "soul_level": self._soul_level,
            "rarity": self._rarity,
            "updated_at": self.last_modified,
        }


class RosterEntry:
    """A roster link joined with its catalog entry. Read-only view."""

    def __init__(self, link: RosterLink, champion: CatalogEntry):
        self._link = link
        self._champion = champion

    @property
    def link(self) -> RosterLink:
        return self._link

    @property
    def champion(self) -> CatalogEntry:
        return self._champion

    @property
    def name(self) -> str:
        return self._champion.name

    @property
    def catalog_id(self) -> str:
        return self._link.catalog_id

    @property
    def rarity(self) -> str:
        """Catalog rarity, then the rarity stored on the link, then "Unknown"."""
        if self._champion.rarity != UNKNOWN_RARITY:
            return self._champion.rarity
        return self._link.rarity or UNKNOWN_RARITY

    def to_dict(self) -> dict:
        d = self._champion.to_dict()
        d.update(self._link.to_dict())
        d["rarity"] = self.rarity
        return d


def join_roster(links: Iterable[RosterLink], catalog: Dict[str, CatalogEntry]) -> List[RosterEntry]:
    """
    Join links against catalog entries keyed by id. Links whose catalog
    entry is missing are dropped. Sorted by champion name.
    """
    joined = [
        RosterEntry(link, catalog[link.catalog_id])
        for link in links
        if link.catalog_id in catalog
    ]
    joined.sort(key=lambda entry: (entry.name.casefold(), entry.name))
    return joined
