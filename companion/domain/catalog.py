"""Catalog entry -- reference data for a champion that exists in the game."""

UNKNOWN_TYPE = "Unknown"


class CatalogEntry:
    """
    Canonical catalog record. Immutable after creation.
    `name`, `faction` and `rarity` are never empty.
    """

    def __init__(
        self,
        name: str,
        faction: str,
        rarity: str,
        type: str | None = None,
        catalog_id: str | None = None,
        affinity: str | None = None,
        image_url: str | None = None,
    ):
        for label, value in (("name", name), ("faction", faction), ("rarity", rarity)):
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Catalog entry {label} cannot be empty")

        self._name = name.strip()
        self._faction = faction.strip()
        self._rarity = rarity.strip()
        self._type = (type or "").strip() or UNKNOWN_TYPE
        self._catalog_id = catalog_id
        self._affinity = affinity
        self._image_url = image_url

    @property
    def name(self) -> str:
        return self._name

    @property
    def faction(self) -> str:
        return self._faction

    @property
    def rarity(self) -> str:
        return self._rarity

    @property
    def type(self) -> str:
        return self._type

    @property
    def catalog_id(self) -> str | None:
        return self._catalog_id

    @property
    def affinity(self) -> str | None:
        return self._affinity

    @property
    def image_url(self) -> str | None:
        return self._image_url

    def __eq__(self, other) -> bool:
        if not isinstance(other, CatalogEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._name, self._faction, self._rarity, self._type, self._catalog_id))

    def __repr__(self) -> str:
        return f"CatalogEntry(name={self._name!r}, faction={self._faction!r}, rarity={self._rarity!r})"

    def to_dict(self) -> dict:
        """Canonical summary; remote-only fields appear only when known."""
        d = {
            "name": self._name,
            "faction": self._faction,
            "type": self._type,
            "rarity": self._rarity,
        }
        if self._catalog_id is not None:
            d["id"] = self._catalog_id
        if self._affinity is not None:
            d["affinity"] = self._affinity
        if self._image_url is not None:
            d["image_url"] = self._image_url
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogEntry":
        return cls(
            name=data["name"],
            faction=data["faction"],
            rarity=data["rarity"],
            type=data.get("type"),
            catalog_id=data.get("id"),
            affinity=data.get("affinity"),
            image_url=data.get("image_url"),
        )
