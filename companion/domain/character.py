"""
COMPANION - Domain Layer: Character Entity.

One champion in the player's local roster. Numeric progression fields are
always kept inside their ranges; the name is never empty.
"""
from companion.domain.enums import Rarity
from companion.domain.identifiers import generate_id
from companion.domain.invariant import coerce_int, clamp, sanitize_level, MIN_LEVEL, MAX_LEVEL, MIN_STARS, MAX_STARS

STAR_FIELDS = ("rank", "ascension_level", "soul_level")
TEXT_FIELDS = ("faction", "type", "gear_set", "notes")


def _clean_text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _clean_rarity(value) -> str | None:
    rarity = Rarity.parse(value)
    if rarity is not None:
        return rarity.value
    return _clean_text(value)


def _optional_stars(value) -> int | None:
    number = coerce_int(value)
    if number is None:
        return None
    return clamp(number, MIN_STARS, MAX_STARS)


class Character:
    """Roster entry. `id` is assigned once and never changes."""

    def __init__(
        self,
        name: str,
        faction: str | None = None,
        type: str | None = None,
        rarity: str | None = None,
        level=MIN_LEVEL,
        rank=None,
        ascension_level=None,
        soul_level=None,
        gear_set: str | None = None,
        notes: str | None = None,
        character_id: str | None = None,
    ):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Character name cannot be empty")

        self._id = character_id or generate_id()
        self._name = name.strip()
        self._faction = _clean_text(faction)
        self._type = _clean_text(type)
        self._rarity = _clean_rarity(rarity)
        self._level = sanitize_level(level)
        self._rank = _optional_stars(rank)
        self._ascension_level = _optional_stars(ascension_level)
        self._soul_level = _optional_stars(soul_level)
        self._gear_set = _clean_text(gear_set)
        self._notes = _clean_text(notes)

    # --- Properties (Read-Only) ---

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def faction(self) -> str | None:
        return self._faction

    @property
    def type(self) -> str | None:
        return self._type

    @property
    def rarity(self) -> str | None:
        return self._rarity

    @property
    def level(self) -> int:
        return self._level

    @property
    def rank(self) -> int | None:
        return self._rank

    @property
    def ascension_level(self) -> int | None:
        return self._ascension_level

    @property
    def soul_level(self) -> int | None:
        return self._soul_level

    @property
    def gear_set(self) -> str | None:
        return self._gear_set

    @property
    def notes(self) -> str | None:
        return self._notes

    # --- Domain Logic ---

    def has_name(self, name: str) -> bool:
        """Case-insensitive name match, the roster uniqueness rule."""
        return self._name.lower() == name.strip().lower()

    def apply_update(self, fields: dict) -> None:
        """
        Merge a partial update. Unknown keys and `id` are ignored.
        A non-numeric level or star value leaves the current value untouched;
        an empty name is ignored.
        """
        if "name" in fields:
            new_name = _clean_text(fields["name"])
            if new_name:
                self._name = new_name

        if "level" in fields:
            number = coerce_int(fields["level"])
            if number is not None:
                self._level = clamp(number, MIN_LEVEL, MAX_LEVEL)

        for key in STAR_FIELDS:
            if key in fields:
                raw = fields[key]
                if raw is None:
                    setattr(self, f"_{key}", None)
                    continue
                number = _optional_stars(raw)
                if number is not None:
                    setattr(self, f"_{key}", number)

        for key in TEXT_FIELDS:
            if key in fields:
                setattr(self, f"_{key}", _clean_text(fields[key]))

        if "rarity" in fields:
            self._rarity = _clean_rarity(fields["rarity"])

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "faction": self._faction,
            "type": self._type,
            "rarity": self._rarity,
            "level": self._level,
            "rank": self._rank,
            "ascension_level": self._ascension_level,
            "soul_level": self._soul_level,
            "gear_set": self._gear_set,
            "notes": self._notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Character":
        return cls(
            name=data["name"],
            faction=data.get("faction"),
            type=data.get("type", data.get("role")),
            rarity=data.get("rarity"),
            level=data.get("level", MIN_LEVEL),
            rank=data.get("rank"),
            ascension_level=data.get("ascension_level", data.get("ascensionLevel")),
            soul_level=data.get("soul_level", data.get("soulLevel")),
            gear_set=data.get("gear_set", data.get("gearSet")),
            notes=data.get("notes"),
            character_id=data.get("id"),
        )
