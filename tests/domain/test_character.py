"""Unit tests for the Character entity."""
import pytest

from companion.domain.character import Character
from tests.conftest import make_character


class TestCharacterCreation:
    def test_fields(self, character):
        assert character.name == "Arbiter"
        assert character.faction == "High Elves"
        assert character.rarity == "Legendary"
        assert character.level == 50

    def test_id_is_generated(self, character):
        assert len(character.id) == 8

    def test_explicit_id_kept(self):
        assert make_character(character_id="champ-9").id == "champ-9"

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            Character(name="   ")

    def test_name_is_trimmed(self):
        assert make_character(name="  Kael ").name == "Kael"

    def test_level_clamped(self):
        assert make_character(level=9999).level == 60
        assert make_character(level=0).level == 1

    def test_non_numeric_level_defaults_to_one(self):
        assert make_character(level="abc").level == 1

    def test_rarity_normalized(self):
        assert make_character(rarity="epic").rarity == "Epic"

    def test_unknown_rarity_kept_as_text(self):
        assert make_character(rarity=" Ultra ").rarity == "Ultra"

    def test_star_fields_clamped(self):
        c = make_character(rank=8, ascension_level=-2, soul_level="3")
        assert c.rank == 6
        assert c.ascension_level == 0
        assert c.soul_level == 3


class TestCharacterHasName:
    def test_case_insensitive(self, character):
        assert character.has_name("arbiter")
        assert character.has_name(" ARBITER ")
        assert not character.has_name("Kael")


class TestCharacterApplyUpdate:
    def test_level_clamped(self, character):
        character.apply_update({"level": 9999})
        assert character.level == 60

    def test_non_numeric_level_leaves_value(self, character):
        character.apply_update({"level": "abc"})
        assert character.level == 50

    def test_id_is_ignored(self, character):
        original = character.id
        character.apply_update({"id": "HIJACKED"})
        assert character.id == original

    def test_empty_name_ignored(self, character):
        character.apply_update({"name": "  "})
        assert character.name == "Arbiter"

    def test_star_none_clears(self):
        c = make_character(rank=5)
        c.apply_update({"rank": None})
        assert c.rank is None

    def test_text_fields(self, character):
        character.apply_update({"notes": "Speed lead", "gear_set": "Speed / Perception"})
        assert character.notes == "Speed lead"
        assert character.gear_set == "Speed / Perception"

    def test_unknown_keys_ignored(self, character):
        character.apply_update({"power": 9000})
        assert "power" not in character.to_dict()


class TestCharacterSerialization:
    def test_round_trip(self):
        c = make_character(rank=6, notes="Arena")
        restored = Character.from_dict(c.to_dict())
        assert restored.to_dict() == c.to_dict()

    def test_from_dict_accepts_camel_case(self):
        c = Character.from_dict({
            "id": "x1", "name": "Kael", "role": "Attack",
            "ascensionLevel": 2, "soulLevel": 1, "gearSet": "Lifesteal",
        })
        assert c.type == "Attack"
        assert c.ascension_level == 2
        assert c.soul_level == 1
        assert c.gear_set == "Lifesteal"

    def test_from_dict_requires_name(self):
        with pytest.raises(KeyError):
            Character.from_dict({"faction": "Orcs"})
