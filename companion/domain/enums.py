"""Enums and value objects used across the domain."""
from enum import Enum


class Rarity(str, Enum):
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"
    MYTHICAL = "Mythical"

    @staticmethod
    def progression_order() -> list:
        return [
            Rarity.COMMON,
            Rarity.UNCOMMON,
            Rarity.RARE,
            Rarity.EPIC,
            Rarity.LEGENDARY,
            Rarity.MYTHICAL,
        ]

    def rank_index(self) -> int:
        return Rarity.progression_order().index(self)

    @staticmethod
    def parse(value) -> "Rarity | None":
        """Case-insensitive lookup. Returns None for unknown tiers."""
        if isinstance(value, Rarity):
            return value
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for rarity in Rarity:
            if rarity.value.lower() == wanted:
                return rarity
        return None


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"

    @staticmethod
    def lanes() -> list:
        return [TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETE]


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class CatalogSource(str, Enum):
    PRIMARY = "primary"
    MIRROR = "mirror"
    FALLBACK = "fallback"
