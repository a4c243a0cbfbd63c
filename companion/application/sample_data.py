"""Built-in sample dataset.

Doubles as a demo for first-time players and as the target of a full reset.
Every function returns fresh objects so callers may mutate them freely.
"""
import json
import os
from typing import Dict, List

from companion.application.catalog_normalizer import normalize_catalog
from companion.domain.catalog import CatalogEntry
from companion.domain.character import Character
from companion.domain.invariant import MAX_LEVEL
from companion.domain.milestone import Milestone
from companion.domain.task import Task

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
BUNDLED_CATALOG_PATH = os.path.join(BASE_DIR, "data", "catalog_fallback.json")

RESOURCE_KINDS = (
    "energy",
    "gems",
    "silver",
    "ancient_shards",
    "void_shards",
    "sacred_shards",
    "arcane_potions",
)

GEAR_KINDS = (
    "speed_boots",
    "perception_sets",
    "lifesteal_sets",
    "savage_sets",
    "resistance_accessories",
)


def sample_characters() -> List[Character]:
    return [
        Character("Arbiter", "High Elves", "Support", "Legendary", 60, character_id="champ-1"),
        Character("Kael", "Dark Elves", "Attack", "Rare", 60, character_id="champ-2"),
        Character("Bad-el-Kazar", "Undead Hordes", "Support", "Legendary", 60, character_id="champ-3"),
    ]


def sample_gear() -> Dict[str, int]:
    return {
        "speed_boots": 8,
        "perception_sets": 4,
        "lifesteal_sets": 3,
        "savage_sets": 2,
        "resistance_accessories": 6,
    }


def sample_resources() -> Dict[str, int]:
    return {
        "energy": 325,
        "gems": 1400,
        "silver": 2800000,
        "ancient_shards": 24,
        "void_shards": 4,
        "sacred_shards": 1,
        "arcane_potions": 45,
    }


def sample_tasks() -> List[Task]:
    return [
        Task("Farm Dragon 20", "Target: 100 runs for artifacts.", "High", "2024-06-01", "todo", task_id="task-1"),
        Task("Upgrade Kael gear", "Take gloves and chest to +16.", "Medium", "2024-05-25", "in-progress", task_id="task-2"),
        Task("Faction Wars: High Elves", "Complete stage 21 with 3 stars.", "High", "2024-06-15", "complete", task_id="task-3"),
    ]


def sample_milestones() -> List[Milestone]:
    return [
        Milestone("Unlock Arbiter", "Finish all missions leading to Arbiter unlock.", "2024-08-30", 55, milestone_id="goal-1"),
        Milestone("Faction Wars Completion", "Reach 3 stars on all faction crypts.", "2024-12-01", 32, milestone_id="goal-2"),
        Milestone("Gear Upgrade Project", "Upgrade 20 artifact pieces to +16.", "2024-07-15", 75, milestone_id="goal-3"),
    ]


def derive_stats(characters: List[Character]) -> Dict[str, int]:
    return {
        "total_champions": len(characters),
        "total_six_star": sum(1 for c in characters if c.level == MAX_LEVEL),
    }


def sample_stats() -> Dict[str, int]:
    return derive_stats(sample_characters())


def sample_settings() -> dict:
    return {"dark_mode": False}


_bundled_cache: List[CatalogEntry] | None = None


def load_bundled_catalog(path: str = BUNDLED_CATALOG_PATH) -> List[CatalogEntry]:
    """Static catalog snapshot shipped with the package, deduplicated and sorted."""
    global _bundled_cache
    if path == BUNDLED_CATALOG_PATH and _bundled_cache is not None:
        return list(_bundled_cache)

    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    entries = normalize_catalog(raw)

    if path == BUNDLED_CATALOG_PATH:
        _bundled_cache = entries
    return list(entries)
