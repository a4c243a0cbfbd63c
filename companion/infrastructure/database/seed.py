"""Seed the remote champion catalog from the bundled JSON snapshot."""
import json
import os

from companion.application.catalog_normalizer import normalize_catalog
from companion.infrastructure.database.models import ChampionModel


def seed_catalog(session_factory, json_path: str) -> int:
    """Load the bundled catalog into the champions table when it is empty.

    Existing rows are never touched: roster links reference their ids.
    Returns the number of rows seeded (0 if the table already has data).
    """
    if not os.path.exists(json_path):
        return 0

    with open(json_path, "r", encoding="utf-8") as f:
        entries = normalize_catalog(json.load(f))

    with session_factory() as session:
        if session.query(ChampionModel).count() > 0:
            return 0

        for entry in entries:
            session.add(ChampionModel(
                name=entry.name,
                faction=entry.faction,
                type=entry.type,
                rarity=entry.rarity,
                affinity=entry.affinity,
                image_url=entry.image_url,
            ))
        session.commit()
        return len(entries)
