"""Use case: map third-party catalog records onto the canonical CatalogEntry.

Source records arrive in several shapes (plain REST objects, WordPress posts
with `title.rendered` and an `acf` block, scraped dumps with `full_name`).
Each canonical field has an ordered list of candidate paths; the first path
that yields a non-empty string wins.
"""
import html
import re
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from companion.domain.catalog import CatalogEntry

Path = Tuple[str, ...]

_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(value) -> str | None:
    """Unescape HTML entities and collapse whitespace. None when empty."""
    if not isinstance(value, str):
        return None
    text = html.unescape(html.unescape(value))
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text or None


def _first_text(value) -> str | None:
    """Strings pass through; lists (multi-select fields) yield their first usable item."""
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, (list, tuple)):
        for item in value:
            text = _first_text(item)
            if text:
                return text
    return None


def _dig(record: dict, path: Path):
    node = record
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


FIELD_CANDIDATES: Dict[str, Sequence[Tuple[Path, Callable]]] = {
    "name": (
        (("name",), _first_text),
        (("title", "rendered"), _first_text),
        (("title",), _first_text),
        (("full_name",), _first_text),
        (("fullName",), _first_text),
        (("champion_name",), _first_text),
        (("acf", "name"), _first_text),
        (("acf", "champion_name"), _first_text),
    ),
    "faction": (
        (("faction",), _first_text),
        (("faction", "name"), _first_text),
        (("acf", "faction"), _first_text),
        (("acf", "faction", "name"), _first_text),
        (("meta", "faction"), _first_text),
    ),
    "type": (
        (("type",), _first_text),
        (("role",), _first_text),
        (("acf", "type"), _first_text),
        (("acf", "role"), _first_text),
        (("meta", "role"), _first_text),
    ),
    "rarity": (
        (("rarity",), _first_text),
        (("rarity", "name"), _first_text),
        (("acf", "rarity"), _first_text),
        (("meta", "rarity"), _first_text),
    ),
}

REQUIRED_FIELDS = ("name", "faction", "rarity")


def extract_field(record: dict, field: str) -> str | None:
    for path, extractor in FIELD_CANDIDATES[field]:
        value = extractor(_dig(record, path))
        if value:
            return value
    return None


def normalize(raw_entry) -> CatalogEntry | None:
    """Canonical entry for one source record, or None when it is incomplete."""
    if not isinstance(raw_entry, dict):
        return None

    fields = {name: extract_field(raw_entry, name) for name in FIELD_CANDIDATES}
    if any(not fields[name] for name in REQUIRED_FIELDS):
        return None

    return CatalogEntry(
        name=fields["name"],
        faction=fields["faction"],
        rarity=fields["rarity"],
        type=fields["type"],
    )


def _entry_name(entry) -> str:
    if isinstance(entry, dict):
        return str(entry.get("name") or "")
    return entry.name


def sort_key(entry) -> tuple:
    # Case-folded first so "arbiter" and "Arbiter" sit together, then raw for a stable tie-break.
    name = _entry_name(entry)
    return (name.casefold(), name)


def dedupe_and_sort(entries: Iterable) -> list:
    """
    Keep the first entry per lowercased name, then sort by name.
    Accepts CatalogEntry objects or plain dicts with a `name` key.
    """
    unique: Dict[str, object] = {}
    for entry in entries:
        key = _entry_name(entry).lower()
        if key not in unique:
            unique[key] = entry
    return sorted(unique.values(), key=sort_key)


def normalize_catalog(raw_entries: Iterable) -> List[CatalogEntry]:
    """Normalize a whole listing, dropping incomplete records."""
    normalized = (normalize(raw) for raw in raw_entries or [])
    return dedupe_and_sort(entry for entry in normalized if entry is not None)
