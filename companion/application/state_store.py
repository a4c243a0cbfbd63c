"""
Application state store -- the single source of truth for the local data.

Holds every domain collection (roster, resources, gear, tasks, milestones,
stats, settings and the cached catalog). Each mutating operation updates the
in-memory state, persists a full snapshot and notifies subscribers. Domain
rule violations come back as result dicts; nothing here raises on bad input.
"""
import copy
import logging
import re
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List

from companion.application import sample_data
from companion.domain.catalog import CatalogEntry
from companion.domain.character import Character
from companion.domain.invariant import coerce_int, sanitize_count
from companion.domain.milestone import Milestone
from companion.domain.task import Task

log = logging.getLogger("companion.store")

SNAPSHOT_VERSION = 1

_UNSET = object()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class AppStore:
    """Explicitly constructed state container. Use `create_store` to build one."""

    def __init__(self, state: dict | None = None, repository=None):
        self._lock = threading.RLock()
        self._repository = repository
        self._listeners: List[Callable[[dict], None]] = []
        self._reset_to_samples()
        if state:
            self._hydrate(state)

    # ------------------------------------------------------------------
    # State (de)serialization
    # ------------------------------------------------------------------

    def _reset_to_samples(self) -> None:
        self._characters: List[Character] = sample_data.sample_characters()
        self._resources: Dict[str, int] = sample_data.sample_resources()
        self._gear: Dict[str, int] = sample_data.sample_gear()
        self._tasks: List[Task] = sample_data.sample_tasks()
        self._milestones: List[Milestone] = sample_data.sample_milestones()
        self._stats: Dict[str, int] = sample_data.sample_stats()
        self._settings: dict = sample_data.sample_settings()
        self._catalog: List[CatalogEntry] = sample_data.load_bundled_catalog()
        self._catalog_fetched_at: str | None = None

    def _hydrate(self, state: dict) -> None:
        """
        Replace collections present in `state`. A snapshot that fails to
        parse leaves the sample dataset in place.
        """
        try:
            parsed = parse_collections(state)
            if "catalog" in state and state["catalog"] is not None:
                parsed["catalog"] = [CatalogEntry.from_dict(e) for e in state["catalog"]]
                parsed["catalog_fetched_at"] = state.get("catalog_fetched_at")
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            log.warning("Discarding unparseable snapshot, using sample data: %s", exc)
            return
        self._apply(parsed)

    def _apply(self, parsed: dict) -> None:
        for key, value in parsed.items():
            setattr(self, f"_{key}", value)

    def snapshot(self) -> dict:
        """Deep copy of the JSON-serializable state."""
        with self._lock:
            return {
                "version": SNAPSHOT_VERSION,
                "stats": dict(self._stats),
                "characters": [c.to_dict() for c in self._characters],
                "resources": dict(self._resources),
                "gear": dict(self._gear),
                "tasks": [t.to_dict() for t in self._tasks],
                "milestones": [m.to_dict() for m in self._milestones],
                "settings": copy.deepcopy(self._settings),
                "catalog": [e.to_dict() for e in self._catalog],
                "catalog_fetched_at": self._catalog_fetched_at,
            }

    def _commit(self) -> None:
        """Persist and notify. Called with the lock held after every mutation."""
        state = self.snapshot()
        if self._repository is not None:
            try:
                self._repository.save(state)
            except Exception as exc:
                # In-memory state must stay usable when durability fails.
                log.error("Snapshot persistence failed: %s", exc)
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                log.exception("Store listener %r failed", listener)

    def subscribe(self, listener: Callable[[dict], None]) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @property
    def characters(self) -> List[Character]:
        return list(self._characters)

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    @property
    def milestones(self) -> List[Milestone]:
        return list(self._milestones)

    @property
    def resources(self) -> Dict[str, int]:
        return dict(self._resources)

    @property
    def gear(self) -> Dict[str, int]:
        return dict(self._gear)

    @property
    def stats(self) -> Dict[str, int]:
        return dict(self._stats)

    @property
    def settings(self) -> dict:
        return copy.deepcopy(self._settings)

    @property
    def dark_mode(self) -> bool:
        return bool(self._settings.get("dark_mode", False))

    @property
    def catalog(self) -> List[CatalogEntry]:
        return list(self._catalog)

    @property
    def catalog_fetched_at(self) -> str | None:
        return self._catalog_fetched_at

    def get_character(self, character_id: str) -> Character | None:
        return next((c for c in self._characters if c.id == character_id), None)

    def get_task(self, task_id: str) -> Task | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def get_milestone(self, milestone_id: str) -> Milestone | None:
        return next((m for m in self._milestones if m.id == milestone_id), None)

    def find_catalog_entry(self, name: str) -> CatalogEntry | None:
        """Case-insensitive exact lookup in the cached catalog (autofill)."""
        wanted = (name or "").strip().lower()
        if not wanted:
            return None
        return next((e for e in self._catalog if e.name.lower() == wanted), None)

    def _name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        return any(c.has_name(name) and c.id != exclude_id for c in self._characters)

    # ------------------------------------------------------------------
    # Characters
    # ------------------------------------------------------------------

    def add_character(self, data: dict) -> dict:
        """
        Add a roster entry. Fails with reason `invalid` for an empty name and
        `duplicate` when the name is already tracked (case-insensitive).
        """
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            return {"success": False, "reason": "invalid"}

        with self._lock:
            if self._name_taken(name):
                return {"success": False, "reason": "duplicate"}

            character = Character(
                name=name,
                faction=data.get("faction"),
                type=data.get("type", data.get("role")),
                rarity=data.get("rarity"),
                level=data.get("level"),
                rank=data.get("rank"),
                ascension_level=data.get("ascension_level"),
                soul_level=data.get("soul_level"),
                gear_set=data.get("gear_set"),
                notes=data.get("notes"),
            )
            self._characters.append(character)
            self._commit()
            return {"success": True, "character": character.to_dict()}

    def update_character(self, character_id: str, fields: dict) -> dict:
        """
        Merge fields into a roster entry. A non-numeric level is dropped, a
        numeric one is clamped. Unknown ids are a no-op.
        """
        with self._lock:
            character = self.get_character(character_id)
            if character is None:
                return {"success": False, "reason": "not_found"}

            new_name = fields.get("name")
            if isinstance(new_name, str) and new_name.strip():
                if self._name_taken(new_name, exclude_id=character_id):
                    return {"success": False, "reason": "duplicate"}

            character.apply_update(fields)
            self._commit()
            return {"success": True, "character": character.to_dict()}

    def delete_character(self, character_id: str) -> bool:
        with self._lock:
            before = len(self._characters)
            self._characters = [c for c in self._characters if c.id != character_id]
            if len(self._characters) == before:
                return False
            self._commit()
            return True

    # ------------------------------------------------------------------
    # Resources / gear / stats
    # ------------------------------------------------------------------

    def update_resources(self, partial: dict) -> Dict[str, int]:
        """Shallow-merge known resource kinds, each coerced to a count >= 0."""
        with self._lock:
            self._merge_counts(self._resources, partial, sample_data.RESOURCE_KINDS)
            self._commit()
            return dict(self._resources)

    def update_gear(self, partial: dict) -> Dict[str, int]:
        with self._lock:
            self._merge_counts(self._gear, partial, sample_data.GEAR_KINDS)
            self._commit()
            return dict(self._gear)

    @staticmethod
    def _merge_counts(target: Dict[str, int], partial: dict, allowed) -> None:
        for key, value in (partial or {}).items():
            if key not in allowed:
                log.debug("Ignoring unknown counter %r", key)
                continue
            target[key] = sanitize_count(value)

    def update_stats(self, partial: dict) -> Dict[str, int]:
        """Merge dashboard stats. Non-numeric values are ignored."""
        with self._lock:
            for key, value in (partial or {}).items():
                number = coerce_int(value)
                if number is not None:
                    self._stats[key] = number
            self._commit()
            return dict(self._stats)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def add_task(self, data: dict) -> dict:
        """New tasks land in the `todo` lane unless a lane is given."""
        try:
            task = Task(
                title=data.get("title"),
                description=data.get("description"),
                priority=data.get("priority"),
                due_date=data.get("due_date"),
                status=data.get("status") or "todo",
            )
        except ValueError:
            return {"success": False, "reason": "invalid"}

        with self._lock:
            self._tasks.append(task)
            self._commit()
            return {"success": True, "task": task.to_dict()}

    def update_task(self, task_id: str, fields: dict) -> dict:
        with self._lock:
            task = self.get_task(task_id)
            if task is None:
                return {"success": False, "reason": "not_found"}
            try:
                task.apply_update(fields)
            except ValueError:
                return {"success": False, "reason": "invalid"}
            self._commit()
            return {"success": True, "task": task.to_dict()}

    def move_task(self, task_id: str, status) -> dict:
        """Change only the lane of one task."""
        with self._lock:
            task = self.get_task(task_id)
            if task is None:
                return {"success": False, "reason": "not_found"}
            try:
                task.move_to(status)
            except ValueError:
                return {"success": False, "reason": "invalid"}
            self._commit()
            return {"success": True, "task": task.to_dict()}

    def delete_task(self, task_id: str) -> bool:
        with self._lock:
            before = len(self._tasks)
            self._tasks = [t for t in self._tasks if t.id != task_id]
            if len(self._tasks) == before:
                return False
            self._commit()
            return True

    # ------------------------------------------------------------------
    # Milestones
    # ------------------------------------------------------------------

    def add_milestone(self, data: dict) -> dict:
        try:
            milestone = Milestone(
                name=data.get("name"),
                description=data.get("description"),
                target_date=data.get("target_date"),
                progress=data.get("progress", 0),
            )
        except ValueError:
            return {"success": False, "reason": "invalid"}

        with self._lock:
            self._milestones.append(milestone)
            self._commit()
            return {"success": True, "milestone": milestone.to_dict()}

    def update_milestone(self, milestone_id: str, fields: dict) -> dict:
        with self._lock:
            milestone = self.get_milestone(milestone_id)
            if milestone is None:
                return {"success": False, "reason": "not_found"}
            milestone.apply_update(fields)
            self._commit()
            return {"success": True, "milestone": milestone.to_dict()}

    def advance_milestone(self, milestone_id: str, step: int = Milestone.PROGRESS_STEP) -> dict:
        with self._lock:
            milestone = self.get_milestone(milestone_id)
            if milestone is None:
                return {"success": False, "reason": "not_found"}
            milestone.advance(step)
            self._commit()
            return {"success": True, "milestone": milestone.to_dict()}

    def delete_milestone(self, milestone_id: str) -> bool:
        with self._lock:
            before = len(self._milestones)
            self._milestones = [m for m in self._milestones if m.id != milestone_id]
            if len(self._milestones) == before:
                return False
            self._commit()
            return True

    # ------------------------------------------------------------------
    # Catalog cache
    # ------------------------------------------------------------------

    def set_catalog(self, entries: List[CatalogEntry], fetched_at=_UNSET) -> None:
        """Replace the cached catalog. `fetched_at` defaults to now; None is kept."""
        with self._lock:
            self._catalog = list(entries)
            self._catalog_fetched_at = _now_iso() if fetched_at is _UNSET else fetched_at
            self._commit()

    def clear_catalog(self) -> None:
        """Back to the bundled snapshot with no fetch timestamp."""
        with self._lock:
            self._catalog = sample_data.load_bundled_catalog()
            self._catalog_fetched_at = None
            self._commit()

    # ------------------------------------------------------------------
    # Settings / bulk operations
    # ------------------------------------------------------------------

    def toggle_dark_mode(self) -> bool:
        with self._lock:
            self._settings["dark_mode"] = not self.dark_mode
            self._commit()
            return self.dark_mode

    def set_dark_mode(self, enabled: bool) -> bool:
        with self._lock:
            enabled = bool(enabled)
            if self.dark_mode != enabled:
                self._settings["dark_mode"] = enabled
                self._commit()
            return self.dark_mode

    def reset_all(self) -> None:
        """Discard every edit and restore the sample dataset."""
        with self._lock:
            self._reset_to_samples()
            self._commit()

    def merge_collections(self, parsed: dict) -> List[str]:
        """Replace whole collections with already-parsed ones (import path)."""
        with self._lock:
            self._apply(parsed)
            self._commit()
            return sorted(parsed.keys())


def _snake_case(key) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", str(key)).lower()


def _known_counts(counts: dict, allowed) -> Dict[str, int]:
    """Counters restricted to `allowed` kinds; camelCase keys map to snake_case."""
    parsed = {}
    for key, value in counts.items():
        kind = _snake_case(key)
        if kind in allowed:
            parsed[kind] = sanitize_count(value)
        else:
            log.debug("Ignoring unknown counter %r", key)
    return parsed


def _require_unique(records, label: str, names: bool = False) -> None:
    ids = [r.id for r in records]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate {label} ids")
    if names:
        folded = [r.name.casefold() for r in records]
        if len(set(folded)) != len(folded):
            raise ValueError(f"Duplicate {label} names")


def parse_collections(state: dict) -> dict:
    """
    Turn a JSON state (or a subset of one) into store collections.
    Keys missing or null in `state` are left out. Raises on malformed records
    and on duplicate ids or character names.
    """
    if not isinstance(state, dict):
        raise TypeError("State must be a JSON object")

    parsed = {}
    characters = state.get("characters")
    if characters is None:
        characters = state.get("champions")
    if characters is not None:
        parsed["characters"] = [Character.from_dict(c) for c in characters]
        _require_unique(parsed["characters"], "character", names=True)
    if state.get("tasks") is not None:
        parsed["tasks"] = [Task.from_dict(t) for t in state["tasks"]]
        _require_unique(parsed["tasks"], "task")
    if state.get("milestones") is not None:
        parsed["milestones"] = [Milestone.from_dict(m) for m in state["milestones"]]
        _require_unique(parsed["milestones"], "milestone")
    if state.get("resources") is not None:
        parsed["resources"] = _known_counts(state["resources"], sample_data.RESOURCE_KINDS)
    if state.get("gear") is not None:
        parsed["gear"] = _known_counts(state["gear"], sample_data.GEAR_KINDS)
    if state.get("stats") is not None:
        parsed["stats"] = {
            str(k): coerce_int(v) for k, v in state["stats"].items() if coerce_int(v) is not None
        }
    if state.get("settings") is not None:
        settings = state["settings"]
        dark = settings.get("dark_mode", settings.get("darkMode", False))
        parsed["settings"] = {"dark_mode": bool(dark)}
    return parsed


def create_store(initial_state: dict | None = None, repository=None) -> AppStore:
    """
    Build a store. Without an explicit initial state the repository's
    snapshot is restored; with neither, the sample dataset is used.
    """
    if initial_state is None and repository is not None:
        initial_state = repository.load()
    return AppStore(state=initial_state, repository=repository)
