"""Durable local snapshot of the whole application state (one JSON file)."""
import json
import logging
import os

log = logging.getLogger("companion.store")

STORAGE_KEY = "rsl-companion-store"
SNAPSHOT_VERSION = 1


class SnapshotRepository:
    """
    JSON-backed state storage. The document is overwritten wholesale on
    every save; there is no incremental write.
    """

    def __init__(self, data_path: str = "data/state.json", storage_key: str = STORAGE_KEY):
        self._data_path = data_path
        self._storage_key = storage_key

    @property
    def data_path(self) -> str:
        return self._data_path

    def load(self) -> dict | None:
        """
        Return the persisted state, or None when nothing usable exists.
        A corrupt or foreign document is treated as absent.
        """
        if not os.path.exists(self._data_path):
            return None
        try:
            with open(self._data_path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            log.warning("Ignoring unreadable snapshot %s: %s", self._data_path, exc)
            return None

        if not isinstance(document, dict):
            return None
        if document.get("storage_key", self._storage_key) != self._storage_key:
            log.warning("Snapshot %s belongs to another store, ignoring.", self._data_path)
            return None
        state = document.get("state")
        return state if isinstance(state, dict) else None

    def save(self, state: dict) -> bool:
        """Persist the state. Failures are logged and reported as False."""
        document = {
            "storage_key": self._storage_key,
            "version": SNAPSHOT_VERSION,
            "state": state,
        }
        tmp_path = f"{self._data_path}.tmp"
        try:
            directory = os.path.dirname(self._data_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            # Write atomically: write to tempfile then replace
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self._data_path)
            return True
        except (OSError, TypeError, ValueError) as exc:
            log.error("Failed to persist snapshot to %s: %s", self._data_path, exc)
            try:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
            except OSError:
                log.debug("Could not remove stale %s", tmp_path)
            return False
