"""Use case: export the store to JSON and merge pasted JSON back in."""
import json
import logging
import os

from companion.application.state_store import AppStore, parse_collections

log = logging.getLogger("companion.store")

EXPORT_FILENAME = "rsl-companion-export.json"

# Only these top-level keys are merged; anything else in the payload is ignored.
IMPORT_ALLOWED_KEYS = ("stats", "champions", "characters", "resources", "tasks", "milestones", "settings")

IMPORT_OK_MESSAGE = "Import successful! Data has been merged into the current session."
IMPORT_FAILED_MESSAGE = "Import failed. Please ensure the JSON is valid."


def export_state(store: AppStore) -> str:
    """Serialize the entire store snapshot."""
    return json.dumps(store.snapshot(), indent=2, ensure_ascii=False)


def export_to_file(store: AppStore, directory: str, filename: str = EXPORT_FILENAME) -> str:
    """Write the export next to the player's other files. Returns the path."""
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, filename)
    with open(path, "w", encoding="utf-8") as f:
        f.write(export_state(store))
    return path


def import_state(store: AppStore, text: str) -> dict:
    """
    Merge allow-listed collections from pasted JSON text into the store.
    Malformed input leaves the store untouched and reports a failure message.
    """
    try:
        payload = json.loads(text)
        if not isinstance(payload, dict):
            raise ValueError("Import payload must be a JSON object")
        allowed = {key: payload[key] for key in IMPORT_ALLOWED_KEYS if payload.get(key) is not None}
        parsed = parse_collections(allowed)
    except (TypeError, ValueError, KeyError, AttributeError) as exc:
        # json.JSONDecodeError is a ValueError
        log.warning("Import rejected: %s", exc)
        return {"success": False, "message": IMPORT_FAILED_MESSAGE, "imported": []}

    imported = store.merge_collections(parsed) if parsed else []
    return {"success": True, "message": IMPORT_OK_MESSAGE, "imported": imported}
