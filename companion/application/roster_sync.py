"""
Remote roster sync adapter.

Treats the remote record store as the source of truth for the roster:
every mutation is followed by a full re-fetch. Remote failures are logged
with their detail and surfaced to the caller as a generic message.
"""
import logging
import threading
from typing import List

from companion.domain.catalog import CatalogEntry
from companion.domain.invariant import sanitize_level, sanitize_stars
from companion.domain.roster import RosterEntry, RosterLink, join_roster, UNKNOWN_RARITY

log = logging.getLogger("companion.roster")

LOAD_ERROR = "Unable to load your champion roster."
SAVE_ERROR = "Unable to save champion. Please try again."
UPDATE_ERROR = "Unable to update champion level."
DELETE_ERROR = "Unable to remove champion."
NOT_SELECTED_ERROR = "Select a champion from the list before adding."
NOT_TRACKED_ERROR = "That champion is not in your roster."


class RosterSyncAdapter:
    """
    Mirrors the roster (identity, level, ascension and soul stars) to the
    remote store. `processing` is advisory: it tells the UI to disable
    submissions but does not serialize overlapping calls.
    """

    def __init__(self, roster_repo, catalog_repo):
        self._roster_repo = roster_repo
        self._catalog_repo = catalog_repo
        self._roster: List[RosterEntry] = []
        self._processing = False
        self._loading = False
        self._roster_error: str | None = None
        self._status_message: dict | None = None
        # Fetch tokens: a result older than the last applied one is discarded.
        self._token_lock = threading.Lock()
        self._issued = 0
        self._applied = 0

    # --- Properties (Read-Only) ---

    @property
    def roster(self) -> List[RosterEntry]:
        return list(self._roster)

    @property
    def processing(self) -> bool:
        return self._processing

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def roster_error(self) -> str | None:
        return self._roster_error

    @property
    def status_message(self) -> dict | None:
        return dict(self._status_message) if self._status_message else None

    def to_dict(self) -> dict:
        return {
            "roster": [e.to_dict() for e in self._roster],
            "count": len(self._roster),
            "processing": self._processing,
            "loading": self._loading,
            "error": self._roster_error,
            "status": self.status_message,
        }

    # --- Read ---

    def _next_token(self) -> int:
        with self._token_lock:
            self._issued += 1
            return self._issued

    def fetch_roster(self) -> List[RosterEntry]:
        """
        Read every link, batch-load the referenced catalog entries and join
        them. On failure the previous roster is kept and `roster_error` set.
        """
        token = self._next_token()
        self._loading = True
        self._roster_error = None
        try:
            links = self._roster_repo.list_links()
            catalog = self._catalog_repo.get_by_ids([link.catalog_id for link in links]) if links else {}
            joined = join_roster(links, catalog)
        except Exception as exc:
            log.error("Failed to fetch roster: %s: %s", type(exc).__name__, exc)
            with self._token_lock:
                if token >= self._applied:
                    self._roster_error = LOAD_ERROR
                    self._loading = False
            return list(self._roster)

        with self._token_lock:
            if token < self._applied:
                log.debug("Discarding stale roster fetch #%d (latest applied #%d)", token, self._applied)
                return list(self._roster)
            self._applied = token
            self._roster = joined
            if token == self._issued:
                self._loading = False
        return list(joined)

    # --- Write ---

    def _begin(self) -> None:
        self._processing = True
        self._status_message = None

    def _succeed(self, text: str) -> dict:
        self._status_message = {"type": "success", "text": text}
        self.fetch_roster()
        return {"success": True, "message": text}

    def _fail(self, text: str) -> dict:
        self._status_message = {"type": "error", "text": text}
        return {"success": False, "error": text}

    def add_character(self, champion: CatalogEntry | None, level=1, ascension_level=0, soul_level=0) -> dict:
        """
        Upsert keyed by catalog id: re-adding a tracked champion overwrites
        its progression instead of duplicating it.
        """
        if champion is None or not champion.catalog_id:
            return self._fail(NOT_SELECTED_ERROR)

        self._begin()
        try:
            link = RosterLink(
                catalog_id=champion.catalog_id,
                level=sanitize_level(level),
                ascension_level=sanitize_stars(ascension_level),
                soul_level=sanitize_stars(soul_level),
                rarity=champion.rarity or UNKNOWN_RARITY,
            )
            self._roster_repo.upsert(link)
            return self._succeed(f"{champion.name} saved to your roster.")
        except Exception as exc:
            log.error("Failed to add champion %s: %s: %s", champion.catalog_id, type(exc).__name__, exc)
            return self._fail(SAVE_ERROR)
        finally:
            self._processing = False

    def update_character(self, catalog_id: str, fields: dict) -> dict:
        """Sanitize level / star fields and update the tracked row."""
        sanitized = {}
        if "level" in fields:
            sanitized["level"] = sanitize_level(fields["level"])
        for key in ("ascension_level", "soul_level"):
            if key in fields:
                sanitized[key] = sanitize_stars(fields[key])

        self._begin()
        try:
            if not self._roster_repo.update(catalog_id, sanitized):
                return self._fail(NOT_TRACKED_ERROR)
            return self._succeed("Champion updated.")
        except Exception as exc:
            log.error("Failed to update champion %s: %s: %s", catalog_id, type(exc).__name__, exc)
            return self._fail(UPDATE_ERROR)
        finally:
            self._processing = False

    def delete_character(self, catalog_id: str) -> dict:
        self._begin()
        try:
            if not self._roster_repo.delete(catalog_id):
                return self._fail(NOT_TRACKED_ERROR)
            return self._succeed("Champion removed from your roster.")
        except Exception as exc:
            log.error("Failed to delete champion %s: %s: %s", catalog_id, type(exc).__name__, exc)
            return self._fail(DELETE_ERROR)
        finally:
            self._processing = False
