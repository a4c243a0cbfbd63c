"""Use case: live champion search while the player types a name.

Queries are debounced: each keystroke cancels the pending search and
schedules a new one DEBOUNCE_SECONDS later, so only the last query in a
burst reaches the catalog.

The HTTP layer only calls `search_now`. `update_query` and `cancel` are
driven by an in-process UI host (a desktop or terminal front end) that
feeds keystrokes in and receives results through `on_results`.
"""
import logging
import threading
from typing import Callable

log = logging.getLogger("companion.catalog")

DEBOUNCE_SECONDS = 0.3
SEARCH_LIMIT = 10
SEARCH_ERROR = "Unable to load champions."


def _empty_results() -> dict:
    return {"data": [], "loading": False, "error": None}


class CatalogSearch:
    """Debounced name search against a catalog repository."""

    def __init__(
        self,
        catalog_repo,
        on_results: Callable[[dict], None] | None = None,
        delay: float = DEBOUNCE_SECONDS,
        limit: int = SEARCH_LIMIT,
    ):
        self._catalog_repo = catalog_repo
        self._on_results = on_results
        self._delay = delay
        self._limit = limit
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._results = _empty_results()

    @property
    def results(self) -> dict:
        with self._lock:
            return dict(self._results, data=list(self._results["data"]))

    def search_now(self, query: str) -> dict:
        """Run one search synchronously. Failures become an error message."""
        term = (query or "").strip()
        if not term:
            return _empty_results()
        try:
            entries = self._catalog_repo.search_by_name(term, limit=self._limit)
        except Exception as exc:
            log.error("Failed to search champions for %r: %s", term, exc)
            return {"data": [], "loading": False, "error": SEARCH_ERROR}
        return {"data": [e.to_dict() for e in entries], "loading": False, "error": None}

    def update_query(self, query: str) -> None:
        """Cancel any pending search and schedule one for `query`."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            if not (query or "").strip():
                self._results = _empty_results()
                notify = True
            else:
                self._results = dict(self._results, loading=True)
                self._timer = threading.Timer(self._delay, self._run, args=(query, generation))
                self._timer.daemon = True
                self._timer.start()
                notify = False
        if notify:
            self._notify()

    def cancel(self) -> None:
        """Drop the pending search, e.g. when the search box goes away."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            self._results = _empty_results()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _run(self, query: str, generation: int) -> None:
        results = self.search_now(query)
        with self._lock:
            if generation != self._generation:
                return
            self._results = results
            self._timer = None
        self._notify()

    def _notify(self) -> None:
        if self._on_results is None:
            return
        try:
            self._on_results(self.results)
        except Exception:
            log.exception("Search results callback failed")
