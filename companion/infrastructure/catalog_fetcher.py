"""External champion catalog -- primary endpoint, CORS-relay mirror, bundled fallback.

Flow
----
1. GET the primary listing (up to 500 records per call).
2. On any failure (HTTP status, network error, bad JSON) or an empty
   normalized result, GET the mirror once.
3. If neither yields usable entries, return the bundled static snapshot.

No caching here: the store keeps the last successful result.

Env vars:
    CATALOG_PRIMARY_URL  -- listing endpoint (WordPress REST shape)
    CATALOG_MIRROR_URL   -- same resource through a CORS relay
    CATALOG_TIMEOUT      -- per-request timeout in seconds (default: 10)
"""
import logging
import os
from typing import List
from urllib.parse import quote

import requests

from companion.application.catalog_normalizer import normalize_catalog
from companion.application.sample_data import load_bundled_catalog
from companion.domain.catalog import CatalogEntry
from companion.domain.enums import CatalogSource

log = logging.getLogger("companion.catalog")

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
PAGE_SIZE = 500
DEFAULT_PRIMARY_URL = f"https://hellhades.com/wp-json/wp/v2/champions?per_page={PAGE_SIZE}"
CORS_RELAY_PREFIX = "https://corsproxy.io/?url="

CATALOG_PRIMARY_URL: str = os.environ.get("CATALOG_PRIMARY_URL", DEFAULT_PRIMARY_URL)
CATALOG_MIRROR_URL: str = os.environ.get(
    "CATALOG_MIRROR_URL", CORS_RELAY_PREFIX + quote(CATALOG_PRIMARY_URL, safe="")
)
CATALOG_TIMEOUT: float = float(os.environ.get("CATALOG_TIMEOUT", "10"))

FALLBACK_WARNING = "Live champion catalog unavailable. Showing the bundled champion list."


class CatalogUnavailableError(RuntimeError):
    """Both network sources failed and the caller asked for fresh data."""


class CatalogFetchResult:
    """Outcome of one fetch: the entries, where they came from, and a UI warning."""

    def __init__(self, entries: List[CatalogEntry], source: CatalogSource, warning: str | None = None):
        self._entries = list(entries)
        self._source = source
        self._warning = warning

    @property
    def entries(self) -> List[CatalogEntry]:
        return list(self._entries)

    @property
    def source(self) -> CatalogSource:
        return self._source

    @property
    def warning(self) -> str | None:
        return self._warning

    @property
    def is_fallback(self) -> bool:
        return self._source == CatalogSource.FALLBACK

    def to_dict(self) -> dict:
        return {
            "source": self._source.value,
            "warning": self._warning,
            "count": len(self._entries),
            "entries": [e.to_dict() for e in self._entries],
        }


def _extract_records(payload) -> list:
    """The listing is a bare array; some mirrors wrap it in an object."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("data", "items", "champions", "results"):
            if isinstance(payload.get(key), list):
                return payload[key]
    return []


class CatalogFetcher:
    """Idempotent, safe to call repeatedly."""

    def __init__(
        self,
        primary_url: str = CATALOG_PRIMARY_URL,
        mirror_url: str | None = CATALOG_MIRROR_URL,
        timeout: float = CATALOG_TIMEOUT,
        session: requests.Session | None = None,
        fallback_loader=load_bundled_catalog,
    ):
        self._primary_url = primary_url
        self._mirror_url = mirror_url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._fallback_loader = fallback_loader

    def _attempt(self, url: str) -> List[CatalogEntry]:
        response = self._session.get(url, timeout=self._timeout, headers={"Accept": "application/json"})
        response.raise_for_status()
        return normalize_catalog(_extract_records(response.json()))

    def fetch(self, require_network: bool = False) -> CatalogFetchResult:
        """
        Try primary then mirror. Falls back to the bundled snapshot unless
        `require_network` is set and every network attempt raised.
        """
        sources = [(CatalogSource.PRIMARY, self._primary_url), (CatalogSource.MIRROR, self._mirror_url)]
        attempted = 0
        failures = []

        for source, url in sources:
            if not url:
                continue
            attempted += 1
            try:
                entries = self._attempt(url)
            except (requests.RequestException, ValueError) as exc:
                # requests' JSONDecodeError is a ValueError
                log.warning("Catalog %s fetch failed: %s: %s", source.value, type(exc).__name__, exc)
                failures.append(exc)
                continue
            if entries:
                log.info("Catalog loaded from %s: %d champions", source.value, len(entries))
                return CatalogFetchResult(entries, source)
            log.warning("Catalog %s returned no usable champions", source.value)

        if require_network and attempted and len(failures) == attempted:
            raise CatalogUnavailableError(
                f"All {attempted} catalog sources failed: {failures[-1]}"
            )

        log.warning("Falling back to the bundled champion catalog")
        return CatalogFetchResult(self._fallback_loader(), CatalogSource.FALLBACK, FALLBACK_WARNING)

    def fetch_catalog(self, require_network: bool = False) -> List[CatalogEntry]:
        return self.fetch(require_network=require_network).entries
