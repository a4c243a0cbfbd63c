"""Champion catalog routes -- cached list, refresh, autofill lookup, remote search."""
from fastapi import APIRouter, HTTPException

from companion.application.refresh_catalog import refresh_catalog
from companion.infrastructure.catalog_fetcher import CatalogUnavailableError

router = APIRouter(prefix="/api/catalog", tags=["catalog"])

_store = None
_fetcher = None
_search = None


def init_catalog_routes(store, fetcher, search=None):
    global _store, _fetcher, _search
    _store = store
    _fetcher = fetcher
    _search = search


@router.get("")
def api_get_catalog():
    """Cached catalog (the bundled snapshot until a fetch succeeds)."""
    entries = [e.to_dict() for e in _store.catalog]
    return {
        "entries": entries,
        "count": len(entries),
        "fetched_at": _store.catalog_fetched_at,
    }


@router.post("/refresh")
def api_refresh_catalog(require_network: bool = False):
    try:
        return refresh_catalog(_store, _fetcher, require_network=require_network)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.delete("")
def api_clear_catalog():
    _store.clear_catalog()
    return {"count": len(_store.catalog), "fetched_at": None}


@router.get("/lookup")
def api_lookup_champion(name: str):
    """Exact, case-insensitive name match used to autofill the add form."""
    entry = _store.find_catalog_entry(name)
    if entry is None:
        raise HTTPException(status_code=404, detail="Champion not found in catalog")
    return entry.to_dict()


@router.get("/search")
def api_search_champions(q: str = ""):
    """Substring search against the remote catalog (remote roster only)."""
    if _search is None:
        raise HTTPException(status_code=503, detail="Remote roster is not configured.")
    return _search.search_now(q)
