"""Use case: refresh the store's cached catalog from the external source."""
from companion.application.state_store import AppStore


def refresh_catalog(store: AppStore, fetcher, require_network: bool = False) -> dict:
    """
    Fetch the catalog and cache it in the store.
    Only a network result replaces the cache; a fallback keeps the last
    successful fetch and surfaces a warning instead.
    """
    result = fetcher.fetch(require_network=require_network)
    if not result.is_fallback:
        store.set_catalog(result.entries)

    return {
        "source": result.source.value,
        "warning": result.warning,
        "count": len(store.catalog),
        "fetched_at": store.catalog_fetched_at,
    }
