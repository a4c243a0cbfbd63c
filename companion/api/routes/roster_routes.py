"""Remote roster routes -- fetch, add, update and remove tracked champions."""
import logging
from typing import Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from companion.application.roster_sync import NOT_SELECTED_ERROR, NOT_TRACKED_ERROR, SAVE_ERROR

log = logging.getLogger("companion.roster")

router = APIRouter(prefix="/api/roster", tags=["roster"])

Loose = Optional[Union[int, float, str]]


class AddRosterRequest(BaseModel):
    catalog_id: str
    level: Loose = 1
    ascension_level: Loose = 0
    soul_level: Loose = 0


class UpdateRosterRequest(BaseModel):
    level: Loose = None
    ascension_level: Loose = None
    soul_level: Loose = None


_adapter = None
_catalog_repo = None


def init_roster_routes(adapter, catalog_repo):
    global _adapter, _catalog_repo
    _adapter = adapter
    _catalog_repo = catalog_repo


def _require_adapter():
    if _adapter is None:
        raise HTTPException(status_code=503, detail="Remote roster is not configured.")
    return _adapter


def _respond(result: dict) -> dict:
    """Map an adapter result onto HTTP: success passes through, errors raise."""
    if result.get("success"):
        return {**result, "roster": _adapter.to_dict()}
    error = result.get("error")
    if error == NOT_TRACKED_ERROR:
        raise HTTPException(status_code=404, detail=error)
    if error == NOT_SELECTED_ERROR:
        raise HTTPException(status_code=400, detail=error)
    raise HTTPException(status_code=502, detail=error)


@router.get("")
def api_get_roster():
    adapter = _require_adapter()
    adapter.fetch_roster()
    return adapter.to_dict()


@router.post("", status_code=201)
def api_add_to_roster(req: AddRosterRequest):
    adapter = _require_adapter()
    try:
        champion = _catalog_repo.get_by_id(req.catalog_id)
    except Exception as exc:
        log.error("Catalog lookup for %s failed: %s: %s", req.catalog_id, type(exc).__name__, exc)
        raise HTTPException(status_code=502, detail=SAVE_ERROR)
    if champion is None:
        raise HTTPException(status_code=404, detail="Champion not found in catalog")
    return _respond(adapter.add_character(
        champion,
        level=req.level,
        ascension_level=req.ascension_level,
        soul_level=req.soul_level,
    ))


@router.patch("/{catalog_id}")
def api_update_roster_entry(catalog_id: str, req: UpdateRosterRequest):
    adapter = _require_adapter()
    return _respond(adapter.update_character(catalog_id, req.model_dump(exclude_none=True)))


@router.delete("/{catalog_id}")
def api_remove_from_roster(catalog_id: str):
    adapter = _require_adapter()
    return _respond(adapter.delete_character(catalog_id))
