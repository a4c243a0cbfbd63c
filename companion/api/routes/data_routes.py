"""Data transfer routes -- JSON export download and pasted-JSON import."""
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from companion.application.data_transfer import EXPORT_FILENAME, export_state, import_state

router = APIRouter(prefix="/api/data", tags=["data"])


class ImportRequest(BaseModel):
    text: str


_store = None


def init_data_routes(store):
    global _store
    _store = store


@router.get("/export")
def api_export():
    return Response(
        content=export_state(_store),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/import")
def api_import(req: ImportRequest):
    result = import_state(_store, req.text)
    if not result["success"]:
        raise HTTPException(status_code=400, detail=result["message"])
    return result
