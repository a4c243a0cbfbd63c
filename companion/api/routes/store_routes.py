"""Local store API routes -- roster, resources, gear, tasks, milestones, settings."""
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from companion.application.color_scheme import ColorSchemeSignal
from companion.application.planner import energy_needed, silver_needed

router = APIRouter(prefix="/api", tags=["store"])

# Numeric fields stay loose on purpose: the store coerces or drops bad input.
Loose = Optional[Union[int, float, str]]


class CharacterCreateRequest(BaseModel):
    name: str = Field(..., max_length=80)
    faction: Optional[str] = None
    type: Optional[str] = None
    rarity: Optional[str] = None
    level: Loose = None
    rank: Loose = None
    ascension_level: Loose = None
    soul_level: Loose = None
    gear_set: Optional[str] = None
    notes: Optional[str] = None


class CharacterUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=80)
    faction: Optional[str] = None
    type: Optional[str] = None
    rarity: Optional[str] = None
    level: Loose = None
    rank: Loose = None
    ascension_level: Loose = None
    soul_level: Loose = None
    gear_set: Optional[str] = None
    notes: Optional[str] = None


class TaskCreateRequest(BaseModel):
    title: str = Field(..., max_length=120)
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[str] = None


class TaskUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=120)
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[str] = None


class MoveTaskRequest(BaseModel):
    status: str


class MilestoneCreateRequest(BaseModel):
    name: str = Field(..., max_length=120)
    description: Optional[str] = None
    target_date: Optional[str] = None
    progress: Loose = 0


class MilestoneUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=120)
    description: Optional[str] = None
    target_date: Optional[str] = None
    progress: Loose = None


class AdvanceMilestoneRequest(BaseModel):
    step: int = Field(5, ge=1, le=100)


class ColorSchemeRequest(BaseModel):
    prefers_dark: bool


_store = None
_color_scheme: ColorSchemeSignal | None = None


def init_store_routes(store, color_scheme: ColorSchemeSignal | None = None):
    global _store, _color_scheme
    _store = store
    _color_scheme = color_scheme


# ---------------------------------------------------------------------------
# Helper: result -> HTTP
# ---------------------------------------------------------------------------

_REASON_STATUS = {
    "invalid": 400,
    "not_found": 404,
    "duplicate": 409,
}

_REASON_DETAIL = {
    "invalid": "Invalid input.",
    "not_found": "Not found.",
    "duplicate": "That champion is already in your roster.",
}


def _unwrap(result: dict, key: str) -> dict:
    """Return the created/updated record or raise the matching HTTP error."""
    if result.get("success"):
        return result[key]
    reason = result.get("reason", "invalid")
    raise HTTPException(
        status_code=_REASON_STATUS.get(reason, 400),
        detail={"reason": reason, "message": _REASON_DETAIL.get(reason, "Invalid input.")},
    )


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

@router.get("/state")
def api_get_state():
    """Full store snapshot (what the UI renders from)."""
    return _store.snapshot()


@router.post("/reset")
def api_reset_all():
    """Restore every collection to the sample dataset."""
    _store.reset_all()
    return _store.snapshot()


# ---------------------------------------------------------------------------
# Characters
# ---------------------------------------------------------------------------

@router.get("/characters")
def api_list_characters():
    return [c.to_dict() for c in _store.characters]


@router.post("/characters", status_code=201)
def api_add_character(req: CharacterCreateRequest):
    return _unwrap(_store.add_character(req.model_dump()), "character")


@router.patch("/characters/{character_id}")
def api_update_character(character_id: str, req: CharacterUpdateRequest):
    return _unwrap(
        _store.update_character(character_id, req.model_dump(exclude_unset=True)),
        "character",
    )


@router.delete("/characters/{character_id}")
def api_delete_character(character_id: str):
    if not _store.delete_character(character_id):
        raise HTTPException(status_code=404, detail="Character not found")
    return {"deleted": character_id}


# ---------------------------------------------------------------------------
# Resources / gear / stats
# ---------------------------------------------------------------------------

@router.get("/resources")
def api_get_resources():
    return _store.resources


@router.patch("/resources")
def api_update_resources(updates: Dict[str, Any]):
    return _store.update_resources(updates)


@router.get("/gear")
def api_get_gear():
    return _store.gear


@router.patch("/gear")
def api_update_gear(updates: Dict[str, Any]):
    return _store.update_gear(updates)


@router.get("/stats")
def api_get_stats():
    return _store.stats


@router.patch("/stats")
def api_update_stats(updates: Dict[str, Any]):
    return _store.update_stats(updates)


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

@router.get("/tasks")
def api_list_tasks(status: Optional[str] = None):
    tasks = [t.to_dict() for t in _store.tasks]
    if status:
        tasks = [t for t in tasks if t["status"] == status]
    return tasks


@router.post("/tasks", status_code=201)
def api_add_task(req: TaskCreateRequest):
    return _unwrap(_store.add_task(req.model_dump(exclude_none=True)), "task")


@router.patch("/tasks/{task_id}")
def api_update_task(task_id: str, req: TaskUpdateRequest):
    return _unwrap(_store.update_task(task_id, req.model_dump(exclude_unset=True)), "task")


@router.post("/tasks/{task_id}/move")
def api_move_task(task_id: str, req: MoveTaskRequest):
    return _unwrap(_store.move_task(task_id, req.status), "task")


@router.delete("/tasks/{task_id}")
def api_delete_task(task_id: str):
    if not _store.delete_task(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return {"deleted": task_id}


# ---------------------------------------------------------------------------
# Milestones
# ---------------------------------------------------------------------------

@router.get("/milestones")
def api_list_milestones():
    return [m.to_dict() for m in _store.milestones]


@router.post("/milestones", status_code=201)
def api_add_milestone(req: MilestoneCreateRequest):
    return _unwrap(_store.add_milestone(req.model_dump()), "milestone")


@router.patch("/milestones/{milestone_id}")
def api_update_milestone(milestone_id: str, req: MilestoneUpdateRequest):
    return _unwrap(
        _store.update_milestone(milestone_id, req.model_dump(exclude_unset=True)),
        "milestone",
    )


@router.post("/milestones/{milestone_id}/advance")
def api_advance_milestone(milestone_id: str, req: AdvanceMilestoneRequest | None = None):
    step = req.step if req else 5
    return _unwrap(_store.advance_milestone(milestone_id, step), "milestone")


@router.delete("/milestones/{milestone_id}")
def api_delete_milestone(milestone_id: str):
    if not _store.delete_milestone(milestone_id):
        raise HTTPException(status_code=404, detail="Milestone not found")
    return {"deleted": milestone_id}


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@router.post("/settings/dark-mode/toggle")
def api_toggle_dark_mode():
    return {"dark_mode": _store.toggle_dark_mode()}


@router.post("/settings/color-scheme")
def api_color_scheme_changed(req: ColorSchemeRequest):
    """The UI relays `prefers-color-scheme` changes here."""
    if _color_scheme is None:
        return {"dark_mode": _store.set_dark_mode(req.prefers_dark)}
    _color_scheme.publish(req.prefers_dark)
    return {"dark_mode": _store.dark_mode}


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------

@router.get("/planner/energy")
def api_energy_needed(rank: int, champions: int = 1):
    try:
        return {"rank": rank, "champions": champions, "energy": energy_needed(rank, champions)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/planner/silver")
def api_silver_needed(upgrade: str, pieces: int = 1):
    try:
        return {"upgrade": upgrade, "pieces": pieces, "silver": silver_needed(upgrade, pieces)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
