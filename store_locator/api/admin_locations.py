from dataclasses import asdict
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from store_locator.cache import invalidate
from store_locator.core import limiter
from store_locator.core.config import settings
from store_locator.core.security import require_admin
from store_locator.models import LocationField, User
from store_locator.services import (
    ActionResult,
    EditorController,
    GeocodingClient,
    LocationGateway,
    SaveReport,
    google_maps_search_url,
)
from .locations import CACHE_PREFIX

router = APIRouter()


class FieldUpdate(BaseModel):
    field: LocationField
    value: Union[bool, float, str, None] = None


class EditorSessions:
    """One editor, and so one working set, per admin user."""

    def __init__(self):
        self._editors: Dict[int, EditorController] = {}

    def get(self, user_id: int) -> Optional[EditorController]:
        return self._editors.get(user_id)

    def open(self, user_id: int, gateway: LocationGateway, geocoder: GeocodingClient) -> EditorController:
        editor = EditorController(gateway=gateway, geocoder=geocoder)
        self._editors[user_id] = editor
        return editor

    def close(self, user_id: int) -> None:
        self._editors.pop(user_id, None)

    def clear(self) -> None:
        self._editors.clear()


editor_sessions = EditorSessions()


def get_gateway() -> LocationGateway:
    return LocationGateway()

def get_geocoder() -> GeocodingClient:
    return GeocodingClient()

async def get_editor(
    request: Request,
    current_user: User = Depends(require_admin),
    gateway: LocationGateway = Depends(get_gateway),
    geocoder: GeocodingClient = Depends(get_geocoder),
) -> EditorController:
    editor = editor_sessions.get(current_user.id)
    if editor is None:
        editor = editor_sessions.open(current_user.id, gateway, geocoder)
        result = await editor.load()
        request.state.initial_load = result
        if not result.ok:
            # retried on the next request
            editor_sessions.close(current_user.id)
    return editor


def load_failure(request: Request) -> Optional[ActionResult]:
    result = getattr(request.state, "initial_load", None)
    if result is not None and not result.ok:
        return result
    return None


def notification_for(result: Optional[ActionResult]) -> Optional[Dict[str, Any]]:
    if result is None or (result.ok and not result.message):
        return None
    if result.ok:
        return {"level": "success", "kind": None, "message": result.message}
    return {"level": "error", "kind": result.error.kind, "message": result.message}


def editor_state(editor: EditorController, result: Optional[ActionResult] = None) -> Dict[str, Any]:
    locations = []
    for index, record in enumerate(editor.working_set):
        item = jsonable_encoder(record)
        item["index"] = index
        item["maps_url"] = google_maps_search_url(record.address)
        locations.append(item)

    state = {
        "notification": notification_for(result),
        "saving": editor.saving,
        "locations": locations,
    }
    if result is not None and isinstance(result.value, SaveReport):
        state["save_report"] = asdict(result.value)
    return state


@router.get("/")
async def get_working_set(request: Request, editor: EditorController = Depends(get_editor)):
    return editor_state(editor, getattr(request.state, "initial_load", None))

@router.post("/reload")
async def reload_locations(request: Request, editor: EditorController = Depends(get_editor)):
    failed = load_failure(request)
    if failed:
        return editor_state(editor, failed)
    return editor_state(editor, await editor.load())

@router.post("/")
async def add_location(request: Request, editor: EditorController = Depends(get_editor)):
    failed = load_failure(request)
    if failed:
        return editor_state(editor, failed)
    return editor_state(editor, editor.add())

@router.patch("/{index}")
async def edit_location(
    request: Request,
    index: int,
    update: FieldUpdate,
    editor: EditorController = Depends(get_editor)
):
    failed = load_failure(request)
    if failed:
        return editor_state(editor, failed)
    return editor_state(editor, editor.edit_field(index, update.field, update.value))

@router.delete("/{index}")
async def remove_location(request: Request, index: int, editor: EditorController = Depends(get_editor)):
    failed = load_failure(request)
    if failed:
        return editor_state(editor, failed)
    result = await editor.remove(index)
    if result.ok and result.value.id is not None:
        invalidate(CACHE_PREFIX)
    return editor_state(editor, result)

@router.post("/{index}/geocode")
@limiter.limit(settings.GEOCODE_RATE_LIMIT)
async def geocode_location(request: Request, index: int, editor: EditorController = Depends(get_editor)):
    failed = load_failure(request)
    if failed:
        return editor_state(editor, failed)
    return editor_state(editor, await editor.geocode(index))

@router.post("/save")
async def save_locations(request: Request, editor: EditorController = Depends(get_editor)):
    failed = load_failure(request)
    if failed:
        return editor_state(editor, failed)
    result = await editor.save_all()
    # Anything committed before a failure is already visible publicly
    if result.value is not None and result.value.committed:
        invalidate(CACHE_PREFIX)
    return editor_state(editor, result)
