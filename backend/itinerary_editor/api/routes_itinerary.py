# backend/itinerary_editor/api/routes_itinerary.py

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from itinerary_editor.db.session_store import EditorHandle, store
from itinerary_editor.models.itinerary_models import Event
from itinerary_editor.models.session_models import (
    ItineraryMeta,
    MoveCommand,
    MoveResult,
    Notification,
    POOL_SLOT,
    SearchResult,
    SessionState,
)
from itinerary_editor.services.itinerary_catalog import ItineraryCatalog
from itinerary_editor.services.notifier import BufferedNavigator, BufferedNotifier
from itinerary_editor.utils.time_utils import format_address, format_event_time, time_range_label

router = APIRouter(prefix="/itineraries", tags=["itineraries"])


# --------------------------------------------------------
# Pydantic Models
# --------------------------------------------------------
class EventView(BaseModel):
    event: Event
    time_label: str
    address: str


class BlockView(BaseModel):
    slot: int
    name: str
    time_range: str
    events: List[EventView]


class SessionView(BaseModel):
    itinerary: ItineraryMeta
    state: SessionState
    dirty: bool
    selected_day: int
    dates: List[str]
    date: Optional[str]
    blocks: List[BlockView]
    unassigned: List[EventView]
    notifications: List[Notification] = []


class DaySelectIn(BaseModel):
    index: int


class MoveIn(BaseModel):
    event_id: int
    event_name: str = ""
    event_description: Optional[str] = None
    source_slot: int = POOL_SLOT
    target_slot: int
    target_position: Optional[int] = None


class MoveOut(BaseModel):
    move: MoveResult
    session: SessionView


class SearchOut(BaseModel):
    result: Optional[SearchResult]
    session: SessionView


class PoolIn(BaseModel):
    event_id: int             # must come from the last search of this session


# --------------------------------------------------------
# Helpers
# --------------------------------------------------------
def _event_view(event: Event, block_name: str = "") -> EventView:
    return EventView(
        event=event,
        time_label=format_event_time(event.hard_start, block_name, event.timezone),
        address=format_address(event.street_address, event.city, event.country, event.postal_code),
    )


def _raise_on_redirect(navigator: BufferedNavigator) -> None:
    redirect = navigator.take_redirect()
    if redirect:
        raise HTTPException(status_code=401, detail={"redirect": redirect})


def _view(handle: EditorHandle) -> SessionView:
    _raise_on_redirect(handle.navigator)

    session = handle.session
    working = session.working
    day = working.current_day

    blocks = []
    if day is not None:
        for slot, block in enumerate(day.blocks):
            blocks.append(BlockView(
                slot=slot,
                name=block.name,
                time_range=time_range_label(block.name),
                events=[_event_view(e, block.name) for e in block.events],
            ))

    return SessionView(
        itinerary=session.meta,
        state=session.state,
        dirty=session.dirty,
        selected_day=working.selected_day,
        dates=[d.date for d in working.days],
        date=day.date if day else None,
        blocks=blocks,
        unassigned=[_event_view(e) for e in working.unassigned],
        notifications=handle.notifier.drain(),
    )


def _handle(itinerary_id: int) -> EditorHandle:
    handle = store.get(itinerary_id)
    if handle is None:
        raise HTTPException(status_code=404, detail="No open edit session for this itinerary")
    return handle


def _event(handle: EditorHandle, event_id: int) -> Event:
    event = handle.session.working.find_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found in the current day or unassigned events")
    return event


# --------------------------------------------------------
# Saved itineraries
# --------------------------------------------------------
@router.get("/saved")
def list_saved():
    notifier, navigator = BufferedNotifier(), BufferedNavigator()
    catalog = ItineraryCatalog(store.client(), notifier, navigator)
    items = catalog.list_saved()
    _raise_on_redirect(navigator)
    return {"items": items or [], "notifications": notifier.drain()}


@router.post("/{itinerary_id}/unsave")
def unsave(itinerary_id: int):
    notifier, navigator = BufferedNotifier(), BufferedNavigator()
    catalog = ItineraryCatalog(store.client(), notifier, navigator)
    ok = catalog.unsave(itinerary_id)
    _raise_on_redirect(navigator)
    if ok:
        store.close(itinerary_id)
    return {"ok": ok, "notifications": notifier.drain()}


# --------------------------------------------------------
# Session lifecycle
# --------------------------------------------------------
@router.post("/{itinerary_id}/session", response_model=SessionView)
def open_session(itinerary_id: int):
    notifier, navigator = BufferedNotifier(), BufferedNavigator()
    handle = store.open(itinerary_id, notifier, navigator)
    _raise_on_redirect(navigator)
    if handle is None:
        messages = [n.message for n in notifier.drain()]
        raise HTTPException(status_code=502, detail=messages[0] if messages else "Failed to load itinerary")
    with handle.lock:
        return _view(handle)


@router.get("/{itinerary_id}/session", response_model=SessionView)
def get_session(itinerary_id: int):
    handle = _handle(itinerary_id)
    with handle.lock:
        return _view(handle)


@router.delete("/{itinerary_id}/session")
def close_session(itinerary_id: int):
    return {"closed": store.close(itinerary_id)}


@router.post("/{itinerary_id}/session/day", response_model=SessionView)
def select_day(itinerary_id: int, data: DaySelectIn):
    handle = _handle(itinerary_id)
    with handle.lock:
        handle.session.select_day(data.index)
        return _view(handle)


# --------------------------------------------------------
# Drag & drop
# --------------------------------------------------------
@router.post("/{itinerary_id}/session/move", response_model=MoveOut)
def move_event(itinerary_id: int, data: MoveIn):
    handle = _handle(itinerary_id)
    command = MoveCommand(
        event_id=data.event_id,
        event_name=data.event_name,
        event_description=data.event_description,
        source_slot=data.source_slot,
    )
    with handle.lock:
        result = handle.engine.drop(command, data.target_slot, data.target_position)
        return MoveOut(move=result, session=_view(handle))


# --------------------------------------------------------
# Save / Cancel
# --------------------------------------------------------
@router.post("/{itinerary_id}/session/save", response_model=SessionView)
def save_session(itinerary_id: int):
    handle = _handle(itinerary_id)
    with handle.lock:
        handle.session.save()
        store.rekey(itinerary_id, handle.session.meta.id)
        return _view(handle)


@router.post("/{itinerary_id}/session/cancel", response_model=SessionView)
def cancel_session(itinerary_id: int):
    handle = _handle(itinerary_id)
    with handle.lock:
        handle.session.cancel()
        return _view(handle)


# --------------------------------------------------------
# User events
# --------------------------------------------------------
@router.post("/{itinerary_id}/session/events", response_model=SessionView)
def create_event(itinerary_id: int, fields: Dict[str, Any]):
    handle = _handle(itinerary_id)
    with handle.lock:
        handle.gateway.create(fields)
        return _view(handle)


@router.put("/{itinerary_id}/session/events/{event_id}", response_model=SessionView)
def update_event(itinerary_id: int, event_id: int, fields: Dict[str, Any]):
    handle = _handle(itinerary_id)
    with handle.lock:
        event = _event(handle, event_id)
        if not event.user_created:
            raise HTTPException(status_code=403, detail="Only events you created can be edited")
        handle.gateway.update(event, fields)
        return _view(handle)


@router.delete("/{itinerary_id}/session/events/{event_id}", response_model=SessionView)
def delete_event(itinerary_id: int, event_id: int):
    handle = _handle(itinerary_id)
    with handle.lock:
        event = _event(handle, event_id)
        if not event.user_created:
            raise HTTPException(status_code=403, detail="Only events you created can be deleted")
        handle.gateway.delete(event)
        return _view(handle)


@router.post("/{itinerary_id}/session/events/search", response_model=SearchOut)
def search_events(itinerary_id: int, filters: Dict[str, Any]):
    handle = _handle(itinerary_id)
    with handle.lock:
        result = handle.gateway.search(filters)
        return SearchOut(result=result, session=_view(handle))


@router.post("/{itinerary_id}/session/pool", response_model=SessionView)
def add_to_pool(itinerary_id: int, data: PoolIn):
    handle = _handle(itinerary_id)
    with handle.lock:
        handle.gateway.add_to_pool(data.event_id)
        return _view(handle)
