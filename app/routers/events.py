# app/routers/events.py
from fastapi import APIRouter, Depends, Query, status

from app.core.auth import require_admin
from app.core.query import Page
from app.database import DocumentStore, get_store
from app.models.event import Event
from app.schemas.event import EventCreate, EventUpdate
from app.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["Events"])
admin_router = APIRouter(
    prefix="/admin/events",
    tags=["Admin: Events"],
    dependencies=[Depends(require_admin)],
)

service = EventService()


# -------- Public endpoints --------


@router.get("", response_model=list[Event])
def list_events(
    upcoming: bool = False,
    store: DocumentStore = Depends(get_store),
):
    """
    List active events in date order.

    - Public endpoint.
    - `upcoming=true` hides past events.
    """
    return service.list_public(store, upcoming=upcoming)


@router.get("/{event_id}", response_model=Event)
def get_event(event_id: str, store: DocumentStore = Depends(get_store)):
    """
    Get a single active event.
    """
    return service.get_public(store, event_id)


# -------- Admin endpoints --------


@admin_router.get("", response_model=list[Event])
def list_all_events(store: DocumentStore = Depends(get_store)):
    """
    List every event, newest date first (admin only).
    """
    return service.list_all(store)


@admin_router.get("/page", response_model=Page[Event])
def page_events(
    page_size: int = Query(10, ge=1, le=100),
    cursor: str | None = None,
    store: DocumentStore = Depends(get_store),
):
    """
    Cursor-paginated events (admin only).

    Pass `nextCursor` from the previous page as `cursor`.
    """
    return service.page(store, page_size=page_size, cursor=cursor)


@admin_router.get("/{event_id}", response_model=Event)
def get_any_event(event_id: str, store: DocumentStore = Depends(get_store)):
    return service.get_event(store, event_id)


@admin_router.post(
    "",
    response_model=Event,
    status_code=status.HTTP_201_CREATED,
)
def create_event(
    payload: EventCreate,
    store: DocumentStore = Depends(get_store),
):
    """
    Create an event (admin only).
    """
    return service.create_event(store, payload)


@admin_router.patch("/{event_id}", response_model=Event)
def update_event(
    event_id: str,
    payload: EventUpdate,
    store: DocumentStore = Depends(get_store),
):
    """
    Update an existing event (admin only).
    """
    return service.update_event(store, event_id, payload)


@admin_router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, store: DocumentStore = Depends(get_store)):
    """
    Delete an event (admin only).
    """
    service.delete_event(store, event_id)
    return None
