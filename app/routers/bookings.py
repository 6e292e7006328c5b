# app/routers/bookings.py
import datetime as dt

from fastapi import APIRouter, Depends, Query, status

from app.core.auth import require_admin
from app.core.query import Page
from app.database import DocumentStore, get_store
from app.models.booking import Booking, BookingStatus
from app.schemas.booking import BookingCreate, BookingStatusUpdate
from app.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])
admin_router = APIRouter(
    prefix="/admin/bookings",
    tags=["Admin: Bookings"],
    dependencies=[Depends(require_admin)],
)

service = BookingService()


# -------- Public endpoints --------


@router.post(
    "",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    payload: BookingCreate,
    store: DocumentStore = Depends(get_store),
):
    """
    Submit a table booking.

    - Public endpoint.
    - New bookings are always `pending`.
    """
    return service.create_booking(store, payload)


# -------- Admin endpoints --------


@admin_router.get("", response_model=list[Booking])
def list_bookings(
    status_filter: BookingStatus | None = Query(None, alias="status"),
    date: dt.date | None = None,
    store: DocumentStore = Depends(get_store),
):
    """
    List bookings (admin only).

    Optional filters:
      - status: pending | confirmed | declined
      - date: YYYY-MM-DD
    """
    return service.list_bookings(store, status_filter=status_filter, date=date)


@admin_router.get("/page", response_model=Page[Booking])
def page_bookings(
    page_size: int = Query(10, ge=1, le=100),
    cursor: str | None = None,
    store: DocumentStore = Depends(get_store),
):
    """
    Cursor-paginated bookings, newest first (admin only).
    """
    return service.page(store, page_size=page_size, cursor=cursor)


@admin_router.get("/{booking_id}", response_model=Booking)
def get_booking(booking_id: str, store: DocumentStore = Depends(get_store)):
    return service.get_booking(store, booking_id)


@admin_router.patch("/{booking_id}/status", response_model=Booking)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    store: DocumentStore = Depends(get_store),
):
    """
    Confirm, decline or reopen a booking (admin only).
    """
    return service.update_status(store, booking_id, payload)


@admin_router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(booking_id: str, store: DocumentStore = Depends(get_store)):
    service.delete_booking(store, booking_id)
    return None
