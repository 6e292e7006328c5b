# app/services/booking_service.py
import datetime as dt
import logging

from fastapi import HTTPException, status

from app.core.constants import Collections
from app.core.query import Page, order_by_asc, order_by_desc, where_equal
from app.database import DocumentStore
from app.models.booking import Booking
from app.schemas.booking import BookingCreate, BookingStatusUpdate

logger = logging.getLogger(__name__)


class BookingService:
    """
    Business logic for table bookings.

    Responsibilities:
      - public booking creation (always pending)
      - checking the referenced event exists
      - admin listing, filtering and status changes
    """

    # ----- Public -----

    def create_booking(self, store: DocumentStore, payload: BookingCreate) -> Booking:
        """
        Record a booking request.

        Rules:
          - status is always 'pending' regardless of input
          - eventId, if given, must reference an existing event
        """
        if payload.event_id and not store.get_document(Collections.EVENTS, payload.event_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Event not found for this booking",
            )

        data = payload.model_dump(mode="json", by_alias=True, exclude={"status"})
        data["status"] = "pending"
        booking = store.create_document(Collections.BOOKINGS, data)
        logger.info("Booking %s created for %s at %s", booking.id, booking.date, booking.time)
        return booking

    # ----- Admin -----

    def list_bookings(
        self,
        store: DocumentStore,
        status_filter: str | None = None,
        date: dt.date | None = None,
    ) -> list[Booking]:
        """
        Bookings newest date first, then by time within a day.
        """
        filters = []
        if status_filter:
            filters.append(where_equal("status", status_filter))
        if date:
            filters.append(where_equal("date", date))
        return store.get_documents(
            Collections.BOOKINGS,
            filters=filters,
            order_by=[order_by_desc("date"), order_by_asc("time")],
        )

    def page(
        self,
        store: DocumentStore,
        page_size: int = 10,
        cursor: str | None = None,
    ) -> Page[Booking]:
        return store.get_page(
            Collections.BOOKINGS,
            order_by_field="createdAt",
            direction="desc",
            page_size=page_size,
            cursor=cursor,
        )

    def get_booking(self, store: DocumentStore, booking_id: str) -> Booking:
        booking = store.get_document(Collections.BOOKINGS, booking_id)
        if not booking:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found",
            )
        return booking

    def update_status(
        self,
        store: DocumentStore,
        booking_id: str,
        payload: BookingStatusUpdate,
    ) -> Booking:
        """
        Move a booking to any status; no transition is forbidden.
        """
        booking = store.update_document(
            Collections.BOOKINGS,
            booking_id,
            {"status": payload.status},
        )
        logger.info("Booking %s is now %s", booking_id, booking.status)
        return booking

    def delete_booking(self, store: DocumentStore, booking_id: str) -> None:
        self.get_booking(store, booking_id)
        store.delete_document(Collections.BOOKINGS, booking_id)
