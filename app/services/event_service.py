# app/services/event_service.py
import datetime as dt

from fastapi import HTTPException, status

from app.core.constants import Collections
from app.core.query import Filter, Page, order_by_asc, order_by_desc, where_equal
from app.database import DocumentStore
from app.models.event import Event
from app.schemas.event import EventCreate, EventUpdate

# How many events the homepage shows
LATEST_EVENTS_COUNT = 3


class EventService:
    """
    Business logic for events.

    Responsibilities:
      - public listing/detail limited to active events
      - admin CRUD and paginated listing
    """

    # ----- Public -----

    def list_public(
        self,
        store: DocumentStore,
        upcoming: bool = False,
        today: dt.date | None = None,
    ) -> list[Event]:
        """
        Active events in chronological order.

        - upcoming=True hides events dated before today.
        """
        filters = [where_equal("isActive", True)]
        if upcoming:
            filters.append(Filter("date", ">=", today or dt.date.today()))
        return store.get_documents(
            Collections.EVENTS,
            filters=filters,
            order_by=[order_by_asc("date"), order_by_asc("time")],
        )

    def latest(self, store: DocumentStore, count: int = LATEST_EVENTS_COUNT) -> list[Event]:
        """Most recent active events by date, newest first."""
        return store.get_documents(
            Collections.EVENTS,
            filters=[where_equal("isActive", True)],
            order_by=[order_by_desc("date")],
            limit=count,
        )

    def get_public(self, store: DocumentStore, event_id: str) -> Event:
        """
        Single active event. Inactive events are reported as not found.
        """
        event = self.get_event(store, event_id)
        if not event.is_active:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found",
            )
        return event

    # ----- Admin -----

    def list_all(self, store: DocumentStore) -> list[Event]:
        return store.get_documents(Collections.EVENTS, order_by=[order_by_desc("date")])

    def page(
        self,
        store: DocumentStore,
        page_size: int = 10,
        cursor: str | None = None,
    ) -> Page[Event]:
        return store.get_page(
            Collections.EVENTS,
            order_by_field="date",
            direction="desc",
            page_size=page_size,
            cursor=cursor,
        )

    def get_event(self, store: DocumentStore, event_id: str) -> Event:
        event = store.get_document(Collections.EVENTS, event_id)
        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found",
            )
        return event

    def create_event(self, store: DocumentStore, payload: EventCreate) -> Event:
        return store.create_document(Collections.EVENTS, payload)

    def update_event(
        self,
        store: DocumentStore,
        event_id: str,
        payload: EventUpdate,
    ) -> Event:
        return store.update_document(Collections.EVENTS, event_id, payload)

    def delete_event(self, store: DocumentStore, event_id: str) -> None:
        self.get_event(store, event_id)
        store.delete_document(Collections.EVENTS, event_id)
