# app/models/booking.py
import datetime as dt
from typing import ClassVar, Literal

from pydantic import EmailStr, field_validator
from sqlmodel import Field

from app.core.constants import Collections
from app.models.document import Document, check_hhmm, check_not_blank

BookingStatus = Literal["pending", "confirmed", "declined"]

# Largest party the booking form accepts
MAX_GUESTS = 10


class Booking(Document):
    """
    Table reservation request.

    Status may move between any of pending | confirmed | declined; it is
    the only field the back office changes after creation.
    """

    collection: ClassVar[str] = Collections.BOOKINGS

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=40)
    date: dt.date
    time: str
    guests: int = Field(ge=1, le=MAX_GUESTS)
    notes: str | None = None
    status: BookingStatus = "pending"
    event_id: str | None = None

    @field_validator("name", "phone")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return check_not_blank(v)

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return check_hhmm(v)
