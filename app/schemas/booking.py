# app/schemas/booking.py
import datetime as dt
from typing import Any

from pydantic import ConfigDict, EmailStr, field_validator, model_validator
from sqlmodel import Field

from app.models.booking import MAX_GUESTS, BookingStatus
from app.models.document import CamelModel, check_hhmm, check_not_blank


class BookingCreate(CamelModel):
    """
    Public booking request.

    Backend derives:
      - status = 'pending' (a client-supplied status is ignored)
      - id, createdAt, updatedAt

    `partySize` is accepted as another name for `guests`.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    email: EmailStr
    phone: str = Field(max_length=40)
    date: dt.date
    time: str
    guests: int = Field(ge=1, le=MAX_GUESTS)
    notes: str | None = None
    event_id: str | None = None
    # Accepted for compatibility; new bookings are always pending
    status: BookingStatus | None = None

    @model_validator(mode="before")
    @classmethod
    def party_size_alias(cls, data: Any) -> Any:
        if isinstance(data, dict) and "partySize" in data and "guests" not in data:
            data = {**data}
            data["guests"] = data.pop("partySize")
        return data

    @field_validator("name", "phone")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return check_not_blank(v)

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return check_hhmm(v)

    @field_validator("notes", "event_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class BookingStatusUpdate(CamelModel):
    """
    Admin payload to change booking status.

    Any status may follow any other.
    """

    model_config = ConfigDict(extra="forbid")

    status: BookingStatus
