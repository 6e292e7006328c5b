# app/models/event.py
import datetime as dt
from typing import ClassVar

from pydantic import field_validator
from sqlmodel import Field

from app.core.constants import Collections
from app.models.document import Document, check_hhmm, check_not_blank


class Event(Document):
    """
    Scheduled event (quiz night, live music, tasting...).

    `is_active` gates public visibility; inactive events are admin-only.
    """

    collection: ClassVar[str] = Collections.EVENTS

    title: str = Field(min_length=1, max_length=200)
    date: dt.date
    time: str = Field(description="Start time, HH:MM 24h")
    description: str = Field(min_length=1)
    short_description: str = ""
    image_url: str | None = None
    price: float = Field(default=0, ge=0)
    capacity: int = Field(ge=1)
    location: str = Field(min_length=1)
    duration: int = Field(ge=1, description="Duration in minutes")
    is_active: bool = True

    @field_validator("title", "location")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return check_not_blank(v)

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return check_hhmm(v)
