# app/schemas/event.py
import datetime as dt

from pydantic import ConfigDict, field_validator
from sqlmodel import Field

from app.models.document import CamelModel, check_hhmm, check_not_blank


class EventCreate(CamelModel):
    """
    Payload for creating an event.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=200)
    date: dt.date
    time: str
    description: str
    short_description: str = ""
    image_url: str | None = None
    price: float = Field(default=0, ge=0)
    capacity: int = Field(ge=1)
    location: str
    duration: int = Field(ge=1)
    is_active: bool = True

    @field_validator("title", "description", "location")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return check_not_blank(v)

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return check_hhmm(v)


class EventUpdate(CamelModel):
    """
    Partial update payload for events.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=200)
    date: dt.date | None = None
    time: str | None = None
    description: str | None = None
    short_description: str | None = None
    image_url: str | None = None
    price: float | None = Field(default=None, ge=0)
    capacity: int | None = Field(default=None, ge=1)
    location: str | None = None
    duration: int | None = Field(default=None, ge=1)
    is_active: bool | None = None

    @field_validator("title", "description", "location")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return check_not_blank(v)

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return check_hhmm(v)
