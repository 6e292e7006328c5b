# app/models/document.py
from datetime import datetime
from typing import Any, ClassVar

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel, Field


class CamelModel(SQLModel):
    """
    Base for every shape that crosses the store or the HTTP boundary.

    Python attributes are snake_case; stored and wire names are camelCase.
    Either spelling is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Document(CamelModel):
    """
    Base shape shared by every persisted entity.

      - id: provider-assigned (or well-known) key, unique within its collection
      - created_at / updated_at: stamped by the access layer, never by clients

    Unknown stored columns are ignored on read.
    """

    model_config = ConfigDict(extra="ignore")

    collection: ClassVar[str] = ""

    id: str = Field(min_length=1)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def field_aliases(cls) -> dict[str, str]:
        """Map python attribute name -> stored (camelCase) name."""
        return {
            name: info.alias or name for name, info in cls.model_fields.items()
        }

    def to_store(self) -> dict[str, Any]:
        """Serialize to the JSON row written to the store."""
        return self.model_dump(mode="json", by_alias=True)


def check_hhmm(value: str) -> str:
    """Validate a 24h `HH:MM` time string, padding a single-digit hour."""
    value = value.strip()
    hours, sep, minutes = value.partition(":")
    if (
        not sep
        or not hours.isdigit()
        or not minutes.isdigit()
        or len(minutes) != 2
        or not 0 <= int(hours) <= 23
        or not 0 <= int(minutes) <= 59
    ):
        raise ValueError("time must be HH:MM (24h)")
    return f"{int(hours):02d}:{minutes}"


def check_not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("field cannot be empty")
    return value
