# app/core/query.py
import base64
import binascii
import json
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.errors import DocumentValidationError

Operator = Literal["==", "!=", "<", "<=", ">", ">=", "in"]
Direction = Literal["asc", "desc"]

# Filter operator -> PostgREST builder method
OPERATOR_METHODS: dict[str, str] = {
    "==": "eq",
    "!=": "neq",
    "<": "lt",
    "<=": "lte",
    ">": "gt",
    ">=": "gte",
    "in": "in_",
}

T = TypeVar("T")


def to_store_value(value: Any) -> Any:
    """Convert Python values into the JSON scalars the store compares on."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set)):
        return [to_store_value(v) for v in value]
    return value


@dataclass(frozen=True)
class Filter:
    """
    Single predicate on a stored field.

    Filters passed together are combined with AND.
    """

    field: str
    op: Operator
    value: Any

    def __post_init__(self) -> None:
        if self.op not in OPERATOR_METHODS:
            raise DocumentValidationError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: Direction = "asc"

    @property
    def desc(self) -> bool:
        return self.direction == "desc"


def where_equal(field: str, value: Any) -> Filter:
    return Filter(field, "==", value)


def order_by_asc(field: str) -> OrderBy:
    return OrderBy(field, "asc")


def order_by_desc(field: str) -> OrderBy:
    return OrderBy(field, "desc")


class Page(BaseModel, Generic[T]):
    """
    One page of a forward, cursor-based scan.

    `next_cursor` is the position of the last item in `items`; pass it
    back as `cursor` to get the following page.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[T]
    next_cursor: str | None = None
    has_more: bool = False


def encode_cursor(value: Any, doc_id: str) -> str:
    raw = json.dumps({"v": to_store_value(value), "id": doc_id}, separators=(",", ":"))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(cursor: str) -> tuple[Any, str]:
    """
    Inverse of `encode_cursor`.

    Raises:
        DocumentValidationError: if the cursor was not produced by us.
    """
    padded = cursor + "=" * (-len(cursor) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
        return payload["v"], str(payload["id"])
    except (binascii.Error, UnicodeError, ValueError, KeyError, TypeError) as exc:
        raise DocumentValidationError("Invalid pagination cursor") from exc
