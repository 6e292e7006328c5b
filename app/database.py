# app/database.py
import logging
import uuid
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError
from supabase import Client, PostgrestAPIError

from app.core.errors import (
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentValidationError,
    StoreError,
)
from app.core.query import (
    OPERATOR_METHODS,
    Direction,
    Filter,
    OrderBy,
    Page,
    decode_cursor,
    encode_cursor,
    to_store_value,
)
from app.core.supabase_client import supabase_admin
from app.models.document import Document
from app.models.registry import COLLECTION_MODELS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Document access layer over the Supabase PostgREST API.
#
# Each collection is a table whose columns carry the camelCase document
# fields (`id`, `createdAt`, `updatedAt`, ...). The store enforces no
# shape of its own, so every write is validated against the collection's
# document model before the network call, and every read is validated on
# the way out.
# ---------------------------------------------------------

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"

# Set by the access layer only; silently dropped from caller payloads
PROTECTED_FIELDS = frozenset({"id", "createdAt", "updatedAt"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _quote(value: Any) -> str:
    """Quote a value for use inside a PostgREST `or=(...)` expression."""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


class DocumentStore:
    """
    Typed CRUD, query and pagination surface over named collections.

    - Timestamps: `createdAt == updatedAt == now` on create, `updatedAt`
      bumped on every update; client-supplied values are ignored.
    - Errors: provider failures surface as `StoreError` with the provider's
      message, never retried. Not-found is `None` on reads and
      `DocumentNotFoundError` on updates.
    - No cascading: callers orchestrate dependent deletes themselves.
    """

    def __init__(
        self,
        client: Client,
        models: Mapping[str, type[Document]] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.client = client
        self.models = dict(models if models is not None else COLLECTION_MODELS)
        self.clock = clock

    # ----- Helpers -----

    def _model(self, collection: str) -> type[Document]:
        try:
            return self.models[collection]
        except KeyError:
            raise DocumentValidationError(f"Unknown collection: {collection}") from None

    def _table(self, collection: str):
        return self.client.table(collection)

    def _execute(
        self,
        builder: Any,
        collection: str,
        doc_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Run a PostgREST request and map provider failures to access-layer errors.
        """
        try:
            response = builder.execute()
        except PostgrestAPIError as exc:
            if str(exc.code) == UNIQUE_VIOLATION and doc_id is not None:
                raise DocumentExistsError(collection, doc_id) from exc
            logger.error("Store request on %s failed: %r", collection, exc)
            raise StoreError(exc.message or str(exc), str(exc.code) if exc.code else None) from exc
        except httpx.HTTPError as exc:
            logger.error("Store request on %s failed: %s", collection, exc)
            raise StoreError(str(exc) or exc.__class__.__name__) from exc
        return list(response.data or [])

    @staticmethod
    def _validate(model: type[Document], row: Mapping[str, Any]) -> Document:
        try:
            return model.model_validate(row)
        except ValidationError as exc:
            raise DocumentValidationError(
                f"Invalid {model.collection} document",
                exc.errors(include_url=False, include_context=False),
            ) from exc

    def _validate_many(
        self,
        model: type[Document],
        rows: Sequence[Mapping[str, Any]],
    ) -> list[Document]:
        """Validate rows, quarantining (skipping) malformed ones."""
        documents: list[Document] = []
        for row in rows:
            try:
                documents.append(model.model_validate(row))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed %s document %r (%d validation errors)",
                    model.collection,
                    row.get("id"),
                    exc.error_count(),
                )
        return documents

    @staticmethod
    def _stored_name(model: type[Document], field: str) -> str:
        return model.field_aliases().get(field, field)

    def _normalize(
        self,
        model: type[Document],
        data: Mapping[str, Any] | BaseModel,
        partial: bool = False,
    ) -> dict[str, Any]:
        """
        Turn a caller payload into stored (camelCase) field names.

        - Pydantic payloads are dumped; partial payloads keep only set fields.
        - Protected fields (id, createdAt, updatedAt) are dropped.
        - Unknown fields are rejected.
        """
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json", by_alias=True, exclude_unset=partial)

        aliases = model.field_aliases()
        known = set(aliases.values())
        fields: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in data.items():
            stored = aliases.get(key, key)
            if stored in PROTECTED_FIELDS:
                continue
            if stored not in known:
                unknown.append(key)
                continue
            fields[stored] = value

        if unknown:
            raise DocumentValidationError(
                f"Unknown field(s) for {model.collection}: {', '.join(sorted(unknown))}"
            )
        return fields

    def _apply_filter(self, query: Any, model: type[Document], flt: Filter) -> Any:
        method = getattr(query, OPERATOR_METHODS[flt.op])
        value = to_store_value(flt.value)
        if flt.op == "in" and not isinstance(value, list):
            value = [value]
        return method(self._stored_name(model, flt.field), value)

    # ----- CRUD -----

    def get_document(self, collection: str, doc_id: str) -> Document | None:
        """
        Return the document or None if the id does not exist.

        Raises:
            StoreError: on provider/connectivity failure.
            DocumentValidationError: if the stored row is malformed.
        """
        model = self._model(collection)
        query = self._table(collection).select("*").eq("id", doc_id).limit(1)
        rows = self._execute(query, collection)
        if not rows:
            return None
        return self._validate(model, rows[0])

    def get_documents(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Document]:
        """
        Query a collection.

        Filters are ANDed; ordering is applied in the given sequence.
        Returns an empty list (never None) when nothing matches.
        """
        model = self._model(collection)
        if limit is not None and limit < 0:
            raise DocumentValidationError("limit must be >= 0")

        query = self._table(collection).select("*")
        for flt in filters:
            query = self._apply_filter(query, model, flt)
        for order in order_by:
            query = query.order(self._stored_name(model, order.field), desc=order.desc)
        if limit is not None:
            query = query.limit(limit)

        rows = self._execute(query, collection)
        return self._validate_many(model, rows)

    def create_document(
        self,
        collection: str,
        data: Mapping[str, Any] | BaseModel,
        doc_id: str | None = None,
    ) -> Document:
        """
        Validate and insert a new document.

        - doc_id=None => a new UUID4 string is assigned.
        - createdAt = updatedAt = now.

        Raises:
            DocumentValidationError: payload does not match the collection shape.
            DocumentExistsError: doc_id already taken.
            StoreError: on provider failure.
        """
        model = self._model(collection)
        fields = self._normalize(model, data)
        now = self.clock()
        doc_id = doc_id or str(uuid.uuid4())

        document = self._validate(
            model,
            {**fields, "id": doc_id, "createdAt": now, "updatedAt": now},
        )
        rows = self._execute(
            self._table(collection).insert(document.to_store()),
            collection,
            doc_id,
        )
        return self._validate(model, rows[0]) if rows else document

    def update_document(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any] | BaseModel,
    ) -> Document:
        """
        Merge the supplied fields into an existing document.

        Only supplied fields are written, plus a strictly increasing
        `updatedAt`. Returns the merged document.

        Raises:
            DocumentNotFoundError: doc_id does not exist.
            DocumentValidationError: merged document would be malformed.
            StoreError: on provider failure.
        """
        model = self._model(collection)
        fields = self._normalize(model, data, partial=True)

        current = self.get_document(collection, doc_id)
        if current is None:
            raise DocumentNotFoundError(collection, doc_id)

        previous = _aware(current.updated_at)
        now = self.clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)

        merged = self._validate(model, {**current.to_store(), **fields, "updatedAt": now})
        stored = merged.to_store()
        patch = {key: stored[key] for key in fields}
        patch["updatedAt"] = stored["updatedAt"]

        rows = self._execute(
            self._table(collection).update(patch).eq("id", doc_id),
            collection,
        )
        if not rows:
            # Deleted between the read and the write
            raise DocumentNotFoundError(collection, doc_id)
        return self._validate(model, rows[0])

    def delete_document(self, collection: str, doc_id: str) -> None:
        """
        Delete a document by id. Deleting a missing id is not an error.
        Does not cascade.
        """
        self._model(collection)
        self._execute(self._table(collection).delete().eq("id", doc_id), collection)

    # ----- Pagination -----

    def get_page(
        self,
        collection: str,
        order_by_field: str = "createdAt",
        direction: Direction = "desc",
        page_size: int = 10,
        cursor: str | None = None,
    ) -> Page[Document]:
        """
        Forward keyset pagination ordered by (order_by_field, id).

        Fetches page_size + 1 rows; the extra one only tells whether
        another page exists and is trimmed.
        """
        model = self._model(collection)
        if page_size < 1:
            raise DocumentValidationError("page_size must be >= 1")
        if direction not in ("asc", "desc"):
            raise DocumentValidationError(f"Unsupported direction: {direction}")

        field = self._stored_name(model, order_by_field)
        desc = direction == "desc"
        query = self._table(collection).select("*")

        if cursor:
            value, last_id = decode_cursor(cursor)
            op = "lt" if desc else "gt"
            query = query.or_(
                f"{field}.{op}.{_quote(value)},"
                f"and({field}.eq.{_quote(value)},id.{op}.{_quote(last_id)})"
            )

        query = query.order(field, desc=desc).order("id", desc=desc).limit(page_size + 1)
        rows = self._execute(query, collection)

        has_more = len(rows) > page_size
        rows = rows[:page_size]
        next_cursor = encode_cursor(rows[-1].get(field), str(rows[-1]["id"])) if rows else None

        return Page[model](
            items=self._validate_many(model, rows),
            next_cursor=next_cursor,
            has_more=has_more,
        )


def get_store() -> DocumentStore:
    """
    FastAPI dependency that returns the access layer bound to the
    service-role Supabase client.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(store: DocumentStore = Depends(get_store)):
            ...
    """
    return DocumentStore(supabase_admin())
