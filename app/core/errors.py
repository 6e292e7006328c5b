# app/core/errors.py
from typing import Any


class AccessLayerError(Exception):
    """Base class for every error raised by the document access layer."""


class DocumentNotFoundError(AccessLayerError):
    """The requested document id does not exist in its collection."""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"{collection}/{doc_id} not found")


class DocumentExistsError(AccessLayerError):
    """A create was attempted with an id that is already taken."""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"{collection}/{doc_id} already exists")


class DocumentValidationError(AccessLayerError):
    """
    A payload (or a stored row) does not match its collection's shape.

    `errors` carries the pydantic error list when there is one, so the
    HTTP layer can return it the same way FastAPI reports request errors.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class StoreError(AccessLayerError):
    """
    Provider-side failure: permission denial, connectivity loss, quota.

    The provider's own message and code are kept verbatim.
    """

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code
        super().__init__(message if not code else f"[{code}] {message}")


class LoginRedirect(Exception):
    """
    Raised by the admin gate; turned into a redirect to the login route.

    `clear_session` is set when a valid session belongs to a non-admin user,
    so the redirect response also deletes the session cookie.
    """

    def __init__(self, clear_session: bool = False):
        self.clear_session = clear_session
        super().__init__("admin session required")
