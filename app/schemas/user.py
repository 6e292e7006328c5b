# app/schemas/user.py
from pydantic import ConfigDict

from app.models.document import CamelModel
from app.models.user import Role


class UserRoleUpdate(CamelModel):
    """
    Admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role


class SessionCreate(CamelModel):
    """
    Body of POST /auth/session.

    `id_token` is optional here so a missing token is answered with 400
    by the endpoint rather than with a validation error.
    """

    id_token: str | None = None


class AuthStatus(CamelModel):
    status: str


class AdminCheck(CamelModel):
    is_admin: bool
