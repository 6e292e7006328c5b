# app/models/user.py
from typing import ClassVar, Literal

from app.core.constants import Collections
from app.models.document import Document

# App-level roles. "guest" = no session, so we don't store it here.
Role = Literal["user", "admin"]


class UserRecord(Document):
    """
    Application profile for a Supabase Auth user.

    Identity:
      - id: MUST match Supabase auth.users.id (the JWT "sub")

    Role:
      - "user" | "admin"; only admins may enter the back office.

    This record is *not* responsible for credentials. Supabase Auth
    stores the password in its own schema. We only mirror the email and
    the application role.
    """

    collection: ClassVar[str] = Collections.USERS

    email: str
    role: Role = "user"
