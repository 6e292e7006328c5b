# app/services/user_service.py
import logging

from fastapi import HTTPException, status

from app.core.constants import Collections
from app.core.query import order_by_asc
from app.database import DocumentStore
from app.models.user import UserRecord
from app.schemas.user import UserRoleUpdate

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for user records.

    Records are created at first sign-in (see `get_or_create_user`);
    this service only covers the admin side.
    """

    # ----- Admin operations -----

    def list_users(self, store: DocumentStore) -> list[UserRecord]:
        """List user records by email (admin only)."""
        return store.get_documents(Collections.USERS, order_by=[order_by_asc("email")])

    def get_user(self, store: DocumentStore, user_id: str) -> UserRecord:
        """
        Get a user record by id (admin only).

        Raises:
            HTTPException(404): if not found.
        """
        user = store.get_document(Collections.USERS, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_role(
        self,
        store: DocumentStore,
        user_id: str,
        payload: UserRoleUpdate,
    ) -> UserRecord:
        """
        Change user's role (admin only).

        Role validation is enforced by the schema (Literal).
        """
        self.get_user(store, user_id)
        user = store.update_document(Collections.USERS, user_id, {"role": payload.role})
        logger.info("User %s role set to %s", user_id, payload.role)
        return user
