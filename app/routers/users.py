# app/routers/users.py
from fastapi import APIRouter, Depends

from app.core.auth import require_admin
from app.database import DocumentStore, get_store
from app.models.user import UserRecord
from app.schemas.user import UserRoleUpdate
from app.services.user_service import UserService

router = APIRouter(
    prefix="/admin/users",
    tags=["Admin: Users"],
    dependencies=[Depends(require_admin)],
)

service = UserService()


@router.get("", response_model=list[UserRecord])
def list_users(store: DocumentStore = Depends(get_store)):
    """
    List all user records (admin only).
    """
    return service.list_users(store)


@router.get("/{user_id}", response_model=UserRecord)
def get_user(user_id: str, store: DocumentStore = Depends(get_store)):
    """
    Get a specific user by id (admin only).
    """
    return service.get_user(store, user_id)


@router.patch("/{user_id}/role", response_model=UserRecord)
def change_role(
    user_id: str,
    payload: UserRoleUpdate,
    store: DocumentStore = Depends(get_store),
):
    """
    Update a user's role (admin only).

    Allowed roles: user, admin.
    """
    return service.update_role(store, user_id, payload)
