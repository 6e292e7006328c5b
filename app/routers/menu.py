# app/routers/menu.py
from fastapi import APIRouter, Depends, status

from app.core.auth import require_admin
from app.database import DocumentStore, get_store
from app.models.menu import MenuCategory, MenuItem
from app.schemas.menu import MenuCategoryGroup, MenuItemCreate, MenuItemUpdate
from app.services.menu_service import MenuService

router = APIRouter(prefix="/menu", tags=["Menu"])
admin_router = APIRouter(
    prefix="/admin/menu",
    tags=["Admin: Menu"],
    dependencies=[Depends(require_admin)],
)

service = MenuService()


# -------- Public endpoints --------


@router.get("", response_model=list[MenuCategoryGroup])
def read_menu(store: DocumentStore = Depends(get_store)):
    """
    Full menu grouped by category.

    - Public endpoint.
    - Unavailable items are listed with a status label.
    """
    return service.list_public_menu(store)


# -------- Admin endpoints --------


@admin_router.get("", response_model=list[MenuItem])
def list_items(
    category: MenuCategory | None = None,
    store: DocumentStore = Depends(get_store),
):
    """
    List menu items, optionally for one category (admin only).
    """
    return service.list_items(store, category=category)


@admin_router.get("/{item_id}", response_model=MenuItem)
def get_item(item_id: str, store: DocumentStore = Depends(get_store)):
    return service.get_item(store, item_id)


@admin_router.post(
    "",
    response_model=MenuItem,
    status_code=status.HTTP_201_CREATED,
)
def create_item(
    payload: MenuItemCreate,
    store: DocumentStore = Depends(get_store),
):
    """
    Create a menu item (admin only).
    """
    return service.create_item(store, payload)


@admin_router.patch("/{item_id}", response_model=MenuItem)
def update_item(
    item_id: str,
    payload: MenuItemUpdate,
    store: DocumentStore = Depends(get_store),
):
    """
    Update an existing menu item (admin only).
    """
    return service.update_item(store, item_id, payload)


@admin_router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: str, store: DocumentStore = Depends(get_store)):
    """
    Delete a menu item (admin only).
    """
    service.delete_item(store, item_id)
    return None
