# app/services/menu_service.py
from fastapi import HTTPException, status

from app.core.constants import Collections
from app.core.query import order_by_asc, where_equal
from app.database import DocumentStore
from app.models.menu import MENU_CATEGORIES, MenuItem
from app.schemas.menu import (
    MenuCategoryGroup,
    MenuItemCreate,
    MenuItemUpdate,
    PublicMenuItem,
)


class MenuService:
    """
    Business logic for menu items.

    Responsibilities:
      - public menu grouped by category (unavailable items stay listed)
      - admin CRUD (enforced at router via require_admin)
    """

    # ----- Public -----

    def list_public_menu(self, store: DocumentStore) -> list[MenuCategoryGroup]:
        """
        Every menu item grouped by category in display order, items by name.

        Empty categories are left out.
        """
        items = self.list_items(store)
        groups: list[MenuCategoryGroup] = []
        for category in MENU_CATEGORIES:
            in_category = [
                PublicMenuItem.from_item(item) for item in items if item.category == category
            ]
            if in_category:
                groups.append(MenuCategoryGroup(category=category, items=in_category))
        return groups

    # ----- Admin -----

    def list_items(
        self,
        store: DocumentStore,
        category: str | None = None,
    ) -> list[MenuItem]:
        filters = [where_equal("category", category)] if category else []
        return store.get_documents(
            Collections.MENU_ITEMS,
            filters=filters,
            order_by=[order_by_asc("category"), order_by_asc("name")],
        )

    def get_item(self, store: DocumentStore, item_id: str) -> MenuItem:
        item = store.get_document(Collections.MENU_ITEMS, item_id)
        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Menu item not found",
            )
        return item

    def create_item(self, store: DocumentStore, payload: MenuItemCreate) -> MenuItem:
        return store.create_document(Collections.MENU_ITEMS, payload)

    def update_item(
        self,
        store: DocumentStore,
        item_id: str,
        payload: MenuItemUpdate,
    ) -> MenuItem:
        """
        Partial update; only the fields present in the payload change.
        """
        return store.update_document(Collections.MENU_ITEMS, item_id, payload)

    def delete_item(self, store: DocumentStore, item_id: str) -> None:
        self.get_item(store, item_id)
        store.delete_document(Collections.MENU_ITEMS, item_id)
