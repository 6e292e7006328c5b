# app/models/menu.py
from typing import ClassVar, Literal

from pydantic import field_validator
from sqlmodel import Field

from app.core.constants import Collections
from app.models.document import Document, check_not_blank

MenuCategory = Literal["drinks", "food", "snacks", "desserts"]

# Display order of categories on the public menu
MENU_CATEGORIES: tuple[str, ...] = ("drinks", "food", "snacks", "desserts")


class MenuItem(Document):
    """
    Menu entry.

    `is_available=False` keeps the item listed on the public menu but
    marked as currently unavailable.
    """

    collection: ClassVar[str] = Collections.MENU_ITEMS

    name: str = Field(min_length=1, max_length=120)
    description: str = ""
    price: float = Field(ge=0, description="Price in the house currency")
    category: MenuCategory
    image_url: str | None = None
    is_available: bool = True

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return check_not_blank(v)
