# app/schemas/menu.py
from pydantic import ConfigDict, field_validator
from sqlmodel import Field

from app.models.document import CamelModel, check_not_blank
from app.models.menu import MenuCategory, MenuItem

UNAVAILABLE_LABEL = "Currently unavailable"


class MenuItemCreate(CamelModel):
    """
    Payload for creating a menu item.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=120)
    description: str = ""
    price: float = Field(ge=0)
    category: MenuCategory
    image_url: str | None = None
    is_available: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_not_blank(v)


class MenuItemUpdate(CamelModel):
    """
    Partial update payload for menu items.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=120)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category: MenuCategory | None = None
    image_url: str | None = None
    is_available: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return check_not_blank(v)


class PublicMenuItem(MenuItem):
    """
    Menu item as shown on the public menu.

    `status_label` is "Currently unavailable" for items switched off by
    the back office, None otherwise.
    """

    status_label: str | None = None

    @classmethod
    def from_item(cls, item: MenuItem) -> "PublicMenuItem":
        return cls.model_validate(
            {
                **item.model_dump(),
                "status_label": None if item.is_available else UNAVAILABLE_LABEL,
            }
        )


class MenuCategoryGroup(CamelModel):
    category: MenuCategory
    items: list[PublicMenuItem]
