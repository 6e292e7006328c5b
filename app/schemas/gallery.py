# app/schemas/gallery.py
from pydantic import ConfigDict, field_validator
from sqlmodel import Field

from app.models.document import CamelModel, check_not_blank


class GalleryCategoryCreate(CamelModel):
    """
    Payload for adding a gallery category.

    The slug is always derived from the name.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=80)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_not_blank(v)


class CategoryDeleteResult(CamelModel):
    """
    Outcome of a cascading category delete.
    """

    category_id: str
    deleted_files: int
    deleted_images: int
