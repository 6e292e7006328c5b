# app/models/gallery.py
from typing import ClassVar

from pydantic import field_validator
from sqlmodel import Field

from app.core.constants import Collections
from app.models.document import Document, check_not_blank


class GalleryCategory(Document):
    """
    Gallery grouping.

    Deleting a category cascades to its stored files and image documents;
    the gallery service orchestrates that sequence.
    """

    collection: ClassVar[str] = Collections.GALLERY_CATEGORIES

    name: str = Field(min_length=1, max_length=80)
    slug: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return check_not_blank(v)


class GalleryImage(Document):
    """
    Uploaded gallery picture.

      - url: public URL in Supabase Storage
      - file_name: object name under gallery/<category_id>/
      - category_id: FK to galleryCategories (checked by the writer)
    """

    collection: ClassVar[str] = Collections.GALLERY_IMAGES

    url: str = Field(min_length=1)
    file_name: str = Field(min_length=1)
    category_id: str = Field(min_length=1)
    title: str | None = None
