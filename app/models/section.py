# app/models/section.py
from typing import ClassVar

from app.core.constants import Collections
from app.models.document import CamelModel, Document


class SectionStat(CamelModel):
    label: str
    value: str


class Section(Document):
    """
    Editable copy for one page region.

    Keyed by a well-known id (hero, about, interior, menu.description,
    gallery.description) instead of a generated one. Every content field
    is optional; which ones are used depends on the region.
    """

    collection: ClassVar[str] = Collections.SECTIONS

    title: str | None = None
    subtitle: str | None = None
    description: str | None = None
    content: str | None = None
    image_url: str | None = None
    button_text: str | None = None
    button_link: str | None = None
    stats: list[SectionStat] | None = None
    hours: dict[str, str] | None = None


class HomepageContent(Document):
    """
    Contact block shown on the homepage and footer (single doc `main`).
    """

    collection: ClassVar[str] = Collections.HOMEPAGE

    address: str | None = None
    phone: str | None = None
    email: str | None = None
    working_hours: dict[str, str] | None = None
    social_links: dict[str, str] | None = None
