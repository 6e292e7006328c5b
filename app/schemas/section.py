# app/schemas/section.py
from pydantic import ConfigDict

from app.models.document import CamelModel
from app.models.event import Event
from app.models.gallery import GalleryImage
from app.models.section import HomepageContent, Section, SectionStat


class SectionUpdate(CamelModel):
    """
    Partial payload for a page section; unspecified fields are kept.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    subtitle: str | None = None
    description: str | None = None
    content: str | None = None
    image_url: str | None = None
    button_text: str | None = None
    button_link: str | None = None
    stats: list[SectionStat] | None = None
    hours: dict[str, str] | None = None


class HomepageContentUpdate(CamelModel):
    """
    Partial payload for the homepage contact block.
    """

    model_config = ConfigDict(extra="forbid")

    address: str | None = None
    phone: str | None = None
    email: str | None = None
    working_hours: dict[str, str] | None = None
    social_links: dict[str, str] | None = None


class HomepageView(CamelModel):
    """
    Everything the public homepage needs in one response.
    """

    hero: Section | None = None
    about: Section | None = None
    interior: Section | None = None
    contact: HomepageContent | None = None
    events: list[Event]
    gallery: list[GalleryImage]
