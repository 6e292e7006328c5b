# app/services/section_service.py
import logging

from fastapi import HTTPException, status
from pydantic import BaseModel

from app.core.constants import HOMEPAGE_DOC_ID, SECTION_IDS, Collections, SectionIds
from app.database import DocumentStore
from app.models.document import Document
from app.models.section import HomepageContent, Section
from app.schemas.section import HomepageContentUpdate, HomepageView, SectionUpdate
from app.services.event_service import EventService
from app.services.gallery_service import GalleryService

logger = logging.getLogger(__name__)


class SectionService:
    """
    Business logic for editable page sections and the homepage.

    Responsibilities:
      - section read/upsert by well-known id
      - homepage contact block (single document)
      - assembling the public homepage view
    """

    def __init__(self, events: EventService, gallery: GalleryService):
        self.events = events
        self.gallery = gallery

    # ----- Helpers -----

    @staticmethod
    def _check_section_id(section_id: str) -> None:
        if section_id not in SECTION_IDS:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Unknown section",
            )

    @staticmethod
    def _upsert(
        store: DocumentStore,
        collection: str,
        doc_id: str,
        payload: BaseModel,
    ) -> Document:
        """
        Update the document if it exists, otherwise create it under doc_id.
        """
        if store.get_document(collection, doc_id) is not None:
            return store.update_document(collection, doc_id, payload)
        logger.info("Creating %s/%s", collection, doc_id)
        return store.create_document(
            collection,
            payload.model_dump(mode="json", by_alias=True, exclude_unset=True),
            doc_id=doc_id,
        )

    # ----- Sections -----

    def get_section(self, store: DocumentStore, section_id: str) -> Section:
        self._check_section_id(section_id)
        section = store.get_document(Collections.SECTIONS, section_id)
        if not section:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Section not found",
            )
        return section

    def upsert_section(
        self,
        store: DocumentStore,
        section_id: str,
        payload: SectionUpdate,
    ) -> Section:
        self._check_section_id(section_id)
        return self._upsert(store, Collections.SECTIONS, section_id, payload)

    # ----- Homepage -----

    def get_contact(self, store: DocumentStore) -> HomepageContent:
        content = store.get_document(Collections.HOMEPAGE, HOMEPAGE_DOC_ID)
        if not content:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Homepage content not found",
            )
        return content

    def upsert_contact(
        self,
        store: DocumentStore,
        payload: HomepageContentUpdate,
    ) -> HomepageContent:
        return self._upsert(store, Collections.HOMEPAGE, HOMEPAGE_DOC_ID, payload)

    def get_homepage(self, store: DocumentStore) -> HomepageView:
        """
        Everything the homepage renders. Missing sections come back as null.
        """
        return HomepageView(
            hero=store.get_document(Collections.SECTIONS, SectionIds.HERO),
            about=store.get_document(Collections.SECTIONS, SectionIds.ABOUT),
            interior=store.get_document(Collections.SECTIONS, SectionIds.INTERIOR),
            contact=store.get_document(Collections.HOMEPAGE, HOMEPAGE_DOC_ID),
            events=self.events.latest(store),
            gallery=self.gallery.latest_images(store),
        )
