# app/routers/sections.py
from fastapi import APIRouter, Depends

from app.core.auth import require_admin
from app.database import DocumentStore, get_store
from app.models.section import HomepageContent, Section
from app.schemas.section import HomepageContentUpdate, HomepageView, SectionUpdate
from app.services.event_service import EventService
from app.services.gallery_service import GalleryService
from app.services.section_service import SectionService
from app.services.upload_service import UploadService

router = APIRouter(tags=["Sections"])
admin_router = APIRouter(
    prefix="/admin",
    tags=["Admin: Sections"],
    dependencies=[Depends(require_admin)],
)

service = SectionService(EventService(), GalleryService(UploadService()))


# -------- Public endpoints --------


@router.get("/sections/{section_id}", response_model=Section)
def get_section(section_id: str, store: DocumentStore = Depends(get_store)):
    """
    Page copy for one region (hero, about, interior, menu.description,
    gallery.description).
    """
    return service.get_section(store, section_id)


@router.get("/homepage", response_model=HomepageView)
def get_homepage(store: DocumentStore = Depends(get_store)):
    """
    Homepage in one call: sections, contact block, latest events and images.
    """
    return service.get_homepage(store)


# -------- Admin endpoints --------


@admin_router.put("/sections/{section_id}", response_model=Section)
def upsert_section(
    section_id: str,
    payload: SectionUpdate,
    store: DocumentStore = Depends(get_store),
):
    """
    Create or update a section (admin only).

    Fields left out of the payload keep their stored value.
    """
    return service.upsert_section(store, section_id, payload)


@admin_router.get("/homepage", response_model=HomepageContent)
def get_contact(store: DocumentStore = Depends(get_store)):
    return service.get_contact(store)


@admin_router.put("/homepage", response_model=HomepageContent)
def upsert_contact(
    payload: HomepageContentUpdate,
    store: DocumentStore = Depends(get_store),
):
    """
    Create or update the homepage contact block (admin only).
    """
    return service.upsert_contact(store, payload)
