# app/core/constants.py
"""
Well-known names shared by the access layer, storage and services.

Collection names are plain strings; the store itself enforces no schema,
the document models registered in `app.models.registry` do.
"""


class Collections:
    EVENTS = "events"
    MENU_ITEMS = "menuItems"
    GALLERY_IMAGES = "galleryImages"
    GALLERY_CATEGORIES = "galleryCategories"
    BOOKINGS = "bookings"
    SECTIONS = "sections"
    HOMEPAGE = "homepage"
    USERS = "users"


class StorageFolders:
    HERO = "hero"
    ABOUT = "about"
    EVENTS = "events"
    GALLERY = "gallery"
    MENU = "menu"
    INTERIOR = "interior"


# Folders an admin may upload into directly. Gallery files go through the
# gallery service so they always get a category folder and a document.
UPLOAD_FOLDERS: tuple[str, ...] = (
    StorageFolders.HERO,
    StorageFolders.ABOUT,
    StorageFolders.EVENTS,
    StorageFolders.MENU,
    StorageFolders.INTERIOR,
)


class SectionIds:
    HERO = "hero"
    ABOUT = "about"
    INTERIOR = "interior"
    MENU_DESCRIPTION = "menu.description"
    GALLERY_DESCRIPTION = "gallery.description"


SECTION_IDS: tuple[str, ...] = (
    SectionIds.HERO,
    SectionIds.ABOUT,
    SectionIds.INTERIOR,
    SectionIds.MENU_DESCRIPTION,
    SectionIds.GALLERY_DESCRIPTION,
)

HOMEPAGE_DOC_ID = "main"
