# app/models/registry.py
from app.models.booking import Booking
from app.models.document import Document
from app.models.event import Event
from app.models.gallery import GalleryCategory, GalleryImage
from app.models.menu import MenuItem
from app.models.section import HomepageContent, Section
from app.models.user import UserRecord

DOCUMENT_MODELS: tuple[type[Document], ...] = (
    MenuItem,
    Event,
    GalleryCategory,
    GalleryImage,
    Booking,
    Section,
    HomepageContent,
    UserRecord,
)

# collection name -> document model used to validate reads and writes
COLLECTION_MODELS: dict[str, type[Document]] = {
    model.collection: model for model in DOCUMENT_MODELS
}
