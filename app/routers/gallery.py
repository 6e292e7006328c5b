# app/routers/gallery.py
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.core.auth import require_admin
from app.core.storage import ObjectStorage, get_storage
from app.database import DocumentStore, get_store
from app.models.gallery import GalleryCategory, GalleryImage
from app.schemas.gallery import CategoryDeleteResult, GalleryCategoryCreate
from app.services.gallery_service import GalleryService
from app.services.upload_service import UploadService

router = APIRouter(prefix="/gallery", tags=["Gallery"])
admin_router = APIRouter(
    prefix="/admin/gallery",
    tags=["Admin: Gallery"],
    dependencies=[Depends(require_admin)],
)

service = GalleryService(UploadService())


# -------- Public endpoints --------


@router.get("/categories", response_model=list[GalleryCategory])
def list_categories(store: DocumentStore = Depends(get_store)):
    """
    Gallery categories ordered by name.
    """
    return service.list_categories(store)


@router.get("/images", response_model=list[GalleryImage])
def list_images(
    category_id: str | None = None,
    store: DocumentStore = Depends(get_store),
):
    """
    Gallery images, newest first.

    - `category_id` narrows the list to one category.
    """
    return service.list_images(store, category_id=category_id)


# -------- Admin endpoints --------


@admin_router.post(
    "/categories",
    response_model=GalleryCategory,
    status_code=status.HTTP_201_CREATED,
)
def add_category(
    payload: GalleryCategoryCreate,
    store: DocumentStore = Depends(get_store),
):
    """
    Add a gallery category; the slug is derived from the name.
    """
    return service.add_category(store, payload)


@admin_router.post("/categories/default", response_model=GalleryCategory | None)
def ensure_default_category(store: DocumentStore = Depends(get_store)):
    """
    Create the 'General' category if there are no categories yet.

    Returns null when categories already exist.
    """
    return service.ensure_default_category(store)


@admin_router.delete(
    "/categories/{category_id}",
    response_model=CategoryDeleteResult,
)
def delete_category(
    category_id: str,
    store: DocumentStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_storage),
):
    """
    Delete a category together with its stored files and image records.
    """
    return service.delete_category(store, storage, category_id)


@admin_router.post(
    "/images",
    response_model=GalleryImage,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image into a gallery category",
)
def upload_image(
    category_id: str = Form(...),
    title: str | None = Form(None),
    file: UploadFile = File(...),
    store: DocumentStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_storage),
):
    """
    Upload an image into a category.

    - Accepts JPEG, PNG, WEBP up to 5MB.
    - The category must already exist.
    """
    file_bytes = file.file.read()
    return service.upload_image(
        store=store,
        storage=storage,
        category_id=category_id,
        original_name=file.filename or "",
        content_type=file.content_type,
        file_bytes=file_bytes,
        title=title,
    )


@admin_router.delete("/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_image(
    image_id: str,
    store: DocumentStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_storage),
):
    """
    Delete a gallery image (stored file, then record).
    """
    service.delete_image(store, storage, image_id)
    return None
