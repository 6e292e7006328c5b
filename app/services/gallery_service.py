# app/services/gallery_service.py
import logging
import re
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, wait

from fastapi import HTTPException, status

from app.core.constants import Collections, StorageFolders
from app.core.query import order_by_asc, order_by_desc, where_equal
from app.core.storage import ObjectStorage
from app.database import DocumentStore
from app.models.gallery import GalleryCategory, GalleryImage
from app.schemas.gallery import CategoryDeleteResult, GalleryCategoryCreate
from app.services.upload_service import UploadService

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_NAME = "General"

# How many images the homepage shows
LATEST_IMAGES_COUNT = 6


def slugify(raw: str) -> str:
    """
    Lowercase the name and turn every run of non-alphanumerics into '-'.

    'Beer Garden' -> 'beer-garden'
    """
    return re.sub(r"[^a-z0-9]+", "-", raw.lower())


class GalleryService:
    """
    Business logic for gallery categories and images.

    Responsibilities:
      - category slugs and the default category
      - image upload/delete orchestration with Supabase Storage
      - cascading category delete (files, then image docs, then category)
    """

    def __init__(self, uploads: UploadService, max_workers: int = 8):
        self.uploads = uploads
        self.max_workers = max_workers

    # ----- Helpers -----

    @staticmethod
    def _folder(category_id: str) -> str:
        return f"{StorageFolders.GALLERY}/{category_id}"

    def _run_all(self, tasks: Iterable[Callable[[], object]]) -> int:
        """
        Run independent tasks concurrently and wait for every one of them.

        Re-raises the first failure once the whole group has finished.
        """
        tasks = list(tasks)
        if not tasks:
            return 0
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(task) for task in tasks]
            wait(futures)
        errors = [f.exception() for f in futures if f.exception() is not None]
        if errors:
            logger.error("%d of %d delete tasks failed", len(errors), len(tasks))
            raise errors[0]
        return len(tasks)

    # ----- Categories -----

    def list_categories(self, store: DocumentStore) -> list[GalleryCategory]:
        return store.get_documents(
            Collections.GALLERY_CATEGORIES,
            order_by=[order_by_asc("name")],
        )

    def get_category(self, store: DocumentStore, category_id: str) -> GalleryCategory:
        category = store.get_document(Collections.GALLERY_CATEGORIES, category_id)
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Gallery category not found",
            )
        return category

    def add_category(
        self,
        store: DocumentStore,
        payload: GalleryCategoryCreate,
    ) -> GalleryCategory:
        name = payload.name.strip()
        return store.create_document(
            Collections.GALLERY_CATEGORIES,
            {"name": name, "slug": slugify(name)},
        )

    def ensure_default_category(self, store: DocumentStore) -> GalleryCategory | None:
        """
        Create the 'General' category when no category exists yet.

        Returns the created category, or None if categories already exist.
        """
        if store.get_documents(Collections.GALLERY_CATEGORIES, limit=1):
            return None
        logger.info("No gallery categories; creating %r", DEFAULT_CATEGORY_NAME)
        return self.add_category(store, GalleryCategoryCreate(name=DEFAULT_CATEGORY_NAME))

    def delete_category(
        self,
        store: DocumentStore,
        storage: ObjectStorage,
        category_id: str,
    ) -> CategoryDeleteResult:
        """
        Delete a category with everything filed under it.

        Order:
          1) every object under gallery/<category_id>/
          2) every image document with that categoryId
          3) the category document

        A failure stops the sequence before the next step; already deleted
        items stay deleted.
        """
        self.get_category(store, category_id)

        files = storage.list(self._folder(category_id))
        deleted_files = self._run_all(
            (lambda path=f.path: storage.delete(path)) for f in files
        )

        images = store.get_documents(
            Collections.GALLERY_IMAGES,
            filters=[where_equal("categoryId", category_id)],
        )
        deleted_images = self._run_all(
            (lambda image_id=image.id: store.delete_document(Collections.GALLERY_IMAGES, image_id))
            for image in images
        )

        store.delete_document(Collections.GALLERY_CATEGORIES, category_id)
        logger.info(
            "Deleted gallery category %s (%d files, %d images)",
            category_id,
            deleted_files,
            deleted_images,
        )
        return CategoryDeleteResult(
            category_id=category_id,
            deleted_files=deleted_files,
            deleted_images=deleted_images,
        )

    # ----- Images -----

    def list_images(
        self,
        store: DocumentStore,
        category_id: str | None = None,
        limit: int | None = None,
    ) -> list[GalleryImage]:
        filters = [where_equal("categoryId", category_id)] if category_id else []
        return store.get_documents(
            Collections.GALLERY_IMAGES,
            filters=filters,
            order_by=[order_by_desc("createdAt")],
            limit=limit,
        )

    def latest_images(
        self,
        store: DocumentStore,
        count: int = LATEST_IMAGES_COUNT,
    ) -> list[GalleryImage]:
        return self.list_images(store, limit=count)

    def get_image(self, store: DocumentStore, image_id: str) -> GalleryImage:
        image = store.get_document(Collections.GALLERY_IMAGES, image_id)
        if not image:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Gallery image not found",
            )
        return image

    def upload_image(
        self,
        store: DocumentStore,
        storage: ObjectStorage,
        category_id: str,
        original_name: str,
        content_type: str | None,
        file_bytes: bytes,
        title: str | None = None,
    ) -> GalleryImage:
        """
        Store the file under gallery/<category_id>/ and record it.

        The category must exist before anything is uploaded.
        """
        self.get_category(store, category_id)
        self.uploads.validate_image(content_type, file_bytes)

        stored = storage.upload(
            self._folder(category_id),
            original_name or "image",
            file_bytes,
            content_type,
        )
        return store.create_document(
            Collections.GALLERY_IMAGES,
            {
                "url": stored.url,
                "fileName": stored.name,
                "categoryId": category_id,
                "title": (title or "").strip() or None,
            },
        )

    def delete_image(
        self,
        store: DocumentStore,
        storage: ObjectStorage,
        image_id: str,
    ) -> None:
        """
        Remove the stored file, then the image document.
        """
        image = self.get_image(store, image_id)
        storage.delete(f"{self._folder(image.category_id)}/{image.file_name}")
        store.delete_document(Collections.GALLERY_IMAGES, image_id)
