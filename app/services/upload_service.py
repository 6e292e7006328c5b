# app/services/upload_service.py
import logging

from fastapi import HTTPException, status

from app.core.constants import UPLOAD_FOLDERS
from app.core.storage import ObjectStorage, StoredFile

logger = logging.getLogger(__name__)

# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}


class UploadService:
    """
    Site image uploads (hero, about, events, menu, interior).

    Gallery images go through GalleryService, which reuses the same
    content checks.
    """

    # ----- Helpers -----

    @staticmethod
    def validate_image(content_type: str | None, file_bytes: bytes) -> None:
        """
        Check type and size of an uploaded image.
        """
        if not content_type:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing content-type for uploaded file",
            )

        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image type. Allowed: JPEG, PNG, WEBP.",
            )

        if not file_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Uploaded file is empty",
            )

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

    @staticmethod
    def _check_folder(folder: str) -> str:
        folder = folder.strip("/")
        if folder not in UPLOAD_FOLDERS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown upload folder. Allowed: {', '.join(UPLOAD_FOLDERS)}.",
            )
        return folder

    # ----- Operations -----

    def upload(
        self,
        storage: ObjectStorage,
        folder: str,
        original_name: str,
        content_type: str | None,
        file_bytes: bytes,
    ) -> StoredFile:
        """
        Store an image under `<folder>/<ms>_<sanitized name>`.
        """
        folder = self._check_folder(folder)
        self.validate_image(content_type, file_bytes)
        stored = storage.upload(folder, original_name or "image", file_bytes, content_type)
        logger.info("Uploaded %s (%d bytes)", stored.path, len(file_bytes))
        return stored

    def list_files(self, storage: ObjectStorage, folder: str) -> list[StoredFile]:
        return storage.list(self._check_folder(folder))

    def delete_file(self, storage: ObjectStorage, folder: str, name: str) -> None:
        """
        Delete `<folder>/<name>`. Names containing a path separator are refused.
        """
        folder = self._check_folder(folder)
        if not name or "/" in name or name in (".", ".."):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid file name",
            )
        storage.delete(f"{folder}/{name}")
        logger.info("Deleted %s/%s", folder, name)
