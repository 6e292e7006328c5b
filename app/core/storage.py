# app/core/storage.py
import logging
import re
import time
from typing import Any

import httpx
from pydantic import BaseModel
from supabase import Client, StorageException

from app.core.config import get_settings
from app.core.errors import StoreError
from app.core.supabase_client import supabase_admin

logger = logging.getLogger(__name__)

# Supabase keeps this marker object in otherwise empty folders
EMPTY_FOLDER_PLACEHOLDER = ".emptyFolderPlaceholder"

# Most entries a single list call may return
LIST_PAGE_SIZE = 100


class StoredFile(BaseModel):
    """
    A file in the storage bucket.

      - path: object path relative to the bucket, e.g. "gallery/<cat>/123_x.jpg"
      - name: last path segment
      - folder: everything before the name
      - url: public URL
    """

    path: str
    name: str
    folder: str
    url: str


def sanitize_file_name(original_name: str) -> str:
    """Replace anything outside [a-zA-Z0-9.-] with '_'."""
    return re.sub(r"[^a-zA-Z0-9.-]", "_", original_name)


def generate_filename(original_name: str, now_ms: int | None = None) -> str:
    """
    Build a stored file name: "<unix-ms>_<sanitized original name>".

    Args:
        original_name: name of the uploaded file as sent by the browser.
        now_ms: timestamp override (milliseconds since epoch).
    """
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}_{sanitize_file_name(original_name)}"


class ObjectStorage:
    """
    Thin wrapper over one Supabase Storage bucket.

    Upload, delete and list; provider failures surface as StoreError.
    """

    def __init__(self, client: Client, bucket: str):
        self.client = client
        self.bucket = bucket

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    def _call(self, action: str, fn, *args: Any) -> Any:
        try:
            return fn(*args)
        except (StorageException, httpx.HTTPError) as exc:
            logger.error("Storage %s failed in bucket %s: %s", action, self.bucket, exc)
            raise StoreError(str(exc) or exc.__class__.__name__) from exc

    def public_url(self, path: str) -> str:
        return self._bucket().get_public_url(path)

    def upload(
        self,
        folder: str,
        original_name: str,
        file_bytes: bytes,
        content_type: str | None = None,
    ) -> StoredFile:
        """
        Upload raw bytes under `folder` and return the stored file.

        The object name follows "<unix-ms>_<sanitized-original-name>", so
        two uploads of the same file never collide.
        """
        name = generate_filename(original_name)
        path = f"{folder.strip('/')}/{name}"
        options: dict[str, str] = {"upsert": "false"}
        if content_type:
            options["content-type"] = content_type

        self._call("upload", self._bucket().upload, path, file_bytes, options)
        return StoredFile(path=path, name=name, folder=folder.strip("/"), url=self.public_url(path))

    def delete(self, path: str) -> None:
        """
        Delete a file by its object path.

        Example path (relative to bucket):
            'gallery/<category_id>/1717171717171_pint.jpg'
        """
        # Supabase Python client expects a list of paths.
        self._call("delete", self._bucket().remove, [path])

    def list(self, folder: str) -> list[StoredFile]:
        """
        List every file directly inside `folder` (sub-folders are skipped).

        Supabase returns at most `LIST_PAGE_SIZE` entries per call, so pages
        are fetched until a short one comes back.
        """
        folder = folder.strip("/")
        files: list[StoredFile] = []
        offset = 0
        while True:
            entries = self._call(
                "list",
                self._bucket().list,
                folder,
                {"limit": LIST_PAGE_SIZE, "offset": offset, "sortBy": {"column": "name", "order": "asc"}},
            ) or []
            for entry in entries:
                name = entry.get("name")
                # Sub-folders come back without an id
                if not name or entry.get("id") is None or name == EMPTY_FOLDER_PLACEHOLDER:
                    continue
                path = f"{folder}/{name}"
                files.append(StoredFile(path=path, name=name, folder=folder, url=self.public_url(path)))
            if len(entries) < LIST_PAGE_SIZE:
                return files
            offset += len(entries)


def get_storage() -> ObjectStorage:
    """FastAPI dependency: storage bound to the service-role client."""
    return ObjectStorage(supabase_admin(), get_settings().STORAGE_BUCKET)
