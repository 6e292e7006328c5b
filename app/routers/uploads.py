# app/routers/uploads.py
from fastapi import APIRouter, Depends, File, UploadFile, status

from app.core.auth import require_admin
from app.core.storage import ObjectStorage, StoredFile, get_storage
from app.services.upload_service import UploadService

router = APIRouter(
    prefix="/admin/uploads",
    tags=["Admin: Uploads"],
    dependencies=[Depends(require_admin)],
)

service = UploadService()


@router.post(
    "/{folder}",
    response_model=StoredFile,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a site image",
)
def upload_file(
    folder: str,
    file: UploadFile = File(...),
    storage: ObjectStorage = Depends(get_storage),
):
    """
    Upload an image into hero, about, events, menu or interior.

    - Accepts JPEG, PNG, WEBP up to 5MB.
    - Returns the public URL to store on the owning document.
    """
    file_bytes = file.file.read()
    return service.upload(
        storage,
        folder,
        original_name=file.filename or "",
        content_type=file.content_type,
        file_bytes=file_bytes,
    )


@router.get("/{folder}", response_model=list[StoredFile])
def list_files(folder: str, storage: ObjectStorage = Depends(get_storage)):
    return service.list_files(storage, folder)


@router.delete("/{folder}/{name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(
    folder: str,
    name: str,
    storage: ObjectStorage = Depends(get_storage),
):
    service.delete_file(storage, folder, name)
    return None
