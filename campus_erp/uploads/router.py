import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile

from campus_erp.config.settings import settings
from campus_erp.errors import MissingParameter, PayloadTooLarge
from campus_erp.storage.service import ObjectStorage, get_object_storage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])

PHOTO_CONTENT_TYPE = "image/jpeg"


def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """Read the upload into memory, enforcing a maximum size."""
    data = file.file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise PayloadTooLarge(f"File too large. Max is {max_bytes} bytes.")
    return data


@router.post("/upload-photo/{student_id}")
def upload_photo(
    student_id: str,
    photo: Optional[UploadFile] = File(None),
    storage: ObjectStorage = Depends(get_object_storage),
):
    """
    Store a student's photo at the bucket root as <StudentID>.jpg and return its public URL.
    """
    logger.info(f"[UPLOAD-PHOTO] Received upload for StudentID: {student_id}")
    if photo is None:
        raise MissingParameter("No file uploaded.")

    data = read_upload_bytes(photo, settings.PHOTO_MAX_BYTES)
    if not data:
        raise MissingParameter("No file uploaded.")

    url = storage.put_object(f"{student_id}.jpg", data, PHOTO_CONTENT_TYPE)
    return {'url': url}
