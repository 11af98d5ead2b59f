import os
import time
import shutil
import secrets
import logging
from typing import Optional

from fastapi import UploadFile

from docsmith.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOAD_DIR_ENV = "UPLOAD_DIR"
PROFILE_PICTURE_SUBDIR = "profile_pictures"
ALLOWED_IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".webp", ".gif"}
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}
MAX_IMAGE_BYTES = 2 * 1024 * 1024


def upload_root() -> str:
    return os.environ.get(UPLOAD_DIR_ENV, "uploads")


def save_profile_image(file: Optional[UploadFile]) -> Optional[str]:
    """Store an uploaded profile picture and return its generated filename."""
    if file is None or not file.filename:
        return None

    extension = os.path.splitext(file.filename)[1].lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS or file.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            "Only image files (jpeg, jpg, png, webp, gif) are allowed!",
            {"profile_image": ["Unsupported file type"]},
        )

    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    if size > MAX_IMAGE_BYTES:
        raise ValidationError("File too large", {"profile_image": ["Maximum size is 2 MB"]})

    directory = os.path.join(upload_root(), PROFILE_PICTURE_SUBDIR)
    os.makedirs(directory, exist_ok=True)
    filename = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"
    with open(os.path.join(directory, filename), "wb") as f:
        shutil.copyfileobj(file.file, f)

    logger.info(f"[UPLOAD_PROFILE_IMAGE] stored {filename}")
    return filename


def remove_profile_image(filename: Optional[str]):
    if not filename:
        return
    path = os.path.join(upload_root(), PROFILE_PICTURE_SUBDIR, filename)
    if os.path.exists(path):
        os.remove(path)
