# coursehub/utils/media.py
import os
from typing import BinaryIO, Optional

import cloudinary
import cloudinary.uploader

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

_configured = False


def _configure() -> None:
    global _configured
    if _configured:
        return
    cloudinary.config(
        cloud_name=os.getenv("CLOUDINARY_NAME"),
        api_key=os.getenv("CLOUDINARY_API_KEY"),
        api_secret=os.getenv("CLOUDINARY_SECRET_KEY"),
        secure=True,
    )
    _configured = True


def validate_image(filename: Optional[str]) -> None:
    """Raises ValueError unless the name carries an allowed image extension."""
    if not filename:
        raise ValueError("Thumbnail Not Attached")
    extension = os.path.splitext(filename)[1].lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValueError(f"Invalid file type. Allowed types: {', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))}")


def upload_thumbnail(file: BinaryIO) -> str:
    """Uploads a course thumbnail to Cloudinary and returns its HTTPS URL."""
    _configure()
    result = cloudinary.uploader.upload(file, folder="course-thumbnails", resource_type="image")
    return result["secure_url"]
