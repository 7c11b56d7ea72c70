"""
Thin wrapper around the Cloudinary uploader.

Only this module talks to the image host; callers get plain dicts back and
``ImageHostError`` on failure.
"""

import logging
from typing import Any, Dict

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from dealership.core.config import settings
from dealership.core.exceptions import ImageHostError

logger = logging.getLogger(__name__)

# Bound the stored size and let the host pick the compression level
UPLOAD_TRANSFORMATION = [
    {"width": 1200, "height": 900, "crop": "limit"},
    {"quality": "auto:good"},
]


def configure() -> None:
    """Point the Cloudinary SDK at the configured account."""
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )


def upload_image(data_uri: str, folder: str) -> Dict[str, Any]:
    """Upload one data URI and return its public URL, identifier and size."""
    try:
        result = cloudinary.uploader.upload(
            data_uri,
            folder=folder,
            resource_type="auto",
            transformation=UPLOAD_TRANSFORMATION,
        )
    except cloudinary.exceptions.Error as e:
        logger.error(f"Error uploading image: {e}")
        raise ImageHostError("Error uploading image")

    return {
        "url": result["secure_url"],
        "public_id": result["public_id"],
        "width": result.get("width"),
        "height": result.get("height"),
    }


def delete_image(public_id: str) -> Dict[str, Any]:
    """Remove an image from the host by its identifier."""
    try:
        result = cloudinary.uploader.destroy(public_id)
    except cloudinary.exceptions.Error as e:
        logger.error(f"Error deleting image {public_id}: {e}")
        raise ImageHostError("Error deleting image")

    if result.get("result") not in ("ok", "not found"):
        raise ImageHostError(f"Image host refused to delete {public_id}: {result.get('result')}")
    return result


configure()
