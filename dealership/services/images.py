"""
Image ingestion: uploading inline images to the host and linking hosted
images to vehicles.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from dealership.core.config import settings
from dealership.core.exceptions import ConflictError, ImageHostError, NotFoundError, ValidationError
from dealership.models import Vehicle, VehicleImage
from dealership.schemas.vehicle import ImageInput
from dealership.services import image_host

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:image/"


def validate_upload_batch(images: Optional[List[str]]) -> List[str]:
    if not images:
        raise ValidationError(["No images provided"])
    if len(images) > settings.MAX_UPLOAD_BATCH:
        raise ValidationError([f"At most {settings.MAX_UPLOAD_BATCH} images per request"])

    errors = [
        f"Image {index + 1} has an invalid format (expected a data:image/... URI)"
        for index, image in enumerate(images)
        if not image.startswith(DATA_URI_PREFIX)
    ]
    if errors:
        raise ValidationError(errors)
    return images


async def ingest_images(images: Optional[List[str]]) -> List[Dict[str, Any]]:
    """
    Upload a batch of data URIs concurrently.

    The batch succeeds or fails as a whole: the first failing upload is
    raised. Uploads that already finished stay on the host.
    """
    validate_upload_batch(images)

    uploads = [
        run_in_threadpool(image_host.upload_image, image, settings.CLOUDINARY_FOLDER)
        for image in images
    ]
    uploaded = await asyncio.gather(*uploads)

    logger.info(f"{len(uploaded)} images uploaded")
    return uploaded


def associate_images(db: Session, vehicle_id: int, images: List[ImageInput]) -> List[VehicleImage]:
    """
    Link hosted images to a vehicle.

    The caller's ``orden`` values are stored as given; an entry without one
    takes its position in the request.
    """
    if not images:
        raise ValidationError(["No images provided"])
    errors = [f"Image {index + 1} requires a url" for index, image in enumerate(images) if not image.url or not image.url.strip()]
    if errors:
        raise ValidationError(errors)

    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")

    created = [
        VehicleImage(
            vehicle_id=vehicle.id,
            url=image.url.strip(),
            order=image.order if image.order is not None else index,
            public_id=image.public_id,
        )
        for index, image in enumerate(images)
    ]
    db.add_all(created)
    db.commit()
    for image in created:
        db.refresh(image)

    logger.info(f"{len(created)} images added to vehicle {vehicle_id}")
    return created


def remove_image(db: Session, vehicle_id: int, image_id: int) -> int:
    """
    Delete one image of a vehicle and return how many remain.

    The hosted file is deleted when its identifier is known. Host failures are
    logged and the local record is removed anyway.

    Raises:
        NotFoundError: unknown vehicle or image.
        ValidationError: the image belongs to another vehicle.
        ConflictError: it is the vehicle's last image.
    """
    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")

    image = db.get(VehicleImage, image_id)
    if image is None:
        raise NotFoundError("Image not found")

    if image.vehicle_id != vehicle.id:
        raise ValidationError(["The image does not belong to this vehicle"])

    remaining = len(vehicle.images)
    if remaining <= 1:
        raise ConflictError("Cannot delete the last image of a vehicle")

    if image.public_id:
        try:
            image_host.delete_image(image.public_id)
            logger.info(f"Hosted image {image.public_id} deleted")
        except ImageHostError as e:
            logger.warning(f"Hosted image {image.public_id} could not be deleted, removing record anyway: {e.message}")
    else:
        logger.info(f"Image {image_id} has no host identifier, skipping host deletion")

    vehicle.images.remove(image)
    db.commit()

    logger.info(f"Image {image_id} removed from vehicle {vehicle_id}")
    return remaining - 1
