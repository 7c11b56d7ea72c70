from fastapi import APIRouter, Depends, status

from dealership.core.security import TokenClaims, get_current_user
from dealership.schemas.image import ImageUploadRequest, ImageUploadResponse
from dealership.services.images import ingest_images

router = APIRouter()

@router.post("", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_images(
    payload: ImageUploadRequest,
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Upload up to 10 inline images (data URIs) to the image host.

    The returned ``url`` and ``publicId`` values are meant to be posted to
    ``/vehiculos/{id}/imagenes`` afterwards.
    """
    uploaded = await ingest_images(payload.images)
    return {"success": True, "images": uploaded, "count": len(uploaded)}
