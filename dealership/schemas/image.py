from typing import List, Optional
from pydantic import BaseModel, Field

class ImageUploadRequest(BaseModel):
    """Schema for a batch of inline images (data URIs) to upload."""
    images: Optional[List[str]] = Field(None, description="Base64 data URIs, e.g. 'data:image/jpeg;base64,...'")


class UploadedImage(BaseModel):
    """An image stored by the host."""
    url: str = Field(..., description="Public HTTPS URL")
    public_id: str = Field(..., alias="publicId", description="Host identifier, needed to delete the file")
    width: Optional[int] = None
    height: Optional[int] = None

    model_config = {"populate_by_name": True}


class ImageUploadResponse(BaseModel):
    success: bool = True
    images: List[UploadedImage]
    count: int
