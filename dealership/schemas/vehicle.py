from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from dealership.core.enums import FuelType, Transmission, VehicleStatus, InquiryStatus

# Request payloads are loosely typed on purpose: range, presence and enum
# checks live in dealership.services.vehicles so every problem is reported
# together instead of stopping at the first pydantic error.

class ImageInput(BaseModel):
    """Schema for an image attached to a vehicle."""
    url: Optional[str] = Field(None, description="Public URL returned by the image host")
    order: Optional[int] = Field(None, alias="orden", description="Zero-based display position")
    public_id: Optional[str] = Field(None, alias="publicId", description="Image host identifier, used to delete the file later")

    model_config = {"populate_by_name": True}


class FeatureInput(BaseModel):
    """Schema for a vehicle feature tag."""
    name: Optional[str] = Field(None, alias="nombre", description="Feature name (e.g., 'ABS')")

    model_config = {"populate_by_name": True}


class VehicleUpdate(BaseModel):
    """Schema for a partial vehicle update; only supplied fields are applied."""
    brand: Optional[str] = Field(None, alias="marca")
    model: Optional[str] = Field(None, alias="modelo")
    year: Optional[int] = Field(None, alias="anio")
    price: Optional[float] = Field(None, alias="precio", allow_inf_nan=False)
    odometer: Optional[int] = Field(None, alias="kilometraje")
    fuel_type: Optional[str] = Field(None, alias="combustible")
    transmission: Optional[str] = Field(None, alias="transmision")
    color: Optional[str] = Field(None, alias="color")
    doors: Optional[int] = Field(None, alias="puertas")
    engine: Optional[str] = Field(None, alias="motor")
    description: Optional[str] = Field(None, alias="descripcion")
    status: Optional[str] = Field(None, alias="estado")
    featured: Optional[bool] = Field(None, alias="destacado")

    model_config = {"populate_by_name": True}


class VehicleCreate(VehicleUpdate):
    """Schema for creating a vehicle, optionally with its images and features."""
    images: Optional[List[ImageInput]] = Field(None, alias="imagenes")
    features: Optional[List[FeatureInput]] = Field(None, alias="caracteristicas")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "marca": "Toyota",
                "modelo": "Corolla",
                "anio": 2022,
                "precio": 15000,
                "kilometraje": 0,
                "combustible": "NAFTA",
                "transmision": "MANUAL",
                "color": "Blanco",
                "puertas": 4,
                "caracteristicas": [{"nombre": "ABS"}]
            }
        }
    }


class ImageAssociation(BaseModel):
    """Schema for attaching already uploaded images to a vehicle."""
    images: List[ImageInput] = Field(..., alias="imagenes")

    model_config = {"populate_by_name": True}


class FeatureAssociation(BaseModel):
    """Schema for adding features to an existing vehicle."""
    features: List[FeatureInput] = Field(..., alias="caracteristicas")

    model_config = {"populate_by_name": True}


class ImageRead(BaseModel):
    id: int
    url: str
    order: int = Field(..., alias="orden")
    public_id: Optional[str] = Field(None, alias="publicId")
    vehicle_id: int = Field(..., alias="vehiculoId")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class FeatureRead(BaseModel):
    id: int
    name: str = Field(..., alias="nombre")
    vehicle_id: int = Field(..., alias="vehiculoId")

    model_config = {"from_attributes": True, "populate_by_name": True}


class VehicleInquiryRead(BaseModel):
    """Inquiry as listed inside a vehicle detail."""
    id: int
    name: str = Field(..., alias="nombre")
    email: str
    phone: str = Field(..., alias="telefono")
    message: str = Field(..., alias="mensaje")
    status: InquiryStatus = Field(..., alias="estado")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class VehicleRead(BaseModel):
    """Schema for vehicle responses."""
    id: int
    brand: str = Field(..., alias="marca")
    model: str = Field(..., alias="modelo")
    year: int = Field(..., alias="anio")
    price: float = Field(..., alias="precio")
    odometer: int = Field(..., alias="kilometraje")
    fuel_type: FuelType = Field(..., alias="combustible")
    transmission: Transmission = Field(..., alias="transmision")
    color: str
    doors: int = Field(..., alias="puertas")
    engine: Optional[str] = Field(None, alias="motor")
    description: Optional[str] = Field(None, alias="descripcion")
    status: VehicleStatus = Field(..., alias="estado")
    featured: bool = Field(..., alias="destacado")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    images: List[ImageRead] = Field(default_factory=list, alias="imagenes")
    features: List[FeatureRead] = Field(default_factory=list, alias="caracteristicas")

    model_config = {"from_attributes": True, "populate_by_name": True}


class VehicleDetail(VehicleRead):
    """Vehicle with the inquiries that reference it."""
    inquiries: List[VehicleInquiryRead] = Field(default_factory=list, alias="consultas")


class VehicleSummary(BaseModel):
    """Shallow vehicle reference embedded in inquiries."""
    id: int
    brand: str = Field(..., alias="marca")
    model: str = Field(..., alias="modelo")
    year: int = Field(..., alias="anio")
    price: float = Field(..., alias="precio")

    model_config = {"from_attributes": True, "populate_by_name": True}


class VehicleResponse(BaseModel):
    success: bool = True
    vehicle: VehicleRead = Field(..., alias="vehiculo")
    message: Optional[str] = Field(None, alias="mensaje")

    model_config = {"populate_by_name": True}


class VehicleDetailResponse(BaseModel):
    success: bool = True
    vehicle: VehicleDetail = Field(..., alias="vehiculo")

    model_config = {"populate_by_name": True}


class VehicleListResponse(BaseModel):
    success: bool = True
    count: int
    vehicles: List[VehicleRead] = Field(..., alias="vehiculos")

    model_config = {"populate_by_name": True}


class DeletedVehicle(BaseModel):
    id: int
    brand: str = Field(..., alias="marca")
    model: str = Field(..., alias="modelo")

    model_config = {"from_attributes": True, "populate_by_name": True}


class VehicleDeleteResponse(BaseModel):
    success: bool = True
    message: str = Field(..., alias="mensaje")
    deleted: DeletedVehicle = Field(..., alias="vehiculoEliminado")

    model_config = {"populate_by_name": True}


class ImageListResponse(BaseModel):
    success: bool = True
    images: List[ImageRead] = Field(..., alias="imagenes")
    count: int

    model_config = {"populate_by_name": True}


class ImageDeleteResponse(BaseModel):
    success: bool = True
    message: str = Field(..., alias="mensaje")
    remaining: int = Field(..., alias="imagenesRestantes")

    model_config = {"populate_by_name": True}


class FeatureListResponse(BaseModel):
    success: bool = True
    features: List[FeatureRead] = Field(..., alias="caracteristicas")
    count: int

    model_config = {"populate_by_name": True}
