from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from dealership.core.enums import InquiryStatus
from dealership.db.base_model import MAX_INTEGER
from dealership.schemas.vehicle import VehicleSummary

class InquiryCreate(BaseModel):
    """Schema for a customer inquiry submitted from the public site."""
    name: Optional[str] = Field(None, alias="nombre", description="Customer name")
    email: Optional[str] = Field(None, description="Customer email")
    phone: Optional[str] = Field(None, alias="telefono", description="Customer phone")
    message: Optional[str] = Field(None, alias="mensaje", description="At least 10 characters")
    vehicle_id: Optional[int] = Field(None, alias="vehiculoId", le=MAX_INTEGER, description="Vehicle the inquiry is about")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "nombre": "Ana Pérez",
                "email": "ana@example.com",
                "telefono": "+54 11 5555-1234",
                "mensaje": "¿Sigue disponible? Me gustaría verlo el sábado.",
                "vehiculoId": 1
            }
        }
    }


class InquiryStatusUpdate(BaseModel):
    """Schema for moving an inquiry through its workflow."""
    status: Optional[str] = Field(None, alias="estado", description="PENDIENTE, CONTACTADO or CERRADO")

    model_config = {"populate_by_name": True}


class InquiryRead(BaseModel):
    """Schema for inquiry responses."""
    id: int
    name: str = Field(..., alias="nombre")
    email: str
    phone: str = Field(..., alias="telefono")
    message: str = Field(..., alias="mensaje")
    status: InquiryStatus = Field(..., alias="estado")
    vehicle_id: Optional[int] = Field(None, alias="vehiculoId")
    vehicle: Optional[VehicleSummary] = Field(None, alias="vehiculo")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class InquiryResponse(BaseModel):
    success: bool = True
    inquiry: InquiryRead = Field(..., alias="consulta")
    message: Optional[str] = Field(None, alias="mensaje")

    model_config = {"populate_by_name": True}


class InquiryListResponse(BaseModel):
    success: bool = True
    count: int
    inquiries: List[InquiryRead] = Field(..., alias="consultas")

    model_config = {"populate_by_name": True}
