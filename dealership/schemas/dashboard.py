from typing import Dict, List
from pydantic import BaseModel, Field

from dealership.schemas.inquiry import InquiryRead

class DashboardSummary(BaseModel):
    """Counts and recent activity shown on the back-office landing page."""
    success: bool = True
    total_vehicles: int = Field(..., alias="totalVehiculos")
    vehicles_by_status: Dict[str, int] = Field(..., alias="vehiculosPorEstado")
    total_inquiries: int = Field(..., alias="totalConsultas")
    inquiries_by_status: Dict[str, int] = Field(..., alias="consultasPorEstado")
    recent_inquiries: List[InquiryRead] = Field(..., alias="consultasRecientes")

    model_config = {"populate_by_name": True}
