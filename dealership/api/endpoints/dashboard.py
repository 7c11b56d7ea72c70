from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from dealership.core.enums import InquiryStatus, VehicleStatus
from dealership.core.security import TokenClaims, get_current_user
from dealership.db.session import get_db
from dealership.models import Inquiry, Vehicle
from dealership.schemas.dashboard import DashboardSummary

router = APIRouter()

RECENT_INQUIRIES = 5

def _count_by_status(db: Session, model, enum_cls) -> dict:
    counts = {member.value: 0 for member in enum_cls}
    rows = db.query(model.status, func.count(model.id)).group_by(model.status).all()
    for status_value, count in rows:
        counts[enum_cls(status_value).value] = count
    return counts

@router.get("", response_model=DashboardSummary)
def dashboard_summary(
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Totals per vehicle and inquiry status plus the latest inquiries.
    """
    vehicles_by_status = _count_by_status(db, Vehicle, VehicleStatus)
    inquiries_by_status = _count_by_status(db, Inquiry, InquiryStatus)

    recent = db.query(Inquiry)\
        .options(joinedload(Inquiry.vehicle))\
        .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())\
        .limit(RECENT_INQUIRIES)\
        .all()

    return {
        "success": True,
        "totalVehiculos": sum(vehicles_by_status.values()),
        "vehiculosPorEstado": vehicles_by_status,
        "totalConsultas": sum(inquiries_by_status.values()),
        "consultasPorEstado": inquiries_by_status,
        "consultasRecientes": recent,
    }
