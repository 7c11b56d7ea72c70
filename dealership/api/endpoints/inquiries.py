from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dealership.core.security import TokenClaims, get_current_user
from dealership.db.session import get_db
from dealership.schemas.inquiry import (
    InquiryCreate,
    InquiryListResponse,
    InquiryResponse,
    InquiryStatusUpdate,
)
from dealership.services import inquiries as inquiry_service

import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=InquiryListResponse)
def list_inquiries(
    estado: Optional[str] = Query(None, description="PENDIENTE, CONTACTADO or CERRADO"),
    vehicle_id: Optional[int] = Query(None, alias="vehiculoId"),
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List inquiries, newest first, optionally filtered by status or vehicle.
    """
    inquiries = inquiry_service.list_inquiries(db, status=estado, vehicle_id=vehicle_id)
    return {"success": True, "count": len(inquiries), "consultas": inquiries}

@router.post("", response_model=InquiryResponse, status_code=status.HTTP_201_CREATED)
def create_inquiry(
    inquiry_data: InquiryCreate,
    db: Session = Depends(get_db)
):
    """
    Submit an inquiry from the public site. No authentication required.
    """
    inquiry = inquiry_service.create_inquiry(db, inquiry_data)
    return {
        "success": True,
        "consulta": inquiry,
        "mensaje": "Inquiry sent successfully. We will contact you soon.",
    }

@router.get("/{inquiry_id}", response_model=InquiryResponse)
def get_inquiry(
    inquiry_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    inquiry = inquiry_service.get_inquiry(db, inquiry_id)
    return {"success": True, "consulta": inquiry}

@router.put("/{inquiry_id}", response_model=InquiryResponse)
def update_inquiry(
    inquiry_id: int,
    payload: InquiryStatusUpdate,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Change the status of an inquiry (PENDIENTE, CONTACTADO, CERRADO).
    """
    inquiry = inquiry_service.update_inquiry_status(db, inquiry_id, payload.status)
    logger.info(f"Inquiry {inquiry_id} updated by {current_user.email}")
    return {
        "success": True,
        "consulta": inquiry,
        "mensaje": "Inquiry updated successfully",
    }

@router.delete("/{inquiry_id}")
def delete_inquiry(
    inquiry_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    inquiry_service.delete_inquiry(db, inquiry_id)
    logger.info(f"Inquiry {inquiry_id} deleted by {current_user.email}")
    return {"success": True, "mensaje": "Inquiry deleted successfully"}
