"""
Validation and persistence of customer inquiries.
"""

import logging
import re
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from dealership.core.enums import InquiryStatus, enum_values, parse_enum
from dealership.core.exceptions import NotFoundError, ValidationError
from dealership.models import Inquiry, Vehicle
from dealership.schemas.inquiry import InquiryCreate

logger = logging.getLogger(__name__)

# something@something.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_MESSAGE_LENGTH = 10


def _invalid_status() -> ValidationError:
    return ValidationError([f"Invalid status. Options: {', '.join(enum_values(InquiryStatus))}"])


def validate_inquiry(payload: InquiryCreate) -> List[str]:
    """Return every problem with an inquiry submission."""
    errors = []

    if not payload.name or not payload.name.strip():
        errors.append("Name is required")

    if not payload.email or not payload.email.strip():
        errors.append("Email is required")
    elif not EMAIL_PATTERN.match(payload.email.strip()):
        errors.append("Email is not valid")

    if not payload.phone or not payload.phone.strip():
        errors.append("Phone is required")

    if not payload.message or not payload.message.strip():
        errors.append("Message is required")
    elif len(payload.message.strip()) < MIN_MESSAGE_LENGTH:
        errors.append(f"Message must be at least {MIN_MESSAGE_LENGTH} characters long")

    return errors


def get_inquiry_or_404(db: Session, inquiry_id: int) -> Inquiry:
    inquiry = db.get(Inquiry, inquiry_id)
    if inquiry is None:
        raise NotFoundError("Inquiry not found")
    return inquiry


def list_inquiries(
    db: Session,
    status: Optional[str] = None,
    vehicle_id: Optional[int] = None,
) -> List[Inquiry]:
    """List inquiries newest first, each with a summary of its vehicle."""
    query = db.query(Inquiry).options(joinedload(Inquiry.vehicle))

    if status:
        status_value = parse_enum(InquiryStatus, status)
        if status_value is None:
            raise _invalid_status()
        query = query.filter(Inquiry.status == status_value)

    if vehicle_id is not None:
        query = query.filter(Inquiry.vehicle_id == vehicle_id)

    return query.order_by(Inquiry.created_at.desc(), Inquiry.id.desc()).all()


def get_inquiry(db: Session, inquiry_id: int) -> Inquiry:
    return get_inquiry_or_404(db, inquiry_id)


def create_inquiry(db: Session, payload: InquiryCreate) -> Inquiry:
    """
    Store a new inquiry in the pending state.

    Field validation runs first (ValidationError); a vehicle id that does not
    exist is reported separately as NotFoundError.
    """
    errors = validate_inquiry(payload)
    if errors:
        raise ValidationError(errors)

    if payload.vehicle_id is not None and db.get(Vehicle, payload.vehicle_id) is None:
        raise NotFoundError("The specified vehicle does not exist")

    inquiry = Inquiry(
        name=payload.name.strip(),
        email=payload.email.strip().lower(),
        phone=payload.phone.strip(),
        message=payload.message.strip(),
        vehicle_id=payload.vehicle_id,
        status=InquiryStatus.PENDING,
    )
    db.add(inquiry)
    db.commit()
    db.refresh(inquiry)

    logger.info(f"New inquiry {inquiry.id} received from {inquiry.email}")
    return inquiry


def update_inquiry_status(db: Session, inquiry_id: int, status: Optional[str]) -> Inquiry:
    """Move an inquiry to ``status``; anything outside the workflow is rejected."""
    inquiry = get_inquiry_or_404(db, inquiry_id)

    status_value = parse_enum(InquiryStatus, status)
    if status_value is None:
        raise _invalid_status()

    inquiry.status = status_value
    db.commit()
    db.refresh(inquiry)

    logger.info(f"Inquiry {inquiry_id} set to {status_value.value}")
    return inquiry


def delete_inquiry(db: Session, inquiry_id: int) -> None:
    inquiry = get_inquiry_or_404(db, inquiry_id)
    db.delete(inquiry)
    db.commit()
    logger.info(f"Inquiry {inquiry_id} deleted")
