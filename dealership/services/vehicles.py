"""
Validation and persistence of vehicles and the features they own.

Every public function takes an open session, commits its own work once and
raises the errors from ``dealership.core.exceptions``.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from dealership.core.enums import FuelType, Transmission, VehicleStatus, enum_values, parse_enum
from dealership.core.exceptions import ConflictError, NotFoundError, ValidationError
from dealership.db.base_model import MAX_INTEGER
from dealership.models import Vehicle, VehicleFeature, VehicleImage
from dealership.schemas.vehicle import FeatureInput, VehicleCreate, VehicleUpdate

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
# NUMERIC(12, 2)
MAX_PRICE = 10 ** 10

REQUIRED_TEXT_FIELDS = {"brand": "Brand", "model": "Model", "color": "Color"}
OPTIONAL_TEXT_FIELDS = ("engine", "description")
ENUM_FIELDS = {
    "fuel_type": (FuelType, "fuel type"),
    "transmission": (Transmission, "transmission"),
    "status": (VehicleStatus, "status"),
}


def max_year() -> int:
    """Latest accepted model year (next year's models are already on sale)."""
    return datetime.now().year + 1


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def validate_vehicle_fields(data: Dict[str, Any], partial: bool = False) -> List[str]:
    """
    Check vehicle fields and return every problem found.

    With ``partial`` only the keys present in ``data`` are checked, which is
    how updates behave; otherwise required fields must be present.
    """
    errors: List[str] = []

    def present(field: str) -> bool:
        return not partial or field in data

    for field, label in REQUIRED_TEXT_FIELDS.items():
        if present(field) and _is_blank(data.get(field)):
            errors.append(f"{label} is required" if not partial else f"{label} cannot be empty")

    if present("year"):
        year = data.get("year")
        if year is None or year < MIN_YEAR or year > max_year():
            errors.append(f"Invalid year: must be between {MIN_YEAR} and {max_year()}")

    if present("price"):
        price = data.get("price")
        # NaN compares False both ways
        if price is None or not math.isfinite(price) or not price > 0:
            errors.append("Price must be greater than 0")
        elif price >= MAX_PRICE:
            errors.append(f"Price must be less than {MAX_PRICE}")

    # Odometer defaults to 0 on create, so only an explicit value is checked
    if "odometer" in data and data.get("odometer") is not None:
        if data["odometer"] < 0:
            errors.append("Odometer cannot be negative")
        elif data["odometer"] > MAX_INTEGER:
            errors.append(f"Odometer cannot exceed {MAX_INTEGER}")
    elif partial and "odometer" in data:
        errors.append("Odometer cannot be empty")

    if present("doors"):
        doors = data.get("doors")
        if doors is None or doors <= 0:
            errors.append("Door count must be greater than 0")
        elif doors > MAX_INTEGER:
            errors.append(f"Door count cannot exceed {MAX_INTEGER}")

    for field, (enum_cls, label) in ENUM_FIELDS.items():
        # Status is optional even on create (new vehicles default to available)
        if field == "status" and data.get(field) is None and not (partial and field in data):
            continue
        if present(field) and parse_enum(enum_cls, data.get(field)) is None:
            errors.append(f"Invalid {label}. Options: {', '.join(enum_values(enum_cls))}")

    return errors


def _validate_nested(data: Dict[str, Any]) -> List[str]:
    errors = []
    for index, image in enumerate(data.get("images") or []):
        if _is_blank(image.get("url")):
            errors.append(f"Image {index + 1} requires a url")
    for index, feature in enumerate(data.get("features") or []):
        if _is_blank(feature.get("name")):
            errors.append(f"Feature {index + 1} requires a name")
    return errors


def _clean_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize validated input into column values (trimmed text, enum members)."""
    cleaned: Dict[str, Any] = {}
    for field, value in data.items():
        if field in REQUIRED_TEXT_FIELDS:
            cleaned[field] = value.strip()
        elif field in OPTIONAL_TEXT_FIELDS:
            cleaned[field] = value.strip() if value and value.strip() else None
        elif field in ENUM_FIELDS:
            cleaned[field] = parse_enum(ENUM_FIELDS[field][0], value)
        elif field == "featured":
            cleaned[field] = bool(value)
        elif field in ("year", "price", "odometer", "doors"):
            cleaned[field] = value
    return cleaned


def get_vehicle_or_404(db: Session, vehicle_id: int) -> Vehicle:
    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    return vehicle


def list_vehicles(
    db: Session,
    status: Optional[str] = None,
    brand: Optional[str] = None,
    include_all: bool = False,
) -> List[Vehicle]:
    """
    List vehicles newest first with their images and features.

    Without an explicit ``status`` only available vehicles are returned,
    unless ``include_all`` is set (staff callers).
    """
    query = db.query(Vehicle).options(
        selectinload(Vehicle.images),
        selectinload(Vehicle.features),
    )

    if status:
        status_value = parse_enum(VehicleStatus, status)
        if status_value is None:
            raise ValidationError([f"Invalid status. Options: {', '.join(enum_values(VehicleStatus))}"])
        query = query.filter(Vehicle.status == status_value)
    elif not include_all:
        query = query.filter(Vehicle.status == VehicleStatus.AVAILABLE)

    if brand and brand.strip():
        query = query.filter(func.lower(Vehicle.brand).contains(brand.strip().lower(), autoescape=True))

    return query.order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).all()


def get_vehicle(db: Session, vehicle_id: int) -> Vehicle:
    """Fetch one vehicle with images, features and the inquiries about it."""
    vehicle = (
        db.query(Vehicle)
        .options(
            selectinload(Vehicle.images),
            selectinload(Vehicle.features),
            selectinload(Vehicle.inquiries),
        )
        .filter(Vehicle.id == vehicle_id)
        .first()
    )
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    return vehicle


def create_vehicle(db: Session, payload: VehicleCreate) -> Vehicle:
    """
    Create a vehicle together with its nested images and features.

    Everything is written in a single commit: either the vehicle and all of
    its children exist afterwards or nothing does.
    """
    data = payload.model_dump()
    errors = validate_vehicle_fields(data) + _validate_nested(data)
    if errors:
        raise ValidationError(errors)

    images = data.pop("images") or []
    features = data.pop("features") or []
    if data.get("odometer") is None:
        data["odometer"] = 0
    if data.get("featured") is None:
        data["featured"] = False
    if data.get("status") is None:
        data["status"] = VehicleStatus.AVAILABLE

    vehicle = Vehicle(**_clean_fields(data))
    # Nested images take their order from their position in the request
    vehicle.images = [
        VehicleImage(url=image["url"].strip(), order=index, public_id=image.get("public_id"))
        for index, image in enumerate(images)
    ]
    vehicle.features = [VehicleFeature(name=feature["name"].strip()) for feature in features]

    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)

    logger.info(f"Vehicle {vehicle.id} created: {vehicle.brand} {vehicle.model} {vehicle.year}")
    return vehicle


def update_vehicle(db: Session, vehicle_id: int, payload: VehicleUpdate) -> Vehicle:
    """Apply a partial update; fields absent from the request are left as they are."""
    vehicle = get_vehicle_or_404(db, vehicle_id)

    data = payload.model_dump(exclude_unset=True)
    errors = validate_vehicle_fields(data, partial=True)
    if errors:
        raise ValidationError(errors)

    for field, value in _clean_fields(data).items():
        setattr(vehicle, field, value)

    db.commit()
    db.refresh(vehicle)

    logger.info(f"Vehicle {vehicle_id} updated ({', '.join(sorted(data)) or 'no fields'})")
    return vehicle


def delete_vehicle(db: Session, vehicle_id: int) -> Dict[str, Any]:
    """
    Delete a vehicle, its images and its features.

    Raises:
        NotFoundError: no vehicle with that id.
        ConflictError: inquiries still reference the vehicle.
    """
    vehicle = get_vehicle_or_404(db, vehicle_id)
    summary = {"id": vehicle.id, "brand": vehicle.brand, "model": vehicle.model}

    try:
        db.delete(vehicle)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Vehicle {vehicle_id} not deleted, still referenced: {e.orig}")
        raise ConflictError("The vehicle cannot be deleted because it has related inquiries")

    logger.info(f"Vehicle {vehicle_id} deleted")
    return summary


def add_features(db: Session, vehicle_id: int, features: List[FeatureInput]) -> List[VehicleFeature]:
    """Attach feature tags to an existing vehicle."""
    errors = _validate_nested({"features": [feature.model_dump() for feature in features]})
    if not features:
        errors.append("No features provided")
    if errors:
        raise ValidationError(errors)

    vehicle = get_vehicle_or_404(db, vehicle_id)
    created = [VehicleFeature(name=feature.name.strip(), vehicle_id=vehicle.id) for feature in features]
    db.add_all(created)
    db.commit()
    for feature in created:
        db.refresh(feature)

    logger.info(f"{len(created)} features added to vehicle {vehicle_id}")
    return created


def remove_feature(db: Session, vehicle_id: int, feature_id: int) -> None:
    get_vehicle_or_404(db, vehicle_id)
    feature = db.get(VehicleFeature, feature_id)
    if feature is None:
        raise NotFoundError("Feature not found")
    if feature.vehicle_id != vehicle_id:
        raise ValidationError(["The feature does not belong to this vehicle"])

    db.delete(feature)
    db.commit()
    logger.info(f"Feature {feature_id} removed from vehicle {vehicle_id}")
