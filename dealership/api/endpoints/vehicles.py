from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dealership.core.security import TokenClaims, get_current_user, get_optional_user
from dealership.db.session import get_db
from dealership.schemas.vehicle import (
    FeatureAssociation,
    FeatureListResponse,
    ImageAssociation,
    ImageDeleteResponse,
    ImageListResponse,
    VehicleCreate,
    VehicleDeleteResponse,
    VehicleDetailResponse,
    VehicleListResponse,
    VehicleResponse,
    VehicleUpdate,
)
from dealership.services import images as image_service
from dealership.services import vehicles as vehicle_service

import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=VehicleListResponse)
def list_vehicles(
    estado: Optional[str] = Query(None, description="DISPONIBLE, RESERVADO or VENDIDO"),
    marca: Optional[str] = Query(None, description="Case-insensitive brand substring"),
    current_user: Optional[TokenClaims] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    List vehicles, newest first.

    Anonymous callers only see available vehicles unless they ask for a
    status; staff with a valid token see every vehicle by default.
    """
    vehicles = vehicle_service.list_vehicles(
        db,
        status=estado,
        brand=marca,
        include_all=current_user is not None,
    )
    return {"success": True, "count": len(vehicles), "vehiculos": vehicles}

@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def create_vehicle(
    vehicle_data: VehicleCreate,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a vehicle, optionally with images (ordered as sent) and features.
    """
    vehicle = vehicle_service.create_vehicle(db, vehicle_data)
    logger.info(f"Vehicle {vehicle.id} created by {current_user.email}")
    return {"success": True, "vehiculo": vehicle}

@router.get("/{vehicle_id}", response_model=VehicleDetailResponse)
def get_vehicle(
    vehicle_id: int,
    db: Session = Depends(get_db)
):
    """
    Get a vehicle with its images, features and inquiries.
    """
    vehicle = vehicle_service.get_vehicle(db, vehicle_id)
    return {"success": True, "vehiculo": vehicle}

@router.put("/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(
    vehicle_id: int,
    vehicle_data: VehicleUpdate,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Partially update a vehicle. Only the fields present in the body change.
    """
    vehicle = vehicle_service.update_vehicle(db, vehicle_id, vehicle_data)
    logger.info(f"Vehicle {vehicle_id} updated by {current_user.email}")
    return {"success": True, "vehiculo": vehicle, "mensaje": "Vehicle updated successfully"}

@router.delete("/{vehicle_id}", response_model=VehicleDeleteResponse)
def delete_vehicle(
    vehicle_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a vehicle with its images and features.

    Fails with 409 while inquiries still reference the vehicle.
    """
    deleted = vehicle_service.delete_vehicle(db, vehicle_id)
    logger.info(f"Vehicle {vehicle_id} deleted by {current_user.email}")
    return {
        "success": True,
        "mensaje": "Vehicle deleted successfully",
        "vehiculoEliminado": deleted,
    }

@router.post("/{vehicle_id}/imagenes", response_model=ImageListResponse, status_code=status.HTTP_201_CREATED)
def add_images(
    vehicle_id: int,
    payload: ImageAssociation,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Attach already uploaded images to a vehicle, keeping the given order values.
    """
    created = image_service.associate_images(db, vehicle_id, payload.images)
    return {"success": True, "imagenes": created, "count": len(created)}

@router.delete("/{vehicle_id}/imagenes/{image_id}", response_model=ImageDeleteResponse)
def delete_image(
    vehicle_id: int,
    image_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Remove one image from a vehicle. The last image of a vehicle cannot be removed.
    """
    remaining = image_service.remove_image(db, vehicle_id, image_id)
    return {
        "success": True,
        "mensaje": "Image deleted successfully",
        "imagenesRestantes": remaining,
    }

@router.post("/{vehicle_id}/caracteristicas", response_model=FeatureListResponse, status_code=status.HTTP_201_CREATED)
def add_features(
    vehicle_id: int,
    payload: FeatureAssociation,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    created = vehicle_service.add_features(db, vehicle_id, payload.features)
    return {"success": True, "caracteristicas": created, "count": len(created)}

@router.delete("/{vehicle_id}/caracteristicas/{feature_id}")
def delete_feature(
    vehicle_id: int,
    feature_id: int,
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    vehicle_service.remove_feature(db, vehicle_id, feature_id)
    return {"success": True, "mensaje": "Feature deleted successfully"}
