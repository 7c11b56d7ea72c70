"""
Import all models from their respective modules.
"""

from dealership.models.vehicle import Vehicle, VehicleImage, VehicleFeature
from dealership.models.inquiry import Inquiry
from dealership.models.user import User

# Export all models
__all__ = [
    "Vehicle",
    "VehicleImage",
    "VehicleFeature",
    "Inquiry",
    "User",
]
