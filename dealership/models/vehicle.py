"""
SQLAlchemy models for vehicle listings and the records they own.
"""

from sqlalchemy import Boolean, Column, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from dealership.core.enums import FuelType, Transmission, VehicleStatus, enum_values
from dealership.db.base_model import BaseModel
from dealership.db.session import Base


def _enum_column(enum_cls, name: str, **kwargs) -> Column:
    # Stored as plain strings so SQLite and Postgres behave the same
    return Column(
        Enum(enum_cls, name=name, values_callable=enum_values, native_enum=False, length=20),
        **kwargs
    )


class Vehicle(Base, BaseModel):
    """
    A vehicle listed for sale.
    Images and features are owned and removed with the vehicle; inquiries are
    not, so deleting a vehicle that still has inquiries fails at the database.
    """
    __tablename__ = "vehicles"

    brand = Column(String(100), nullable=False, index=True)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    odometer = Column(Integer, nullable=False, default=0)
    fuel_type = _enum_column(FuelType, "fuel_type", nullable=False)
    transmission = _enum_column(Transmission, "transmission", nullable=False)
    color = Column(String(50), nullable=False)
    doors = Column(Integer, nullable=False)
    engine = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    status = _enum_column(VehicleStatus, "vehicle_status", nullable=False, default=VehicleStatus.AVAILABLE, index=True)
    featured = Column(Boolean, nullable=False, default=False)

    images = relationship(
        "VehicleImage",
        back_populates="vehicle",
        cascade="all, delete-orphan",
        order_by="VehicleImage.order",
        passive_deletes=True,
    )
    features = relationship(
        "VehicleFeature",
        back_populates="vehicle",
        cascade="all, delete-orphan",
        order_by="VehicleFeature.id",
        passive_deletes=True,
    )
    # "all" keeps the ORM from nulling inquiry.vehicle_id so the FK can refuse the delete
    inquiries = relationship("Inquiry", back_populates="vehicle", passive_deletes="all")

    def __repr__(self):
        return f"<Vehicle {self.id} {self.brand} {self.model} {self.year}>"


class VehicleImage(Base, BaseModel):
    """
    A hosted picture of a vehicle.
    ``public_id`` is the image host's identifier, kept so the file can be
    removed from the host without re-deriving it from the URL.
    """
    __tablename__ = "vehicle_images"

    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(500), nullable=False)
    order = Column("display_order", Integer, nullable=False, default=0)
    public_id = Column(String(255), nullable=True)

    vehicle = relationship("Vehicle", back_populates="images")

    def __repr__(self):
        return f"<VehicleImage {self.id} of vehicle {self.vehicle_id}>"


class VehicleFeature(Base, BaseModel):
    """A name-only tag such as "ABS" or "Air conditioning"."""
    __tablename__ = "vehicle_features"

    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    vehicle = relationship("Vehicle", back_populates="features")
