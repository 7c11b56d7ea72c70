"""
SQLAlchemy model for customer inquiries.
"""

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dealership.core.enums import InquiryStatus, enum_values
from dealership.db.base_model import BaseModel
from dealership.db.session import Base

class Inquiry(Base, BaseModel):
    """
    A message from a prospective customer, optionally about one vehicle.
    The vehicle reference is nullable and never cascades.
    """
    __tablename__ = "inquiries"

    name = Column(String(150), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(
        Enum(InquiryStatus, name="inquiry_status", values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=InquiryStatus.PENDING,
        index=True,
    )
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=True, index=True)

    vehicle = relationship("Vehicle", back_populates="inquiries")

    def __repr__(self):
        return f"<Inquiry {self.id} from {self.email} ({self.status})>"
