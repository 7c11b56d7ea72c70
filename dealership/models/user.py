"""
SQLAlchemy model for the users table.
"""

from sqlalchemy import Boolean, Column, Enum, String

from dealership.core.enums import UserRole, enum_values
from dealership.db.base_model import BaseModel
from dealership.db.session import Base

class User(Base, BaseModel):
    """
    Staff account allowed to log in to the back-office.
    Accounts are created out of band (see setup_db.py); no route creates them.
    """
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(150), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=UserRole.SELLER,
    )
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
