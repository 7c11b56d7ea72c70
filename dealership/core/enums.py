"""
Enumerations shared by the ORM models, validators and query filters.

Values are the wire and storage representation.
"""

import enum
from typing import List, Optional, Type


class FuelType(str, enum.Enum):
    GASOLINE = "NAFTA"
    DIESEL = "DIESEL"
    ELECTRIC = "ELECTRICO"
    HYBRID = "HIBRIDO"
    CNG = "GNC"


class Transmission(str, enum.Enum):
    MANUAL = "MANUAL"
    AUTOMATIC = "AUTOMATICA"
    SEQUENTIAL = "SECUENCIAL"


class VehicleStatus(str, enum.Enum):
    AVAILABLE = "DISPONIBLE"
    RESERVED = "RESERVADO"
    SOLD = "VENDIDO"


class InquiryStatus(str, enum.Enum):
    PENDING = "PENDIENTE"
    CONTACTED = "CONTACTADO"
    CLOSED = "CERRADO"


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    SELLER = "VENDEDOR"


def enum_values(enum_cls: Type[enum.Enum]) -> List[str]:
    return [member.value for member in enum_cls]


def parse_enum(enum_cls: Type[enum.Enum], value) -> Optional[enum.Enum]:
    """Return the member whose value equals ``value``, or None."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None
