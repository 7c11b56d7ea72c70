from datetime import datetime
from sqlalchemy import Column, DateTime, Integer

# Upper bound of an Integer column on Postgres
MAX_INTEGER = 2 ** 31 - 1

class BaseModel:
    """Columns shared by every dealership table."""

    # SERIAL on Postgres
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
