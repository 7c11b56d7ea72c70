import logging
from sqlalchemy.exc import SQLAlchemyError

from dealership.db.session import Base, engine
# Registers every table on Base.metadata
import dealership.models  # noqa: F401

logger = logging.getLogger(__name__)

def init_db(bind=None):
    """
    Create all dealership tables that do not exist yet.
    Existing tables are left untouched.
    """
    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind, checkfirst=True)
        for table in Base.metadata.sorted_tables:
            logger.info(f"Table {table.name} ready")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise
