import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dealership import __version__
from dealership.core.config import settings
from dealership.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Report the service version and whether the database answers.

    The response is always 200; ``success`` and ``status`` turn false/unhealthy
    when the database check fails.
    """
    database_ok = True
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database_ok = False

    return {
        "success": database_ok,
        "status": "healthy" if database_ok else "unhealthy",
        "database": "online" if database_ok else "offline",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "timestamp": _timestamp(),
    }


@router.get("/test")
def ping():
    """Liveness check that never touches the database."""
    return {
        "success": True,
        "status": "OK",
        "message": "API is up and running",
        "timestamp": _timestamp(),
    }
