"""System health route."""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.engine import make_url

from core.config import settings
from core.db import SessionLocal
from core.version import __version__
from modules.system.schemas import HealthCheck

log = logging.getLogger("zap.api")
router = APIRouter()


@router.get("/health", response_model=HealthCheck, tags=["System"])
async def health_check():
    """Check API health and database connectivity."""
    database = make_url(settings.database_url).get_backend_name()
    status = "ok"
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        log.warning("Health check could not reach the database", exc_info=True)
        status = "degraded"
    finally:
        db.close()

    return HealthCheck(status=status, version=__version__, database=database)
