import logging
import os
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from prolist import __version__
from prolist.config import Settings
from prolist.dependencies import get_db, get_settings
from prolist.schemas.health import HealthResponse

router = APIRouter()

logger = logging.getLogger("prolist.health")


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    db_status = "healthy"
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        db_status = "unhealthy"

    # Upload dir is created lazily, so a missing dir only needs a writable parent.
    upload_dir = settings.upload_dir
    checked_dir = upload_dir if os.path.isdir(upload_dir) else os.path.dirname(upload_dir) or "."
    storage_status = "healthy" if os.access(checked_dir, os.W_OK) else "unhealthy"

    overall = "healthy" if db_status == "healthy" and storage_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall,
        database=db_status,
        storage=storage_status,
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        version=__version__,
    )
