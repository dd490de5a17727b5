"""Liveness and readiness probes."""

import os

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.exceptions import DataSourceUnavailable
from app.db.session import get_db

router = APIRouter()


@router.get("")
async def liveness(settings: Settings = Depends(get_settings)):
    """Process is up. Includes built_at when BACKEND_BUILT_AT is set by the image build."""
    payload: dict = {"status": "ok", "app": settings.app_name, "environment": settings.environment}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Database answers a trivial query; otherwise 503 via the data source handler."""
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        raise DataSourceUnavailable(str(exc), operation="readiness") from exc
    return {"status": "ok", "database": "connected"}
