"""Health check endpoint (unauthenticated)."""
import logging
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session


logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded"]
    database: Literal["healthy", "unhealthy"]
    auth_mode: Literal["dev", "local-jwt", "remote"]


def _auth_mode(settings: Settings) -> Literal["dev", "local-jwt", "remote"]:
    if settings.dev_mode:
        return "dev"
    return "local-jwt" if settings.verify_tokens_locally else "remote"


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Report application and database health, and how tokens are verified."""
    database = "healthy"
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        database = "unhealthy"

    return HealthResponse(
        status="healthy" if database == "healthy" else "degraded",
        database=database,
        auth_mode=_auth_mode(settings),
    )
