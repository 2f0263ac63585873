"""Liveness and storage health."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from src.taskhub.api.dependencies import DatabaseDep
from src.taskhub.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(database: DatabaseDep) -> JSONResponse:
    """200 when the database answers, 503 otherwise."""
    try:
        await database.ping()
    except Exception as e:
        logger.warning("Health check failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": False,
                "message": "db unreachable",
                "status": "unhealthy",
                "database": "disconnected",
            },
        )
    return JSONResponse(
        content={"success": True, "message": "ok", "status": "ok", "database": "connected"}
    )
