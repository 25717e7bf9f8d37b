"""
Health check endpoints.
"""

from fastapi import APIRouter

from studio import __version__
from studio.application.dto.responses import HealthResponse
from studio.config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Service and database health.

    Tests SQLite connectivity and reports the applied schema version.
    """
    from studio.infrastructure.storage.sqlite import get_connection
    from studio.infrastructure.storage.sqlite.migrations.migrator import get_current_version

    try:
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
            schema_version = await get_current_version(conn)
    except Exception as e:
        logger.warning("health_database_unavailable", error=str(e))
        return HealthResponse(
            status="unhealthy",
            version=__version__,
            database="unavailable",
        )

    return HealthResponse(
        status="healthy",
        version=__version__,
        database="sqlite",
        schema_version=schema_version,
    )
