"""
Operational routes.

GET /healthz reports database connectivity; /metrics is exposed by the
Prometheus instrumentator in main.py.
"""

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from quotebox.api.dependencies import get_repository
from quotebox.api.models import HealthResponse
from quotebox.persistence.exceptions import RepositoryError
from quotebox.persistence.repository import QuoteRepository

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get(
    "/healthz",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    summary="Service health check",
    responses={
        200: {"description": "Database reachable"},
        503: {"description": "Database unreachable"},
    },
)
async def health_check(
    repository: QuoteRepository = Depends(get_repository),
):
    """Ping the database; 503 when the probe fails."""
    try:
        await repository.ping()
    except RepositoryError as e:
        logger.warning("Health check failed", error=e.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=HealthResponse(
                status="unhealthy", error="database connection failed"
            ).model_dump(exclude_none=True),
        )

    return HealthResponse(status="ok")
