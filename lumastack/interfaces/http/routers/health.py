"""Service information and liveness endpoints."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from lumastack import __version__
from lumastack.core.container import ApplicationContainer
from lumastack.interfaces.http.deps import get_container
from lumastack.schemas import ApiInfoResponse, HealthResponse

router = APIRouter()


@router.get("/", response_model=ApiInfoResponse, summary="API information")
async def root(container: ApplicationContainer = Depends(get_container)) -> ApiInfoResponse:
    settings = container.settings
    return ApiInfoResponse(
        name=settings.project_name,
        description=settings.description,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        endpoints={
            "health": "GET /health",
            "users": f"GET {settings.api_prefix}/users",
        },
    )


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health(container: ApplicationContainer = Depends(get_container)) -> HealthResponse:
    healthy = await container.database.ping()
    return HealthResponse(database="healthy" if healthy else "unhealthy", version=__version__)
