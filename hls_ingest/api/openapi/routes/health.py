"""Health check endpoints."""

from enum import Enum

from fastapi import APIRouter
from pydantic import BaseModel, Field

from hls_ingest.api.dependencies import FactoryDep, SettingsDep

router = APIRouter()


class HealthStatus(str, Enum):
    """Health check status."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealth(BaseModel):
    """Health status of a single component."""

    name: str = Field(description="Component name")
    status: HealthStatus = Field(description="Component health status")
    message: str | None = Field(default=None, description="Additional details")


class HealthResponse(BaseModel):
    """Health check response."""

    status: HealthStatus = Field(description="Overall health status")
    version: str = Field(description="Application version")
    environment: str = Field(description="Deployment environment")
    components: list[ComponentHealth] = Field(
        default_factory=list,
        description="Individual component health",
    )


class LivenessResponse(BaseModel):
    """Simple liveness response."""

    status: str = Field(default="ok")


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool = Field(description="Whether the service is ready to accept requests")
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual readiness checks",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Get overall health status of the service and its components.",
)
async def health_check(
    settings: SettingsDep,
    factory: FactoryDep,
) -> HealthResponse:
    """Check health of all service components."""
    components: list[ComponentHealth] = []

    # Check document database
    try:
        db_health = await factory.get_document_db().health_check()
        components.append(
            ComponentHealth(
                name="document_db",
                status=HealthStatus.HEALTHY if db_health.healthy else HealthStatus.UNHEALTHY,
                message=db_health.message or f"Provider: {settings.document_db.provider}",
            )
        )
    except Exception as e:
        components.append(
            ComponentHealth(
                name="document_db",
                status=HealthStatus.UNHEALTHY,
                message=str(e),
            )
        )

    # Check transcoder executable
    ffmpeg = settings.transcoding.ffmpeg_path
    available = factory.get_process_invoker().is_available(ffmpeg)
    components.append(
        ComponentHealth(
            name="transcoder",
            status=HealthStatus.HEALTHY if available else HealthStatus.UNHEALTHY,
            message=f"Executable: {ffmpeg}" if available else f"{ffmpeg} not found",
        )
    )

    unhealthy_count = sum(1 for c in components if c.status == HealthStatus.UNHEALTHY)
    if unhealthy_count == 0:
        overall_status = HealthStatus.HEALTHY
    elif unhealthy_count < len(components):
        overall_status = HealthStatus.DEGRADED
    else:
        overall_status = HealthStatus.UNHEALTHY

    return HealthResponse(
        status=overall_status,
        version=settings.app.version,
        environment=settings.app.environment,
        components=components,
    )


@router.get(
    "/health/live",
    response_model=LivenessResponse,
    summary="Liveness probe",
    description="Simple liveness check for Kubernetes probes.",
)
async def liveness() -> LivenessResponse:
    """Simple liveness check - just verifies the app is running."""
    return LivenessResponse(status="ok")


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check for Kubernetes probes.",
)
async def readiness(
    settings: SettingsDep,
    factory: FactoryDep,
) -> ReadinessResponse:
    """Check if service is ready to accept uploads.

    Verifies the document store answers and the transcoder is installed.
    """
    checks: dict[str, bool] = {}

    try:
        db_health = await factory.get_document_db().health_check()
        checks["document_db"] = db_health.healthy
    except Exception:
        checks["document_db"] = False

    checks["transcoder"] = factory.get_process_invoker().is_available(
        settings.transcoding.ffmpeg_path
    )

    return ReadinessResponse(ready=all(checks.values()), checks=checks)
