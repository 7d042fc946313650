"""
Health check endpoint.
"""

from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from app.api.utils import utc_timestamp
from app.core.config import settings

router = APIRouter()


class HealthStatus(BaseModel):
    """Health status model."""

    status: str
    service: str
    version: str
    environment: str
    timestamp: datetime

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "OK",
                "service": "donation-microservice",
                "version": "0.1.0",
                "environment": "development",
                "timestamp": "2024-01-01T00:00:00Z",
            }
        }
    }


class ComponentStatus(BaseModel):
    """Component health status model."""

    name: str
    status: str
    details: Optional[Dict] = None


class DetailedHealthStatus(HealthStatus):
    """Detailed health status model with component status information."""

    components: List[ComponentStatus]


@router.get(
    "",
    response_model=HealthStatus,
    summary="Basic health check endpoint",
    description="Returns a simple status indicating the service is running.",
    responses={200: {"description": "Service is healthy"}},
)
async def health_check() -> HealthStatus:
    """
    Basic health check endpoint.
    """
    return HealthStatus(
        status="OK",
        service=settings.SERVICE_NAME,
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=utc_timestamp(),
    )


@router.get(
    "/ready",
    response_model=DetailedHealthStatus,
    summary="Readiness check endpoint",
    description="Checks that the donation dataset is loaded.",
    responses={200: {"description": "Service is ready"}, 503: {"description": "Service is not ready"}},
)
async def readiness_check(request: Request, response: Response) -> DetailedHealthStatus:
    """
    Detailed health check for service readiness.
    """
    dataset = getattr(request.app.state, "dataset", None)
    if dataset is not None:
        component = ComponentStatus(
            name="dataset",
            status="healthy",
            details={"categories": len(dataset.categories), "donations": len(dataset.donations)},
        )
    else:
        component = ComponentStatus(name="dataset", status="unhealthy", details={"error": "Dataset not loaded"})
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return DetailedHealthStatus(
        status="OK" if dataset is not None else "degraded",
        service=settings.SERVICE_NAME,
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=utc_timestamp(),
        components=[component],
    )
