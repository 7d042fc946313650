"""
Standardized API response models.

Every analytics endpoint wraps its payload in the same envelope:
``{"success": true, "data": ..., "timestamp": ...}``, optionally with a
``count`` or ``chartType``. Failures use ``{"success": false, "error": ...}``.
"""

from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

from fastapi import status
from pydantic import BaseModel, Field

# Type variable for generic response models
T = TypeVar("T")


class EnvelopeModel(BaseModel, Generic[T]):
    """Generic success envelope."""

    success: bool = Field(True, description="Whether the request succeeded")
    data: T = Field(..., description="Response data")
    timestamp: datetime = Field(..., description="Time the response was produced")


class CountedEnvelopeModel(EnvelopeModel[T], Generic[T]):
    """Success envelope for list payloads."""

    count: int = Field(..., description="Number of entries in data")


class ChartEnvelopeModel(EnvelopeModel[T], Generic[T]):
    """Success envelope for chart payloads."""

    chart_type: str = Field(..., alias="chartType", description="Requested chart type")

    model_config = {"populate_by_name": True}


class ErrorEnvelopeModel(BaseModel):
    """Error envelope."""

    success: bool = Field(False, description="Always false")
    error: str = Field(..., description="Short error label")
    message: Optional[str] = Field(None, description="Human readable detail")


class InvalidChartTypeModel(ErrorEnvelopeModel):
    """Error envelope for an unsupported chart type."""

    valid_chart_types: List[str] = Field(..., alias="validChartTypes")
    provided: str

    model_config = {"populate_by_name": True}


# Export HTTP status codes for easier route definitions
HTTP_400_BAD_REQUEST = status.HTTP_400_BAD_REQUEST
HTTP_429_TOO_MANY_REQUESTS = status.HTTP_429_TOO_MANY_REQUESTS
HTTP_500_INTERNAL_SERVER_ERROR = status.HTTP_500_INTERNAL_SERVER_ERROR


class Tags:
    """API route tags for documentation grouping."""

    HEALTH = "Health"
    ANALYTICS = "Analytics"
    DONATIONS = "Donations"


default_error_responses: dict[int | str, dict[str, Any]] = {
    HTTP_400_BAD_REQUEST: {
        "model": ErrorEnvelopeModel,
        "description": "Bad Request – Invalid query parameter",
    },
    HTTP_429_TOO_MANY_REQUESTS: {
        "model": ErrorEnvelopeModel,
        "description": "Too Many Requests – Rate limit exceeded",
    },
    HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorEnvelopeModel,
        "description": "Internal Error – Unexpected server failure",
    },
}

chart_error_responses: dict[int | str, dict[str, Any]] = {
    **default_error_responses,
    HTTP_400_BAD_REQUEST: {
        "model": InvalidChartTypeModel,
        "description": "Bad Request – Unsupported chart type",
    },
}
