"""
API-specific request and response models for FastAPI endpoints.

The classify endpoint returns the core ClassificationResult directly; the
models here cover everything around it.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictStr

from centroid_router.models.output_models import BuildSummary


class ClassifyRequest(BaseModel):
    """Request body for POST /api/classify."""
    
    text: StrictStr = Field(
        min_length=1,
        description="Text to classify (e.g. an e-mail body)",
        examples=["Hello, I was charged twice for my subscription this month."]
    )


class LabelsResponse(BaseModel):
    """Labels available in the current centroid table."""
    
    labels: list[str] = Field(description="Labels in stored order")
    count: int = Field(ge=0, description="Number of labels")
    threshold: float = Field(description="Minimum best score required to route")


class RebuildRequest(BaseModel):
    """Optional body for POST /api/centroids/rebuild."""
    
    training_data_path: Optional[str] = Field(
        default=None,
        description="Training JSON file on the worker (default: TRAINING_DATA_PATH)"
    )


class RebuildSubmitResponse(BaseModel):
    """Response for the rebuild submission endpoint."""
    
    task_id: str = Field(description="Celery task ID for tracking")
    submitted_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Submission timestamp (UTC)"
    )


class TaskStatusResponse(BaseModel):
    """Response for rebuild task status endpoint."""
    
    task_id: str = Field(description="Celery task ID")
    status: str = Field(
        description="Task state: PENDING, STARTED, SUCCESS, FAILURE",
        examples=["PENDING", "STARTED", "SUCCESS", "FAILURE"]
    )
    result: Optional[BuildSummary] = Field(
        default=None,
        description="Build summary (present only if status=SUCCESS)"
    )
    error: Optional[str] = Field(
        default=None,
        description="Error message (present only if status=FAILURE)"
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded", "unhealthy"]
    )
    version: str = Field(description="Application version", examples=["0.1.0"])
    services: dict[str, str] = Field(
        description="Component-specific health status",
        examples=[{"embedding_provider": "ok", "centroids": "ok"}]
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""
    
    error: str = Field(
        description="Error code",
        examples=["invalid_request", "centroids_unavailable", "embedding_provider_error"]
    )
    message: str = Field(description="Human-readable error message")
    details: Optional[Any] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp (UTC)"
    )
