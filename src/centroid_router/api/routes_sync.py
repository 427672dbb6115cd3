"""
Synchronous API routes: classification, labels and health.
"""

import asyncio
from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from centroid_router.api.dependencies import get_routing_service, get_settings
from centroid_router.api.models import (
    ClassifyRequest,
    ErrorResponse,
    HealthResponse,
    LabelsResponse,
)
from centroid_router.config import Settings
from centroid_router.models.output_models import ClassificationResult
from centroid_router.service import RoutingService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/api/classify",
    response_model=ClassificationResult,
    status_code=status.HTTP_200_OK,
    summary="Classify a text against the centroid table",
    description="""
    Embed the text, score it against every label centroid and route it.
    
    `routed` is the best label when its score reaches the configured
    threshold, otherwise `"unclassified"`. `bestLabel` / `bestScore` always
    report the top match; `similarities` lists every label in rank order.
    """,
    responses={
        200: {"description": "Text classified"},
        400: {"model": ErrorResponse, "description": "Text missing or not a string"},
        502: {"model": ErrorResponse, "description": "Embedding provider failed"},
        503: {"model": ErrorResponse, "description": "No centroids built yet"},
        504: {"model": ErrorResponse, "description": "Embedding provider timed out"},
    },
)
async def classify_text(
    request: ClassifyRequest,
    service: RoutingService = Depends(get_routing_service),
) -> ClassificationResult:
    """
    Classify one text.
    
    Args:
        request: ClassifyRequest with the text
        service: Routing service (injected)
    
    Returns:
        ClassificationResult (camelCase keys)
    """
    result = await service.classify(request.text)
    logger.info(
        "Classification request completed",
        routed=result.routed,
        best_score=result.best_score,
    )
    return result


@router.get(
    "/api/labels",
    response_model=LabelsResponse,
    summary="List labels in the current centroid table",
    responses={
        503: {"model": ErrorResponse, "description": "No centroids built yet"},
    },
)
async def list_labels(
    service: RoutingService = Depends(get_routing_service),
) -> LabelsResponse:
    labels = await asyncio.to_thread(service.labels)
    return LabelsResponse(labels=labels, count=len(labels), threshold=service.threshold)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Check the embedding provider and the centroid table.
    
    - healthy: provider reachable and centroids built
    - degraded: provider reachable, no centroids yet (classify answers 503)
    - unhealthy: provider unreachable (HTTP 503)
    """,
    responses={
        200: {"description": "Healthy or degraded"},
        503: {"description": "Embedding provider unreachable"},
    },
)
async def health_check(
    service: RoutingService = Depends(get_routing_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    services = {}
    
    provider_ok = await service.provider.health_check()
    services["embedding_provider"] = "ok" if provider_ok else "unreachable"
    
    centroids_ok = await asyncio.to_thread(service.store.exists)
    services["centroids"] = "ok" if centroids_ok else "missing"
    
    if provider_ok and centroids_ok:
        health_status = "healthy"
        status_code = status.HTTP_200_OK
    elif provider_ok:
        health_status = "degraded"
        status_code = status.HTTP_200_OK
    else:
        health_status = "unhealthy"
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    
    logger.info("Health check", status=health_status, services=services)
    
    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
        timestamp=datetime.utcnow(),
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )
