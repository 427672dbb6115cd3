"""
FastAPI exception handlers for structured error responses.

Maps routing, embedding and persistence exceptions to HTTP status codes.
Every handler logs the failure before answering.
"""

from datetime import datetime
from typing import Any, Optional

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from centroid_router.core.exceptions import (
    CentroidsUnavailableError,
    InvalidRequestError,
    RouterError,
)
from centroid_router.embeddings.exceptions import (
    EmbeddingProviderError,
    EmbeddingTimeoutError,
)
from centroid_router.persistence.exceptions import PersistenceError

logger = structlog.get_logger(__name__)


def _error_response(
    status_code: int, error: str, message: str, details: Optional[Any] = None
) -> JSONResponse:
    content: dict[str, Any] = {
        "error": error,
        "message": message,
        "timestamp": datetime.utcnow().isoformat(),
    }
    if details:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies.
    
    Maps to 400 Bad Request. On the classify endpoint this is always the
    missing / non-string / empty text case.
    """
    logger.warning("Invalid request format", errors=jsonable_encoder(exc.errors()))
    
    message = "Text is required" if request.url.path.endswith("/classify") else "Request validation failed"
    return _error_response(
        status.HTTP_400_BAD_REQUEST, "invalid_request", message, details=exc.errors()
    )


async def invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
    """Handle InvalidRequestError. Maps to 400 Bad Request."""
    logger.warning("Invalid classify request", details=exc.details)
    return _error_response(status.HTTP_400_BAD_REQUEST, "invalid_request", exc.message)


async def centroids_unavailable_handler(
    request: Request, exc: CentroidsUnavailableError
) -> JSONResponse:
    """
    Handle a classify call made before any build.
    
    Maps to 503 Service Unavailable: the service works once a build has run.
    """
    logger.error("Centroids unavailable", error=exc.message)
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE, "centroids_unavailable", exc.message
    )


async def embedding_timeout_handler(request: Request, exc: EmbeddingTimeoutError) -> JSONResponse:
    """Handle embedding timeouts. Maps to 504 Gateway Timeout."""
    logger.error("Embedding provider timeout", error=exc.message, details=exc.details)
    return _error_response(
        status.HTTP_504_GATEWAY_TIMEOUT,
        "embedding_timeout",
        "Embedding provider request timed out",
    )


async def embedding_provider_error_handler(
    request: Request, exc: EmbeddingProviderError
) -> JSONResponse:
    """
    Handle any other embedding failure (network, auth, rate limit, bad response).
    
    Maps to 502 Bad Gateway (upstream failure).
    """
    logger.error(
        "Embedding provider error",
        error_type=type(exc).__name__,
        error=exc.message,
        details=exc.details,
    )
    return _error_response(
        status.HTTP_502_BAD_GATEWAY, "embedding_provider_error", exc.message
    )


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """Handle centroid store failures. Maps to 500."""
    logger.error("Persistence error", error=exc.message, details=exc.details)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "persistence_error", exc.message
    )


async def router_error_handler(request: Request, exc: RouterError) -> JSONResponse:
    """Handle remaining core errors (e.g. dimension mismatch). Maps to 500."""
    logger.error(
        "Routing error",
        error_type=type(exc).__name__,
        error=exc.message,
        details=exc.details,
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "classification_failed", exc.message
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors. Maps to 500 Internal Server Error."""
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        str(exc) or "Classification failed",
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    InvalidRequestError: invalid_request_handler,
    CentroidsUnavailableError: centroids_unavailable_handler,
    EmbeddingTimeoutError: embedding_timeout_handler,
    EmbeddingProviderError: embedding_provider_error_handler,
    PersistenceError: persistence_error_handler,
    RouterError: router_error_handler,
    Exception: generic_error_handler,
}
