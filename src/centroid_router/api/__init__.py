"""
FastAPI API routes and endpoints.

- routes_sync.py: POST /api/classify, GET /api/labels, GET /health
- routes_async.py: POST /api/centroids/rebuild, GET /api/centroids/task/{id}
- dependencies.py: Dependency injection for provider, store and service
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request tracing
"""

from centroid_router.api import dependencies, error_handlers, models
from centroid_router.api.routes_async import router as async_router
from centroid_router.api.routes_sync import router as sync_router

__all__ = [
    "sync_router",
    "async_router",
    "dependencies",
    "error_handlers",
    "models",
]
