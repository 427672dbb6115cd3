"""
FastAPI application entry point for Centroid Router.
"""

from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from prometheus_fastapi_instrumentator import Instrumentator

from centroid_router.api.dependencies import get_centroid_store, get_embedding_provider
from centroid_router.api.error_handlers import EXCEPTION_HANDLERS
from centroid_router.api.middleware import RequestTracingMiddleware
from centroid_router.api.routes_async import router as async_router
from centroid_router.api.routes_sync import router as sync_router
from centroid_router.config import settings
from centroid_router.logging_config import configure_logging
from centroid_router.persistence.redis_client import RedisClient

# Configure structured logging before any other imports
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Routes free-form text to labels by embedding similarity to label centroids",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(sync_router, tags=["classify"])
if settings.ENABLE_ASYNC_API:
    app.include_router(async_router, prefix="/api/centroids", tags=["centroids"])


@app.on_event("startup")
async def startup():
    """Application startup - report configuration and centroid availability."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        embedding_backend=settings.EMBEDDING_BACKEND,
        centroid_store=settings.CENTROID_STORE_BACKEND,
        threshold=settings.CLASSIFICATION_THRESHOLD,
    )
    
    store = get_centroid_store()
    if store.exists():
        logger.info("Centroid table found", store=repr(store))
    else:
        logger.warning(
            "No centroid table yet - classify will fail until a build runs",
            store=repr(store),
        )


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - cleanup resources."""
    await get_embedding_provider().close()
    RedisClient.close_pools()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/", include_in_schema=False)
@app.get("/index.html", include_in_schema=False)
async def root():
    """Serve the web UI if present, otherwise service info."""
    index_path = Path(settings.STATIC_DIR) / "index.html"
    if index_path.is_file():
        return FileResponse(index_path, media_type="text/html")
    
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "classify": "/api/classify",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "centroid_router.main:app",
        host=settings.HOST,
        port=settings.PORT,
    )
