"""
Celery task that rebuilds the centroid table from the training file.

Tasks accept and return JSON-serializable values for compatibility with
Celery's JSON serialization.
"""

import asyncio
from typing import Optional

import structlog
from celery import Task

from centroid_router.config import settings
from centroid_router.persistence.training_data import load_training_examples
from centroid_router.service import RoutingService
from centroid_router.tasks.celery_app import celery_app

logger = structlog.get_logger(__name__)


class CentroidTask(Task):
    """
    Base task class with resource initialization.
    
    Builds the routing service once per worker process and reuses it
    across task invocations.
    """
    
    _service: Optional[RoutingService] = None
    
    @property
    def service(self) -> RoutingService:
        """Get or initialize routing service (singleton per worker)."""
        if self._service is None:
            self._service = RoutingService.from_settings(settings)
        return self._service


@celery_app.task(bind=True, base=CentroidTask, name="rebuild_centroids")
def rebuild_centroids_task(self: CentroidTask, training_data_path: Optional[str] = None) -> dict:
    """
    Rebuild the centroid table from a training file.
    
    Failures are not retried: the task ends in FAILURE and the previous
    table stays in place.
    
    Args:
        training_data_path: Training JSON file (default: TRAINING_DATA_PATH)
    
    Returns:
        BuildSummary as dict
    """
    path = training_data_path or settings.TRAINING_DATA_PATH
    structlog.contextvars.bind_contextvars(task_id=self.request.id)
    
    try:
        logger.info("Centroid rebuild started", training_data_path=path)
        
        examples = load_training_examples(path)
        # The provider is async; each task run gets its own event loop
        summary = asyncio.run(_build(self.service, examples))
        
        logger.info(
            "Centroid rebuild completed",
            labels=summary.labels,
            example_count=summary.example_count,
            duration_ms=summary.duration_ms,
        )
        return summary.model_dump(mode="json")
    
    except Exception as exc:
        logger.error(
            "Centroid rebuild failed",
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=True,
        )
        raise
    
    finally:
        structlog.contextvars.clear_contextvars()


async def _build(service: RoutingService, examples):
    try:
        return await service.build_with_summary(examples)
    finally:
        # The pooled httpx client is bound to this run's event loop
        await service.close()
