"""
Asynchronous API routes for background centroid rebuilds.

Rebuilds run in a Celery worker; these endpoints submit them and report
their state.
"""

from datetime import datetime
from typing import Optional

import structlog
from celery.result import AsyncResult
from fastapi import APIRouter, status

from centroid_router.api.models import (
    RebuildRequest,
    RebuildSubmitResponse,
    TaskStatusResponse,
)
from centroid_router.models.output_models import BuildSummary
from centroid_router.tasks.celery_app import celery_app
from centroid_router.tasks.centroid_tasks import rebuild_centroids_task

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/rebuild",
    response_model=RebuildSubmitResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Rebuild centroids in the background",
    description="""
    Queue a full rebuild of the centroid table from the training file.
    
    The current table keeps serving classifications until the new one is
    written. Poll GET /api/centroids/task/{task_id} for the outcome.
    """,
)
async def submit_rebuild(
    rebuild_request: Optional[RebuildRequest] = None,
) -> RebuildSubmitResponse:
    training_data_path = rebuild_request.training_data_path if rebuild_request else None
    result = rebuild_centroids_task.delay(training_data_path)  # type: ignore[attr-defined]
    
    logger.info(
        "Centroid rebuild submitted",
        task_id=result.id,
        training_data_path=training_data_path,
    )
    
    return RebuildSubmitResponse(task_id=result.id, submitted_at=datetime.utcnow())


@router.get(
    "/task/{task_id}",
    response_model=TaskStatusResponse,
    summary="Check rebuild task status",
    description="""
    Possible states:
    - PENDING: Task is waiting in queue (also reported for unknown ids)
    - STARTED: Task is being processed
    - SUCCESS: Build finished (summary available)
    - FAILURE: Build failed (error available); the previous table is untouched
    """,
)
async def get_task_status(task_id: str) -> TaskStatusResponse:
    async_result = AsyncResult(task_id, app=celery_app)
    state = async_result.state
    
    if state == "SUCCESS":
        return TaskStatusResponse(
            task_id=task_id,
            status=state,
            result=BuildSummary.model_validate(async_result.result),
        )
    
    if state == "FAILURE":
        error_info = str(async_result.info) if async_result.info else "Unknown error"
        logger.warning("Rebuild task failed", task_id=task_id, error=error_info)
        return TaskStatusResponse(task_id=task_id, status=state, error=error_info)
    
    return TaskStatusResponse(task_id=task_id, status=state)
