"""
Celery tasks for background centroid rebuilds.

- celery_app.py: Celery application configuration (broker, backend, etc.)
- centroid_tasks.py: Task definitions (rebuild_centroids)
"""

from centroid_router.tasks.celery_app import celery_app
from centroid_router.tasks.centroid_tasks import rebuild_centroids_task

__all__ = [
    "celery_app",
    "rebuild_centroids_task",
]
