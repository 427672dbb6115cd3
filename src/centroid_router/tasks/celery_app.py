"""
Celery application for background centroid rebuilds.

Redis serves as broker and result backend. The only task lives in
centroid_tasks.py and is registered through `include`.

Run a worker with:
    celery -A centroid_router.tasks.celery_app worker --loglevel=INFO
"""

from typing import Any

from celery import Celery

from centroid_router.config import Settings, settings


def celery_config(settings: Settings) -> dict[str, Any]:
    """Celery settings derived from application settings."""
    return {
        # A rebuild embeds the whole training set; bound it in time
        "task_time_limit": settings.CELERY_TASK_TIME_LIMIT,
        "task_soft_time_limit": max(settings.CELERY_TASK_TIME_LIMIT - 30, 1),

        # Rebuilds replace the whole table, so running two at once is wasted work
        "worker_concurrency": settings.CELERY_WORKER_CONCURRENCY,
        "worker_prefetch_multiplier": 1,

        "task_serializer": "json",
        "result_serializer": "json",
        "accept_content": ["json"],
        "timezone": "UTC",
        "enable_utc": True,

        # Build summaries are small; keep them for a day
        "result_expires": 86400,
        "task_track_started": True,
        "task_acks_late": True,
        "task_reject_on_worker_lost": True,
    }


def create_celery_app(settings: Settings) -> Celery:
    app = Celery(
        "centroid_router",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
        include=["centroid_router.tasks.centroid_tasks"],
    )
    app.conf.update(celery_config(settings))
    return app


celery_app = create_celery_app(settings)
