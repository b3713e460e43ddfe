"""Fila de trabalho (Celery sobre Redis)."""
from src.infrastructure.queue.celery_config import (
    NOTIFICATIONS_QUEUE,
    VIDEO_PROCESSING_QUEUE,
    celery_app,
)
from src.infrastructure.queue.celery_work_queue import (
    TASK_ROUTES,
    CeleryWorkQueue,
    to_broker_priority,
)

__all__ = [
    "celery_app",
    "VIDEO_PROCESSING_QUEUE",
    "NOTIFICATIONS_QUEUE",
    "TASK_ROUTES",
    "CeleryWorkQueue",
    "to_broker_priority",
]
