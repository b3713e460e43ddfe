"""
Configuração do Celery para processamento de vídeos e notificações.

Workers:
    celery -A src.infrastructure.queue.celery_config:celery_app worker -Q video_processing
    celery -A src.infrastructure.queue.celery_config:celery_app worker -Q notifications
    celery -A src.infrastructure.queue.celery_config:celery_app beat
"""
from celery import Celery
from celery.schedules import crontab
from kombu import Queue

from src.config import settings

VIDEO_PROCESSING_QUEUE = "video_processing"
NOTIFICATIONS_QUEUE = "notifications"

celery_app = Celery(
    "video_platform",
    broker=settings.broker_url,
    backend=settings.result_backend,
    include=["src.infrastructure.queue.celery_tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="America/Sao_Paulo",
    enable_utc=True,

    # Filas e roteamento
    task_queues=(
        Queue(VIDEO_PROCESSING_QUEUE),
        Queue(NOTIFICATIONS_QUEUE),
    ),
    task_default_queue=VIDEO_PROCESSING_QUEUE,
    task_routes={
        "video.*": {"queue": VIDEO_PROCESSING_QUEUE},
        "notifications.*": {"queue": NOTIFICATIONS_QUEUE},
    },

    # Prioridade no Redis: 0 é a mais alta
    broker_transport_options={
        "queue_order_strategy": "priority",
        "priority_steps": list(range(10)),
        "sep": ":",
    },
    task_default_priority=5,

    # Configurações de retry
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    result_expires=24 * 3600,

    # Configurações de workers
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,

    task_soft_time_limit=settings.celery_task_soft_time_limit,
    task_time_limit=settings.celery_task_time_limit,

    beat_schedule={
        "cleanup-old-processing-jobs": {
            "task": "video.cleanup_old_jobs",
            "schedule": crontab(hour=3, minute=0),
        },
    },
)
