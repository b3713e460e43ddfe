"""Persistence adapters (Redis)."""
from src.infrastructure.persistence.redis_video_repository import RedisVideoRepository
from src.infrastructure.persistence.redis_processing_job_repository import RedisProcessingJobRepository
from src.infrastructure.persistence.redis_notification_repository import RedisNotificationRepository

__all__ = [
    "RedisVideoRepository",
    "RedisProcessingJobRepository",
    "RedisNotificationRepository",
]
