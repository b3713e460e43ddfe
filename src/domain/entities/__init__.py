"""Domain entities package."""
from src.domain.entities.video import Video, VideoStatus, DEFAULT_MAX_ATTEMPTS
from src.domain.entities.processing_job import ProcessingJob, JobStatus
from src.domain.entities.notification import Notification, NotificationType, NotificationStatus

__all__ = [
    "Video",
    "VideoStatus",
    "DEFAULT_MAX_ATTEMPTS",
    "ProcessingJob",
    "JobStatus",
    "Notification",
    "NotificationType",
    "NotificationStatus",
]
