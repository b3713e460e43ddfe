"""Use cases package."""
from src.application.use_cases.upload_video import UploadVideoUseCase
from src.application.use_cases.process_video import ProcessVideoUseCase
from src.application.use_cases.get_video_status import GetVideoStatusUseCase
from src.application.use_cases.get_processing_stats import GetProcessingStatsUseCase
from src.application.use_cases.cleanup_old_jobs import CleanupOldJobsUseCase
from src.application.use_cases.send_notification import SendNotificationUseCase
from src.application.use_cases.get_notifications import GetNotificationsUseCase

__all__ = [
    "UploadVideoUseCase",
    "ProcessVideoUseCase",
    "GetVideoStatusUseCase",
    "GetProcessingStatsUseCase",
    "CleanupOldJobsUseCase",
    "SendNotificationUseCase",
    "GetNotificationsUseCase",
]
