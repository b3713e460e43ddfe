"""DTOs package."""
from src.application.dtos.common_dtos import (
    ApiResponseDTO,
    ErrorResponseDTO,
    HealthCheckDTO,
    ReadinessCheckDTO,
)
from src.application.dtos.video_dtos import (
    UploadedFileDTO,
    ProcessVideoRequestDTO,
    VideoResponseDTO,
    VideoListResponseDTO,
    DownloadUrlDTO,
    ProcessingStatsDTO,
)
from src.application.dtos.notification_dtos import (
    SendNotificationRequestDTO,
    NotificationResponseDTO,
    NotificationListResponseDTO,
)
from src.application.dtos.queue_messages import (
    VIDEO_PROCESSING,
    SEND_EMAIL,
    SEND_PUSH,
    UserProfileMessage,
    ProcessingOptionsMessage,
    VideoProcessingMessage,
    EmailNotificationMessage,
    PushNotificationMessage,
)

__all__ = [
    "ApiResponseDTO",
    "ErrorResponseDTO",
    "HealthCheckDTO",
    "ReadinessCheckDTO",
    "UploadedFileDTO",
    "ProcessVideoRequestDTO",
    "VideoResponseDTO",
    "VideoListResponseDTO",
    "DownloadUrlDTO",
    "ProcessingStatsDTO",
    "SendNotificationRequestDTO",
    "NotificationResponseDTO",
    "NotificationListResponseDTO",
    "VIDEO_PROCESSING",
    "SEND_EMAIL",
    "SEND_PUSH",
    "UserProfileMessage",
    "ProcessingOptionsMessage",
    "VideoProcessingMessage",
    "EmailNotificationMessage",
    "PushNotificationMessage",
]
