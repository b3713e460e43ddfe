"""Background processors (executados pelos workers Celery)."""
from src.infrastructure.processors.video_processing_processor import VideoProcessingProcessor
from src.infrastructure.processors.notification_processor import NotificationProcessor

__all__ = ["VideoProcessingProcessor", "NotificationProcessor"]
