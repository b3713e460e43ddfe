"""Value objects package."""
from src.domain.value_objects.video_metadata import VideoMetadata
from src.domain.value_objects.processing_options import ProcessingOptions, SUPPORTED_FRAME_FORMATS
from src.domain.value_objects.processing_result import ProcessingResult
from src.domain.value_objects.user_profile import UserProfile, NotificationPreferences

__all__ = [
    "VideoMetadata",
    "ProcessingOptions",
    "SUPPORTED_FRAME_FORMATS",
    "ProcessingResult",
    "UserProfile",
    "NotificationPreferences",
]
