"""Domain services package."""
from src.domain.services.video_processing_policy import (
    VideoProcessingPolicy,
    ValidationResult,
    DEFAULT_ALLOWED_MIME_TYPES,
    DEFAULT_MAX_UPLOAD_SIZE,
    TIER_BASE_PRIORITY,
)

__all__ = [
    "VideoProcessingPolicy",
    "ValidationResult",
    "DEFAULT_ALLOWED_MIME_TYPES",
    "DEFAULT_MAX_UPLOAD_SIZE",
    "TIER_BASE_PRIORITY",
]
