"""Domain interfaces package."""
from src.domain.interfaces.video_repository import IVideoRepository
from src.domain.interfaces.processing_job_repository import IProcessingJobRepository
from src.domain.interfaces.notification_repository import INotificationRepository
from src.domain.interfaces.file_storage import IFileStorage
from src.domain.interfaces.transcoder import ITranscoder, FrameExtraction
from src.domain.interfaces.object_store import IObjectStore, StoredObject
from src.domain.interfaces.work_queue import IWorkQueue, QueueJobState
from src.domain.interfaces.notification_dispatcher import INotificationDispatcher
from src.domain.interfaces.user_profile_provider import IUserProfileProvider
from src.domain.interfaces.notification_sender import IEmailSender, IPushSender

__all__ = [
    "IVideoRepository",
    "IProcessingJobRepository",
    "INotificationRepository",
    "IFileStorage",
    "ITranscoder",
    "FrameExtraction",
    "IObjectStore",
    "StoredObject",
    "IWorkQueue",
    "QueueJobState",
    "INotificationDispatcher",
    "IUserProfileProvider",
    "IEmailSender",
    "IPushSender",
]
