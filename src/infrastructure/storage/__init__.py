"""Storage adapters (disco local e S3)."""
from src.infrastructure.storage.local_file_storage import LocalFileStorage
from src.infrastructure.storage.s3_object_store import S3ObjectStore
from src.infrastructure.storage.frame_archiver import create_frames_archive

__all__ = ["LocalFileStorage", "S3ObjectStore", "create_frames_archive"]
