"""
Configurações e fixtures pytest.

Os colaboradores externos (Redis, FFmpeg, object store, fila) são
substituídos por implementações em memória das interfaces de domínio.
"""
import copy
import shutil
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

from src.domain.entities import JobStatus, Notification, ProcessingJob, Video, VideoStatus
from src.domain.exceptions import StorageError, TranscoderError, QueueError
from src.domain.interfaces import (
    FrameExtraction,
    IFileStorage,
    INotificationDispatcher,
    INotificationRepository,
    IObjectStore,
    IProcessingJobRepository,
    ITranscoder,
    IVideoRepository,
    IWorkQueue,
    QueueJobState,
    StoredObject,
)
from src.domain.services import VideoProcessingPolicy
from src.domain.value_objects import NotificationPreferences, UserProfile, VideoMetadata

MB = 1024 * 1024


# ============= FAKES =============

class InMemoryVideoRepository(IVideoRepository):
    """Repositório de vídeos em memória (cópias, como um store real)."""

    def __init__(self):
        self.videos: Dict[str, Video] = {}
        self.fail_on_save = False

    async def create(self, video: Video) -> Video:
        return await self.save(video)

    async def save(self, video: Video) -> Video:
        if self.fail_on_save:
            raise StorageError("database unavailable")
        self.videos[video.id] = copy.deepcopy(video)
        return video

    async def find_by_id(self, video_id: str) -> Optional[Video]:
        video = self.videos.get(video_id)
        return copy.deepcopy(video) if video else None

    def _by_user(self, user_id: str, status: Optional[VideoStatus]) -> List[Video]:
        videos = [
            v for v in self.videos.values()
            if v.user_id == user_id and (status is None or v.status == status)
        ]
        return sorted(videos, key=lambda v: v.created_at, reverse=True)

    async def find_by_user_id(self, user_id, status=None, limit=10, offset=0) -> List[Video]:
        return [copy.deepcopy(v) for v in self._by_user(user_id, status)[offset:offset + limit]]

    async def count_by_user_id(self, user_id, status=None) -> int:
        return len(self._by_user(user_id, status))

    async def find_by_status(self, status, limit=None) -> List[Video]:
        videos = [copy.deepcopy(v) for v in self.videos.values() if v.status == status]
        return videos[:limit] if limit else videos

    async def find_pending_for_processing(self, limit: int = 10) -> List[Video]:
        return await self.find_by_status(VideoStatus.PENDING, limit)

    async def count_by_status(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in VideoStatus}
        for video in self.videos.values():
            counts[video.status.value] += 1
        return counts

    async def delete(self, video_id: str) -> bool:
        return self.videos.pop(video_id, None) is not None


class InMemoryProcessingJobRepository(IProcessingJobRepository):
    """Repositório de jobs em memória, com concessão de execução."""

    def __init__(self):
        self.jobs: Dict[str, ProcessingJob] = {}
        self.locks: Dict[str, int] = {}

    async def create(self, job: ProcessingJob) -> ProcessingJob:
        return await self.save(job)

    async def save(self, job: ProcessingJob) -> ProcessingJob:
        self.jobs[job.id] = copy.deepcopy(job)
        return job

    async def find_by_id(self, job_id: str) -> Optional[ProcessingJob]:
        job = self.jobs.get(job_id)
        return copy.deepcopy(job) if job else None

    async def find_by_video_id(self, video_id: str) -> List[ProcessingJob]:
        return [copy.deepcopy(j) for j in self.jobs.values() if j.video_id == video_id]

    async def find_by_status(self, status, limit=None) -> List[ProcessingJob]:
        jobs = [copy.deepcopy(j) for j in self.jobs.values() if j.status == status]
        return jobs[:limit] if limit else jobs

    async def get_job_stats(self) -> Dict[str, int]:
        stats = {status.value: 0 for status in JobStatus}
        for job in self.jobs.values():
            stats[job.status.value] += 1
        stats["total"] = len(self.jobs)
        return stats

    async def cleanup_old_jobs(self, older_than_days: int = 30) -> int:
        return 0

    async def acquire_lock(self, job_id: str, ttl_seconds: int) -> bool:
        if job_id in self.locks:
            return False
        self.locks[job_id] = ttl_seconds
        return True

    async def release_lock(self, job_id: str) -> None:
        self.locks.pop(job_id, None)

    async def lock_ttl(self, job_id: str) -> int:
        return self.locks.get(job_id, 0)


class InMemoryNotificationRepository(INotificationRepository):
    """Repositório de notificações em memória."""

    def __init__(self):
        self.notifications: Dict[str, Notification] = {}

    async def create(self, notification: Notification) -> Notification:
        return await self.save(notification)

    async def save(self, notification: Notification) -> Notification:
        self.notifications[notification.id] = copy.deepcopy(notification)
        return notification

    async def find_by_id(self, notification_id: str) -> Optional[Notification]:
        notification = self.notifications.get(notification_id)
        return copy.deepcopy(notification) if notification else None

    def _by_user(self, user_id: str) -> List[Notification]:
        items = [n for n in self.notifications.values() if n.user_id == user_id]
        return sorted(items, key=lambda n: n.created_at, reverse=True)

    async def find_by_user_id(self, user_id, limit=10, offset=0) -> List[Notification]:
        return [copy.deepcopy(n) for n in self._by_user(user_id)[offset:offset + limit]]

    async def count_by_user_id(self, user_id: str) -> int:
        return len(self._by_user(user_id))


class FakeFileStorage(IFileStorage):
    """Storage local sob um diretório temporário, registrando chamadas."""

    def __init__(self, root: Path):
        self.root = root
        self.saved: List[str] = []
        self.deleted: List[str] = []
        self.cleaned: List[Path] = []
        self.fail_on_save = False

    async def save(self, content: bytes, original_name: str, owner_id: str) -> str:
        if self.fail_on_save:
            raise StorageError("disk full")
        stored_name = f"stored-{len(self.saved) + 1}{Path(original_name).suffix}"
        target = self.path(stored_name, owner_id)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        self.saved.append(stored_name)
        return stored_name

    def path(self, stored_name: str, owner_id: str) -> Path:
        return self.root / "uploads" / owner_id / stored_name

    async def exists(self, stored_name: str, owner_id: str) -> bool:
        return self.path(stored_name, owner_id).exists()

    async def delete(self, stored_name: str, owner_id: str) -> bool:
        self.deleted.append(stored_name)
        self.path(stored_name, owner_id).unlink(missing_ok=True)
        return True

    def url(self, stored_name: str, owner_id: str) -> str:
        return f"/uploads/{owner_id}/{stored_name}"

    def frames_dir(self, owner_id: str, video_id: str) -> Path:
        return self.root / owner_id / "frames" / video_id

    async def cleanup_directory(self, directory: Path) -> bool:
        self.cleaned.append(directory)
        shutil.rmtree(directory, ignore_errors=True)
        return True


class FakeTranscoder(ITranscoder):
    """Transcoder que grava arquivos de frame falsos."""

    def __init__(self):
        self.frame_count = 10
        self.total_frames: Optional[int] = None
        self.duration = 10.0
        self.extract_error: Optional[Exception] = None
        self.metadata_error: Optional[Exception] = None
        self.metadata = VideoMetadata(
            width=1920, height=1080, duration=10.0, frame_rate=30.0,
            bitrate=5_000_000, codec="h264", format="mp4",
        )
        self.extract_calls: List[dict] = []

    async def extract_frames(self, input_path, output_dir, options) -> FrameExtraction:
        self.extract_calls.append({"input_path": input_path, "output_dir": output_dir, "options": options})
        if self.extract_error:
            raise self.extract_error

        frames = []
        for index in range(1, self.frame_count + 1):
            frame = Path(output_dir) / f"frame_{index:05d}.{options.output_format}"
            frame.write_bytes(b"frame")
            frames.append(frame)

        total = self.total_frames if self.total_frames is not None else self.frame_count
        return FrameExtraction(frames=frames, total_frames=total, duration=self.duration)

    async def read_metadata(self, path) -> VideoMetadata:
        if self.metadata_error:
            raise self.metadata_error
        return self.metadata


class FakeObjectStore(IObjectStore):
    """Object store em memória."""

    def __init__(self):
        self.objects: Dict[str, int] = {}
        self.upload_error: Optional[Exception] = None
        self.url_error: Optional[Exception] = None
        self.bucket_ready = False

    async def ensure_bucket(self) -> None:
        self.bucket_ready = True

    async def upload(self, local_dir: Path, owner_id: str, video_id: str) -> StoredObject:
        if self.upload_error:
            raise self.upload_error
        key = f"processed-videos/{owner_id}/{video_id}_frames.zip"
        size = sum(f.stat().st_size for f in Path(local_dir).iterdir()) or 1
        self.objects[key] = size
        return StoredObject(key=key, size_bytes=size)

    async def signed_url(self, key: str, ttl_seconds: int = 3600) -> str:
        if self.url_error:
            raise self.url_error
        return f"https://storage.test/{key}?expires={ttl_seconds}"

    async def delete(self, key: str) -> bool:
        return self.objects.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return key in self.objects


class FakeWorkQueue(IWorkQueue):
    """Fila em memória que registra as mensagens publicadas."""

    def __init__(self):
        self.messages: List[dict] = []
        self.error: Optional[Exception] = None

    async def enqueue(self, job_type, payload, priority=0, delay=0, attempts=3) -> str:
        if self.error:
            raise self.error
        queue_job_id = f"queue-job-{len(self.messages) + 1}"
        self.messages.append({
            "id": queue_job_id,
            "job_type": job_type,
            "payload": payload,
            "priority": priority,
            "delay": delay,
            "attempts": attempts,
        })
        return queue_job_id

    async def status(self, queue_job_id: str) -> QueueJobState:
        return QueueJobState(state="PENDING")

    async def remove(self, queue_job_id: str) -> bool:
        return True


# ============= FIXTURES =============

@pytest.fixture
def video_repository():
    return InMemoryVideoRepository()


@pytest.fixture
def job_repository():
    return InMemoryProcessingJobRepository()


@pytest.fixture
def notification_repository():
    return InMemoryNotificationRepository()


@pytest.fixture
def file_storage(tmp_path):
    return FakeFileStorage(tmp_path)


@pytest.fixture
def transcoder():
    return FakeTranscoder()


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def work_queue():
    return FakeWorkQueue()


@pytest.fixture
def notification_dispatcher():
    return AsyncMock(spec=INotificationDispatcher)


@pytest.fixture
def policy():
    return VideoProcessingPolicy(max_attempts=3)


@pytest.fixture
def make_video():
    """Fábrica de vídeos de teste."""
    def _make(**overrides) -> Video:
        fields = {
            "user_id": "user-1",
            "filename": "stored.mp4",
            "original_name": "holiday.mp4",
            "mime_type": "video/mp4",
            "size": 5 * MB,
        }
        fields.update(overrides)
        return Video(**fields)
    return _make


@pytest.fixture
def user_profile():
    return UserProfile(
        id="user-1",
        email="ana@example.com",
        name="Ana",
        preferences=NotificationPreferences(email=True, push=True, sms=False),
    )


@pytest.fixture
def queue_error():
    return QueueError("broker unavailable")


@pytest.fixture
def transcoder_error():
    return TranscoderError("ffmpeg", "Invalid data found when processing input")
