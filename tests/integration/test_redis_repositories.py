"""
Testes de integração dos repositórios Redis.

Requerem um Redis acessível em REDIS_TEST_URL (padrão: database 15 local);
são ignorados quando o servidor não responde. O database é limpo antes e
depois de cada teste.
"""
import os
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from src.domain.entities import JobStatus, Notification, NotificationType, ProcessingJob, Video, VideoStatus
from src.domain.value_objects import ProcessingResult
from src.infrastructure.persistence import (
    RedisNotificationRepository,
    RedisProcessingJobRepository,
    RedisVideoRepository,
)

REDIS_TEST_URL = os.getenv("REDIS_TEST_URL", "redis://localhost:6379/15")

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def redis():
    client = Redis.from_url(REDIS_TEST_URL, decode_responses=True)
    try:
        await client.ping()
    except (RedisConnectionError, OSError) as e:
        await client.aclose()
        pytest.skip(f"Redis not available: {e}")

    await client.flushdb()
    yield client
    await client.flushdb()
    await client.aclose()


def _video(**overrides):
    fields = {
        "user_id": "user-1",
        "filename": "stored.mp4",
        "original_name": "holiday.mp4",
        "mime_type": "video/mp4",
        "size": 1024,
    }
    fields.update(overrides)
    return Video(**fields)


class TestRedisVideoRepository:
    """Persistência e índices de vídeos."""

    @pytest.mark.asyncio
    async def test_roundtrip_and_status_index(self, redis):
        repository = RedisVideoRepository(redis)
        video = await repository.create(_video())

        video.queue_for_processing()
        await repository.save(video)

        loaded = await repository.find_by_id(video.id)
        assert loaded.status == VideoStatus.QUEUED
        assert [v.id for v in await repository.find_by_status(VideoStatus.QUEUED)] == [video.id]
        assert await repository.find_by_status(VideoStatus.PENDING) == []

        counts = await repository.count_by_status()
        assert counts["queued"] == 1
        assert counts["pending"] == 0

    @pytest.mark.asyncio
    async def test_user_listing_newest_first(self, redis):
        repository = RedisVideoRepository(redis)
        base = datetime(2024, 1, 1)
        videos = [
            await repository.create(_video(created_at=base + timedelta(minutes=i)))
            for i in range(3)
        ]
        await repository.create(_video(user_id="user-2"))

        page = await repository.find_by_user_id("user-1", limit=2, offset=0)

        assert [v.id for v in page] == [videos[2].id, videos[1].id]
        assert await repository.count_by_user_id("user-1") == 3
        assert await repository.count_by_user_id("user-1", status=VideoStatus.COMPLETED) == 0

    @pytest.mark.asyncio
    async def test_delete(self, redis):
        repository = RedisVideoRepository(redis)
        video = await repository.create(_video())

        assert await repository.delete(video.id) is True
        assert await repository.find_by_id(video.id) is None
        assert await repository.count_by_user_id("user-1") == 0
        assert await repository.delete(video.id) is False


class TestRedisProcessingJobRepository:
    """Persistência de jobs e concessão de execução."""

    @pytest.mark.asyncio
    async def test_roundtrip_with_result(self, redis):
        repository = RedisProcessingJobRepository(redis)
        job = await repository.create(ProcessingJob(video_id="video-1", user_id="user-1", input_path="/in.mp4"))

        job.start_processing()
        job.complete_processing(ProcessingResult(
            success=True, total_frames=10, processed_frames=10, output_path="k", output_size=100
        ))
        await repository.save(job)

        loaded = await repository.find_by_id(job.id)
        assert loaded.status == JobStatus.COMPLETED
        assert loaded.attempts == 1
        assert loaded.result.total_frames == 10
        assert [j.id for j in await repository.find_by_video_id("video-1")] == [job.id]

        stats = await repository.get_job_stats()
        assert stats["completed"] == 1
        assert stats["total"] == 1

    @pytest.mark.asyncio
    async def test_lock_is_exclusive(self, redis):
        repository = RedisProcessingJobRepository(redis)

        assert await repository.acquire_lock("job-1", 60) is True
        assert await repository.acquire_lock("job-1", 60) is False

        await repository.release_lock("job-1")
        assert await repository.acquire_lock("job-1", 60) is True

    @pytest.mark.asyncio
    async def test_lock_ttl(self, redis):
        repository = RedisProcessingJobRepository(redis)

        assert await repository.lock_ttl("job-1") == 0

        await repository.acquire_lock("job-1", 60)
        assert 0 < await repository.lock_ttl("job-1") <= 60

    @pytest.mark.asyncio
    async def test_cleanup_removes_only_old_terminal_jobs(self, redis):
        repository = RedisProcessingJobRepository(redis)
        old = ProcessingJob(
            video_id="video-1", user_id="user-1", input_path="/in.mp4",
            created_at=datetime.utcnow() - timedelta(days=40),
        )
        old.fail_processing("boom")
        await repository.create(old)
        recent = ProcessingJob(video_id="video-2", user_id="user-1", input_path="/in.mp4")
        recent.fail_processing("boom")
        await repository.create(recent)
        pending = ProcessingJob(
            video_id="video-3", user_id="user-1", input_path="/in.mp4",
            created_at=datetime.utcnow() - timedelta(days=40),
        )
        await repository.create(pending)

        removed = await repository.cleanup_old_jobs(older_than_days=30)

        assert removed == 1
        assert await repository.find_by_id(old.id) is None
        assert await repository.find_by_id(recent.id) is not None
        assert await repository.find_by_id(pending.id) is not None


class TestRedisNotificationRepository:
    """Persistência de notificações."""

    @pytest.mark.asyncio
    async def test_listing_and_count(self, redis):
        repository = RedisNotificationRepository(redis)
        base = datetime(2024, 1, 1)
        for index in range(3):
            await repository.create(Notification(
                user_id="user-1", type=NotificationType.EMAIL, title=f"n{index}", message="m",
                created_at=base + timedelta(minutes=index),
            ))

        page = await repository.find_by_user_id("user-1", limit=2, offset=1)

        assert [n.title for n in page] == ["n1", "n0"]
        assert await repository.count_by_user_id("user-1") == 3
        assert await repository.count_by_user_id("user-2") == 0
