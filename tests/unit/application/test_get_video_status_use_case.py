"""
Testes unitários para GetVideoStatusUseCase e GetProcessingStatsUseCase.
"""
from unittest.mock import AsyncMock

import pytest

from src.application.use_cases import (
    CleanupOldJobsUseCase,
    GetProcessingStatsUseCase,
    GetVideoStatusUseCase,
)
from src.domain.entities import VideoStatus
from src.domain.exceptions import InvalidStateError, StorageError, VideoNotFoundError

S3_KEY = "processed-videos/user-1/video_frames.zip"


@pytest.fixture
def use_case(video_repository, object_store):
    return GetVideoStatusUseCase(video_repository, object_store, signed_url_ttl=600)


@pytest.fixture
def completed_video(make_video):
    return make_video(status=VideoStatus.COMPLETED, s3_key=S3_KEY, processing_attempts=1)


class TestGetVideoById:
    """Testa consulta de um vídeo."""

    @pytest.mark.asyncio
    async def test_completed_video_has_download_url(self, use_case, video_repository, completed_video):
        await video_repository.create(completed_video)

        result = await use_case.get_video_by_id(completed_video.id, "user-1")

        assert result.status == VideoStatus.COMPLETED
        assert result.download_url == f"https://storage.test/{S3_KEY}?expires=600"

    @pytest.mark.asyncio
    async def test_pending_video_has_no_download_url(self, use_case, video_repository, make_video):
        video = make_video()
        await video_repository.create(video)

        result = await use_case.get_video_by_id(video.id, "user-1")

        assert result.status == VideoStatus.PENDING
        assert result.download_url is None

    @pytest.mark.asyncio
    async def test_url_failure_returns_video_without_url(
        self, use_case, video_repository, object_store, completed_video
    ):
        await video_repository.create(completed_video)
        object_store.url_error = StorageError("signing key unavailable")

        result = await use_case.get_video_by_id(completed_video.id, "user-1")

        assert result.id == completed_video.id
        assert result.status == VideoStatus.COMPLETED
        assert result.download_url is None

    @pytest.mark.asyncio
    async def test_other_owner_looks_like_missing_video(self, use_case, video_repository, make_video):
        video = make_video()
        await video_repository.create(video)

        with pytest.raises(VideoNotFoundError) as foreign:
            await use_case.get_video_by_id(video.id, "intruder")
        with pytest.raises(VideoNotFoundError) as missing:
            await use_case.get_video_by_id("does-not-exist", "intruder")

        assert str(foreign.value) == str(missing.value) == "Video not found"


class TestGetUserVideos:
    """Testa listagem paginada."""

    @pytest.mark.asyncio
    async def test_page_translates_to_offset(self, use_case, video_repository, make_video):
        for _ in range(5):
            await video_repository.create(make_video())
        video_repository.find_by_user_id = AsyncMock(wraps=video_repository.find_by_user_id)

        result = await use_case.get_user_videos("user-1", page=2, limit=2)

        video_repository.find_by_user_id.assert_awaited_once_with(
            "user-1", status=None, limit=2, offset=2
        )
        assert len(result.videos) == 2
        assert result.total == 5
        assert result.page == 2
        assert result.limit == 2
        assert result.total_pages == 3

    @pytest.mark.asyncio
    async def test_status_filter(self, use_case, video_repository, make_video, completed_video):
        await video_repository.create(make_video())
        await video_repository.create(completed_video)

        result = await use_case.get_user_videos("user-1", status=VideoStatus.COMPLETED)

        assert result.total == 1
        assert result.videos[0].id == completed_video.id
        assert result.videos[0].download_url is not None

    @pytest.mark.asyncio
    async def test_only_owner_videos_are_listed(self, use_case, video_repository, make_video):
        await video_repository.create(make_video())
        await video_repository.create(make_video(user_id="user-2"))

        result = await use_case.get_user_videos("user-2")

        assert result.total == 1
        assert result.total_pages == 1

    @pytest.mark.asyncio
    async def test_empty_listing(self, use_case):
        result = await use_case.get_user_videos("nobody")

        assert result.videos == []
        assert result.total == 0
        assert result.total_pages == 0

    @pytest.mark.asyncio
    async def test_url_failure_does_not_break_listing(
        self, use_case, video_repository, object_store, completed_video
    ):
        await video_repository.create(completed_video)
        object_store.url_error = StorageError("timeout")

        result = await use_case.get_user_videos("user-1")

        assert len(result.videos) == 1
        assert result.videos[0].download_url is None


class TestDownloadUrl:
    """Testa geração explícita de URL."""

    @pytest.mark.asyncio
    async def test_download_url_for_completed_video(self, use_case, video_repository, completed_video):
        await video_repository.create(completed_video)

        result = await use_case.get_download_url(completed_video.id, "user-1")

        assert result.download_url.startswith(f"https://storage.test/{S3_KEY}")
        assert result.expires_in == 600

    @pytest.mark.asyncio
    async def test_download_url_requires_completed_video(self, use_case, video_repository, make_video):
        video = make_video(status=VideoStatus.PROCESSING)
        await video_repository.create(video)

        with pytest.raises(InvalidStateError) as exc_info:
            await use_case.get_download_url(video.id, "user-1")

        assert str(exc_info.value) == "Video processing not completed"

    @pytest.mark.asyncio
    async def test_download_url_propagates_storage_error(
        self, use_case, video_repository, object_store, completed_video
    ):
        await video_repository.create(completed_video)
        object_store.url_error = StorageError("signing key unavailable")

        with pytest.raises(StorageError):
            await use_case.get_download_url(completed_video.id, "user-1")


class TestVideosByStatus:
    """Testa listagem operacional por status."""

    @pytest.mark.asyncio
    async def test_lists_across_owners_without_urls(self, use_case, video_repository, make_video):
        await video_repository.create(make_video(status=VideoStatus.FAILED))
        await video_repository.create(make_video(user_id="user-2", status=VideoStatus.FAILED))
        await video_repository.create(make_video())

        result = await use_case.get_videos_by_status(VideoStatus.FAILED)

        assert len(result) == 2
        assert all(item.download_url is None for item in result)

    @pytest.mark.asyncio
    async def test_respects_limit(self, use_case, video_repository, make_video):
        for _ in range(3):
            await video_repository.create(make_video())

        result = await use_case.get_videos_by_status(VideoStatus.PENDING, limit=2)

        assert len(result) == 2


class TestProcessingStats:
    """Testa estatísticas e limpeza."""

    @pytest.mark.asyncio
    async def test_stats_count_jobs_and_videos(self, video_repository, job_repository, make_video, policy):
        await video_repository.create(make_video())
        await video_repository.create(make_video(status=VideoStatus.FAILED))
        await job_repository.create(policy.create_processing_job("v1", "user-1", "/tmp/v1.mp4"))

        result = await GetProcessingStatsUseCase(video_repository, job_repository).execute()

        assert result.videos["pending"] == 1
        assert result.videos["failed"] == 1
        assert result.videos["completed"] == 0
        assert result.jobs["pending"] == 1
        assert result.jobs["total"] == 1

    @pytest.mark.asyncio
    async def test_cleanup_reports_removed_jobs(self, job_repository):
        job_repository.cleanup_old_jobs = AsyncMock(return_value=4)

        result = await CleanupOldJobsUseCase(job_repository, retention_days=7).execute()

        job_repository.cleanup_old_jobs.assert_awaited_once_with(7)
        assert result == {"success": True, "removed_count": 4, "retention_days": 7}
