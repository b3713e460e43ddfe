"""
Testes unitários do VideoProcessingPolicy.

Testa:
- Elegibilidade para processamento
- Gate de validação do upload
- Defaults do processing job
- Cálculo de prioridade e estimativa de tempo
- Validação do resultado
"""
import pytest

from src.domain.entities import ProcessingJob, VideoStatus
from src.domain.services import DEFAULT_ALLOWED_MIME_TYPES, VideoProcessingPolicy
from src.domain.value_objects import ProcessingOptions, ProcessingResult, VideoMetadata

MB = 1024 * 1024


@pytest.mark.unit
class TestCanVideoBeProcessed:

    @pytest.mark.parametrize("status", list(VideoStatus))
    @pytest.mark.parametrize("attempts", [0, 1, 2, 3, 4])
    def test_eligible_iff_pending_or_failed_with_attempts_left(self, policy, make_video, status, attempts):
        video = make_video(status=status, processing_attempts=attempts)

        expected = status in (VideoStatus.PENDING, VideoStatus.FAILED) and attempts < 3

        assert policy.can_video_be_processed(video) is expected

    def test_respects_configured_max_attempts(self, make_video):
        policy = VideoProcessingPolicy(max_attempts=5)
        video = make_video(status=VideoStatus.FAILED, processing_attempts=4)

        assert policy.can_video_be_processed(video)


@pytest.mark.unit
class TestShouldRetryProcessing:

    def test_failed_job_with_attempts_left(self, policy):
        job = ProcessingJob(video_id="v", user_id="u", input_path="/in")
        job.start_processing()
        job.fail_processing("boom")

        assert policy.should_retry_processing(job)

    def test_exhausted_job(self, policy):
        job = ProcessingJob(video_id="v", user_id="u", input_path="/in", attempts=3)
        job.fail_processing("boom")

        assert not policy.should_retry_processing(job)


@pytest.mark.unit
class TestValidateVideoForUpload:

    def test_accepts_valid_file(self, policy):
        result = policy.validate_video_for_upload("clip.mp4", "video/mp4", 5 * MB)

        assert result.is_valid
        assert result.error is None

    def test_rejects_unsupported_mime_type(self, policy):
        result = policy.validate_video_for_upload("clip.gif", "image/gif", 5 * MB)

        assert not result.is_valid
        assert "Unsupported file type: image/gif" in result.error

    def test_rejects_oversize_file(self, policy):
        result = policy.validate_video_for_upload("clip.mp4", "video/mp4", 100 * MB + 1)

        assert not result.is_valid
        assert result.error == "File size exceeds maximum allowed size of 100MB"

    def test_accepts_file_exactly_at_limit(self, policy):
        result = policy.validate_video_for_upload("clip.mp4", "video/mp4", 100 * MB)

        assert result.is_valid

    def test_rejects_empty_file(self, policy):
        result = policy.validate_video_for_upload("clip.mp4", "video/mp4", 0)

        assert not result.is_valid
        assert result.error == "File is empty"

    def test_custom_limits(self, policy):
        result = policy.validate_video_for_upload(
            "clip.webm", "video/webm", 2 * MB, max_size=1 * MB, allowed_types=["video/webm"]
        )

        assert not result.is_valid
        assert "1MB" in result.error

    @pytest.mark.parametrize("mime_type", DEFAULT_ALLOWED_MIME_TYPES)
    def test_default_allow_list(self, policy, mime_type):
        assert policy.validate_video_for_upload("clip", mime_type, 1).is_valid


@pytest.mark.unit
class TestCreateProcessingJob:

    def test_applies_defaults(self, policy):
        job = policy.create_processing_job("video-1", "user-1", "/uploads/user-1/a.mp4")

        assert job.video_id == "video-1"
        assert job.user_id == "user-1"
        assert job.input_path == "/uploads/user-1/a.mp4"
        assert job.priority == 0
        assert job.max_attempts == 3
        assert job.processing_options == ProcessingOptions(
            frames_per_second=1,
            output_format="png",
            compression_quality=95,
            max_width=1920,
            max_height=1080,
        )

    def test_keeps_informed_options(self, policy):
        job = policy.create_processing_job(
            "video-1",
            "user-1",
            "/in",
            {"priority": 7, "frames_per_second": 2, "output_format": "jpg", "compression_quality": 80},
        )

        assert job.priority == 7
        assert job.processing_options.frames_per_second == 2
        assert job.processing_options.output_format == "jpg"
        assert job.processing_options.compression_quality == 80
        assert job.processing_options.max_width == 1920


@pytest.mark.unit
class TestCalculateProcessingPriority:

    @pytest.mark.parametrize("size,tier,expected", [
        (5 * MB, "basic", 30),
        (20 * MB, "basic", 20),
        (80 * MB, "basic", 10),
        (5 * MB, "premium", 70),
        (5 * MB, "enterprise", 120),
    ])
    def test_tier_and_size_bonus(self, policy, make_video, size, tier, expected):
        assert policy.calculate_processing_priority(make_video(size=size), tier) == expected

    def test_unknown_tier_falls_back_to_basic(self, policy, make_video):
        video = make_video(size=80 * MB)

        assert policy.calculate_processing_priority(video, "gold") == 10

    def test_non_increasing_in_attempts(self, policy, make_video):
        priorities = [
            policy.calculate_processing_priority(make_video(processing_attempts=n), "premium")
            for n in range(0, 20)
        ]

        assert all(a >= b for a, b in zip(priorities, priorities[1:]))

    def test_floored_at_one(self, policy, make_video):
        video = make_video(size=80 * MB, processing_attempts=10)

        assert policy.calculate_processing_priority(video, "basic") == 1

    @pytest.mark.parametrize("size", [1 * MB, 30 * MB, 90 * MB])
    @pytest.mark.parametrize("attempts", [0, 1, 2])
    def test_tier_ordering(self, policy, make_video, size, attempts):
        video = make_video(size=size, processing_attempts=attempts)

        enterprise = policy.calculate_processing_priority(video, "enterprise")
        premium = policy.calculate_processing_priority(video, "premium")
        basic = policy.calculate_processing_priority(video, "basic")

        assert enterprise > premium > basic


@pytest.mark.unit
class TestEstimateProcessingTime:

    def _metadata(self, width, height, duration=10.0):
        return VideoMetadata(width=width, height=height, duration=duration, frame_rate=30.0)

    def test_sd_video(self, policy):
        options = ProcessingOptions(frames_per_second=1, compression_quality=100)

        assert policy.estimate_processing_time(self._metadata(640, 480), options) == 1000

    def test_full_hd_doubles_frame_cost(self, policy):
        options = ProcessingOptions(frames_per_second=1, compression_quality=100)

        assert policy.estimate_processing_time(self._metadata(1920, 1080), options) == 2000

    def test_4k_quadruples_frame_cost(self, policy):
        options = ProcessingOptions(frames_per_second=1, compression_quality=100)

        assert policy.estimate_processing_time(self._metadata(3840, 2160), options) == 4000

    def test_scales_with_quality_and_fps(self, policy):
        options = ProcessingOptions(frames_per_second=2, compression_quality=50)

        assert policy.estimate_processing_time(self._metadata(640, 480), options) == 1000


@pytest.mark.unit
class TestValidateProcessingResult:

    def test_accepts_complete_result(self, policy):
        result = ProcessingResult(success=True, total_frames=10, processed_frames=10, output_size=100)

        assert policy.validate_processing_result(result).is_valid

    def test_rejects_unsuccessful_result(self, policy):
        result = ProcessingResult(success=False, total_frames=10, processed_frames=10, error_message="boom")

        validation = policy.validate_processing_result(result)

        assert not validation.is_valid
        assert validation.error == "boom"

    def test_rejects_zero_frames(self, policy):
        result = ProcessingResult(success=True, total_frames=10, processed_frames=0, output_size=100)

        assert policy.validate_processing_result(result).error == "No frames were processed"

    def test_rejects_low_efficiency(self, policy):
        result = ProcessingResult(success=True, total_frames=10, processed_frames=4, output_size=100)

        validation = policy.validate_processing_result(result)

        assert not validation.is_valid
        assert "efficiency too low" in validation.error

    def test_accepts_efficiency_at_threshold(self, policy):
        result = ProcessingResult(success=True, total_frames=10, processed_frames=5, output_size=100)

        assert policy.validate_processing_result(result).is_valid

    def test_rejects_empty_output(self, policy):
        result = ProcessingResult(success=True, total_frames=10, processed_frames=10, output_size=0)

        assert policy.validate_processing_result(result).error == "Output file is empty"
