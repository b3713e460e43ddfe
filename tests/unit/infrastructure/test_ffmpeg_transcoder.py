"""
Testes unitários para FFmpegTranscoder (subprocessos simulados).
"""
import json
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest

from src.domain.exceptions import TranscoderError
from src.domain.value_objects import ProcessingOptions
from src.infrastructure.media import FFmpegTranscoder

FFPROBE_OUTPUT = {
    "streams": [
        {"codec_type": "audio", "codec_name": "aac"},
        {
            "codec_type": "video",
            "codec_name": "h264",
            "width": 1920,
            "height": 1080,
            "r_frame_rate": "30000/1001",
        },
    ],
    "format": {"duration": "10.5", "bit_rate": "5000000", "format_name": "mov,mp4,m4a"},
}


@pytest.fixture
def transcoder():
    return FFmpegTranscoder(ffmpeg_path="ffmpeg", ffprobe_path="ffprobe", timeout_seconds=30)


@pytest.fixture
def video_file(tmp_path):
    path = tmp_path / "input.mp4"
    path.write_bytes(b"fake video")
    return path


class TestReadMetadata:
    """Testa a leitura de metadados."""

    @pytest.mark.asyncio
    async def test_read_metadata_parses_ffprobe_json(self, transcoder, video_file):
        transcoder._run = AsyncMock(return_value=(json.dumps(FFPROBE_OUTPUT).encode(), b""))

        metadata = await transcoder.read_metadata(video_file)

        assert metadata.width == 1920
        assert metadata.height == 1080
        assert metadata.duration == 10.5
        assert metadata.frame_rate == 29.97
        assert metadata.bitrate == 5_000_000
        assert metadata.codec == "h264"
        cmd = transcoder._run.await_args.args[0]
        assert cmd[0] == "ffprobe"
        assert cmd[-1] == str(video_file)

    @pytest.mark.asyncio
    async def test_read_metadata_without_video_stream(self, transcoder, video_file):
        output = {"streams": [{"codec_type": "audio"}], "format": {}}
        transcoder._run = AsyncMock(return_value=(json.dumps(output).encode(), b""))

        with pytest.raises(TranscoderError, match="no video stream"):
            await transcoder.read_metadata(video_file)

    @pytest.mark.asyncio
    async def test_read_metadata_invalid_output(self, transcoder, video_file):
        transcoder._run = AsyncMock(return_value=(b"not json", b""))

        with pytest.raises(TranscoderError, match="invalid output"):
            await transcoder.read_metadata(video_file)

    @pytest.mark.parametrize("value,expected", [
        ("30/1", 30.0),
        ("30000/1001", 29.97),
        ("0/0", 0.0),
        ("garbage", 0.0),
    ])
    def test_parse_frame_rate(self, value, expected):
        assert FFmpegTranscoder._parse_frame_rate(value) == expected


class TestExtractFrames:
    """Testa a extração de frames."""

    @pytest.mark.asyncio
    async def test_extract_frames_builds_command_and_counts(self, transcoder, video_file, tmp_path):
        output_dir = tmp_path / "frames"
        output_dir.mkdir()

        async def fake_run(cmd, timeout):
            if cmd[0] == "ffprobe":
                return json.dumps(FFPROBE_OUTPUT).encode(), b""
            for index in range(1, 11):
                (output_dir / f"frame_{index:05d}.jpg").write_bytes(b"frame")
            return b"", b""

        transcoder._run = AsyncMock(side_effect=fake_run)
        options = ProcessingOptions(frames_per_second=1, output_format="jpg", compression_quality=100)

        extraction = await transcoder.extract_frames(video_file, output_dir, options)

        assert extraction.extracted_frames == 10
        assert extraction.total_frames == 11
        assert extraction.duration == 10.5
        assert extraction.frames[0].name == "frame_00001.jpg"

        ffmpeg_cmd, timeout = transcoder._run.await_args_list[1].args
        assert timeout == 30
        assert ffmpeg_cmd[0] == "ffmpeg"
        assert "fps=1" in ffmpeg_cmd[ffmpeg_cmd.index("-vf") + 1]
        assert ffmpeg_cmd[ffmpeg_cmd.index("-q:v") + 1] == "2"
        assert ffmpeg_cmd[-1] == str(output_dir / "frame_%05d.jpg")

    @pytest.mark.asyncio
    async def test_missing_input(self, transcoder, tmp_path):
        with pytest.raises(TranscoderError, match="input file not found"):
            await transcoder.extract_frames(tmp_path / "missing.mp4", tmp_path, ProcessingOptions())

    @pytest.mark.parametrize("output_format,quality,expected", [
        ("jpg", 100, ["-q:v", "2"]),
        ("jpeg", 1, ["-q:v", "31"]),
        ("png", 100, ["-compression_level", "0"]),
        ("png", 1, ["-compression_level", "9"]),
    ])
    def test_quality_args(self, output_format, quality, expected):
        options = ProcessingOptions(output_format=output_format, compression_quality=quality)
        assert FFmpegTranscoder._quality_args(options) == expected


class TestRun:
    """Testa a execução de subprocessos."""

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self, transcoder):
        process = Mock(returncode=1)
        process.communicate = AsyncMock(return_value=(b"", b"Invalid data found when processing input"))

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(TranscoderError) as exc_info:
                await transcoder._run(["ffmpeg", "-i", "x"], 5)

        assert exc_info.value.command == "ffmpeg"
        assert "Invalid data" in exc_info.value.stderr

    @pytest.mark.asyncio
    async def test_missing_binary(self):
        transcoder = FFmpegTranscoder(ffmpeg_path=str(Path("/nonexistent/ffmpeg")))

        with pytest.raises(TranscoderError, match="binary not found"):
            await transcoder._run([transcoder.ffmpeg_path, "-version"], 5)
