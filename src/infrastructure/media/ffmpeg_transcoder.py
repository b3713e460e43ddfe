"""
Transcoder baseado em FFmpeg/FFprobe.

Executa os binários via asyncio subprocess com timeout, sem bloquear o
event loop.
"""
import asyncio
import json
import math
from fractions import Fraction
from pathlib import Path
from typing import List, Tuple

from loguru import logger

from src.domain.exceptions import TranscoderError
from src.domain.interfaces import FrameExtraction, ITranscoder
from src.domain.value_objects import ProcessingOptions, VideoMetadata

METADATA_TIMEOUT_SECONDS = 60


class FFmpegTranscoder(ITranscoder):
    """Extrai frames com o filtro fps do FFmpeg."""

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        ffprobe_path: str = "ffprobe",
        timeout_seconds: int = 1800
    ):
        """
        Inicializa o transcoder.

        Args:
            ffmpeg_path: Binário do FFmpeg
            ffprobe_path: Binário do FFprobe
            timeout_seconds: Tempo máximo de uma extração
        """
        self.ffmpeg_path = ffmpeg_path
        self.ffprobe_path = ffprobe_path
        self.timeout_seconds = timeout_seconds

    async def _run(self, cmd: List[str], timeout: int) -> Tuple[bytes, bytes]:
        """
        Executa um comando e retorna (stdout, stderr).

        Raises:
            TranscoderError: Se o binário não existir, falhar ou exceder o timeout
        """
        name = Path(cmd[0]).name
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except FileNotFoundError as e:
            raise TranscoderError(name, f"binary not found: {cmd[0]}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise TranscoderError(name, f"timed out after {timeout}s") from e

        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace") if stderr else "Unknown FFmpeg error"
            raise TranscoderError(name, error_msg)

        return stdout, stderr

    async def read_metadata(self, path: Path) -> VideoMetadata:
        cmd = [
            self.ffprobe_path,
            "-v", "error",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(path),
        ]
        stdout, _ = await self._run(cmd, METADATA_TIMEOUT_SECONDS)

        try:
            info = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise TranscoderError("ffprobe", f"invalid output: {e}") from e

        streams = info.get("streams", [])
        video_stream = next((s for s in streams if s.get("codec_type") == "video"), None)
        if video_stream is None:
            raise TranscoderError("ffprobe", f"no video stream found in {path.name}")

        fmt = info.get("format", {})
        duration = fmt.get("duration") or video_stream.get("duration") or 0

        return VideoMetadata(
            width=int(video_stream.get("width", 0)),
            height=int(video_stream.get("height", 0)),
            duration=float(duration),
            frame_rate=self._parse_frame_rate(video_stream.get("r_frame_rate", "0/1")),
            bitrate=int(fmt.get("bit_rate") or 0),
            codec=video_stream.get("codec_name", "unknown"),
            format=fmt.get("format_name", "unknown"),
        )

    @staticmethod
    def _parse_frame_rate(value: str) -> float:
        """Converte '30000/1001' em 29.97."""
        try:
            return round(float(Fraction(value)), 3)
        except (ValueError, ZeroDivisionError):
            return 0.0

    @staticmethod
    def _quality_args(options: ProcessingOptions) -> List[str]:
        if options.output_format in ("jpg", "jpeg"):
            # -q:v vai de 2 (melhor) a 31 (pior)
            qscale = round(2 + (100 - options.compression_quality) * 29 / 100)
            return ["-q:v", str(qscale)]
        # PNG é sem perdas; qualidade menor => mais compressão
        level = round((100 - options.compression_quality) * 9 / 100)
        return ["-compression_level", str(level)]

    async def extract_frames(
        self,
        input_path: Path,
        output_dir: Path,
        options: ProcessingOptions
    ) -> FrameExtraction:
        if not input_path.exists():
            raise TranscoderError("ffmpeg", f"input file not found: {input_path}")

        metadata = await self.read_metadata(input_path)
        extension = options.output_format

        video_filter = (
            f"fps={options.frames_per_second},"
            f"scale='min({options.max_width},iw)':'min({options.max_height},ih)'"
            f":force_original_aspect_ratio=decrease"
        )
        cmd = [
            self.ffmpeg_path,
            "-y",
            "-loglevel", "error",
            "-i", str(input_path),
            "-vf", video_filter,
            *self._quality_args(options),
            str(output_dir / f"frame_%05d.{extension}"),
        ]

        logger.info(
            f"🎞️  Extracting frames: {input_path.name} "
            f"(fps={options.frames_per_second}, format={extension}, {metadata.quality_label()})"
        )
        await self._run(cmd, self.timeout_seconds)

        frames = sorted(output_dir.glob(f"frame_*.{extension}"))
        expected = math.ceil(metadata.duration * options.frames_per_second)

        logger.info(f"✅ Extracted {len(frames)} frames (expected ~{expected})")
        return FrameExtraction(
            frames=frames,
            total_frames=max(len(frames), expected),
            duration=metadata.duration,
        )
