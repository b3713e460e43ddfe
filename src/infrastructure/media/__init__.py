"""Media adapters (FFmpeg)."""
from src.infrastructure.media.ffmpeg_transcoder import FFmpegTranscoder

__all__ = ["FFmpegTranscoder"]
