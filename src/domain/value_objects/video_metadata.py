"""
Value Object: VideoMetadata
Metadados técnicos lidos pelo transcoder.
Imutável após a criação.
"""
from dataclasses import dataclass
from math import gcd
from typing import Optional


@dataclass(frozen=True)
class VideoMetadata:
    """Metadados técnicos de um vídeo."""

    width: int
    height: int
    duration: float
    frame_rate: float
    bitrate: int = 0
    codec: str = "unknown"
    format: str = "unknown"

    def __post_init__(self) -> None:
        """Validação pós-inicialização."""
        if self.width < 0 or self.height < 0:
            raise ValueError("Video dimensions must not be negative")
        if self.duration < 0:
            raise ValueError("Video duration must not be negative")
        if self.frame_rate < 0:
            raise ValueError("Frame rate must not be negative")

    @property
    def aspect_ratio(self) -> str:
        """Retorna o aspect ratio simplificado (ex: 16:9)."""
        if not self.width or not self.height:
            return "0:0"
        divisor = gcd(self.width, self.height)
        return f"{self.width // divisor}:{self.height // divisor}"

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def is_hd(self) -> bool:
        return self.width >= 1280 and self.height >= 720

    @property
    def is_full_hd(self) -> bool:
        return self.width >= 1920 and self.height >= 1080

    @property
    def is_4k(self) -> bool:
        return self.width >= 3840 and self.height >= 2160

    @property
    def estimated_frame_count(self) -> int:
        """Total aproximado de frames no vídeo original."""
        return int(self.duration * self.frame_rate)

    def quality_label(self) -> str:
        """Classificação textual usada em logs e respostas."""
        if self.is_4k:
            return "4K"
        if self.is_full_hd:
            return "Full HD"
        if self.is_hd:
            return "HD"
        return "SD"

    def to_dict(self) -> dict:
        """Converte para dicionário."""
        return {
            "width": self.width,
            "height": self.height,
            "duration": self.duration,
            "frame_rate": self.frame_rate,
            "bitrate": self.bitrate,
            "codec": self.codec,
            "format": self.format,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["VideoMetadata"]:
        """Reconstrói a partir de um dicionário persistido."""
        if not data:
            return None
        return cls(
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
            duration=float(data.get("duration", 0.0)),
            frame_rate=float(data.get("frame_rate", 0.0)),
            bitrate=int(data.get("bitrate", 0)),
            codec=data.get("codec", "unknown"),
            format=data.get("format", "unknown"),
        )
