"""
Value Object: ProcessingOptions
Parâmetros de extração de frames de um processing job.
"""
from dataclasses import dataclass
from typing import Optional

SUPPORTED_FRAME_FORMATS = ("png", "jpg", "jpeg")


@dataclass(frozen=True)
class ProcessingOptions:
    """Opções de extração de frames."""

    frames_per_second: float = 1
    output_format: str = "png"
    compression_quality: int = 95
    max_width: int = 1920
    max_height: int = 1080

    def __post_init__(self) -> None:
        """Validação pós-inicialização."""
        if self.frames_per_second <= 0:
            raise ValueError("frames_per_second must be positive")
        if self.output_format not in SUPPORTED_FRAME_FORMATS:
            raise ValueError(
                f"Unsupported output format: {self.output_format}. "
                f"Allowed formats: {', '.join(SUPPORTED_FRAME_FORMATS)}"
            )
        if not 1 <= self.compression_quality <= 100:
            raise ValueError("compression_quality must be between 1 and 100")
        if self.max_width <= 0 or self.max_height <= 0:
            raise ValueError("max_width and max_height must be positive")

    def to_dict(self) -> dict:
        """Converte para dicionário."""
        return {
            "frames_per_second": self.frames_per_second,
            "output_format": self.output_format,
            "compression_quality": self.compression_quality,
            "max_width": self.max_width,
            "max_height": self.max_height,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ProcessingOptions":
        """Reconstrói a partir de um dicionário persistido."""
        if not data:
            return cls()
        return cls(**{key: value for key, value in data.items() if value is not None})
