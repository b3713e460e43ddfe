"""
Value Object: ProcessingResult
Resultado de uma execução de extração de frames.
Produzido uma única vez pelo processor ao final do job.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProcessingResult:
    """Resultado da extração e empacotamento de frames."""

    success: bool
    total_frames: int
    processed_frames: int
    output_path: str = ""
    output_size: int = 0
    processing_time_ms: int = 0
    error_message: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return self.success and not self.error_message

    @property
    def processing_efficiency(self) -> float:
        """Percentual de frames processados em relação ao total esperado."""
        if self.total_frames == 0:
            return 0.0
        return (self.processed_frames / self.total_frames) * 100

    @property
    def processing_rate(self) -> float:
        """Frames processados por segundo."""
        if self.processing_time_ms == 0:
            return 0.0
        return self.processed_frames / (self.processing_time_ms / 1000)

    @property
    def output_size_mb(self) -> float:
        return self.output_size / (1024 * 1024)

    def compression_ratio(self, original_size: int) -> float:
        """Razão entre o tamanho do arquivo gerado e o original."""
        if original_size == 0:
            return 0.0
        return self.output_size / original_size

    def summary(self) -> str:
        """Resumo legível para logs."""
        if not self.is_successful:
            return f"Processing failed: {self.error_message}"
        return (
            f"Processed {self.processed_frames}/{self.total_frames} frames "
            f"({self.processing_efficiency:.1f}%) in {self.processing_time_ms}ms, "
            f"output size: {self.output_size_mb:.2f}MB"
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (resumo persistido no job)."""
        return {
            "success": self.success,
            "total_frames": self.total_frames,
            "processed_frames": self.processed_frames,
            "output_path": self.output_path,
            "output_size": self.output_size,
            "processing_time_ms": self.processing_time_ms,
            "error_message": self.error_message,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["ProcessingResult"]:
        """Reconstrói a partir de um dicionário persistido."""
        if not data:
            return None
        return cls(
            success=bool(data.get("success", False)),
            total_frames=int(data.get("total_frames", 0)),
            processed_frames=int(data.get("processed_frames", 0)),
            output_path=data.get("output_path", ""),
            output_size=int(data.get("output_size", 0)),
            processing_time_ms=int(data.get("processing_time_ms", 0)),
            error_message=data.get("error_message"),
        )
