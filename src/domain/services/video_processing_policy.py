"""
Domain Service: VideoProcessingPolicy
Regras puras (sem I/O) de elegibilidade, prioridade e defaults de jobs.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from src.domain.entities import ProcessingJob, Video
from src.domain.value_objects import ProcessingOptions, ProcessingResult, VideoMetadata

MB = 1024 * 1024

DEFAULT_ALLOWED_MIME_TYPES = (
    "video/mp4",
    "video/avi",
    "video/mov",
    "video/mkv",
    "application/octet-stream",
)
DEFAULT_MAX_UPLOAD_SIZE = 100 * MB

TIER_BASE_PRIORITY = {
    "enterprise": 100,
    "premium": 50,
    "basic": 10,
}

BASE_FRAME_COST_MS = 100
MIN_PROCESSING_EFFICIENCY = 50.0


@dataclass(frozen=True)
class ValidationResult:
    """Resultado de uma validação de domínio."""

    is_valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)


class VideoProcessingPolicy:
    """
    Serviço de domínio com as políticas do pipeline de vídeo.

    Todas as operações são determinísticas e não acessam colaboradores,
    o que permite usá-las tanto na API quanto nos workers.
    """

    def __init__(self, max_attempts: int = 3):
        """
        Inicializa a política.

        Args:
            max_attempts: Teto de tentativas de processamento por vídeo
        """
        self.max_attempts = max_attempts

    def can_video_be_processed(self, video: Video) -> bool:
        """Status elegível e tentativas abaixo do teto."""
        return video.can_be_processed() and not video.has_exceeded_max_attempts(self.max_attempts)

    def should_retry_processing(self, job: ProcessingJob) -> bool:
        """Job falhou mas ainda possui tentativas."""
        return job.can_be_processed() and not job.has_exceeded_max_attempts()

    def validate_video_for_upload(
        self,
        filename: str,
        mime_type: str,
        size: int,
        max_size: int = DEFAULT_MAX_UPLOAD_SIZE,
        allowed_types: Sequence[str] = DEFAULT_ALLOWED_MIME_TYPES
    ) -> ValidationResult:
        """
        Gate de validação do upload (sem I/O).

        Args:
            filename: Nome original do arquivo
            mime_type: MIME type informado pelo cliente
            size: Tamanho em bytes
            max_size: Tamanho máximo permitido em bytes
            allowed_types: MIME types aceitos

        Returns:
            ValidationResult: Válido ou com o motivo da rejeição
        """
        if mime_type not in allowed_types:
            return ValidationResult.fail(
                f"Unsupported file type: {mime_type}. "
                f"Allowed types: {', '.join(allowed_types)}"
            )

        if size > max_size:
            return ValidationResult.fail(
                f"File size exceeds maximum allowed size of {max_size // MB}MB"
            )

        if size == 0:
            return ValidationResult.fail("File is empty")

        return ValidationResult.ok()

    def create_processing_job(
        self,
        video_id: str,
        user_id: str,
        input_path: str,
        options: Optional[dict] = None
    ) -> ProcessingJob:
        """
        Monta o rascunho de um ProcessingJob aplicando defaults.

        Args:
            video_id: ID do vídeo
            user_id: Dono do vídeo
            input_path: Caminho do arquivo de entrada
            options: Opções informadas (priority, frames_per_second,
                output_format, compression_quality, max_width, max_height)

        Returns:
            ProcessingJob: Job em PENDING, ainda não persistido
        """
        options = options or {}
        defaults = ProcessingOptions()

        processing_options = ProcessingOptions(
            frames_per_second=options.get("frames_per_second") or defaults.frames_per_second,
            output_format=options.get("output_format") or defaults.output_format,
            compression_quality=options.get("compression_quality") or defaults.compression_quality,
            max_width=options.get("max_width") or defaults.max_width,
            max_height=options.get("max_height") or defaults.max_height,
        )

        return ProcessingJob(
            video_id=video_id,
            user_id=user_id,
            input_path=input_path,
            priority=options.get("priority") or 0,
            max_attempts=self.max_attempts,
            processing_options=processing_options,
        )

    def calculate_processing_priority(self, video: Video, user_tier: str = "basic") -> int:
        """
        Calcula a prioridade de despacho (maior = mais urgente).

        Args:
            video: Vídeo a ser processado
            user_tier: basic, premium ou enterprise

        Returns:
            int: Prioridade, no mínimo 1
        """
        priority = TIER_BASE_PRIORITY.get(user_tier, TIER_BASE_PRIORITY["basic"])

        # Arquivos pequenos terminam rápido
        if video.size < 10 * MB:
            priority += 20
        elif video.size < 50 * MB:
            priority += 10

        priority -= video.processing_attempts * 5

        return max(priority, 1)

    def estimate_processing_time(
        self,
        metadata: VideoMetadata,
        options: ProcessingOptions
    ) -> int:
        """
        Estimativa (em ms) do tempo de extração. Apenas informativa.

        Args:
            metadata: Metadados do vídeo
            options: Opções de extração

        Returns:
            int: Tempo estimado em milissegundos
        """
        frames_to_extract = metadata.duration * options.frames_per_second
        frame_cost = BASE_FRAME_COST_MS

        if metadata.is_4k:
            frame_cost *= 4
        elif metadata.is_full_hd:
            frame_cost *= 2

        frame_cost *= options.compression_quality / 100

        return int(frames_to_extract * frame_cost)

    def validate_processing_result(self, result: ProcessingResult) -> ValidationResult:
        """
        Recusa resultados degenerados antes de marcar o job como COMPLETED.

        Args:
            result: Resultado produzido pelo processor

        Returns:
            ValidationResult: Válido ou com o motivo da rejeição
        """
        if not result.is_successful:
            return ValidationResult.fail(result.error_message or "Processing failed")

        if result.processed_frames == 0:
            return ValidationResult.fail("No frames were processed")

        efficiency = result.processing_efficiency
        if efficiency < MIN_PROCESSING_EFFICIENCY:
            return ValidationResult.fail(
                f"Processing efficiency too low: {efficiency:.1f}%"
            )

        if result.output_size == 0:
            return ValidationResult.fail("Output file is empty")

        return ValidationResult.ok()
