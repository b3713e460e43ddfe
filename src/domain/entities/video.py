"""
Entity: Video
Representa um vídeo enviado e seu ciclo de vida de processamento.

Estados: PENDING -> QUEUED -> PROCESSING -> COMPLETED | FAILED
FAILED pode voltar a PROCESSING por uma nova solicitação, se houver tentativas.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from src.domain.entities.serialization import datetime_to_str, str_to_datetime
from src.domain.value_objects import VideoMetadata

DEFAULT_MAX_ATTEMPTS = 3


class VideoStatus(str, Enum):
    """Status de processamento de um vídeo."""

    PENDING = "pending"
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class Video:
    """Entidade que representa um vídeo enviado por um usuário."""

    user_id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    duration: Optional[float] = None
    status: VideoStatus = VideoStatus.PENDING
    processed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    s3_key: Optional[str] = None
    processing_attempts: int = 0
    metadata: Optional[VideoMetadata] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def can_be_processed(self) -> bool:
        """Verifica se o status permite (re)processamento."""
        return self.status in (VideoStatus.PENDING, VideoStatus.FAILED)

    def queue_for_processing(self) -> None:
        """PENDING/FAILED -> QUEUED."""
        self.status = VideoStatus.QUEUED
        self._touch()

    def start_processing(self) -> None:
        """Marca como PROCESSING, incrementa tentativas e limpa erro anterior."""
        self.status = VideoStatus.PROCESSING
        self.processing_attempts += 1
        self.error_message = None
        self._touch()

    def complete_processing(self, s3_key: str, duration: Optional[float] = None) -> None:
        """
        Marca como COMPLETED.

        Args:
            s3_key: Chave do pacote de frames no object store
            duration: Duração do vídeo em segundos (opcional)
        """
        self.status = VideoStatus.COMPLETED
        self.s3_key = s3_key
        self.processed_at = datetime.utcnow()
        if duration is not None:
            self.duration = duration
        self._touch()

    def fail_processing(self, error_message: str) -> None:
        """Marca como FAILED registrando a mensagem de erro."""
        self.status = VideoStatus.FAILED
        self.error_message = error_message
        self._touch()

    def has_exceeded_max_attempts(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> bool:
        return self.processing_attempts >= max_attempts

    def belongs_to(self, user_id: str) -> bool:
        return self.user_id == user_id

    @property
    def is_completed(self) -> bool:
        return self.status == VideoStatus.COMPLETED and bool(self.s3_key)

    @property
    def size_mb(self) -> float:
        """Retorna o tamanho do arquivo em MB."""
        return self.size / (1024 * 1024)

    def _touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def to_dict(self) -> dict:
        """Converte para dicionário (formato persistido)."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "filename": self.filename,
            "original_name": self.original_name,
            "mime_type": self.mime_type,
            "size": self.size,
            "duration": self.duration,
            "status": self.status.value,
            "processed_at": datetime_to_str(self.processed_at),
            "error_message": self.error_message,
            "s3_key": self.s3_key,
            "processing_attempts": self.processing_attempts,
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "created_at": datetime_to_str(self.created_at),
            "updated_at": datetime_to_str(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Video":
        """Reconstrói a entidade a partir do formato persistido."""
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            filename=data["filename"],
            original_name=data["original_name"],
            mime_type=data["mime_type"],
            size=int(data["size"]),
            duration=data.get("duration"),
            status=VideoStatus(data.get("status", VideoStatus.PENDING.value)),
            processed_at=str_to_datetime(data.get("processed_at")),
            error_message=data.get("error_message"),
            s3_key=data.get("s3_key"),
            processing_attempts=int(data.get("processing_attempts", 0)),
            metadata=VideoMetadata.from_dict(data.get("metadata")),
            created_at=str_to_datetime(data.get("created_at")) or datetime.utcnow(),
            updated_at=str_to_datetime(data.get("updated_at")) or datetime.utcnow(),
        )
