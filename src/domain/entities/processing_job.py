"""
Entity: ProcessingJob
Unidade de trabalho enfileirada contra um vídeo, com controle de tentativas.

Estados: PENDING -> PROCESSING -> COMPLETED | FAILED | DELAYED
DELAYED volta a PENDING quando scheduled_for expira (responsabilidade do scheduler).
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from src.domain.entities.serialization import datetime_to_str, str_to_datetime
from src.domain.value_objects import ProcessingOptions, ProcessingResult


class JobStatus(str, Enum):
    """Status de um processing job."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    DELAYED = "delayed"


@dataclass
class ProcessingJob:
    """Entidade que representa um job de extração de frames."""

    video_id: str
    user_id: str
    input_path: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    output_path: Optional[str] = None
    priority: int = 0
    attempts: int = 0
    max_attempts: int = 3
    status: JobStatus = JobStatus.PENDING
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    failed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    processing_options: ProcessingOptions = field(default_factory=ProcessingOptions)
    result: Optional[ProcessingResult] = None
    scheduled_for: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def can_be_processed(self) -> bool:
        """PENDING, ou FAILED com tentativas restantes."""
        if self.status == JobStatus.PENDING:
            return True
        return self.status == JobStatus.FAILED and self.attempts < self.max_attempts

    def start_processing(self) -> None:
        """Marca como PROCESSING, incrementa tentativas e limpa erro anterior."""
        self.status = JobStatus.PROCESSING
        self.attempts += 1
        self.started_at = datetime.utcnow()
        self.error_message = None
        self._touch()

    def complete_processing(self, result: ProcessingResult) -> None:
        """Marca como COMPLETED com o resumo do resultado."""
        self.status = JobStatus.COMPLETED
        self.completed_at = datetime.utcnow()
        self.result = result
        self.output_path = result.output_path or self.output_path
        self._touch()

    def fail_processing(self, error_message: str) -> None:
        """Marca como FAILED registrando a mensagem de erro."""
        self.status = JobStatus.FAILED
        self.failed_at = datetime.utcnow()
        self.error_message = error_message
        self._touch()

    def delay(self, until: datetime) -> None:
        """Adia o job até o instante informado."""
        self.status = JobStatus.DELAYED
        self.scheduled_for = until
        self._touch()

    def has_exceeded_max_attempts(self) -> bool:
        return self.attempts >= self.max_attempts

    def calculate_next_retry_delay(self) -> int:
        """Backoff exponencial em milissegundos: 2^attempts * 1000."""
        return (2 ** self.attempts) * 1000

    def _touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def to_dict(self) -> dict:
        """Converte para dicionário (formato persistido)."""
        return {
            "id": self.id,
            "video_id": self.video_id,
            "user_id": self.user_id,
            "input_path": self.input_path,
            "output_path": self.output_path,
            "priority": self.priority,
            "attempts": self.attempts,
            "max_attempts": self.max_attempts,
            "status": self.status.value,
            "started_at": datetime_to_str(self.started_at),
            "completed_at": datetime_to_str(self.completed_at),
            "failed_at": datetime_to_str(self.failed_at),
            "error_message": self.error_message,
            "processing_options": self.processing_options.to_dict(),
            "result": self.result.to_dict() if self.result else None,
            "scheduled_for": datetime_to_str(self.scheduled_for),
            "created_at": datetime_to_str(self.created_at),
            "updated_at": datetime_to_str(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProcessingJob":
        """Reconstrói a entidade a partir do formato persistido."""
        return cls(
            id=data["id"],
            video_id=data["video_id"],
            user_id=data["user_id"],
            input_path=data["input_path"],
            output_path=data.get("output_path"),
            priority=int(data.get("priority", 0)),
            attempts=int(data.get("attempts", 0)),
            max_attempts=int(data.get("max_attempts", 3)),
            status=JobStatus(data.get("status", JobStatus.PENDING.value)),
            started_at=str_to_datetime(data.get("started_at")),
            completed_at=str_to_datetime(data.get("completed_at")),
            failed_at=str_to_datetime(data.get("failed_at")),
            error_message=data.get("error_message"),
            processing_options=ProcessingOptions.from_dict(data.get("processing_options")),
            result=ProcessingResult.from_dict(data.get("result")),
            scheduled_for=str_to_datetime(data.get("scheduled_for")),
            created_at=str_to_datetime(data.get("created_at")) or datetime.utcnow(),
            updated_at=str_to_datetime(data.get("updated_at")) or datetime.utcnow(),
        )
