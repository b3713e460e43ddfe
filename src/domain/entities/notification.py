"""
Entity: Notification
Registro de uma notificação enviada (ou tentada) a um usuário.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
import uuid

from src.domain.entities.serialization import datetime_to_str, str_to_datetime


class NotificationType(str, Enum):
    """Canal de entrega."""

    EMAIL = "email"
    PUSH = "push"
    SMS = "sms"
    WEBHOOK = "webhook"


class NotificationStatus(str, Enum):
    """Status de entrega."""

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    DELIVERED = "delivered"


@dataclass
class Notification:
    """Entidade que representa uma notificação."""

    user_id: str
    type: NotificationType
    title: str
    message: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    data: Dict[str, Any] = field(default_factory=dict)
    status: NotificationStatus = NotificationStatus.PENDING
    sent_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    failed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    retry_count: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def mark_sent(self) -> None:
        self.status = NotificationStatus.SENT
        self.sent_at = datetime.utcnow()
        self.error_message = None
        self._touch()

    def mark_delivered(self) -> None:
        self.status = NotificationStatus.DELIVERED
        self.delivered_at = datetime.utcnow()
        self._touch()

    def mark_failed(self, error_message: str) -> None:
        """Marca como FAILED e incrementa o contador de tentativas."""
        self.status = NotificationStatus.FAILED
        self.failed_at = datetime.utcnow()
        self.error_message = error_message
        self.retry_count += 1
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def to_dict(self) -> dict:
        """Converte para dicionário (formato persistido)."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "data": self.data,
            "status": self.status.value,
            "sent_at": datetime_to_str(self.sent_at),
            "delivered_at": datetime_to_str(self.delivered_at),
            "failed_at": datetime_to_str(self.failed_at),
            "error_message": self.error_message,
            "retry_count": self.retry_count,
            "created_at": datetime_to_str(self.created_at),
            "updated_at": datetime_to_str(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Notification":
        """Reconstrói a entidade a partir do formato persistido."""
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            type=NotificationType(data["type"]),
            title=data["title"],
            message=data["message"],
            data=data.get("data") or {},
            status=NotificationStatus(data.get("status", NotificationStatus.PENDING.value)),
            sent_at=str_to_datetime(data.get("sent_at")),
            delivered_at=str_to_datetime(data.get("delivered_at")),
            failed_at=str_to_datetime(data.get("failed_at")),
            error_message=data.get("error_message"),
            retry_count=int(data.get("retry_count", 0)),
            created_at=str_to_datetime(data.get("created_at")) or datetime.utcnow(),
            updated_at=str_to_datetime(data.get("updated_at")) or datetime.utcnow(),
        )
