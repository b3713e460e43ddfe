"""
DTOs do serviço de notificações.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from src.domain.entities import Notification, NotificationStatus, NotificationType


class SendNotificationRequestDTO(BaseModel):
    """DTO para requisição de envio de notificação."""

    user_id: str = Field(..., min_length=1, description="Destinatário")
    type: NotificationType = Field(..., description="Canal de entrega")
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict, description="Dados extras (template, contexto)")


class NotificationResponseDTO(BaseModel):
    """DTO para projeção de notificação."""

    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)
    status: NotificationStatus
    sent_at: Optional[datetime] = None
    failed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    retry_count: int = 0
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponseDTO":
        """Cria o DTO a partir da entidade."""
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            data=notification.data,
            status=notification.status,
            sent_at=notification.sent_at,
            failed_at=notification.failed_at,
            error_message=notification.error_message,
            retry_count=notification.retry_count,
            created_at=notification.created_at,
        )


class NotificationListResponseDTO(BaseModel):
    """DTO para listagem paginada de notificações."""

    notifications: List[NotificationResponseDTO]
    total: int
    page: int
    limit: int
    has_more: bool
