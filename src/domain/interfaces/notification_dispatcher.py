"""
Interface: INotificationDispatcher
Contrato de despacho de notificações do pipeline de vídeo.
"""
from abc import ABC, abstractmethod
from typing import Optional

from src.domain.value_objects import UserProfile


class INotificationDispatcher(ABC):
    """Interface para notificar o resultado do processamento."""

    @abstractmethod
    async def notify_complete(
        self,
        user_id: str,
        video_id: str,
        download_url: Optional[str],
        user: Optional[UserProfile] = None
    ) -> None:
        pass

    @abstractmethod
    async def notify_failed(
        self,
        user_id: str,
        video_id: str,
        error_message: str,
        user: Optional[UserProfile] = None
    ) -> None:
        pass
