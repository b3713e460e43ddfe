"""
Interface: INotificationRepository
Contrato de persistência de notificações.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Notification


class INotificationRepository(ABC):
    """Interface para persistência de notificações."""

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def find_by_id(self, notification_id: str) -> Optional[Notification]:
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str, limit: int = 10, offset: int = 0) -> List[Notification]:
        """Notificações de um usuário, mais recentes primeiro."""
        pass

    @abstractmethod
    async def count_by_user_id(self, user_id: str) -> int:
        pass
