"""
Use Case: Get Notifications
Consulta de notificações de um usuário.
"""
from loguru import logger

from src.application.dtos import NotificationListResponseDTO, NotificationResponseDTO
from src.domain.exceptions import NotificationNotFoundError
from src.domain.interfaces import INotificationRepository


class GetNotificationsUseCase:
    """Use Case para listagem e consulta de notificações."""

    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repository = notification_repository

    async def get_user_notifications(
        self,
        user_id: str,
        limit: int = 10,
        offset: int = 0
    ) -> NotificationListResponseDTO:
        """
        Lista notificações do usuário (mais recentes primeiro).

        Args:
            user_id: Destinatário
            limit: Itens por página
            offset: Deslocamento

        Returns:
            NotificationListResponseDTO: Página com total e has_more
        """
        notifications = await self.notification_repository.find_by_user_id(user_id, limit, offset)
        total = await self.notification_repository.count_by_user_id(user_id)

        logger.debug(f"Listed {len(notifications)}/{total} notifications for user {user_id}")

        return NotificationListResponseDTO(
            notifications=[NotificationResponseDTO.from_entity(n) for n in notifications],
            total=total,
            page=offset // limit + 1,
            limit=limit,
            has_more=offset + len(notifications) < total,
        )

    async def get_by_id(self, notification_id: str) -> NotificationResponseDTO:
        """
        Raises:
            NotificationNotFoundError: Se a notificação não existir
        """
        notification = await self.notification_repository.find_by_id(notification_id)
        if not notification:
            raise NotificationNotFoundError(notification_id)
        return NotificationResponseDTO.from_entity(notification)
