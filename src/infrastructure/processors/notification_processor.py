"""
Processor das mensagens send-email / send-push.
"""
from typing import Optional

from loguru import logger

from src.application.dtos import (
    EmailNotificationMessage,
    NotificationResponseDTO,
    PushNotificationMessage,
    SendNotificationRequestDTO,
    UserProfileMessage,
)
from src.application.use_cases import SendNotificationUseCase
from src.domain.entities import NotificationType
from src.domain.interfaces import IUserProfileProvider
from src.domain.value_objects import UserProfile


class NotificationProcessor:
    """
    Entrega notificações enfileiradas.

    Usa o perfil enviado na mensagem quando disponível; caso contrário
    consulta o serviço de identidade. Usuários inativos ou com o canal
    desabilitado são ignorados. Falhas de entrega ficam registradas na
    notificação e são relançadas para retry da fila.
    """

    def __init__(
        self,
        send_notification: SendNotificationUseCase,
        user_provider: IUserProfileProvider
    ):
        self.send_notification = send_notification
        self.user_provider = user_provider

    async def handle_email(self, message: EmailNotificationMessage) -> Optional[NotificationResponseDTO]:
        user = await self._resolve_user(message.user_id, message.user)
        if not self._should_notify(user, NotificationType.EMAIL, message.user_id):
            return None

        request = SendNotificationRequestDTO(
            user_id=message.user_id,
            type=NotificationType.EMAIL,
            title=message.subject,
            message=message.context.get("message") or message.subject,
            data={"template": message.template, "context": message.context},
        )
        return await self.send_notification.execute(request, user=user)

    async def handle_push(self, message: PushNotificationMessage) -> Optional[NotificationResponseDTO]:
        user = await self._resolve_user(message.user_id, message.user)
        if not self._should_notify(user, NotificationType.PUSH, message.user_id):
            return None

        request = SendNotificationRequestDTO(
            user_id=message.user_id,
            type=NotificationType.PUSH,
            title=message.title,
            message=message.body,
            data=message.data,
        )
        return await self.send_notification.execute(request, user=user)

    async def _resolve_user(
        self,
        user_id: str,
        cached: Optional[UserProfileMessage]
    ) -> Optional[UserProfile]:
        if cached is not None and cached.email:
            return cached.to_profile()
        return await self.user_provider.get_user_by_id(user_id)

    @staticmethod
    def _should_notify(user: Optional[UserProfile], channel: NotificationType, user_id: str) -> bool:
        if user is None:
            logger.warning(f"User {user_id} not found, skipping {channel.value} notification")
            return False
        if not user.is_active:
            logger.info(f"User {user_id} is inactive, skipping {channel.value} notification")
            return False
        if not user.preferences.allows(channel.value):
            logger.info(f"User {user_id} disabled {channel.value} notifications, skipping")
            return False
        return True
