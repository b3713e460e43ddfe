"""
Use Case: Send Notification
Resolve o destinatário, registra e entrega uma notificação.
"""
from typing import Optional

from loguru import logger

from src.application.dtos import NotificationResponseDTO, SendNotificationRequestDTO
from src.domain.entities import Notification, NotificationType
from src.domain.exceptions import UserNotFoundError, ValidationError
from src.domain.interfaces import (
    IEmailSender,
    INotificationRepository,
    IPushSender,
    IUserProfileProvider,
)
from src.domain.value_objects import UserProfile

SUPPORTED_TYPES = (NotificationType.EMAIL, NotificationType.PUSH)


class SendNotificationUseCase:
    """Use Case para envio de notificações por e-mail ou push."""

    def __init__(
        self,
        notification_repository: INotificationRepository,
        user_provider: IUserProfileProvider,
        email_sender: IEmailSender,
        push_sender: IPushSender
    ):
        """
        Inicializa o use case.

        Args:
            notification_repository: Repositório de notificações
            user_provider: Consulta ao serviço de identidade
            email_sender: Canal de e-mail
            push_sender: Canal de push
        """
        self.notification_repository = notification_repository
        self.user_provider = user_provider
        self.email_sender = email_sender
        self.push_sender = push_sender

    async def execute(
        self,
        request: SendNotificationRequestDTO,
        user: Optional[UserProfile] = None
    ) -> NotificationResponseDTO:
        """
        Envia a notificação.

        Args:
            request: Dados da notificação
            user: Perfil já conhecido (evita consulta ao serviço de identidade)

        Returns:
            NotificationResponseDTO: Notificação em SENT

        Raises:
            UserNotFoundError: Se o usuário não existir
            ValidationError: Canal não suportado, desabilitado ou usuário inativo
            NotificationDeliveryError: Se a entrega falhar (registro fica FAILED)
        """
        if user is None:
            user = await self.user_provider.get_user_by_id(request.user_id)
        if user is None:
            raise UserNotFoundError(request.user_id)

        if request.type not in SUPPORTED_TYPES:
            raise ValidationError(f"Notification type '{request.type.value}' is not supported")

        if not user.is_active:
            raise ValidationError(f"User {user.id} is inactive")

        if not user.preferences.allows(request.type.value):
            raise ValidationError(f"User {user.id} has disabled {request.type.value} notifications")

        notification = Notification(
            user_id=request.user_id,
            type=request.type,
            title=request.title,
            message=request.message,
            data=request.data,
        )
        notification = await self.notification_repository.create(notification)

        try:
            await self._deliver(notification, user)
        except Exception as e:
            notification.mark_failed(str(e))
            await self.notification_repository.save(notification)
            logger.error(
                f"❌ Notification {notification.id} failed ({notification.type.value}): {e}",
                extra={"notification_id": notification.id, "user_id": notification.user_id}
            )
            raise

        notification.mark_sent()
        notification = await self.notification_repository.save(notification)

        logger.info(
            f"✅ Notification {notification.id} sent via {notification.type.value} to user {user.id}"
            + (" (degraded profile)" if user.is_degraded else "")
        )
        return NotificationResponseDTO.from_entity(notification)

    async def _deliver(self, notification: Notification, user: UserProfile) -> None:
        if notification.type == NotificationType.EMAIL:
            template = notification.data.get("template", "default")
            context = {
                **notification.data.get("context", {}),
                "user_name": user.name,
                "title": notification.title,
                "message": notification.message,
            }
            await self.email_sender.send(user.email, notification.title, template, context)
        else:
            await self.push_sender.send(
                user.id,
                notification.title,
                notification.message,
                notification.data
            )
