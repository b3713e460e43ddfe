"""
Interfaces: IEmailSender / IPushSender
Contratos dos canais de entrega de notificações.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IEmailSender(ABC):
    """Interface para envio de e-mails."""

    @abstractmethod
    async def send(
        self,
        to: str,
        subject: str,
        template: str,
        context: Dict[str, Any]
    ) -> None:
        """
        Renderiza o template e envia o e-mail.

        Raises:
            NotificationDeliveryError: Se o envio falhar
        """
        pass


class IPushSender(ABC):
    """Interface para envio de push notifications."""

    @abstractmethod
    async def send(
        self,
        user_id: str,
        title: str,
        body: str,
        data: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Envia a push notification.

        Raises:
            NotificationDeliveryError: Se o envio falhar
        """
        pass
