"""
Despacho das notificações de resultado do processamento.

Publica mensagens send-email e send-push na fila de notificações,
consumidas pelo serviço de notificações.
"""
from datetime import datetime
from typing import Optional

from loguru import logger

from src.application.best_effort import attempt
from src.application.dtos import (
    SEND_EMAIL,
    SEND_PUSH,
    EmailNotificationMessage,
    PushNotificationMessage,
    UserProfileMessage,
)
from src.domain.interfaces import INotificationDispatcher, IWorkQueue
from src.domain.value_objects import UserProfile

NOTIFICATION_ATTEMPTS = 3


class CeleryNotificationDispatcher(INotificationDispatcher):
    """Enfileira e-mail e push para cada resultado de processamento."""

    def __init__(self, work_queue: IWorkQueue, support_email: str = "support@videoplat.com"):
        self.work_queue = work_queue
        self.support_email = support_email

    async def _publish(
        self,
        email: EmailNotificationMessage,
        push: PushNotificationMessage
    ) -> None:
        """
        Enfileira cada canal separadamente; só falha se nenhum foi publicado.

        Raises:
            QueueError: Se e-mail e push falharam
        """
        outcomes = []
        for job_type, message in ((SEND_EMAIL, email), (SEND_PUSH, push)):
            payload = message.model_dump(mode="json")
            outcome = await attempt(
                f"enqueue {job_type}",
                lambda: self.work_queue.enqueue(job_type, payload, attempts=NOTIFICATION_ATTEMPTS),
                user_id=email.user_id
            )
            outcomes.append(outcome)

        if not any(outcome.succeeded for outcome in outcomes):
            raise outcomes[0].error

    async def notify_complete(
        self,
        user_id: str,
        video_id: str,
        download_url: Optional[str],
        user: Optional[UserProfile] = None
    ) -> None:
        user_message = UserProfileMessage.from_profile(user) if user else None

        email = EmailNotificationMessage(
            user_id=user_id,
            user=user_message,
            subject="🎉 Seu vídeo foi processado com sucesso!",
            template="video-processing-complete",
            context={
                "video_id": video_id,
                "download_url": download_url,
                "processed_at": datetime.utcnow().isoformat(),
            },
        )
        push = PushNotificationMessage(
            user_id=user_id,
            user=user_message,
            title="Vídeo Processado!",
            body="Seu vídeo foi processado com sucesso e está pronto para download.",
            data={
                "video_id": video_id,
                "download_url": download_url,
                "icon": "video-complete",
                "click_action": f"/videos/{video_id}",
            },
        )

        await self._publish(email, push)
        logger.info(f"📣 Completion notifications queued for video {video_id}")

    async def notify_failed(
        self,
        user_id: str,
        video_id: str,
        error_message: str,
        user: Optional[UserProfile] = None
    ) -> None:
        user_message = UserProfileMessage.from_profile(user) if user else None

        email = EmailNotificationMessage(
            user_id=user_id,
            user=user_message,
            subject="❌ Falha no processamento do seu vídeo",
            template="video-processing-failed",
            context={
                "video_id": video_id,
                "error": error_message,
                "failed_at": datetime.utcnow().isoformat(),
                "support_url": f"mailto:{self.support_email}",
            },
        )
        push = PushNotificationMessage(
            user_id=user_id,
            user=user_message,
            title="Falha no Processamento",
            body="Houve um problema ao processar seu vídeo. Tente novamente.",
            data={
                "video_id": video_id,
                "error": error_message,
                "icon": "video-error",
                "click_action": f"/videos/{video_id}",
            },
        )

        await self._publish(email, push)
        logger.info(f"📣 Failure notifications queued for video {video_id}")
