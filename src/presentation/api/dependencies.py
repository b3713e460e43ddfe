"""
Injeção de dependências das rotas.

Os containers são montados no lifespan de cada aplicação e ficam em
`app.state.container`; as rotas recebem apenas os use cases.
A identidade do usuário chega nos headers definidos pelo API gateway.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Request

from src.application.use_cases import (
    GetNotificationsUseCase,
    GetProcessingStatsUseCase,
    GetVideoStatusUseCase,
    ProcessVideoUseCase,
    SendNotificationUseCase,
    UploadVideoUseCase,
)
from src.domain.exceptions import AuthenticationRequiredError
from src.domain.services import TIER_BASE_PRIORITY
from src.domain.value_objects import UserProfile
from src.infrastructure.container import NotificationServiceContainer, VideoServiceContainer


@dataclass(frozen=True)
class CurrentUser:
    """Usuário autenticado pelo gateway."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    tier: str = "basic"

    def to_profile(self) -> Optional[UserProfile]:
        """Perfil repassado aos workers (evita nova consulta ao auth-service)."""
        if not self.email:
            return None
        return UserProfile(id=self.id, email=self.email, name=self.name or "")


def get_current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    email: Optional[str] = Header(None, alias="X-User-Email"),
    name: Optional[str] = Header(None, alias="X-User-Name"),
    tier: Optional[str] = Header(None, alias="X-User-Tier"),
) -> CurrentUser:
    if not x_user_id:
        raise AuthenticationRequiredError()
    tier = (tier or "basic").lower()
    if tier not in TIER_BASE_PRIORITY:
        tier = "basic"
    return CurrentUser(id=x_user_id, email=email, name=name, tier=tier)


def get_video_container(request: Request) -> VideoServiceContainer:
    return request.app.state.container


def get_notification_container(request: Request) -> NotificationServiceContainer:
    return request.app.state.container


def get_upload_use_case(
    container: VideoServiceContainer = Depends(get_video_container)
) -> UploadVideoUseCase:
    return container.upload_video


def get_process_use_case(
    container: VideoServiceContainer = Depends(get_video_container)
) -> ProcessVideoUseCase:
    return container.process_video


def get_video_status_use_case(
    container: VideoServiceContainer = Depends(get_video_container)
) -> GetVideoStatusUseCase:
    return container.get_video_status


def get_stats_use_case(
    container: VideoServiceContainer = Depends(get_video_container)
) -> GetProcessingStatsUseCase:
    return container.get_processing_stats


def get_send_notification_use_case(
    container: NotificationServiceContainer = Depends(get_notification_container)
) -> SendNotificationUseCase:
    return container.send_notification


def get_notifications_use_case(
    container: NotificationServiceContainer = Depends(get_notification_container)
) -> GetNotificationsUseCase:
    return container.get_notifications
