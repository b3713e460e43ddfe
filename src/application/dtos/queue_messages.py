"""
Schemas das mensagens trafegadas pela fila.

Cada tipo de mensagem tem um schema explícito com discriminador
`message_type`, validado no consumo antes de qualquer trabalho.
"""
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, Field

from src.domain.value_objects import NotificationPreferences, ProcessingOptions, UserProfile

VIDEO_PROCESSING = "video-processing"
SEND_EMAIL = "send-email"
SEND_PUSH = "send-push"


class UserPreferencesMessage(BaseModel):
    email: bool = True
    push: bool = True
    sms: bool = False


class UserProfileMessage(BaseModel):
    """Perfil de usuário embutido em mensagens (cache do chamador)."""

    id: str
    email: str
    name: str = ""
    is_active: bool = True
    preferences: UserPreferencesMessage = Field(default_factory=UserPreferencesMessage)
    is_degraded: bool = False

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserProfileMessage":
        return cls.model_validate(profile.to_dict())

    def to_profile(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            email=self.email,
            name=self.name,
            is_active=self.is_active,
            preferences=NotificationPreferences(**self.preferences.model_dump()),
            is_degraded=self.is_degraded,
        )


class ProcessingOptionsMessage(BaseModel):
    frames_per_second: float = Field(default=1, gt=0)
    output_format: Literal["png", "jpg", "jpeg"] = "png"
    compression_quality: int = Field(default=95, ge=1, le=100)
    max_width: int = Field(default=1920, gt=0)
    max_height: int = Field(default=1080, gt=0)

    def to_options(self) -> ProcessingOptions:
        return ProcessingOptions(**self.model_dump())


class VideoProcessingMessage(BaseModel):
    """Mensagem de processamento de vídeo."""

    message_type: Literal["video-processing"] = VIDEO_PROCESSING
    job_id: str
    video_id: str
    user_id: str
    user: Optional[UserProfileMessage] = None
    input_path: str
    processing_options: ProcessingOptionsMessage = Field(default_factory=ProcessingOptionsMessage)


class EmailNotificationMessage(BaseModel):
    """Mensagem de envio de e-mail."""

    message_type: Literal["send-email"] = SEND_EMAIL
    user_id: str
    user: Optional[UserProfileMessage] = None
    subject: str
    template: str
    context: Dict[str, Any] = Field(default_factory=dict)


class PushNotificationMessage(BaseModel):
    """Mensagem de envio de push."""

    message_type: Literal["send-push"] = SEND_PUSH
    user_id: str
    user: Optional[UserProfileMessage] = None
    title: str
    body: str
    data: Dict[str, Any] = Field(default_factory=dict)
