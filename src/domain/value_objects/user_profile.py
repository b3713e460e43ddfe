"""
Value Object: UserProfile
Perfil de usuário obtido do serviço de identidade (ou sintetizado
quando o serviço está indisponível).
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class NotificationPreferences:
    """Canais de notificação habilitados pelo usuário."""

    email: bool = True
    push: bool = True
    sms: bool = False

    def allows(self, channel: str) -> bool:
        """Verifica se o canal (email, push, sms) está habilitado."""
        return bool(getattr(self, channel.lower(), False))

    def to_dict(self) -> dict:
        return {"email": self.email, "push": self.push, "sms": self.sms}


@dataclass(frozen=True)
class UserProfile:
    """Perfil mínimo necessário para notificar um usuário."""

    id: str
    email: str
    name: str = ""
    is_active: bool = True
    preferences: NotificationPreferences = field(default_factory=NotificationPreferences)
    is_degraded: bool = False

    @classmethod
    def degraded(cls, user_id: str) -> "UserProfile":
        """
        Cria um perfil substituto para quando o serviço de identidade
        está inacessível.

        Args:
            user_id: ID do usuário

        Returns:
            UserProfile: Perfil marcado como degradado
        """
        return cls(
            id=user_id,
            email=f"user-{user_id}@temp.com",
            name=f"Usuário {user_id}",
            is_active=True,
            preferences=NotificationPreferences(email=True, push=True, sms=False),
            is_degraded=True,
        )

    def to_dict(self) -> dict:
        """Converte para dicionário."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "is_active": self.is_active,
            "preferences": self.preferences.to_dict(),
            "is_degraded": self.is_degraded,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["UserProfile"]:
        """Reconstrói a partir de um dicionário (payload de fila ou HTTP)."""
        if not data:
            return None
        preferences = data.get("preferences") or {}
        return cls(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name") or "",
            is_active=data.get("is_active", True),
            preferences=NotificationPreferences(
                email=preferences.get("email", True),
                push=preferences.get("push", True),
                sms=preferences.get("sms", False),
            ),
            is_degraded=data.get("is_degraded", False),
        )
