"""
Interface: IUserProfileProvider
Contrato de consulta ao serviço de identidade.
"""
from abc import ABC, abstractmethod
from typing import Optional

from src.domain.value_objects import UserProfile


class IUserProfileProvider(ABC):
    """Interface para obter perfis de usuário."""

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        """
        Obtém o perfil do usuário.

        Returns:
            Optional[UserProfile]: None se o usuário não existe; perfil
            degradado se o serviço estiver inacessível
        """
        pass
