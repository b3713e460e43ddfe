"""
Interface: IVideoRepository
Contrato de persistência de vídeos.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from src.domain.entities import Video, VideoStatus


class IVideoRepository(ABC):
    """Interface para persistência de vídeos."""

    @abstractmethod
    async def create(self, video: Video) -> Video:
        """Persiste um novo vídeo."""
        pass

    @abstractmethod
    async def save(self, video: Video) -> Video:
        """Grava o estado atual de um vídeo existente."""
        pass

    @abstractmethod
    async def find_by_id(self, video_id: str) -> Optional[Video]:
        pass

    @abstractmethod
    async def find_by_user_id(
        self,
        user_id: str,
        status: Optional[VideoStatus] = None,
        limit: int = 10,
        offset: int = 0
    ) -> List[Video]:
        """
        Lista vídeos de um usuário (mais recentes primeiro).

        Args:
            user_id: Dono dos vídeos
            status: Filtro opcional de status
            limit: Quantidade máxima
            offset: Deslocamento

        Returns:
            List[Video]: Página de vídeos
        """
        pass

    @abstractmethod
    async def count_by_user_id(self, user_id: str, status: Optional[VideoStatus] = None) -> int:
        pass

    @abstractmethod
    async def find_by_status(self, status: VideoStatus, limit: Optional[int] = None) -> List[Video]:
        """Lista vídeos por status (mais antigos primeiro), sem filtro de dono."""
        pass

    @abstractmethod
    async def find_pending_for_processing(self, limit: int = 10) -> List[Video]:
        """Vídeos PENDING ou QUEUED, mais antigos primeiro."""
        pass

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]:
        pass

    @abstractmethod
    async def delete(self, video_id: str) -> bool:
        pass
