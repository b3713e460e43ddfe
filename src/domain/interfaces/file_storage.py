"""
Interface: IFileStorage
Contrato de armazenamento local de uploads e frames.
"""
from abc import ABC, abstractmethod
from pathlib import Path


class IFileStorage(ABC):
    """Interface para armazenamento de arquivos enviados."""

    @abstractmethod
    async def save(self, content: bytes, original_name: str, owner_id: str) -> str:
        """
        Salva o arquivo com um nome único.

        Args:
            content: Bytes do arquivo
            original_name: Nome original (define a extensão)
            owner_id: Dono do arquivo

        Returns:
            str: Nome atribuído pelo storage
        """
        pass

    @abstractmethod
    def path(self, stored_name: str, owner_id: str) -> Path:
        pass

    @abstractmethod
    async def exists(self, stored_name: str, owner_id: str) -> bool:
        pass

    @abstractmethod
    async def delete(self, stored_name: str, owner_id: str) -> bool:
        pass

    @abstractmethod
    def url(self, stored_name: str, owner_id: str) -> str:
        pass

    @abstractmethod
    def frames_dir(self, owner_id: str, video_id: str) -> Path:
        """Diretório de saída dos frames de um vídeo (não cria)."""
        pass

    @abstractmethod
    async def cleanup_directory(self, directory: Path) -> bool:
        """Remove um diretório e todo seu conteúdo."""
        pass
