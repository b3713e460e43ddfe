"""
Interface: IObjectStore
Contrato do object store (pacotes de frames processados).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StoredObject:
    """Objeto enviado ao object store."""

    key: str
    size_bytes: int


class IObjectStore(ABC):
    """Interface para armazenamento de objetos."""

    @abstractmethod
    async def ensure_bucket(self) -> None:
        """Cria o bucket se necessário (idempotente)."""
        pass

    @abstractmethod
    async def upload(self, local_dir: Path, owner_id: str, video_id: str) -> StoredObject:
        """
        Empacota o diretório em ZIP e envia ao object store.

        Args:
            local_dir: Diretório com os frames
            owner_id: Dono do vídeo
            video_id: ID do vídeo

        Returns:
            StoredObject: Chave e tamanho do pacote

        Raises:
            StorageError: Se o empacotamento ou upload falhar
        """
        pass

    @abstractmethod
    async def signed_url(self, key: str, ttl_seconds: int = 3600) -> str:
        """URL temporária para download direto."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass
