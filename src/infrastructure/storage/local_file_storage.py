"""
Storage Service Implementation.
Armazena uploads e frames extraídos no disco local.

Layout:
- <upload_dir>/<owner_id>/<uuid><ext>: vídeos enviados
- <frames_dir>/<owner_id>/frames/<video_id>/: frames de um processamento
"""
import asyncio
import shutil
import uuid
from pathlib import Path

from loguru import logger

from src.domain.exceptions import StorageError
from src.domain.interfaces import IFileStorage


class LocalFileStorage(IFileStorage):
    """Armazenamento local de arquivos enviados."""

    def __init__(self, upload_dir: str = "./storage/uploads", frames_dir: str = "./storage"):
        """
        Inicializa o serviço de storage. Diretórios são criados sob demanda.

        Args:
            upload_dir: Diretório base dos uploads
            frames_dir: Diretório base dos frames extraídos
        """
        self.upload_dir = Path(upload_dir)
        self.frames_root = Path(frames_dir)

    def path(self, stored_name: str, owner_id: str) -> Path:
        return self.upload_dir / owner_id / stored_name

    async def save(self, content: bytes, original_name: str, owner_id: str) -> str:
        """
        Salva o arquivo com nome único (uuid + extensão original).

        Raises:
            StorageError: Se a escrita falhar
        """
        extension = Path(original_name).suffix.lower()
        stored_name = f"{uuid.uuid4()}{extension}"
        target = self.path(stored_name, owner_id)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)

        try:
            loop = asyncio.get_event_loop()
            await loop.run_in_executor(None, _write)
        except OSError as e:
            logger.error(f"Failed to store upload {original_name}: {e}")
            raise StorageError(f"Failed to store file: {e}") from e

        logger.debug(f"Stored upload: {target} ({len(content)} bytes)")
        return stored_name

    async def exists(self, stored_name: str, owner_id: str) -> bool:
        return self.path(stored_name, owner_id).is_file()

    async def delete(self, stored_name: str, owner_id: str) -> bool:
        target = self.path(stored_name, owner_id)
        if not target.exists():
            return False
        try:
            target.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete {target}: {e}") from e
        logger.debug(f"Deleted upload: {target}")
        return True

    def url(self, stored_name: str, owner_id: str) -> str:
        return f"/uploads/{owner_id}/{stored_name}"

    def frames_dir(self, owner_id: str, video_id: str) -> Path:
        return self.frames_root / owner_id / "frames" / video_id

    async def cleanup_directory(self, directory: Path) -> bool:
        """
        Remove um diretório específico e todo seu conteúdo.

        Returns:
            bool: True se removido (ou inexistente)
        """
        if not directory.exists():
            return True
        if not directory.is_dir():
            logger.warning(f"Path is not a directory: {directory}")
            return False

        try:
            loop = asyncio.get_event_loop()
            await loop.run_in_executor(None, shutil.rmtree, directory)
        except OSError as e:
            logger.error(f"Failed to remove directory {directory}: {e}")
            return False

        logger.debug(f"Removed directory: {directory}")
        return True
