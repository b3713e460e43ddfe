"""
Use Case: Upload Video
Valida, armazena e registra um vídeo enviado pelo usuário.
"""
from typing import Sequence

from loguru import logger

from src.application.best_effort import attempt
from src.application.dtos import UploadedFileDTO, VideoResponseDTO
from src.domain.entities import Video
from src.domain.exceptions import UploadError, VideoValidationError
from src.domain.interfaces import IFileStorage, ITranscoder, IVideoRepository
from src.domain.services import (
    DEFAULT_ALLOWED_MIME_TYPES,
    DEFAULT_MAX_UPLOAD_SIZE,
    VideoProcessingPolicy,
)


class UploadVideoUseCase:
    """
    Use Case para upload de vídeos.
    Coordena validação, armazenamento, leitura de metadados e persistência.
    """

    def __init__(
        self,
        video_repository: IVideoRepository,
        file_storage: IFileStorage,
        transcoder: ITranscoder,
        policy: VideoProcessingPolicy,
        max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE,
        allowed_mime_types: Sequence[str] = DEFAULT_ALLOWED_MIME_TYPES
    ):
        """
        Inicializa o use case.

        Args:
            video_repository: Repositório de vídeos
            file_storage: Armazenamento local dos uploads
            transcoder: Usado apenas para a leitura de metadados
            policy: Políticas de domínio
            max_upload_size: Tamanho máximo em bytes
            allowed_mime_types: MIME types aceitos
        """
        self.video_repository = video_repository
        self.file_storage = file_storage
        self.transcoder = transcoder
        self.policy = policy
        self.max_upload_size = max_upload_size
        self.allowed_mime_types = list(allowed_mime_types)

    async def execute(self, file: UploadedFileDTO, user_id: str) -> VideoResponseDTO:
        """
        Executa o upload.

        Args:
            file: Arquivo recebido
            user_id: Dono do vídeo

        Returns:
            VideoResponseDTO: Vídeo criado em PENDING

        Raises:
            VideoValidationError: Se o arquivo for rejeitado pelo gate de upload
            UploadError: Se armazenamento ou persistência falharem
        """
        validation = self.policy.validate_video_for_upload(
            file.original_name,
            file.mime_type,
            file.size,
            self.max_upload_size,
            self.allowed_mime_types
        )
        if not validation.is_valid:
            logger.warning(
                f"Upload rejected for user {user_id}: {validation.error}",
                extra={"user_id": user_id, "original_name": file.original_name}
            )
            raise VideoValidationError(file.original_name, validation.error)

        stored_name = None
        try:
            stored_name = await self.file_storage.save(file.content, file.original_name, user_id)
            file_path = self.file_storage.path(stored_name, user_id)

            lookup = await attempt(
                "read video metadata",
                lambda: self.transcoder.read_metadata(file_path),
                user_id=user_id,
                filename=stored_name
            )
            metadata = lookup.value

            video = Video(
                user_id=user_id,
                filename=stored_name,
                original_name=file.original_name,
                mime_type=file.mime_type,
                size=file.size,
                duration=metadata.duration if metadata else None,
                metadata=metadata,
            )
            video = await self.video_repository.create(video)

        except Exception as e:
            logger.error(f"❌ Upload failed for user {user_id}: {e}")
            if stored_name:
                await attempt(
                    "remove orphan upload",
                    lambda: self.file_storage.delete(stored_name, user_id),
                    user_id=user_id
                )
            raise UploadError(str(e)) from e

        logger.info(
            f"✅ Video uploaded: {video.id} ({video.size_mb:.2f}MB, "
            f"{video.metadata.quality_label() if video.metadata else 'no metadata'})",
            extra={"video_id": video.id, "user_id": user_id}
        )
        return VideoResponseDTO.from_entity(video)
