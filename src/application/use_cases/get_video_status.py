"""
Use Case: Get Video Status
Projeção de leitura dos vídeos com URLs de download sob demanda.
"""
import math
from typing import List, Optional

from loguru import logger

from src.application.best_effort import attempt
from src.application.dtos import DownloadUrlDTO, VideoListResponseDTO, VideoResponseDTO
from src.domain.entities import Video, VideoStatus
from src.domain.exceptions import InvalidStateError, VideoNotFoundError
from src.domain.interfaces import IObjectStore, IVideoRepository


class GetVideoStatusUseCase:
    """Use Case para consultas de status de vídeos."""

    def __init__(
        self,
        video_repository: IVideoRepository,
        object_store: IObjectStore,
        signed_url_ttl: int = 3600
    ):
        """
        Inicializa o use case.

        Args:
            video_repository: Repositório de vídeos
            object_store: Gera URLs assinadas
            signed_url_ttl: Validade das URLs em segundos
        """
        self.video_repository = video_repository
        self.object_store = object_store
        self.signed_url_ttl = signed_url_ttl

    async def get_video_by_id(self, video_id: str, user_id: str) -> VideoResponseDTO:
        """
        Obtém um vídeo do usuário.

        Raises:
            VideoNotFoundError: Se não existir ou pertencer a outro usuário
        """
        video = await self._get_owned_video(video_id, user_id)
        download_url = await self._try_download_url(video)
        return VideoResponseDTO.from_entity(video, download_url)

    async def get_user_videos(
        self,
        user_id: str,
        status: Optional[VideoStatus] = None,
        page: int = 1,
        limit: int = 10
    ) -> VideoListResponseDTO:
        """
        Lista paginada dos vídeos do usuário.

        Args:
            user_id: Dono dos vídeos
            status: Filtro opcional
            page: Página (a partir de 1)
            limit: Itens por página

        Returns:
            VideoListResponseDTO: Página com total e total_pages
        """
        offset = (page - 1) * limit

        videos = await self.video_repository.find_by_user_id(
            user_id,
            status=status,
            limit=limit,
            offset=offset
        )
        total = await self.video_repository.count_by_user_id(user_id, status=status)

        items = []
        for video in videos:
            download_url = await self._try_download_url(video)
            items.append(VideoResponseDTO.from_entity(video, download_url))

        return VideoListResponseDTO(
            videos=items,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if limit else 0,
        )

    async def get_videos_by_status(
        self,
        status: VideoStatus,
        limit: Optional[int] = None
    ) -> List[VideoResponseDTO]:
        """Listagem operacional por status (sem filtro de dono, sem URLs)."""
        videos = await self.video_repository.find_by_status(status, limit)
        return [VideoResponseDTO.from_entity(video) for video in videos]

    async def get_download_url(self, video_id: str, user_id: str) -> DownloadUrlDTO:
        """
        Gera a URL de download do pacote de frames.

        Raises:
            VideoNotFoundError: Se não existir ou pertencer a outro usuário
            InvalidStateError: Se o processamento não estiver concluído
            StorageError: Se o object store falhar
        """
        video = await self._get_owned_video(video_id, user_id)

        if not video.is_completed:
            raise InvalidStateError("Video processing not completed")

        url = await self.object_store.signed_url(video.s3_key, self.signed_url_ttl)
        return DownloadUrlDTO(download_url=url, expires_in=self.signed_url_ttl)

    async def _get_owned_video(self, video_id: str, user_id: str) -> Video:
        video = await self.video_repository.find_by_id(video_id)
        # Mesmo erro para inexistente e de outro dono
        if not video or not video.belongs_to(user_id):
            if video:
                logger.debug(f"Video {video_id} requested by non-owner {user_id}")
            raise VideoNotFoundError(video_id)
        return video

    async def _try_download_url(self, video: Video) -> Optional[str]:
        if not video.is_completed:
            return None

        outcome = await attempt(
            "generate download url",
            lambda: self.object_store.signed_url(video.s3_key, self.signed_url_ttl),
            video_id=video.id
        )
        return outcome.value
