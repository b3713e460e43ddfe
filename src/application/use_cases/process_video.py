"""
Use Case: Process Video
Valida dono e elegibilidade, cria o ProcessingJob e publica na fila.
"""
from typing import Optional

from loguru import logger

from src.application.best_effort import attempt
from src.application.dtos import (
    VIDEO_PROCESSING,
    ProcessingOptionsMessage,
    ProcessVideoRequestDTO,
    UserProfileMessage,
    VideoProcessingMessage,
    VideoResponseDTO,
)
from src.domain.entities import Video
from src.domain.exceptions import (
    InvalidStateError,
    ProcessingError,
    ResourceNotFoundError,
    UnauthorizedError,
    ValidationError,
    VideoNotFoundError,
    VideoNotProcessableError,
)
from src.domain.interfaces import (
    IFileStorage,
    IProcessingJobRepository,
    IVideoRepository,
    IWorkQueue,
)
from src.domain.services import VideoProcessingPolicy
from src.domain.value_objects import UserProfile


class ProcessVideoUseCase:
    """Use Case para solicitar a extração de frames de um vídeo."""

    def __init__(
        self,
        video_repository: IVideoRepository,
        job_repository: IProcessingJobRepository,
        work_queue: IWorkQueue,
        file_storage: IFileStorage,
        policy: VideoProcessingPolicy
    ):
        """
        Inicializa o use case.

        Args:
            video_repository: Repositório de vídeos
            job_repository: Repositório de processing jobs
            work_queue: Fila de trabalho
            file_storage: Resolve o caminho do arquivo de entrada
            policy: Políticas de domínio
        """
        self.video_repository = video_repository
        self.job_repository = job_repository
        self.work_queue = work_queue
        self.file_storage = file_storage
        self.policy = policy

    async def execute(
        self,
        video_id: str,
        user_id: str,
        request: Optional[ProcessVideoRequestDTO] = None,
        user_tier: str = "basic",
        user: Optional[UserProfile] = None
    ) -> VideoResponseDTO:
        """
        Executa a solicitação de processamento.

        Args:
            video_id: ID do vídeo
            user_id: Usuário solicitante
            request: Opções de processamento
            user_tier: Tier do usuário (prioridade de despacho)
            user: Perfil do usuário, repassado ao worker para notificações

        Returns:
            VideoResponseDTO: Vídeo em QUEUED

        Raises:
            VideoNotFoundError: Se o vídeo não existir
            UnauthorizedError: Se o solicitante não for o dono
            VideoNotProcessableError: Se o vídeo não for elegível
            ProcessingError: Para qualquer outra falha
        """
        request = request or ProcessVideoRequestDTO()

        video = await self.video_repository.find_by_id(video_id)
        if not video:
            raise VideoNotFoundError(video_id)

        if not video.belongs_to(user_id):
            raise UnauthorizedError("Unauthorized to process this video")

        if not self.policy.can_video_be_processed(video):
            raise VideoNotProcessableError(video.status.value, video.processing_attempts)

        try:
            input_path = str(self.file_storage.path(video.filename, video.user_id))
            job = self.policy.create_processing_job(
                video.id,
                user_id,
                input_path,
                request.model_dump(exclude_none=True)
            )
            job = await self.job_repository.create(job)

            priority = self.policy.calculate_processing_priority(video, user_tier)

            message = VideoProcessingMessage(
                job_id=job.id,
                video_id=video.id,
                user_id=user_id,
                user=UserProfileMessage.from_profile(user) if user else None,
                input_path=input_path,
                processing_options=ProcessingOptionsMessage(**job.processing_options.to_dict()),
            )

            try:
                queue_job_id = await self.work_queue.enqueue(
                    VIDEO_PROCESSING,
                    message.model_dump(mode="json"),
                    priority=priority,
                    attempts=job.max_attempts
                )
            except Exception as e:
                job.fail_processing(f"Failed to enqueue: {e}")
                await attempt(
                    "mark job as failed after enqueue error",
                    lambda: self.job_repository.save(job),
                    job_id=job.id
                )
                raise

            logger.info(
                f"🚀 Video {video.id} enqueued for processing "
                f"(job={job.id}, priority={priority}, tier={user_tier}, queue_id={queue_job_id})",
                extra={"video_id": video.id, "job_id": job.id, "priority": priority}
            )

            video = await self._mark_queued(video)

        except (ResourceNotFoundError, ValidationError, UnauthorizedError, InvalidStateError):
            raise
        except Exception as e:
            logger.error(f"❌ Failed to process video {video_id}: {e}")
            raise ProcessingError(str(e)) from e

        return VideoResponseDTO.from_entity(video)

    async def _mark_queued(self, video: Video) -> Video:
        """
        Transiciona para QUEUED.

        Relê o vídeo antes de gravar: se um worker já iniciou o
        processamento, o status dele prevalece.
        """
        current = await self.video_repository.find_by_id(video.id) or video
        if not current.can_be_processed():
            logger.debug(f"Video {video.id} already moved to {current.status.value}, keeping it")
            return current

        current.queue_for_processing()
        return await self.video_repository.save(current)
