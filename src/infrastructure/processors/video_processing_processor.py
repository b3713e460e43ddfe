"""
Processor de jobs de extração de frames.

Consome uma mensagem video-processing por invocação e conduz Video e
ProcessingJob até COMPLETED ou FAILED:

1. Obtém a concessão exclusiva do job (sem ela, a entrega é descartada
   se o job já terminou, ou reagendada até a concessão expirar)
2. Marca Video/Job como PROCESSING (best-effort)
3. Extrai frames -> empacota e envia ao object store
4. Valida o resultado e grava COMPLETED
5. Gera URL de download e notifica (best-effort)

Qualquer falha nos passos 3-4 grava FAILED, notifica (best-effort) e é
relançada como JobExecutionError para a política de retry da fila.
"""
import time
from pathlib import Path
from typing import Optional

from loguru import logger

from src.application.best_effort import attempt
from src.application.dtos import VideoProcessingMessage
from src.domain.entities import JobStatus, ProcessingJob, Video
from src.domain.exceptions import (
    JobExecutionError,
    JobLeaseBusyError,
    ProcessingError,
    VideoNotFoundError,
)
from src.domain.interfaces import (
    IFileStorage,
    INotificationDispatcher,
    IObjectStore,
    IProcessingJobRepository,
    ITranscoder,
    IVideoRepository,
)
from src.domain.services import VideoProcessingPolicy
from src.domain.value_objects import ProcessingResult, UserProfile

MAX_ATTEMPTS_EXCEEDED = "Maximum processing attempts exceeded"


class VideoProcessingProcessor:
    """Orquestra a execução de um processing job."""

    def __init__(
        self,
        video_repository: IVideoRepository,
        job_repository: IProcessingJobRepository,
        file_storage: IFileStorage,
        transcoder: ITranscoder,
        object_store: IObjectStore,
        notification_dispatcher: INotificationDispatcher,
        policy: VideoProcessingPolicy,
        signed_url_ttl: int = 3600,
        strict_result_validation: bool = True,
        lock_ttl_seconds: int = 3600,
        cleanup_frames: bool = True
    ):
        """
        Inicializa o processor.

        Args:
            video_repository: Repositório de vídeos
            job_repository: Repositório de jobs (inclui a concessão de execução)
            file_storage: Resolve o diretório de frames
            transcoder: Extração de frames
            object_store: Upload do pacote e URLs assinadas
            notification_dispatcher: Notificações de resultado
            policy: Políticas de domínio (validação do resultado)
            signed_url_ttl: Validade da URL enviada na notificação
            strict_result_validation: Se False, resultado degenerado só gera warning
            lock_ttl_seconds: Validade da concessão de execução
            cleanup_frames: Remove os frames locais após o upload
        """
        self.video_repository = video_repository
        self.job_repository = job_repository
        self.file_storage = file_storage
        self.transcoder = transcoder
        self.object_store = object_store
        self.notification_dispatcher = notification_dispatcher
        self.policy = policy
        self.signed_url_ttl = signed_url_ttl
        self.strict_result_validation = strict_result_validation
        self.lock_ttl_seconds = lock_ttl_seconds
        self.cleanup_frames = cleanup_frames

    async def handle(self, message: VideoProcessingMessage) -> Optional[ProcessingResult]:
        """
        Processa uma mensagem.

        Returns:
            Optional[ProcessingResult]: Resultado, ou None se a entrega foi ignorada

        Raises:
            JobLeaseBusyError: Se outra entrega detém a concessão do job
            JobExecutionError: Se o job falhou (já registrado como FAILED)
        """
        if not await self.job_repository.acquire_lock(message.job_id, self.lock_ttl_seconds):
            return await self._handle_leased(message)

        try:
            return await self._process(message)
        finally:
            await attempt(
                "release job lock",
                lambda: self.job_repository.release_lock(message.job_id),
                job_id=message.job_id
            )

    async def _process(self, message: VideoProcessingMessage) -> Optional[ProcessingResult]:
        job = await self.job_repository.find_by_id(message.job_id)
        if job is None:
            logger.error(f"❌ Job {message.job_id} not found, discarding message")
            raise JobExecutionError(message.job_id, "Processing job not found", retryable=False)

        if job.status == JobStatus.COMPLETED:
            logger.info(f"Job {job.id} already completed, skipping duplicate delivery")
            return job.result

        user = message.user.to_profile() if message.user else None

        if job.has_exceeded_max_attempts():
            # Reentrega após queda do worker na última tentativa
            logger.warning(f"Job {job.id} exhausted {job.attempts}/{job.max_attempts} attempts")
            if job.status != JobStatus.FAILED:
                await self._fail(message, None, job, MAX_ATTEMPTS_EXCEEDED, user)
            raise JobExecutionError(job.id, MAX_ATTEMPTS_EXCEEDED, retryable=False)

        video = await self._mark_processing(message, job)

        logger.info(
            f"🚀 Processing job {job.id} for video {message.video_id} "
            f"(attempt {job.attempts}/{job.max_attempts})",
            extra={"job_id": job.id, "video_id": message.video_id}
        )

        started = time.monotonic()
        output_dir = self.file_storage.frames_dir(message.user_id, message.video_id)

        try:
            output_dir.mkdir(parents=True, exist_ok=True)

            extraction = await self.transcoder.extract_frames(
                Path(message.input_path),
                output_dir,
                message.processing_options.to_options()
            )
            stored = await self.object_store.upload(output_dir, message.user_id, message.video_id)

            result = ProcessingResult(
                success=True,
                total_frames=extraction.total_frames,
                processed_frames=extraction.extracted_frames,
                output_path=stored.key,
                output_size=stored.size_bytes,
                processing_time_ms=int((time.monotonic() - started) * 1000),
            )
            self._check_result(job, result)

            video = video or await self.video_repository.find_by_id(message.video_id)
            if video is None:
                raise VideoNotFoundError(message.video_id)

            video.complete_processing(stored.key, extraction.duration or None)
            await self.video_repository.save(video)

            job.complete_processing(result)
            await self.job_repository.save(job)

        except Exception as e:
            error_message = str(e)
            logger.error(
                f"❌ Job {job.id} failed: {error_message}",
                extra={"job_id": job.id, "video_id": message.video_id, "attempt": job.attempts}
            )
            await self._fail(message, video, job, error_message, user)
            raise JobExecutionError(
                job.id,
                error_message,
                retryable=not job.has_exceeded_max_attempts(),
                retry_delay_ms=job.calculate_next_retry_delay()
            ) from e

        finally:
            if self.cleanup_frames:
                await self.file_storage.cleanup_directory(output_dir)

        logger.info(f"✅ Job {job.id} completed: {result.summary()}")
        await self._notify_success(message, job, user)
        return result

    async def _handle_leased(self, message: VideoProcessingMessage) -> Optional[ProcessingResult]:
        """
        Entrega sem concessão. Job já encerrado: a entrega é descartada.
        Caso contrário a concessão é de uma execução ativa ou de um worker
        encerrado, e a entrega volta quando ela expirar.
        """
        job = await self.job_repository.find_by_id(message.job_id)
        if job is not None and job.status in (JobStatus.COMPLETED, JobStatus.FAILED):
            logger.info(
                f"Job {job.id} already {job.status.value}, skipping duplicate delivery",
                extra={"job_id": job.id, "video_id": message.video_id}
            )
            return job.result

        remaining = await self.job_repository.lock_ttl(message.job_id)
        logger.warning(
            f"Job {message.job_id} is leased by another delivery, retrying in {remaining}s",
            extra={"job_id": message.job_id, "video_id": message.video_id}
        )
        raise JobLeaseBusyError(message.job_id, retry_delay_ms=max(remaining, 1) * 1000)

    async def _fail(
        self,
        message: VideoProcessingMessage,
        video: Optional[Video],
        job: ProcessingJob,
        error_message: str,
        user: Optional[UserProfile]
    ) -> None:
        await self._record_failure(message, video, job, error_message)
        await attempt(
            "notify processing failure",
            lambda: self.notification_dispatcher.notify_failed(
                message.user_id, message.video_id, error_message, user
            ),
            job_id=job.id
        )

    async def _mark_processing(self, message: VideoProcessingMessage, job: ProcessingJob) -> Optional[Video]:
        """Marca Video e Job como PROCESSING. Falhas são registradas e ignoradas."""
        job.start_processing()
        await attempt(
            "mark job as processing",
            lambda: self.job_repository.save(job),
            job_id=job.id
        )

        loaded = await attempt(
            "load video",
            lambda: self.video_repository.find_by_id(message.video_id),
            video_id=message.video_id
        )
        video = loaded.value
        if video is None:
            return None

        video.start_processing()
        await attempt(
            "mark video as processing",
            lambda: self.video_repository.save(video),
            video_id=video.id
        )
        return video

    def _check_result(self, job: ProcessingJob, result: ProcessingResult) -> None:
        validation = self.policy.validate_processing_result(result)
        if validation.is_valid:
            return

        if self.strict_result_validation:
            raise ProcessingError(validation.error)

        logger.warning(f"⚠️ Job {job.id} completed with degenerate result: {validation.error}")

    async def _record_failure(
        self,
        message: VideoProcessingMessage,
        video: Optional[Video],
        job: ProcessingJob,
        error_message: str
    ) -> None:
        if video is None:
            loaded = await attempt(
                "load video",
                lambda: self.video_repository.find_by_id(message.video_id),
                video_id=message.video_id
            )
            video = loaded.value

        if video is not None:
            video.fail_processing(error_message)
            await attempt(
                "mark video as failed",
                lambda: self.video_repository.save(video),
                video_id=video.id
            )

        job.fail_processing(error_message)
        await attempt(
            "mark job as failed",
            lambda: self.job_repository.save(job),
            job_id=job.id
        )

    async def _notify_success(
        self,
        message: VideoProcessingMessage,
        job: ProcessingJob,
        user: Optional[UserProfile]
    ) -> None:
        url = await attempt(
            "generate download url",
            lambda: self.object_store.signed_url(job.output_path, self.signed_url_ttl),
            job_id=job.id
        )
        await attempt(
            "notify processing complete",
            lambda: self.notification_dispatcher.notify_complete(
                message.user_id, message.video_id, url.value, user
            ),
            job_id=job.id
        )
