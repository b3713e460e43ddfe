"""
Containers de injeção de dependências.

Cada serviço (API de vídeos, API de notificações, workers) monta seu
container explicitamente na inicialização; não há singletons de módulo.
A API guarda o container em `app.state.container`; os workers o mantêm
na instância da task.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

import httpx
from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError, TimeoutError as RedisTimeoutError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from src.application.use_cases import (
    CleanupOldJobsUseCase,
    GetNotificationsUseCase,
    GetProcessingStatsUseCase,
    GetVideoStatusUseCase,
    ProcessVideoUseCase,
    SendNotificationUseCase,
    UploadVideoUseCase,
)
from src.config import Settings
from src.domain.services import VideoProcessingPolicy
from src.infrastructure.clients import AuthServiceClient
from src.infrastructure.media import FFmpegTranscoder
from src.infrastructure.notifications import (
    CeleryNotificationDispatcher,
    HttpPushSender,
    SmtpEmailSender,
)
from src.infrastructure.persistence import (
    RedisNotificationRepository,
    RedisProcessingJobRepository,
    RedisVideoRepository,
)
from src.infrastructure.processors import NotificationProcessor, VideoProcessingProcessor
from src.infrastructure.queue.celery_config import celery_app
from src.infrastructure.queue.celery_work_queue import CeleryWorkQueue
from src.infrastructure.storage import LocalFileStorage, S3ObjectStore
from src.infrastructure.utils import CircuitBreaker


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((RedisConnectionError, RedisTimeoutError)),
    reraise=True,
)
async def connect_redis(redis: Redis) -> None:
    """Aguarda o Redis responder (containers sobem em paralelo)."""
    await redis.ping()


async def _ping(redis: Redis) -> bool:
    try:
        return bool(await redis.ping())
    except Exception as e:
        logger.warning(f"⚠️ Redis health check failed: {e}")
        return False


@dataclass
class VideoServiceContainer:
    """Dependências do serviço de vídeos e do worker de processamento."""

    settings: Settings
    redis: Redis
    video_repository: RedisVideoRepository
    job_repository: RedisProcessingJobRepository
    file_storage: LocalFileStorage
    transcoder: FFmpegTranscoder
    object_store: S3ObjectStore
    work_queue: CeleryWorkQueue
    policy: VideoProcessingPolicy
    upload_video: UploadVideoUseCase
    process_video: ProcessVideoUseCase
    get_video_status: GetVideoStatusUseCase
    get_processing_stats: GetProcessingStatsUseCase
    cleanup_old_jobs: CleanupOldJobsUseCase
    video_processor: VideoProcessingProcessor

    async def startup(self) -> None:
        """Verifica o Redis e, se configurado, cria o bucket."""
        await connect_redis(self.redis)
        if self.settings.s3_auto_create_bucket:
            await self.object_store.ensure_bucket()
        logger.info("✅ Video service dependencies ready")

    async def shutdown(self) -> None:
        await self.redis.aclose()
        logger.info("Video service dependencies closed")

    async def readiness_checks(self) -> Dict[str, bool]:
        return {
            "redis": await _ping(self.redis),
            "upload_dir": Path(self.settings.upload_dir).parent.exists(),
        }


@dataclass
class NotificationServiceContainer:
    """Dependências do serviço de notificações e do worker de entrega."""

    settings: Settings
    redis: Redis
    notification_repository: RedisNotificationRepository
    user_provider: AuthServiceClient
    email_sender: SmtpEmailSender
    push_sender: HttpPushSender
    send_notification: SendNotificationUseCase
    get_notifications: GetNotificationsUseCase
    notification_processor: NotificationProcessor

    async def startup(self) -> None:
        await connect_redis(self.redis)
        logger.info("✅ Notification service dependencies ready")

    async def shutdown(self) -> None:
        await self.user_provider.close()
        await self.push_sender.close()
        await self.redis.aclose()
        logger.info("Notification service dependencies closed")

    async def readiness_checks(self) -> Dict[str, bool]:
        return {
            "redis": await _ping(self.redis),
            "auth_service": self.user_provider.circuit_breaker.get_stats()["state"] != "open",
        }


def create_redis(settings: Settings) -> Redis:
    return Redis.from_url(settings.redis_url, decode_responses=True)


def build_video_container(settings: Settings) -> VideoServiceContainer:
    """Monta o grafo de dependências do serviço de vídeos."""
    redis = create_redis(settings)
    video_repository = RedisVideoRepository(redis)
    job_repository = RedisProcessingJobRepository(redis)
    file_storage = LocalFileStorage(settings.upload_dir, settings.frames_dir)
    transcoder = FFmpegTranscoder(
        ffmpeg_path=settings.ffmpeg_path,
        ffprobe_path=settings.ffprobe_path,
        timeout_seconds=settings.ffmpeg_timeout_seconds,
    )
    object_store = S3ObjectStore(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        public_endpoint_url=settings.s3_public_endpoint_url,
        access_key_id=settings.s3_access_key_id,
        secret_access_key=settings.s3_secret_access_key,
    )
    work_queue = CeleryWorkQueue(celery_app)
    policy = VideoProcessingPolicy(max_attempts=settings.max_processing_attempts)

    return VideoServiceContainer(
        settings=settings,
        redis=redis,
        video_repository=video_repository,
        job_repository=job_repository,
        file_storage=file_storage,
        transcoder=transcoder,
        object_store=object_store,
        work_queue=work_queue,
        policy=policy,
        upload_video=UploadVideoUseCase(
            video_repository=video_repository,
            file_storage=file_storage,
            transcoder=transcoder,
            policy=policy,
            max_upload_size=settings.max_upload_size_bytes,
            allowed_mime_types=settings.get_allowed_mime_types(),
        ),
        process_video=ProcessVideoUseCase(
            video_repository=video_repository,
            job_repository=job_repository,
            work_queue=work_queue,
            file_storage=file_storage,
            policy=policy,
        ),
        get_video_status=GetVideoStatusUseCase(
            video_repository=video_repository,
            object_store=object_store,
            signed_url_ttl=settings.signed_url_ttl_seconds,
        ),
        get_processing_stats=GetProcessingStatsUseCase(video_repository, job_repository),
        cleanup_old_jobs=CleanupOldJobsUseCase(job_repository, settings.job_retention_days),
        video_processor=VideoProcessingProcessor(
            video_repository=video_repository,
            job_repository=job_repository,
            file_storage=file_storage,
            transcoder=transcoder,
            object_store=object_store,
            notification_dispatcher=CeleryNotificationDispatcher(work_queue),
            policy=policy,
            signed_url_ttl=settings.signed_url_ttl_seconds,
            strict_result_validation=settings.strict_result_validation,
            lock_ttl_seconds=settings.processing_lock_ttl_seconds,
            cleanup_frames=settings.cleanup_frames_after_upload,
        ),
    )


def build_notification_container(settings: Settings) -> NotificationServiceContainer:
    """Monta o grafo de dependências do serviço de notificações."""
    redis = create_redis(settings)
    notification_repository = RedisNotificationRepository(redis)
    user_provider = AuthServiceClient(
        base_url=settings.auth_service_url,
        timeout=settings.auth_service_timeout,
        max_retries=settings.auth_service_retries,
        circuit_breaker=CircuitBreaker(
            name="auth-service",
            failure_threshold=settings.circuit_breaker_failure_threshold,
            timeout_seconds=settings.circuit_breaker_timeout_seconds,
            expected_exceptions=(httpx.TransportError, httpx.HTTPStatusError),
        ),
    )
    email_sender = SmtpEmailSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_password,
        sender=settings.smtp_from,
        use_tls=settings.smtp_use_tls,
    )
    push_sender = HttpPushSender(settings.push_gateway_url, timeout=settings.push_timeout)
    send_notification = SendNotificationUseCase(
        notification_repository=notification_repository,
        user_provider=user_provider,
        email_sender=email_sender,
        push_sender=push_sender,
    )

    return NotificationServiceContainer(
        settings=settings,
        redis=redis,
        notification_repository=notification_repository,
        user_provider=user_provider,
        email_sender=email_sender,
        push_sender=push_sender,
        send_notification=send_notification,
        get_notifications=GetNotificationsUseCase(notification_repository),
        notification_processor=NotificationProcessor(send_notification, user_provider),
    )
