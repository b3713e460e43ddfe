"""
Celery Tasks do pipeline de vídeo e das notificações.

As tasks apenas validam a mensagem, delegam aos processors e aplicam a
política de retry. Cada processo worker mantém um único event loop: os
clientes redis.asyncio e httpx ficam presos ao loop em que foram criados.
"""
import asyncio
from typing import Any, Coroutine, Dict, Optional

from celery import Task
from celery.exceptions import Reject
from celery.signals import worker_process_init, worker_process_shutdown
from loguru import logger
from pydantic import BaseModel, ValidationError as PydanticValidationError

from src.application.dtos import (
    EmailNotificationMessage,
    PushNotificationMessage,
    VideoProcessingMessage,
)
from src.config import settings
from src.domain.exceptions import CollaboratorError, JobExecutionError, JobLeaseBusyError
from src.infrastructure.container import (
    NotificationServiceContainer,
    VideoServiceContainer,
    build_notification_container,
    build_video_container,
)
from src.infrastructure.monitoring import setup_logging
from src.infrastructure.queue.celery_config import celery_app


class PlatformTask(Task):
    """Task base com event loop e containers compartilhados pelo processo."""

    _loop: Optional[asyncio.AbstractEventLoop] = None
    _video_container: Optional[VideoServiceContainer] = None
    _notification_container: Optional[NotificationServiceContainer] = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if PlatformTask._loop is None or PlatformTask._loop.is_closed():
            PlatformTask._loop = asyncio.new_event_loop()
            asyncio.set_event_loop(PlatformTask._loop)
        return PlatformTask._loop

    def run_async(self, coro: Coroutine) -> Any:
        return self.loop.run_until_complete(coro)

    @property
    def video_container(self) -> VideoServiceContainer:
        if PlatformTask._video_container is None:
            container = build_video_container(settings)
            self.run_async(container.startup())
            PlatformTask._video_container = container
        return PlatformTask._video_container

    @property
    def notification_container(self) -> NotificationServiceContainer:
        if PlatformTask._notification_container is None:
            container = build_notification_container(settings)
            self.run_async(container.startup())
            PlatformTask._notification_container = container
        return PlatformTask._notification_container

    @classmethod
    def shutdown(cls) -> None:
        if cls._loop is None or cls._loop.is_closed():
            return
        for container in (cls._video_container, cls._notification_container):
            if container is not None:
                cls._loop.run_until_complete(container.shutdown())
        cls._video_container = None
        cls._notification_container = None
        cls._loop.close()


@worker_process_init.connect
def configure_worker(**kwargs):
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_format == "json",
    )
    logger.info("🚀 Worker process started")


@worker_process_shutdown.connect
def release_worker_resources(**kwargs):
    PlatformTask.shutdown()


def _parse(schema, payload: Dict[str, Any], task_name: str) -> BaseModel:
    """Valida a mensagem; mensagens inválidas são descartadas sem retry."""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        logger.error(f"❌ Discarding invalid message for {task_name}: {e}")
        raise Reject(str(e), requeue=False) from e


@celery_app.task(bind=True, base=PlatformTask, name="video.process")
def process_video_task(self, payload: Dict[str, Any], attempts: int = 3) -> Dict[str, Any]:
    """
    Executa um processing job.

    O número de tentativas é controlado pelo ProcessingJob; o atraso de
    cada retry vem de `ProcessingJob.calculate_next_retry_delay()`. Entregas
    que encontram a concessão ocupada voltam quando ela expira.
    """
    message: VideoProcessingMessage = _parse(VideoProcessingMessage, payload, self.name)
    self.update_state(state="PROGRESS", meta={"progress": 0, "job_id": message.job_id})

    try:
        result = self.run_async(self.video_container.video_processor.handle(message))
    except JobLeaseBusyError as e:
        # Sem limite: a concessão expira e a entrega seguinte encerra o job
        countdown = e.retry_delay_ms / 1000
        logger.warning(f"⏳ Job {e.job_id} is leased, redelivering in {countdown:.0f}s")
        raise self.retry(exc=e, countdown=countdown, max_retries=None)
    except JobExecutionError as e:
        if e.retryable and self.request.retries < attempts - 1:
            countdown = (e.retry_delay_ms or 1000) / 1000
            logger.warning(f"🔄 Retrying job {e.job_id} in {countdown:.0f}s")
            raise self.retry(exc=e, countdown=countdown, max_retries=attempts - 1)
        raise

    return {
        "job_id": message.job_id,
        "status": "completed" if result else "skipped",
        "result": result.to_dict() if result else None,
    }


def _deliver(task: PlatformTask, handler, message: BaseModel, attempts: int) -> Dict[str, Any]:
    try:
        notification = task.run_async(handler(message))
    except CollaboratorError as e:
        if task.request.retries < attempts - 1:
            countdown = 2 ** task.request.retries
            logger.warning(f"🔄 Retrying {task.name} for user {message.user_id} in {countdown}s: {e}")
            raise task.retry(exc=e, countdown=countdown, max_retries=attempts - 1)
        raise

    if notification is None:
        return {"status": "skipped", "user_id": message.user_id}
    return {"status": notification.status.value, "notification_id": notification.id}


@celery_app.task(bind=True, base=PlatformTask, name="notifications.send_email")
def send_email_task(self, payload: Dict[str, Any], attempts: int = 3) -> Dict[str, Any]:
    message = _parse(EmailNotificationMessage, payload, self.name)
    processor = self.notification_container.notification_processor
    return _deliver(self, processor.handle_email, message, attempts)


@celery_app.task(bind=True, base=PlatformTask, name="notifications.send_push")
def send_push_task(self, payload: Dict[str, Any], attempts: int = 3) -> Dict[str, Any]:
    message = _parse(PushNotificationMessage, payload, self.name)
    processor = self.notification_container.notification_processor
    return _deliver(self, processor.handle_push, message, attempts)


@celery_app.task(bind=True, base=PlatformTask, name="video.cleanup_old_jobs")
def cleanup_old_jobs_task(self) -> Dict[str, Any]:
    """Remove jobs terminais antigos (agendado pelo beat)."""
    logger.info("🧹 Running processing jobs cleanup...")
    return self.run_async(self.video_container.cleanup_old_jobs.execute())
