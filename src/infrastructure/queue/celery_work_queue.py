"""
Work Queue sobre Celery.

Cada tipo de mensagem tem task, fila e schema próprios; o payload é
validado antes da publicação.
"""
import asyncio
from functools import partial
from typing import Any, Dict, Type

from celery import Celery
from celery.result import AsyncResult
from loguru import logger
from pydantic import BaseModel, ValidationError as PydanticValidationError

from src.application.dtos import (
    SEND_EMAIL,
    SEND_PUSH,
    VIDEO_PROCESSING,
    EmailNotificationMessage,
    PushNotificationMessage,
    VideoProcessingMessage,
)
from src.domain.exceptions import QueueError
from src.domain.interfaces import IWorkQueue, QueueJobState
from src.infrastructure.queue.celery_config import NOTIFICATIONS_QUEUE, VIDEO_PROCESSING_QUEUE

TASK_ROUTES: Dict[str, Dict[str, Any]] = {
    VIDEO_PROCESSING: {
        "task": "video.process",
        "queue": VIDEO_PROCESSING_QUEUE,
        "schema": VideoProcessingMessage,
    },
    SEND_EMAIL: {
        "task": "notifications.send_email",
        "queue": NOTIFICATIONS_QUEUE,
        "schema": EmailNotificationMessage,
    },
    SEND_PUSH: {
        "task": "notifications.send_push",
        "queue": NOTIFICATIONS_QUEUE,
        "schema": PushNotificationMessage,
    },
}

MAX_BROKER_PRIORITY = 9
PRIORITY_STEP = 15


def to_broker_priority(priority: int) -> int:
    """
    Converte a prioridade da política (maior = mais urgente) para a escala
    do broker (0..9, 0 = mais urgente).
    """
    return MAX_BROKER_PRIORITY - min(MAX_BROKER_PRIORITY, max(priority, 0) // PRIORITY_STEP)


class CeleryWorkQueue(IWorkQueue):
    """Publica mensagens como tasks Celery."""

    def __init__(self, app: Celery):
        self.app = app

    async def enqueue(
        self,
        job_type: str,
        payload: Dict[str, Any],
        priority: int = 0,
        delay: int = 0,
        attempts: int = 3
    ) -> str:
        route = TASK_ROUTES.get(job_type)
        if route is None:
            raise QueueError(f"Unknown job type: {job_type}")

        schema: Type[BaseModel] = route["schema"]
        try:
            message = schema.model_validate(payload)
        except PydanticValidationError as e:
            raise QueueError(f"Invalid {job_type} payload: {e}") from e

        send = partial(
            self.app.send_task,
            route["task"],
            args=[message.model_dump(mode="json")],
            kwargs={"attempts": attempts},
            queue=route["queue"],
            priority=to_broker_priority(priority),
            countdown=delay / 1000 if delay else None,
        )

        try:
            loop = asyncio.get_event_loop()
            result = await loop.run_in_executor(None, send)
        except Exception as e:
            logger.error(f"❌ Failed to enqueue {job_type}: {e}")
            raise QueueError(f"Failed to enqueue {job_type}: {e}") from e

        logger.debug(f"📨 Enqueued {job_type} as {route['task']} (id={result.id}, priority={priority})")
        return result.id

    async def status(self, queue_job_id: str) -> QueueJobState:
        result = AsyncResult(queue_job_id, app=self.app)
        info = result.info
        progress = info.get("progress") if isinstance(info, dict) else None
        error = str(info) if result.state == "FAILURE" and info else None
        return QueueJobState(state=result.state, progress=progress, error=error)

    async def remove(self, queue_job_id: str) -> bool:
        self.app.control.revoke(queue_job_id)
        logger.info(f"Revoked queued task {queue_job_id}")
        return True
