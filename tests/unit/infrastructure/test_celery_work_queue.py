"""
Testes unitários para CeleryWorkQueue.
"""
from unittest.mock import Mock

import pytest

from src.application.dtos import SEND_EMAIL, VIDEO_PROCESSING
from src.domain.exceptions import QueueError
from src.infrastructure.queue import CeleryWorkQueue, to_broker_priority

VIDEO_PAYLOAD = {
    "job_id": "job-1",
    "video_id": "video-1",
    "user_id": "user-1",
    "input_path": "/data/uploads/user-1/stored.mp4",
}


@pytest.fixture
def celery_app():
    app = Mock()
    app.send_task.return_value = Mock(id="task-123")
    return app


class TestBrokerPriority:
    """Conversão para a escala do broker."""

    @pytest.mark.parametrize("priority,expected", [
        (0, 9),
        (1, 9),
        (14, 9),
        (15, 8),
        (30, 7),
        (70, 5),
        (120, 1),
        (135, 0),
        (500, 0),
        (-10, 9),
    ])
    def test_mapping(self, priority, expected):
        assert to_broker_priority(priority) == expected

    def test_more_urgent_never_maps_lower(self):
        mapped = [to_broker_priority(p) for p in range(0, 200)]
        assert mapped == sorted(mapped, reverse=True)


class TestCeleryWorkQueue:
    """Publicação de tasks."""

    @pytest.mark.asyncio
    async def test_enqueue_video_processing(self, celery_app):
        queue = CeleryWorkQueue(celery_app)

        queue_job_id = await queue.enqueue(VIDEO_PROCESSING, VIDEO_PAYLOAD, priority=30, attempts=3)

        assert queue_job_id == "task-123"
        args, kwargs = celery_app.send_task.call_args
        assert args == ("video.process",)
        assert kwargs["queue"] == "video_processing"
        assert kwargs["priority"] == 7
        assert kwargs["kwargs"] == {"attempts": 3}
        assert kwargs["countdown"] is None

        [payload] = kwargs["args"]
        assert payload["message_type"] == "video-processing"
        assert payload["processing_options"]["frames_per_second"] == 1

    @pytest.mark.asyncio
    async def test_enqueue_with_delay(self, celery_app):
        queue = CeleryWorkQueue(celery_app)
        payload = {"user_id": "user-1", "subject": "Oi", "template": "default"}

        await queue.enqueue(SEND_EMAIL, payload, delay=2500)

        kwargs = celery_app.send_task.call_args.kwargs
        assert celery_app.send_task.call_args.args == ("notifications.send_email",)
        assert kwargs["queue"] == "notifications"
        assert kwargs["countdown"] == 2.5

    @pytest.mark.asyncio
    async def test_unknown_job_type(self, celery_app):
        with pytest.raises(QueueError, match="Unknown job type"):
            await CeleryWorkQueue(celery_app).enqueue("transcode", {})

        celery_app.send_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_payload_not_published(self, celery_app):
        with pytest.raises(QueueError, match="Invalid video-processing payload"):
            await CeleryWorkQueue(celery_app).enqueue(VIDEO_PROCESSING, {"job_id": "job-1"})

        celery_app.send_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_broker_failure_wrapped(self, celery_app):
        celery_app.send_task.side_effect = ConnectionError("broker down")

        with pytest.raises(QueueError, match="broker down"):
            await CeleryWorkQueue(celery_app).enqueue(VIDEO_PROCESSING, VIDEO_PAYLOAD)
