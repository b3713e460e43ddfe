"""
Testes unitários para CeleryNotificationDispatcher e templates de e-mail.
"""
import pytest

from src.application.dtos import SEND_EMAIL, SEND_PUSH, EmailNotificationMessage, PushNotificationMessage
from src.domain.exceptions import QueueError
from src.infrastructure.notifications import CeleryNotificationDispatcher
from src.infrastructure.notifications.email_templates import render_email


class TestCeleryNotificationDispatcher:
    """Publicação de send-email e send-push."""

    @pytest.mark.asyncio
    async def test_complete_publishes_email_and_push(self, work_queue):
        dispatcher = CeleryNotificationDispatcher(work_queue)

        await dispatcher.notify_complete("user-1", "video-1", "https://storage.test/k")

        email, push = work_queue.messages
        assert email["job_type"] == SEND_EMAIL
        assert push["job_type"] == SEND_PUSH
        assert email["attempts"] == 3

        email_message = EmailNotificationMessage.model_validate(email["payload"])
        assert email_message.template == "video-processing-complete"
        assert email_message.context["download_url"] == "https://storage.test/k"
        assert email_message.user is None

        push_message = PushNotificationMessage.model_validate(push["payload"])
        assert push_message.data["click_action"] == "/videos/video-1"

    @pytest.mark.asyncio
    async def test_failed_includes_error_and_profile(self, work_queue, user_profile):
        dispatcher = CeleryNotificationDispatcher(work_queue, support_email="help@example.com")

        await dispatcher.notify_failed("user-1", "video-1", "FFmpeg command failed", user_profile)

        email = EmailNotificationMessage.model_validate(work_queue.messages[0]["payload"])
        assert email.template == "video-processing-failed"
        assert email.context["error"] == "FFmpeg command failed"
        assert email.context["support_url"] == "mailto:help@example.com"
        assert email.user.email == "ana@example.com"

    @pytest.mark.asyncio
    async def test_push_published_when_email_enqueue_fails(self, work_queue, queue_error):
        enqueue = work_queue.enqueue

        async def email_broker_down(job_type, payload, **kwargs):
            if job_type == SEND_EMAIL:
                raise queue_error
            return await enqueue(job_type, payload, **kwargs)

        work_queue.enqueue = email_broker_down

        await CeleryNotificationDispatcher(work_queue).notify_failed("user-1", "video-1", "boom")

        [push] = work_queue.messages
        assert push["job_type"] == SEND_PUSH

    @pytest.mark.asyncio
    async def test_queue_error_propagates_when_no_channel_published(self, work_queue, queue_error):
        work_queue.error = queue_error

        with pytest.raises(QueueError):
            await CeleryNotificationDispatcher(work_queue).notify_complete("user-1", "video-1", None)


class TestEmailTemplates:
    """Renderização dos e-mails."""

    def test_complete_with_download_link(self):
        html = render_email("video-processing-complete", {
            "user_name": "Ana",
            "video_id": "video-1",
            "download_url": "https://storage.test/k?a=1&b=2",
        })

        assert "Olá Ana" in html
        assert 'href="https://storage.test/k?a=1&amp;b=2"' in html

    def test_complete_without_download_link(self):
        html = render_email("video-processing-complete", {"video_id": "video-1"})

        assert "Olá usuário" in html
        assert "href" not in html

    def test_failed_escapes_error(self):
        html = render_email("video-processing-failed", {"error": "<script>alert(1)</script>"})

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_unknown_template_uses_default(self):
        html = render_email("newsletter", {"title": "Novidades", "message": "Olá"})

        assert "<h1>Novidades</h1>" in html
        assert "<p>Olá</p>" in html
