"""
Testes unitários para NotificationProcessor.
"""
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from src.application.dtos import EmailNotificationMessage, PushNotificationMessage, UserProfileMessage
from src.application.use_cases import SendNotificationUseCase
from src.domain.entities import NotificationStatus
from src.domain.exceptions import NotificationDeliveryError
from src.domain.interfaces import IEmailSender, IPushSender, IUserProfileProvider
from src.domain.value_objects import NotificationPreferences
from src.infrastructure.processors import NotificationProcessor


@pytest.fixture
def user_provider(user_profile):
    provider = AsyncMock(spec=IUserProfileProvider)
    provider.get_user_by_id.return_value = user_profile
    return provider


@pytest.fixture
def email_sender():
    return AsyncMock(spec=IEmailSender)


@pytest.fixture
def push_sender():
    return AsyncMock(spec=IPushSender)


@pytest.fixture
def processor(notification_repository, user_provider, email_sender, push_sender):
    send_notification = SendNotificationUseCase(
        notification_repository, user_provider, email_sender, push_sender
    )
    return NotificationProcessor(send_notification, user_provider)


def _email(**overrides):
    fields = {
        "user_id": "user-1",
        "subject": "Vídeo processado com sucesso",
        "template": "video_complete",
        "context": {"video_id": "v1", "download_url": "https://storage.test/k"},
    }
    fields.update(overrides)
    return EmailNotificationMessage(**fields)


class TestEmailMessages:
    """Testa mensagens send-email."""

    @pytest.mark.asyncio
    async def test_email_delivered(self, processor, email_sender, notification_repository):
        result = await processor.handle_email(_email())

        assert result.status == NotificationStatus.SENT
        to, subject, template, context = email_sender.send.await_args.args
        assert to == "ana@example.com"
        assert subject == "Vídeo processado com sucesso"
        assert template == "video_complete"
        assert context["download_url"] == "https://storage.test/k"

        stored = notification_repository.notifications[result.id]
        assert stored.message == "Vídeo processado com sucesso"
        assert stored.data["template"] == "video_complete"

    @pytest.mark.asyncio
    async def test_cached_profile_skips_lookup(self, processor, user_provider, email_sender):
        cached = UserProfileMessage(id="user-1", email="cached@example.com", name="Cached")

        await processor.handle_email(_email(user=cached))

        user_provider.get_user_by_id.assert_not_awaited()
        assert email_sender.send.await_args.args[0] == "cached@example.com"

    @pytest.mark.asyncio
    async def test_unknown_user_skipped(self, processor, user_provider, email_sender, notification_repository):
        user_provider.get_user_by_id.return_value = None

        result = await processor.handle_email(_email())

        assert result is None
        email_sender.send.assert_not_awaited()
        assert notification_repository.notifications == {}

    @pytest.mark.asyncio
    async def test_inactive_user_skipped(self, processor, user_provider, user_profile, email_sender):
        user_provider.get_user_by_id.return_value = replace(user_profile, is_active=False)

        assert await processor.handle_email(_email()) is None
        email_sender.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delivery_failure_propagates(self, processor, email_sender, notification_repository):
        email_sender.send.side_effect = NotificationDeliveryError("email", "SMTP timeout")

        with pytest.raises(NotificationDeliveryError):
            await processor.handle_email(_email())

        [stored] = notification_repository.notifications.values()
        assert stored.status == NotificationStatus.FAILED


class TestPushMessages:
    """Testa mensagens send-push."""

    @pytest.mark.asyncio
    async def test_push_delivered(self, processor, push_sender):
        message = PushNotificationMessage(
            user_id="user-1", title="Vídeo pronto", body="Seus frames estão prontos", data={"video_id": "v1"}
        )

        result = await processor.handle_push(message)

        assert result.status == NotificationStatus.SENT
        push_sender.send.assert_awaited_once_with(
            "user-1", "Vídeo pronto", "Seus frames estão prontos", {"video_id": "v1"}
        )

    @pytest.mark.asyncio
    async def test_push_disabled_skipped(self, processor, user_provider, user_profile, push_sender):
        user_provider.get_user_by_id.return_value = replace(
            user_profile, preferences=NotificationPreferences(email=True, push=False)
        )
        message = PushNotificationMessage(user_id="user-1", title="t", body="b")

        assert await processor.handle_push(message) is None
        push_sender.send.assert_not_awaited()
