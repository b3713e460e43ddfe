"""Notification adapters (despacho, e-mail e push)."""
from src.infrastructure.notifications.celery_notification_dispatcher import CeleryNotificationDispatcher
from src.infrastructure.notifications.smtp_email_sender import SmtpEmailSender
from src.infrastructure.notifications.http_push_sender import HttpPushSender
from src.infrastructure.notifications.email_templates import render_email

__all__ = [
    "CeleryNotificationDispatcher",
    "SmtpEmailSender",
    "HttpPushSender",
    "render_email",
]
