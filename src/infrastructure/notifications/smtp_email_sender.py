"""
Envio de e-mails via SMTP.
"""
import asyncio
import smtplib
from email.message import EmailMessage
from typing import Any, Dict, Optional

from loguru import logger

from src.domain.exceptions import NotificationDeliveryError
from src.domain.interfaces import IEmailSender
from src.infrastructure.notifications.email_templates import render_email


class SmtpEmailSender(IEmailSender):
    """Envia e-mails HTML por SMTP (no executor padrão)."""

    def __init__(
        self,
        host: Optional[str],
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: str = "noreply@videoplatform.com",
        use_tls: bool = True,
        timeout: float = 30.0
    ):
        """
        Inicializa o sender. Sem host configurado, os e-mails são apenas
        registrados em log.
        """
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("Este e-mail requer um cliente com suporte a HTML.")
        message.add_alternative(html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username and self.password:
                smtp.login(self.username, self.password)
            smtp.send_message(message)

    async def send(
        self,
        to: str,
        subject: str,
        template: str,
        context: Dict[str, Any]
    ) -> None:
        html = render_email(template, context)

        if not self.host:
            logger.warning(f"SMTP not configured, email to {to} logged only: {subject}")
            return

        message = self._build_message(to, subject, html)
        try:
            loop = asyncio.get_event_loop()
            await loop.run_in_executor(None, self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationDeliveryError("email", str(e)) from e

        logger.info(f"📧 Email sent to {to}: {subject}")
