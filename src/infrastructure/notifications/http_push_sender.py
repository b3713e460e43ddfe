"""
Envio de push notifications via gateway HTTP (FCM/OneSignal proxy).
"""
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from src.domain.exceptions import NotificationDeliveryError
from src.domain.interfaces import IPushSender

DEFAULT_ICON = "/assets/icons/default-notification.png"


class HttpPushSender(IPushSender):
    """Publica o payload de push no gateway configurado."""

    def __init__(self, gateway_url: Optional[str], timeout: float = 10.0, retries: int = 2):
        """
        Inicializa o sender. Sem gateway configurado, os pushes são apenas
        registrados em log.
        """
        self.gateway_url = gateway_url
        self.client = httpx.AsyncClient(
            timeout=timeout,
            transport=httpx.AsyncHTTPTransport(retries=retries),
        )

    async def send(
        self,
        user_id: str,
        title: str,
        body: str,
        data: Optional[Dict[str, Any]] = None
    ) -> None:
        data = data or {}
        payload = {
            "to": f"user_{user_id}",
            "title": title,
            "body": body,
            "icon": data.get("icon", DEFAULT_ICON),
            "click_action": data.get("click_action"),
            "data": data,
            "timestamp": datetime.utcnow().isoformat(),
        }

        if not self.gateway_url:
            logger.info(f"Push gateway not configured, push to user {user_id} logged only: {title}")
            return

        try:
            response = await self.client.post(self.gateway_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise NotificationDeliveryError("push", str(e)) from e

        logger.info(f"📱 Push sent to user {user_id}: {title}")

    async def close(self) -> None:
        await self.client.aclose()
