"""
Cliente HTTP do serviço de identidade (auth-service).

Nunca bloqueia notificações por indisponibilidade do serviço: falhas de
rede ou circuito aberto resultam em um perfil degradado.
"""
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from src.domain.exceptions import DegradedDependencyError
from src.domain.interfaces import IUserProfileProvider
from src.domain.value_objects import NotificationPreferences, UserProfile
from src.infrastructure.utils import CircuitBreaker, CircuitBreakerOpenError

SERVICE_NAME = "auth-service"


class AuthServiceClient(IUserProfileProvider):
    """Consulta perfis em `GET {base_url}/users/{id}`."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        max_retries: int = 2,
        circuit_breaker: Optional[CircuitBreaker] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Inicializa o cliente.

        Args:
            base_url: URL base do auth-service
            timeout: Timeout por requisição em segundos
            max_retries: Retentativas de conexão do transport
            circuit_breaker: Circuit breaker compartilhado
            client: Cliente httpx pré-construído (testes)
        """
        self.base_url = base_url.rstrip("/")
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            name=SERVICE_NAME,
            expected_exceptions=(httpx.TransportError, httpx.HTTPStatusError),
        )
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            transport=httpx.AsyncHTTPTransport(retries=max_retries),
            headers={"Content-Type": "application/json"},
        )

    async def close(self) -> None:
        """Fecha cliente HTTP"""
        await self.client.aclose()

    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        try:
            return await self._fetch_user(user_id)
        except DegradedDependencyError as e:
            logger.warning(
                f"⚠️ Using degraded profile for user {user_id}: {e.reason}",
                extra={"user_id": user_id, "service": SERVICE_NAME}
            )
            return UserProfile.degraded(user_id)

    async def _fetch_user(self, user_id: str) -> Optional[UserProfile]:
        """
        Raises:
            DegradedDependencyError: Se o serviço estiver inacessível
        """
        try:
            response = await self.circuit_breaker.call(self._get, f"/users/{user_id}")
        except CircuitBreakerOpenError as e:
            raise DegradedDependencyError(SERVICE_NAME, str(e)) from e
        except httpx.HTTPStatusError as e:
            raise DegradedDependencyError(
                SERVICE_NAME, f"HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise DegradedDependencyError(SERVICE_NAME, str(e) or type(e).__name__) from e

        if response is None:
            logger.warning(f"User not found: {user_id}")
            return None

        try:
            body = response.json()
            data = body.get("data") if isinstance(body, dict) and "data" in body else body
            if not data or (isinstance(body, dict) and body.get("success") is False):
                return None
            return self._to_profile(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise DegradedDependencyError(SERVICE_NAME, f"Malformed user payload: {e}") from e

    async def _get(self, path: str) -> Optional[httpx.Response]:
        """GET que trata 404 como resposta válida (usuário inexistente)."""
        response = await self.client.get(f"{self.base_url}{path}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response

    @staticmethod
    def _to_profile(data: Dict[str, Any]) -> UserProfile:
        preferences = data.get("preferences") or {}
        return UserProfile(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name") or "",
            is_active=data.get("isActive", data.get("is_active", True)),
            preferences=NotificationPreferences(
                email=preferences.get("emailNotifications", True),
                push=preferences.get("pushNotifications", True),
                sms=preferences.get("smsNotifications", False),
            ),
        )
