"""
Circuit Breaker para chamadas a serviços vizinhos.

O cliente do auth-service envolve cada requisição com `CircuitBreaker.call`.
Depois de `failure_threshold` falhas seguidas o circuito abre e as chamadas
são recusadas sem rede até `timeout_seconds`; em seguida, um número
limitado de chamadas de teste (HALF_OPEN) decide se o circuito fecha.

Roda em um único event loop: as transições acontecem entre awaits e não
precisam de lock.
"""
import time
from collections import deque
from enum import Enum
from typing import Any, Awaitable, Callable, Deque, Dict, Optional, Tuple, Type

from loguru import logger

from src.domain.exceptions import ServiceUnavailableError


class CircuitState(Enum):
    """Estados do Circuit Breaker."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpenError(ServiceUnavailableError):
    """Chamada recusada porque o circuito está aberto."""

    def __init__(self, service_name: str, retry_after: float):
        self.service_name = service_name
        self.retry_after = retry_after
        super().__init__(
            f"Circuit breaker OPEN for '{service_name}'. Retry after {retry_after:.0f}s"
        )


class CircuitBreaker:
    """
    Circuit Breaker assíncrono.

    Example:
        ```python
        breaker = CircuitBreaker(name="auth-service", failure_threshold=5)
        response = await breaker.call(client.get, "/users/42")
        ```
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        timeout_seconds: float = 60,
        half_open_max_calls: int = 3,
        success_threshold: int = 2,
        window_size: int = 10,
        expected_exceptions: Tuple[Type[BaseException], ...] = (Exception,)
    ):
        """
        Args:
            name: Serviço protegido (aparece nos logs e no erro)
            failure_threshold: Falhas seguidas que abrem o circuito
            timeout_seconds: Tempo em OPEN antes das chamadas de teste
            half_open_max_calls: Chamadas de teste permitidas em HALF_OPEN
            success_threshold: Sucessos em HALF_OPEN para fechar o circuito
            window_size: Últimas chamadas consideradas na taxa de falha
            expected_exceptions: Exceções que contam como falha do serviço
        """
        self.name = name
        self.failure_threshold = failure_threshold
        self.timeout_seconds = timeout_seconds
        self.half_open_max_calls = half_open_max_calls
        self.success_threshold = success_threshold
        self.expected_exceptions = expected_exceptions

        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self._trial_calls = 0
        self._trial_successes = 0
        self._opened_at: Optional[float] = None
        self._recent: Deque[bool] = deque(maxlen=window_size)
        self._totals = {"calls": 0, "successes": 0, "failures": 0, "rejected": 0}

    @property
    def retry_after(self) -> float:
        """Segundos até a próxima chamada de teste (0 fora de OPEN)."""
        if self.state != CircuitState.OPEN or self._opened_at is None:
            return 0.0
        elapsed = time.monotonic() - self._opened_at
        return max(0.0, self.timeout_seconds - elapsed)

    async def call(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        """
        Aguarda `func(*args, **kwargs)` se o circuito permitir.

        Raises:
            CircuitBreakerOpenError: Circuito aberto ou cota de teste esgotada
        """
        self._admit()

        try:
            result = await func(*args, **kwargs)
        except self.expected_exceptions as e:
            self._record_failure(e)
            raise

        self._record_success()
        return result

    def _admit(self) -> None:
        self._totals["calls"] += 1

        if self.state == CircuitState.OPEN and self.retry_after == 0:
            self._move_to(CircuitState.HALF_OPEN)

        if self.state == CircuitState.OPEN:
            self._reject(self.retry_after)

        if self.state == CircuitState.HALF_OPEN:
            if self._trial_calls >= self.half_open_max_calls:
                self._reject(float(self.timeout_seconds))
            self._trial_calls += 1

    def _reject(self, retry_after: float) -> None:
        self._totals["rejected"] += 1
        logger.warning(
            f"🚫 Circuit breaker rejected call: {self.name}",
            extra={"state": self.state.value, "retry_after": round(retry_after, 1)}
        )
        raise CircuitBreakerOpenError(self.name, retry_after)

    def _record_success(self) -> None:
        self._totals["successes"] += 1
        self._recent.append(True)

        if self.state == CircuitState.HALF_OPEN:
            self._trial_successes += 1
            if self._trial_successes >= self.success_threshold:
                self._move_to(CircuitState.CLOSED)
            return

        self.failure_count = 0

    def _record_failure(self, error: BaseException) -> None:
        self._totals["failures"] += 1
        self._recent.append(False)
        self.failure_count += 1

        logger.warning(
            f"Circuit breaker failure: {self.name} ({self.failure_count}/{self.failure_threshold})",
            extra={"state": self.state.value, "exception_type": type(error).__name__}
        )

        if self.state == CircuitState.HALF_OPEN or self.failure_count >= self.failure_threshold:
            self._move_to(CircuitState.OPEN)

    def _move_to(self, state: CircuitState) -> None:
        previous, self.state = self.state, state
        self._trial_calls = 0
        self._trial_successes = 0

        if state == CircuitState.OPEN:
            self._opened_at = time.monotonic()
            logger.error(f"⚠️ Circuit breaker OPENED: {self.name} ({previous.value} -> open)")
            return

        if state == CircuitState.CLOSED:
            self.failure_count = 0
            self._opened_at = None
        logger.info(f"🔄 Circuit breaker {self.name}: {previous.value} -> {state.value}")

    def reset(self) -> None:
        """Fecha o circuito manualmente e descarta o histórico recente."""
        logger.info(f"Circuit breaker manually reset: {self.name}")
        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self._trial_calls = 0
        self._trial_successes = 0
        self._opened_at = None
        self._recent.clear()

    def get_stats(self) -> Dict[str, Any]:
        failure_rate = 0.0
        if self._recent:
            failure_rate = self._recent.count(False) / len(self._recent) * 100

        return {
            "name": self.name,
            "state": self.state.value,
            "total_calls": self._totals["calls"],
            "total_successes": self._totals["successes"],
            "total_failures": self._totals["failures"],
            "rejected_calls": self._totals["rejected"],
            "current_failure_count": self.failure_count,
            "failure_threshold": self.failure_threshold,
            "retry_after_seconds": round(self.retry_after, 1),
            "failure_rate_percent": round(failure_rate, 2),
        }
