"""Utils module."""
from src.infrastructure.utils.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)

__all__ = ["CircuitBreaker", "CircuitBreakerOpenError", "CircuitState"]
