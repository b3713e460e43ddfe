"""
Execução best-effort de efeitos colaterais.

Usado para operações que nunca devem falhar a operação principal
(URLs de download em listagens, notificações pós-processamento, leitura
de metadados). A falha é registrada em log e devolvida ao chamador no
Outcome, nunca propagada.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from loguru import logger

T = TypeVar("T")


@dataclass
class Outcome(Generic[T]):
    """Resultado capturado de uma operação best-effort."""

    operation: str
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


async def attempt(
    operation: str,
    func: Callable[[], Awaitable[T]],
    **context: Any
) -> Outcome[T]:
    """
    Executa `func` capturando qualquer falha.

    Args:
        operation: Descrição da operação (para logs)
        func: Fábrica da corrotina a executar
        **context: Campos extras de log (video_id, job_id...)

    Returns:
        Outcome: Valor em caso de sucesso ou a exceção capturada
    """
    try:
        value = await func()
    except Exception as e:
        logger.warning(
            f"⚠️ Best-effort operation '{operation}' failed: {e}",
            extra={"operation": operation, "error_type": type(e).__name__, **context}
        )
        return Outcome(operation=operation, error=e)

    return Outcome(operation=operation, value=value)
