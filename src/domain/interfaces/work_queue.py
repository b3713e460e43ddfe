"""
Interface: IWorkQueue
Contrato da fila de trabalho.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class QueueJobState:
    """Estado de uma mensagem na fila."""

    state: str
    progress: Optional[float] = None
    error: Optional[str] = None


class IWorkQueue(ABC):
    """Interface para publicação de trabalho em background."""

    @abstractmethod
    async def enqueue(
        self,
        job_type: str,
        payload: Dict[str, Any],
        priority: int = 0,
        delay: int = 0,
        attempts: int = 3
    ) -> str:
        """
        Publica uma mensagem.

        Args:
            job_type: Tipo da mensagem (ex: video-processing)
            payload: Corpo validado contra o schema do tipo
            priority: Prioridade da política (maior = mais urgente)
            delay: Atraso em milissegundos antes da execução
            attempts: Orçamento total de tentativas

        Returns:
            str: ID da mensagem na fila

        Raises:
            QueueError: Se a publicação falhar
        """
        pass

    @abstractmethod
    async def status(self, queue_job_id: str) -> QueueJobState:
        pass

    @abstractmethod
    async def remove(self, queue_job_id: str) -> bool:
        pass
