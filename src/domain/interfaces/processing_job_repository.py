"""
Interface: IProcessingJobRepository
Contrato de persistência de processing jobs.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from src.domain.entities import JobStatus, ProcessingJob


class IProcessingJobRepository(ABC):
    """Interface para persistência de processing jobs."""

    @abstractmethod
    async def create(self, job: ProcessingJob) -> ProcessingJob:
        pass

    @abstractmethod
    async def save(self, job: ProcessingJob) -> ProcessingJob:
        pass

    @abstractmethod
    async def find_by_id(self, job_id: str) -> Optional[ProcessingJob]:
        pass

    @abstractmethod
    async def find_by_video_id(self, video_id: str) -> List[ProcessingJob]:
        """Jobs de um vídeo, mais recentes primeiro."""
        pass

    @abstractmethod
    async def find_by_status(self, status: JobStatus, limit: Optional[int] = None) -> List[ProcessingJob]:
        pass

    @abstractmethod
    async def get_job_stats(self) -> Dict[str, int]:
        """Contagem de jobs por status (inclui 'total')."""
        pass

    @abstractmethod
    async def cleanup_old_jobs(self, older_than_days: int = 30) -> int:
        """
        Remove jobs terminais (COMPLETED/FAILED) mais antigos que o limite.

        Returns:
            int: Número de jobs removidos
        """
        pass

    @abstractmethod
    async def acquire_lock(self, job_id: str, ttl_seconds: int) -> bool:
        """
        Tenta obter a concessão exclusiva de execução do job.

        Returns:
            bool: True se a concessão foi obtida
        """
        pass

    @abstractmethod
    async def release_lock(self, job_id: str) -> None:
        pass

    @abstractmethod
    async def lock_ttl(self, job_id: str) -> int:
        """
        Segundos restantes da concessão do job (0 se não houver concessão).
        """
        pass
