"""
Use Case: Cleanup Old Jobs
Remove processing jobs terminais antigos.
"""
from loguru import logger

from src.domain.interfaces import IProcessingJobRepository


class CleanupOldJobsUseCase:
    """Use Case para limpeza de jobs antigos."""

    def __init__(
        self,
        job_repository: IProcessingJobRepository,
        retention_days: int = 30
    ):
        """
        Inicializa o use case.

        Args:
            job_repository: Repositório de processing jobs
            retention_days: Idade máxima dos jobs terminais em dias
        """
        self.job_repository = job_repository
        self.retention_days = retention_days

    async def execute(self) -> dict:
        """
        Executa a limpeza.

        Returns:
            dict: Informações sobre a limpeza
        """
        logger.info(f"Starting job cleanup: retention={self.retention_days}d")

        removed_count = await self.job_repository.cleanup_old_jobs(self.retention_days)

        logger.info(f"Job cleanup completed: {removed_count} jobs removed")
        return {
            "success": True,
            "removed_count": removed_count,
            "retention_days": self.retention_days,
        }
