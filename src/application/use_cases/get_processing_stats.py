"""
Use Case: Get Processing Stats
Contagens de jobs e vídeos por status.
"""
from src.application.dtos import ProcessingStatsDTO
from src.domain.interfaces import IProcessingJobRepository, IVideoRepository


class GetProcessingStatsUseCase:
    """Use Case para estatísticas do pipeline."""

    def __init__(
        self,
        video_repository: IVideoRepository,
        job_repository: IProcessingJobRepository
    ):
        self.video_repository = video_repository
        self.job_repository = job_repository

    async def execute(self) -> ProcessingStatsDTO:
        jobs = await self.job_repository.get_job_stats()
        videos = await self.video_repository.count_by_status()
        return ProcessingStatsDTO(jobs=jobs, videos=videos)
