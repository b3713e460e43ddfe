"""
Repositório de processing jobs em Redis.
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from loguru import logger
from redis.asyncio import Redis

from src.domain.entities import JobStatus, ProcessingJob
from src.domain.interfaces import IProcessingJobRepository
from src.infrastructure.persistence.redis_base import RedisRepository

TERMINAL_STATUSES = (JobStatus.COMPLETED, JobStatus.FAILED)


class RedisProcessingJobRepository(RedisRepository[ProcessingJob], IProcessingJobRepository):
    """
    Jobs em `processing_job:<id>`, com índices:
    - `processing_jobs:video:<video_id>`: jobs de um vídeo
    - `processing_jobs:status:<status>`: jobs por status

    A concessão de execução fica em `processing_job:<id>:lock` (SET NX EX).
    """

    key_prefix = "processing_job"

    def __init__(self, redis: Redis):
        super().__init__(redis, ProcessingJob.from_dict)

    @staticmethod
    def _video_index(video_id: str) -> str:
        return f"processing_jobs:video:{video_id}"

    @staticmethod
    def _status_index(status: JobStatus) -> str:
        return f"processing_jobs:status:{status.value}"

    def _lock_key(self, job_id: str) -> str:
        return f"{self._key(job_id)}:lock"

    async def create(self, job: ProcessingJob) -> ProcessingJob:
        await self.save(job)
        logger.debug(f"💾 Processing job created: {job.id} (video={job.video_id})")
        return job

    async def save(self, job: ProcessingJob) -> ProcessingJob:
        score = self._score(job.created_at)
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(self._key(job.id), self._dump(job))
            pipe.zadd(self._video_index(job.video_id), {job.id: score})
            for status in JobStatus:
                if status != job.status:
                    pipe.zrem(self._status_index(status), job.id)
            pipe.zadd(self._status_index(job.status), {job.id: score})
            await pipe.execute()
        return job

    async def find_by_id(self, job_id: str) -> Optional[ProcessingJob]:
        return await self._get(job_id)

    async def find_by_video_id(self, video_id: str) -> List[ProcessingJob]:
        ids = await self.redis.zrevrange(self._video_index(video_id), 0, -1)
        return await self._load_many(ids)

    async def find_by_status(self, status: JobStatus, limit: Optional[int] = None) -> List[ProcessingJob]:
        ids = await self.redis.zrange(self._status_index(status), 0, self._stop(limit))
        return await self._load_many(ids)

    async def get_job_stats(self) -> Dict[str, int]:
        stats = {}
        for status in JobStatus:
            stats[status.value] = await self.redis.zcard(self._status_index(status))
        stats["total"] = sum(stats.values())
        return stats

    async def cleanup_old_jobs(self, older_than_days: int = 30) -> int:
        cutoff = (datetime.utcnow() - timedelta(days=older_than_days)).timestamp()
        removed = 0

        for status in TERMINAL_STATUSES:
            ids = await self.redis.zrangebyscore(self._status_index(status), "-inf", cutoff)
            for job in await self._load_many(ids):
                async with self.redis.pipeline(transaction=True) as pipe:
                    pipe.delete(self._key(job.id))
                    pipe.zrem(self._video_index(job.video_id), job.id)
                    pipe.zrem(self._status_index(status), job.id)
                    await pipe.execute()
                removed += 1

        if removed:
            logger.info(f"🧹 Removed {removed} processing jobs older than {older_than_days} days")
        return removed

    async def acquire_lock(self, job_id: str, ttl_seconds: int) -> bool:
        acquired = await self.redis.set(self._lock_key(job_id), "1", nx=True, ex=ttl_seconds)
        return bool(acquired)

    async def release_lock(self, job_id: str) -> None:
        await self.redis.delete(self._lock_key(job_id))

    async def lock_ttl(self, job_id: str) -> int:
        # TTL retorna -2 sem chave e -1 sem expiração
        remaining = await self.redis.ttl(self._lock_key(job_id))
        return max(0, remaining)
