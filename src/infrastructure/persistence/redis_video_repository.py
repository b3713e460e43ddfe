"""
Repositório de vídeos em Redis.
"""
import heapq
from typing import Dict, List, Optional

from loguru import logger
from redis.asyncio import Redis

from src.domain.entities import Video, VideoStatus
from src.domain.interfaces import IVideoRepository
from src.infrastructure.persistence.redis_base import RedisRepository


class RedisVideoRepository(RedisRepository[Video], IVideoRepository):
    """
    Vídeos em `video:<id>`, com índices:
    - `videos:user:<user_id>`: vídeos do usuário
    - `videos:status:<status>`: vídeos por status
    """

    key_prefix = "video"

    def __init__(self, redis: Redis):
        super().__init__(redis, Video.from_dict)

    @staticmethod
    def _user_index(user_id: str) -> str:
        return f"videos:user:{user_id}"

    @staticmethod
    def _status_index(status: VideoStatus) -> str:
        return f"videos:status:{status.value}"

    async def create(self, video: Video) -> Video:
        await self.save(video)
        logger.debug(f"💾 Video created: {video.id} (user={video.user_id})")
        return video

    async def save(self, video: Video) -> Video:
        score = self._score(video.created_at)
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(self._key(video.id), self._dump(video))
            pipe.zadd(self._user_index(video.user_id), {video.id: score})
            for status in VideoStatus:
                if status != video.status:
                    pipe.zrem(self._status_index(status), video.id)
            pipe.zadd(self._status_index(video.status), {video.id: score})
            await pipe.execute()
        return video

    async def find_by_id(self, video_id: str) -> Optional[Video]:
        return await self._get(video_id)

    async def _user_video_ids(self, user_id: str, status: Optional[VideoStatus]) -> List[str]:
        ids = await self.redis.zrevrange(self._user_index(user_id), 0, -1)
        if status is None:
            return ids
        with_status = set(await self.redis.zrange(self._status_index(status), 0, -1))
        return [video_id for video_id in ids if video_id in with_status]

    async def find_by_user_id(
        self,
        user_id: str,
        status: Optional[VideoStatus] = None,
        limit: int = 10,
        offset: int = 0
    ) -> List[Video]:
        ids = await self._user_video_ids(user_id, status)
        return await self._load_many(ids[offset:offset + limit])

    async def count_by_user_id(self, user_id: str, status: Optional[VideoStatus] = None) -> int:
        if status is None:
            return await self.redis.zcard(self._user_index(user_id))
        return len(await self._user_video_ids(user_id, status))

    async def find_by_status(self, status: VideoStatus, limit: Optional[int] = None) -> List[Video]:
        ids = await self.redis.zrange(self._status_index(status), 0, self._stop(limit))
        return await self._load_many(ids)

    async def find_pending_for_processing(self, limit: int = 10) -> List[Video]:
        pending = await self.redis.zrange(
            self._status_index(VideoStatus.PENDING), 0, limit - 1, withscores=True
        )
        queued = await self.redis.zrange(
            self._status_index(VideoStatus.QUEUED), 0, limit - 1, withscores=True
        )
        oldest = heapq.nsmallest(limit, pending + queued, key=lambda item: item[1])
        return await self._load_many([video_id for video_id, _ in oldest])

    async def count_by_status(self) -> Dict[str, int]:
        counts = {}
        for status in VideoStatus:
            counts[status.value] = await self.redis.zcard(self._status_index(status))
        return counts

    async def delete(self, video_id: str) -> bool:
        video = await self.find_by_id(video_id)
        if not video:
            return False

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._key(video_id))
            pipe.zrem(self._user_index(video.user_id), video_id)
            for status in VideoStatus:
                pipe.zrem(self._status_index(status), video_id)
            await pipe.execute()

        logger.info(f"🗑️  Video deleted: {video_id}")
        return True
