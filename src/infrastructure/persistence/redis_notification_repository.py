"""
Repositório de notificações em Redis.
"""
from typing import List, Optional

from redis.asyncio import Redis

from src.domain.entities import Notification
from src.domain.interfaces import INotificationRepository
from src.infrastructure.persistence.redis_base import RedisRepository


class RedisNotificationRepository(RedisRepository[Notification], INotificationRepository):
    """Notificações em `notification:<id>`, indexadas por usuário."""

    key_prefix = "notification"

    def __init__(self, redis: Redis):
        super().__init__(redis, Notification.from_dict)

    @staticmethod
    def _user_index(user_id: str) -> str:
        return f"notifications:user:{user_id}"

    async def create(self, notification: Notification) -> Notification:
        return await self.save(notification)

    async def save(self, notification: Notification) -> Notification:
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(self._key(notification.id), self._dump(notification))
            pipe.zadd(
                self._user_index(notification.user_id),
                {notification.id: self._score(notification.created_at)}
            )
            await pipe.execute()
        return notification

    async def find_by_id(self, notification_id: str) -> Optional[Notification]:
        return await self._get(notification_id)

    async def find_by_user_id(self, user_id: str, limit: int = 10, offset: int = 0) -> List[Notification]:
        ids = await self.redis.zrevrange(self._user_index(user_id), offset, self._stop(limit, offset))
        return await self._load_many(ids)

    async def count_by_user_id(self, user_id: str) -> int:
        return await self.redis.zcard(self._user_index(user_id))
