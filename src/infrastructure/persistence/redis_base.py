"""
Base dos repositórios Redis.

Cada entidade é gravada como JSON em `<prefix>:<id>`; índices secundários
são sorted sets pontuados pelo timestamp de criação.
"""
import json
from datetime import datetime
from typing import Callable, Generic, List, Optional, TypeVar

from redis.asyncio import Redis

T = TypeVar("T")


class RedisRepository(Generic[T]):
    """Operações comuns de serialização e leitura em lote."""

    key_prefix: str = ""

    def __init__(self, redis: Redis, factory: Callable[[dict], T]):
        """
        Args:
            redis: Cliente redis.asyncio (decode_responses=True)
            factory: Reconstrói a entidade a partir do dicionário persistido
        """
        self.redis = redis
        self._factory = factory

    def _key(self, entity_id: str) -> str:
        return f"{self.key_prefix}:{entity_id}"

    @staticmethod
    def _score(created_at: datetime) -> float:
        return created_at.timestamp()

    @staticmethod
    def _dump(entity) -> str:
        return json.dumps(entity.to_dict())

    async def _get(self, entity_id: str) -> Optional[T]:
        data = await self.redis.get(self._key(entity_id))
        if not data:
            return None
        return self._factory(json.loads(data))

    async def _load_many(self, ids: List[str]) -> List[T]:
        """Carrega entidades preservando a ordem dos IDs."""
        if not ids:
            return []
        values = await self.redis.mget([self._key(entity_id) for entity_id in ids])
        return [self._factory(json.loads(value)) for value in values if value]

    @staticmethod
    def _stop(limit: Optional[int], offset: int = 0) -> int:
        """Índice final (inclusivo) para ZRANGE."""
        if limit is None:
            return -1
        return offset + limit - 1
