import json
import logging

import redis.asyncio as redis

from bloglist.config import settings

logger = logging.getLogger(__name__)

BLOG_LIST_KEY = "blogs:list"


def blog_detail_key(blog_id: str) -> str:
    return f"blogs:detail:{blog_id}"


class CacheManager:
    """
    Cache-aside store for blog reads, backed by Redis.

    Redis is optional: with no connection every read is a miss and every
    write or invalidation is a no-op.  Redis errors are logged at DEBUG
    and treated the same way.
    """

    def __init__(self) -> None:
        self._redis: redis.Redis | None = None
        self._hits = 0
        self._misses = 0

    async def connect(self) -> None:
        self._redis = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        try:
            await self._redis.ping()
            logger.info("Redis connected: %s", settings.REDIS_URL)
        except Exception as exc:  # pragma: no cover
            logger.warning("Redis ping failed, running without cache: %s", exc)
            await self._redis.aclose()
            self._redis = None

    async def disconnect(self) -> None:
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    async def get(self, key: str) -> dict | list | None:
        if self._redis is None:
            self._misses += 1
            return None
        try:
            data = await self._redis.get(key)
        except Exception as exc:
            logger.debug("Cache GET error for key=%r: %s", key, exc)
            data = None
        if data is None:
            self._misses += 1
            return None
        self._hits += 1
        return json.loads(data)

    async def set(self, key: str, value: dict | list, ttl: int | None = None) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.set(key, json.dumps(value), ex=ttl)
        except Exception as exc:
            logger.debug("Cache SET error for key=%r: %s", key, exc)

    async def invalidate_blogs(self, blog_id: str | None = None) -> None:
        """
        Drop the cached blog list and, when *blog_id* is given, that
        blog's detail entry.  Called after every blog mutation.
        """
        if self._redis is None:
            return
        keys = [BLOG_LIST_KEY]
        if blog_id is not None:
            keys.append(blog_detail_key(blog_id))
        try:
            await self._redis.delete(*keys)
        except Exception as exc:
            logger.debug("Cache DELETE error for keys=%r: %s", keys, exc)

    @property
    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }


cache = CacheManager()
