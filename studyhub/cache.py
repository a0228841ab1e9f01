import json
import logging

import redis.asyncio as redis

from studyhub.config import settings

logger = logging.getLogger(__name__)

LIST_KEY = "resources:list"
DETAIL_KEY = "resources:detail:{resource_id}"

# session.info slot holding keys to drop once the transaction commits
STALE_KEYS = "studyhub.stale_cache_keys"


class CacheManager:
    """
    Cache-aside manager backed by Redis.

    Only annotated resource reads are cached (list and detail).  Every
    method degrades to a no-op when Redis is unavailable: reads miss and
    writes are skipped, so a cache outage never fails a request.
    """

    def __init__(self) -> None:
        self._redis: redis.Redis | None = None
        self._hits: int = 0
        self._misses: int = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Open the connection pool.  Called once at application startup."""
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
            logger.warning("Redis ping failed, cache disabled: %s", exc)
            await self._redis.aclose()
            self._redis = None

    async def disconnect(self) -> None:
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    # ------------------------------------------------------------------
    # Core cache operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> dict | list | None:
        """Return the cached value for *key*, or None on a miss / error."""
        if not self._redis:
            self._misses += 1
            return None
        try:
            data = await self._redis.get(key)
        except Exception as exc:
            logger.debug("Cache GET error for key=%r: %s", key, exc)
            self._misses += 1
            return None
        if data is None:
            self._misses += 1
            return None
        self._hits += 1
        return json.loads(data)

    async def set(self, key: str, value: dict | list, ttl: int | None = None) -> None:
        if not self._redis:
            return
        try:
            await self._redis.set(key, json.dumps(value, default=str), ex=ttl)
        except Exception as exc:
            logger.debug("Cache SET error for key=%r: %s", key, exc)

    async def delete(self, *keys: str) -> None:
        if not self._redis or not keys:
            return
        try:
            removed = await self._redis.delete(*keys)
            logger.debug("Cache invalidated %d key(s): %s", removed, ", ".join(keys))
        except Exception as exc:
            logger.debug("Cache DELETE error for keys=%r: %s", keys, exc)

    # ------------------------------------------------------------------
    # Domain-level invalidation
    # ------------------------------------------------------------------

    def invalidate_resource(self, session, resource_id: int | None = None) -> None:
        """
        Mark cached resource reads stale after a write made on *session*.

        The list entry is always marked because counts, tags and ordering
        are all part of it.  The detail entry is marked too when
        *resource_id* is given.  Nothing is deleted until the session
        commits (see ``drop_stale``); a concurrent read before the commit
        would otherwise re-cache the old row.
        """
        keys = session.info.setdefault(STALE_KEYS, set())
        keys.add(LIST_KEY)
        if resource_id is not None:
            keys.add(DETAIL_KEY.format(resource_id=resource_id))

    async def drop_stale(self, session) -> None:
        """Delete the keys *session* marked stale.  Call after commit."""
        keys = session.info.pop(STALE_KEYS, None)
        if keys:
            await self.delete(*sorted(keys))

    def discard_stale(self, session) -> None:
        """Forget pending keys of a rolled-back session."""
        session.info.pop(STALE_KEYS, None)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    @property
    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }


# Module-level singleton shared across all request handlers.
cache = CacheManager()
