import logging
import os
import time
from typing import Dict, Optional, Tuple

import redis.asyncio as redis
from redis import RedisError

from ..session.errors import NotFound, StoreError

logger = logging.getLogger(__name__)

SESSION_PREFIX = "session:"


class RedisStore:
    """Redis-backed Store."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = SESSION_PREFIX):
        """
        Initialize the Redis store.

        Args:
            redis_client: Async Redis client
            key_prefix: Prefix applied to every key
        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _log_key(self, key: str) -> str:
        # Keys embed session IDs; never log more than a short prefix
        return f"{self.key_prefix}{key[:8]}..."

    async def store(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        redis_key = self._key(key)
        try:
            if ttl:
                await self.redis.setex(redis_key, ttl, value)
            else:
                await self.redis.set(redis_key, value)
        except RedisError as e:
            logger.error(f"Redis error storing {self._log_key(key)}: {e}")
            raise StoreError("Database error during session store") from e
        logger.debug(f"Stored {self._log_key(key)} (ttl={ttl})")

    async def retrieve(self, key: str) -> bytes:
        redis_key = self._key(key)
        try:
            data = await self.redis.get(redis_key)
        except RedisError as e:
            logger.error(f"Redis error retrieving {self._log_key(key)}: {e}")
            raise StoreError("Database error during session retrieve") from e

        if data is None:
            raise NotFound("Session not found")
        # Clients created with decode_responses=True hand back str
        if isinstance(data, str):
            return data.encode("utf-8")
        return data


class InMemoryStore:
    """
    Process-local Store with lazy TTL eviction.

    Suitable for tests and single-process deployments.
    """

    def __init__(self, clock=time.monotonic):
        self._data: Dict[str, Tuple[bytes, Optional[float]]] = {}
        self._clock = clock

    async def store(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        deadline = self._clock() + ttl if ttl else None
        self._data[key] = (bytes(value), deadline)

    async def retrieve(self, key: str) -> bytes:
        entry = self._data.get(key)
        if entry is None:
            raise NotFound("Session not found")

        value, deadline = entry
        if deadline is not None and self._clock() >= deadline:
            del self._data[key]
            raise NotFound("Session not found")
        return value

    def __len__(self) -> int:
        return len(self._data)


class StorageModule:
    """Black box storage connection holder."""

    def __init__(self, connection_url: str = None):
        """Initialize storage with connection URL."""
        self.url = connection_url or os.getenv("REDIS_URL", "redis://localhost:6379/0")
        self._client = None

    async def connect(self) -> redis.Redis:
        """Get storage connection."""
        if not self._client:
            self._client = redis.from_url(self.url)
            logger.info(f"Redis client created for {self.url}")
        return self._client

    async def ping(self) -> bool:
        """Check if the storage connection is healthy."""
        if not self._client:
            return False
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    async def disconnect(self):
        """Close storage connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
