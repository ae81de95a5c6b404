"""
Redis cache backend.

Connection and command failures are raised as ``CacheUnavailable`` so the
cache service can degrade to misses instead of breaking the pipeline.
"""

import logging
from typing import Any

import redis

from gridbot.domain.exceptions import CacheUnavailable
from gridbot.domain.interfaces import CacheBackendInterface

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_TIMEOUT = 2.0  # seconds


class RedisCacheBackend(CacheBackendInterface):
    """
    Store values in Redis with ``SETEX``.

    Example:
        backend = RedisCacheBackend("redis://localhost:6379/0")
        cache = RobotCache(backend, namespace="gridbot")
    """

    def __init__(
        self,
        url: str = DEFAULT_REDIS_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Any = None,
    ):
        """
        Args:
            url: Redis connection URL
            timeout: Socket connect/read timeout in seconds
            client: Pre-built client (skips URL handling)
        """
        self._url = url
        if client is None:
            client = redis.Redis.from_url(
                url,
                socket_connect_timeout=timeout,
                socket_timeout=timeout,
                decode_responses=True,
            )
        self._client = client

    @property
    def url(self) -> str:
        return self._url

    def set_with_ttl(self, key: str, value: str, ttl: int) -> None:
        try:
            self._client.setex(key, ttl, value)
        except redis.RedisError as e:
            raise self._unavailable("set", e) from e

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            raise self._unavailable("get", e) from e
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        try:
            return int(self._client.delete(*keys))
        except redis.RedisError as e:
            raise self._unavailable("delete", e) from e

    def keys_matching(self, pattern: str) -> list[str]:
        try:
            keys = list(self._client.scan_iter(match=pattern))
        except redis.RedisError as e:
            raise self._unavailable("scan", e) from e
        return sorted(k.decode("utf-8") if isinstance(k, bytes) else k for k in keys)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            raise self._unavailable("ping", e) from e

    def info(self) -> dict[str, Any]:
        try:
            server = self._client.info()
        except redis.RedisError as e:
            raise self._unavailable("info", e) from e
        return {
            "backend": "redis",
            "url": self._url,
            "redis_version": server.get("redis_version", "unknown"),
            "connected_clients": server.get("connected_clients", 0),
            "used_memory_human": server.get("used_memory_human", "unknown"),
        }

    def _unavailable(self, operation: str, error: Exception) -> CacheUnavailable:
        logger.debug("Redis %s failed on %s: %s", operation, self._url, error)
        return CacheUnavailable(f"Redis {operation} failed: {error}", backend="redis")
