"""Cache backends."""

from gridbot.infrastructure.cache.memory import InMemoryCacheBackend
from gridbot.infrastructure.cache.null import NullCacheBackend
from gridbot.infrastructure.cache.redis import RedisCacheBackend

__all__ = [
    "InMemoryCacheBackend",
    "NullCacheBackend",
    "RedisCacheBackend",
]
