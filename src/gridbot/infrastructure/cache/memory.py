"""
In-memory cache backend.

Useful for testing and single-process runs. Expiry is checked lazily on
access against an injectable clock, and expired entries are swept every
``purge_every`` writes.
"""

import time
from collections.abc import Callable
from fnmatch import fnmatchcase
from typing import Any

from gridbot.domain.interfaces import CacheBackendInterface

DEFAULT_PURGE_EVERY = 1000


class InMemoryCacheBackend(CacheBackendInterface):
    """Dict-backed store with per-key expiry."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        purge_every: int = DEFAULT_PURGE_EVERY,
    ) -> None:
        if purge_every <= 0:
            raise ValueError(f"purge_every must be positive, got {purge_every}")
        self._entries: dict[str, tuple[str, float]] = {}
        self._clock = clock
        self._purge_every = purge_every
        self._writes = 0

    def set_with_ttl(self, key: str, value: str, ttl: int) -> None:
        if ttl <= 0:
            raise ValueError(f"TTL must be positive, got {ttl}")
        self._entries[key] = (value, self._clock() + ttl)
        self._writes += 1
        if self._writes % self._purge_every == 0:
            self._purge_expired()

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if self.get(key) is not None:
                deleted += 1
            self._entries.pop(key, None)
        return deleted

    def keys_matching(self, pattern: str) -> list[str]:
        self._purge_expired()
        return sorted(key for key in self._entries if fnmatchcase(key, pattern))

    def ping(self) -> bool:
        return True

    def info(self) -> dict[str, Any]:
        self._purge_expired()
        return {"backend": "memory", "entries": len(self._entries)}

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
