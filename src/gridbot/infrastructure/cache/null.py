"""Cache backend that stores nothing. Every lookup is a miss."""

from typing import Any

from gridbot.domain.interfaces import CacheBackendInterface


class NullCacheBackend(CacheBackendInterface):
    def set_with_ttl(self, key: str, value: str, ttl: int) -> None:
        pass

    def get(self, key: str) -> str | None:
        return None

    def delete(self, *keys: str) -> int:
        return 0

    def keys_matching(self, pattern: str) -> list[str]:
        return []

    def ping(self) -> bool:
        return True

    def info(self) -> dict[str, Any]:
        return {"backend": "null"}
