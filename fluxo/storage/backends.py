"""
Key-value backends for the local storage adapter.

Backends store raw strings; serialization is the adapter's job.
"""
from typing import Dict, Optional
import redis
from redis.connection import ConnectionPool
from fluxo.core.logging import logger


class StorageQuotaExceeded(Exception):
    """Raised when a write would push a backend past its byte quota."""


class StorageBackend:
    """Minimal string key-value interface."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryBackend(StorageBackend):
    """
    In-process dictionary backend.
    
    An optional quota caps the total size of stored values, the way browser
    storage refuses writes once its quota is used up.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self._items: Dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def _used_bytes(self, excluding: Optional[str] = None) -> int:
        return sum(
            len(k.encode()) + len(v.encode())
            for k, v in self._items.items()
            if k != excluding
        )

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            needed = self._used_bytes(excluding=key) + len(key.encode()) + len(value.encode())
            if needed > self.quota_bytes:
                raise StorageQuotaExceeded(
                    f"Writing {key} needs {needed} bytes, quota is {self.quota_bytes}"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class RedisBackend(StorageBackend):
    """Redis backend with connection pooling."""

    def __init__(self, url: str, max_connections: int = 20):
        self.url = url
        self.max_connections = max_connections
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[redis.Redis] = None

    def _get_client(self) -> redis.Redis:
        """Get or create Redis client with connection pooling."""
        if self._client is None:
            self._pool = redis.ConnectionPool.from_url(
                self.url,
                decode_responses=True,
                max_connections=self.max_connections,
            )
            self._client = redis.Redis(connection_pool=self._pool)
            logger.info("Redis connection pool created for local storage")
        return self._client

    def get_item(self, key: str) -> Optional[str]:
        return self._get_client().get(key)

    def set_item(self, key: str, value: str) -> None:
        self._get_client().set(key, value)

    def remove_item(self, key: str) -> None:
        self._get_client().delete(key)

    def close(self):
        """Close Redis connection pool."""
        if self._client:
            self._client.close()
            logger.info("Redis connection pool closed")
