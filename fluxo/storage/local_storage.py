"""
Keyed record store with seed-on-first-access semantics.

Every collection is read whole, modified in memory and written back whole.
There is no locking: the store assumes a single writer, and two writers
racing on the same key can lose updates.
"""
import copy
import json
from typing import Any, TypeVar
from fluxo.core.config import settings
from fluxo.core.logging import logger
from fluxo.storage.backends import StorageBackend, MemoryBackend, RedisBackend

T = TypeVar("T")

# Collection keys
USERS_KEY = "FLUXO_USERS"
IDENTITIES_KEY = "FLUXO_IDENTITIES"
ORGANIZER_REQUESTS_KEY = "FLUXO_ORG_REQUESTS"
DYNAMIC_EVENTS_KEY = "FLUXO_DYNAMIC_EVENTS"


class LocalStorage:
    """JSON-serializing wrapper around a string key-value backend."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    def get_storage(self, key: str, default: T) -> T:
        """
        Return the stored value for key, seeding it with default on first access.
        
        A read or deserialization failure is logged and the default returned.
        The caller always receives its own copy of the default.
        
        Args:
            key: Collection key
            default: Value to store and return when the key is absent
            
        Returns:
            The stored value or a copy of the default
        """
        try:
            stored = self.backend.get_item(key)
            if not stored:
                seeded = copy.deepcopy(default)
                self.backend.set_item(key, json.dumps(seeded, default=str))
                return seeded
            return json.loads(stored)
        except Exception as e:
            logger.error(f"Storage read error for key {key}: {e}")
            return copy.deepcopy(default)

    def set_storage(self, key: str, data: Any) -> None:
        """
        Overwrite the stored value for key.
        
        Failures are logged and the write is dropped; the caller is not told.
        """
        try:
            self.backend.set_item(key, json.dumps(data, default=str))
        except Exception as e:
            logger.error(f"Storage write error for key {key}: {e}")


def create_local_storage() -> LocalStorage:
    """Build the LocalStorage selected by LOCAL_STORAGE_BACKEND."""
    if settings.LOCAL_STORAGE_BACKEND == "redis":
        backend: StorageBackend = RedisBackend(settings.REDIS_URL)
    elif settings.LOCAL_STORAGE_BACKEND == "memory":
        backend = MemoryBackend(quota_bytes=settings.LOCAL_STORAGE_QUOTA_BYTES)
    else:
        raise ValueError(f"Unknown LOCAL_STORAGE_BACKEND: {settings.LOCAL_STORAGE_BACKEND}")
    logger.info(f"Local storage using {settings.LOCAL_STORAGE_BACKEND} backend")
    return LocalStorage(backend)
