"""Local key-value persistence adapter."""
from fluxo.storage.backends import StorageBackend, MemoryBackend, RedisBackend, StorageQuotaExceeded
from fluxo.storage.local_storage import LocalStorage, create_local_storage

__all__ = [
    "StorageBackend",
    "MemoryBackend",
    "RedisBackend",
    "StorageQuotaExceeded",
    "LocalStorage",
    "create_local_storage",
]
