"""Cachelock - Redis-backed expiring cache and distributed lock.

Both components own their connection, speak to a single Redis endpoint,
and rely only on atomic Redis primitives, so they are safe to share
between processes that share no memory.

Example:
    with RedisLock({"connection.host": "localhost"}) as lock:
        if lock.try_acquire("order-42", ttl=5000):
            try:
                process_order(42)
            finally:
                lock.release("order-42")
"""

from .cache import Cache, RedisCache
from .config import ConnectionSettings
from .connection import ConnectionManager
from .exceptions import (
    CacheLockError,
    ConfigurationError,
    DecodeError,
    LockTimeoutError,
    NotOpenError,
    SerializationError,
    TransportError,
)
from .factory import create
from .lock import Lock, RedisLock

__version__ = "0.1.0"

__all__ = [
    "Cache",
    "RedisCache",
    "Lock",
    "RedisLock",
    "ConnectionManager",
    "ConnectionSettings",
    "create",
    "CacheLockError",
    "ConfigurationError",
    "NotOpenError",
    "TransportError",
    "DecodeError",
    "SerializationError",
    "LockTimeoutError",
]
