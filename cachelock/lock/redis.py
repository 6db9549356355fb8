"""Redis-based distributed lock."""

import logging
import time
import uuid
from collections.abc import Mapping
from typing import Any

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import WatchError

from ..connection import ConnectedComponent, ConnectionManager, translate_errors
from ..exceptions import LockTimeoutError
from ..utils import ensure_int, flatten_config
from .base import Lock

logger = logging.getLogger(__name__)

DEFAULT_RETRY_TIMEOUT = 100


class RedisLock(ConnectedComponent, Lock):
    """Distributed lock backed by a single Redis endpoint.

    Uses Redis SET with NX (set if not exists) and PX (expiration in
    milliseconds) for atomic acquisition. The stored value is a token
    generated once per instance, and release deletes the key only while
    it still holds that token (WATCH/MULTI/EXEC). An instance whose TTL
    lapsed can therefore never delete a lock another instance acquired.

    Not a quorum lock: one Redis endpoint is the source of truth.

    Args:
        config: Configuration mapping (see cachelock.config);
            "options.retry_timeout" sets the acquire() polling interval
        client_class: Redis client class used to build the session

    Example:
        lock = RedisLock({"connection.host": "localhost", "connection.port": 6379})
        lock.open()
        if lock.try_acquire("order-42", ttl=5000):
            try:
                process_order(42)
            finally:
                lock.release("order-42")
        lock.close()
    """

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        client_class: type[redis.Redis] = redis.Redis,
    ) -> None:
        self._connection = ConnectionManager(client_class=client_class)
        self._token = uuid.uuid4().hex
        self.retry_timeout = DEFAULT_RETRY_TIMEOUT
        if config is not None:
            self.configure(config)

    @property
    def token(self) -> str:
        """Identifier stored as the value of every lock this instance holds."""
        return self._token

    def configure(self, config: Mapping[str, Any]) -> None:
        """Configure connection and the acquire() retry interval."""
        super().configure(config)
        flat = flatten_config(config)
        self.retry_timeout = ensure_int(
            flat.get("options.retry_timeout"), default=self.retry_timeout
        )

    def try_acquire(self, key: str, ttl: int) -> bool:
        """Make a single SET NX PX attempt; never waits.

        Raises:
            NotOpenError: If the lock is not open
            ValueError: If ttl is not positive
            TransportError: If the command fails
        """
        client = self._connection.client
        if ttl <= 0:
            raise ValueError(f"Lock ttl must be positive, got {ttl}")

        with translate_errors("SET NX"):
            acquired = bool(client.set(key, self._token, nx=True, px=ttl))

        logger.debug(f"Lock '{key}' {'acquired' if acquired else 'busy'}")
        return acquired

    def acquire(self, key: str, ttl: int, timeout: int) -> None:
        """Poll try_acquire every retry_timeout ms until timeout ms elapse.

        Raises:
            LockTimeoutError: If the lock is still held after timeout
        """
        deadline = time.monotonic() + timeout / 1000

        while True:
            if self.try_acquire(key, ttl):
                return

            if time.monotonic() >= deadline:
                raise LockTimeoutError(key, timeout)

            # Wait a bit before retrying
            time.sleep(self.retry_timeout / 1000)

    def release(self, key: str) -> bool:
        """Delete the lock only if it still holds this instance's token.

        A missing key or a key held by another token is left untouched
        and reported as False; no error is raised for either.

        Raises:
            NotOpenError: If the lock is not open
            TransportError: If the transaction cannot be sent
        """
        client = self._connection.client

        with translate_errors("DEL IF EQUAL"), client.pipeline() as pipe:
            try:
                pipe.watch(key)
                if pipe.get(key) != self._token.encode():
                    pipe.unwatch()
                    logger.debug(f"Lock '{key}' not held by this instance")
                    return False

                pipe.multi()
                pipe.delete(key)
                pipe.execute()
            except WatchError as e:
                if isinstance(e.__cause__, RedisConnectionError):
                    raise
                # Key changed between WATCH and EXEC
                logger.warning(f"Lock '{key}' changed during release")
                return False

        logger.debug(f"Lock '{key}' released")
        return True
