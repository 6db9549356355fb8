"""Redis-based expiring cache."""

import dataclasses
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

import redis

from ..connection import ConnectedComponent, ConnectionManager, translate_errors
from ..exceptions import DecodeError, SerializationError
from ..utils import ensure_int, flatten_config
from .base import Cache

logger = logging.getLogger(__name__)

DEFAULT_TTL = 60000


def _encode_default(value: object) -> object:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class RedisCache(ConnectedComponent, Cache):
    """Cache that keeps JSON-encoded values in Redis.

    Each operation is one Redis command (GET, SET PX, DEL), so concurrent
    callers in different processes never interleave a read-modify-write.

    Args:
        config: Configuration mapping (see cachelock.config)
        timeout: Default TTL in milliseconds for store() without a TTL;
            a positive "options.timeout" in config overrides it
        client_class: Redis client class used to build the session

    Example:
        with RedisCache({"connection.host": "localhost"}) as cache:
            cache.store("user:1", {"name": "Ann"}, ttl=5000)
            cache.retrieve("user:1")
    """

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        timeout: int = DEFAULT_TTL,
        client_class: type[redis.Redis] = redis.Redis,
    ) -> None:
        self._connection = ConnectionManager(client_class=client_class)
        self.timeout = timeout
        if config is not None:
            self.configure(config)

    def configure(self, config: Mapping[str, Any]) -> None:
        """Configure connection and the default TTL."""
        super().configure(config)
        flat = flatten_config(config)
        timeout = ensure_int(flat.get("options.timeout"), default=None)
        if timeout is not None and timeout > 0:
            self.timeout = timeout

    def store(self, key: str, value: Any, ttl: int = 0) -> Any:
        """Store a value with SET PX.

        A non-positive ttl falls back to the component default (self.timeout).
        If Redis reports the write as not applied, None is returned
        instead of the value.

        Raises:
            NotOpenError: If the cache is not open
            SerializationError: If the value cannot be encoded as JSON
            TransportError: If the command fails
        """
        client = self._connection.client
        ttl = ttl if ttl and ttl > 0 else self.timeout

        try:
            data = json.dumps(value, default=_encode_default)
        except (TypeError, ValueError) as e:
            raise SerializationError(value, str(e)) from e

        with translate_errors("SET"):
            result = client.set(key, data, px=ttl)

        if not result:
            logger.warning(f"Cache write for key '{key}' was not applied")
            return None

        logger.debug(f"Stored key '{key}' for {ttl}ms")
        return value

    def retrieve(
        self, key: str, factory: Callable[[Any], Any] | None = None
    ) -> Any | None:
        """Retrieve and decode a value with GET.

        Raises:
            NotOpenError: If the cache is not open
            DecodeError: If the stored bytes are not UTF-8 JSON or the
                factory raises
            TransportError: If the command fails
        """
        client = self._connection.client

        with translate_errors("GET"):
            data = client.get(key)
        if data is None:
            return None

        try:
            value = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(key, str(e)) from e

        if factory is None:
            return value

        try:
            return factory(value)
        except Exception as e:
            raise DecodeError(key, str(e)) from e

    def remove(self, key: str) -> None:
        """Delete a value with DEL.

        Raises:
            NotOpenError: If the cache is not open
            TransportError: If the command fails
        """
        client = self._connection.client

        with translate_errors("DEL"):
            client.delete(key)
