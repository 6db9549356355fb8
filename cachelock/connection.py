"""Connection management for the backing Redis store."""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Protocol

import redis
from redis.backoff import ExponentialBackoff
from redis.exceptions import RedisError
from redis.retry import Retry

from .config import DEFAULT_HOST, DEFAULT_PORT, ConnectionSettings
from .exceptions import ConfigurationError, NotOpenError, TransportError

logger = logging.getLogger(__name__)


class Discovery(Protocol):
    """Resolves connection parameters registered under a discovery key."""

    def resolve(self, key: str) -> Mapping[str, Any] | None: ...


class CredentialStore(Protocol):
    """Looks up credential parameters registered under a store key."""

    def lookup(self, key: str) -> Mapping[str, Any] | None: ...


class ConnectionManager:
    """Owns a single session to the backing store.

    The session is created by open() and destroyed by close(). Every
    command goes through `client`, which raises NotOpenError while closed.

    Args:
        config: Configuration mapping (see cachelock.config)
        client_class: Redis client class used to build the session
    """

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        client_class: type[redis.Redis] = redis.Redis,
    ) -> None:
        self.client_class = client_class
        self.settings = ConnectionSettings.from_config(config)
        self._discovery: Discovery | None = None
        self._credential_store: CredentialStore | None = None
        self._client: redis.Redis | None = None

    def configure(self, config: Mapping[str, Any]) -> None:
        """Replace settings from a configuration mapping."""
        self.settings = ConnectionSettings.from_config(config)

    def set_references(
        self,
        discovery: Discovery | None = None,
        credential_store: CredentialStore | None = None,
    ) -> None:
        """Set the optional discovery and credential store collaborators."""
        self._discovery = discovery
        self._credential_store = credential_store

    def is_open(self) -> bool:
        return self._client is not None

    def open(self) -> None:
        """Resolve settings and establish a verified session.

        Raises:
            ConfigurationError: If no connection target can be resolved
            TransportError: If the store does not answer PING
        """
        if self.is_open():
            return

        settings = self._resolve()
        options: dict[str, Any] = {
            "socket_connect_timeout": settings.connect_timeout / 1000,
            "socket_timeout": settings.timeout / 1000,
            "retry": Retry(ExponentialBackoff(), settings.retries),
            "decode_responses": False,
        }
        if settings.password:
            options["password"] = settings.password

        if settings.uri:
            client = self.client_class.from_url(settings.uri, **options)
        else:
            client = self.client_class(
                host=settings.host or DEFAULT_HOST,
                port=settings.port or DEFAULT_PORT,
                **options,
            )

        try:
            client.ping()
        except RedisError as e:
            client.close()
            logger.error(f"Cannot connect to {settings}: {e}")
            raise TransportError("PING", str(e)) from e

        self._client = client
        logger.info(f"Connected to store: {settings}")

    def close(self) -> None:
        """Release the session. Closing a closed manager does nothing."""
        if self._client is None:
            return

        client, self._client = self._client, None
        try:
            client.close()
        except RedisError as e:
            logger.warning(f"Error while closing store connection: {e}")
        logger.info("Disconnected from store")

    @property
    def client(self) -> redis.Redis:
        """Return the open client.

        Raises:
            NotOpenError: If the manager is not open
        """
        if self._client is None:
            raise NotOpenError()
        return self._client

    def _resolve(self) -> ConnectionSettings:
        settings = self.settings
        if not settings.has_connection:
            raise ConfigurationError("connection is not configured")

        if settings.discovery_key and not settings.uri and not settings.host:
            if self._discovery is None:
                raise ConfigurationError(
                    f"discovery_key '{settings.discovery_key}' set but no discovery service"
                )
            params = self._discovery.resolve(settings.discovery_key)
            if not params:
                raise ConfigurationError(
                    f"cannot resolve connection for discovery_key '{settings.discovery_key}'"
                )
            settings = settings.with_connection(params)

        if settings.store_key and self._credential_store is not None:
            params = self._credential_store.lookup(settings.store_key)
            if params:
                settings = settings.with_credential(params)

        return settings


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise redis client errors as TransportError."""
    try:
        yield
    except RedisError as e:
        raise TransportError(operation, str(e)) from e


class ConnectedComponent:
    """Lifecycle shared by components that own a ConnectionManager."""

    _connection: ConnectionManager

    def configure(self, config: Mapping[str, Any]) -> None:
        self._connection.configure(config)

    def set_references(
        self,
        discovery: Discovery | None = None,
        credential_store: CredentialStore | None = None,
    ) -> None:
        self._connection.set_references(
            discovery=discovery, credential_store=credential_store
        )

    def is_open(self) -> bool:
        return self._connection.is_open()

    def open(self) -> None:
        self._connection.open()

    def close(self) -> None:
        self._connection.close()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
