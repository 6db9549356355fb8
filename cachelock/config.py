"""Connection settings resolved from a configuration bag.

Recognized keys (dotted or nested):

    connection.host, connection.port, connection.uri, connection.discovery_key
    credential.store_key, credential.username, credential.password
    options.connect_timeout, options.response_timeout (or options.timeout),
    options.retries

Timeouts are milliseconds. Unknown keys are ignored.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from .utils import ensure_int, flatten_config

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379
DEFAULT_CONNECT_TIMEOUT = 30000
DEFAULT_TIMEOUT = 3000
DEFAULT_RETRIES = 3

_CONNECTION_KEYS = ("host", "port", "uri", "discovery_key")
_CREDENTIAL_KEYS = ("store_key", "username", "password")


def _text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class ConnectionSettings:
    """Connection, credential and option values for one component.

    Attributes:
        host: Store host name, None when not configured
        port: Store port, None when not configured
        uri: Connection URI; takes precedence over host/port
        discovery_key: Key to resolve the connection through discovery
        store_key: Key to resolve credentials through a credential store
        username: Reserved, not sent to the store
        password: Store password
        connect_timeout: Connect timeout in milliseconds
        timeout: Response timeout in milliseconds
        retries: Number of retries for failed connections
    """

    host: str | None = None
    port: int | None = None
    uri: str | None = None
    discovery_key: str | None = None
    store_key: str | None = None
    username: str | None = None
    password: str | None = None
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    timeout: int = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "ConnectionSettings":
        """Create settings from a dotted or nested configuration mapping."""
        flat = flatten_config(config or {})

        port = ensure_int(flat.get("connection.port"), default=None)
        return cls(
            host=_text(flat.get("connection.host")),
            port=port if port else None,
            uri=_text(flat.get("connection.uri")),
            discovery_key=_text(flat.get("connection.discovery_key")),
            store_key=_text(flat.get("credential.store_key")),
            username=_text(flat.get("credential.username")),
            password=_text(flat.get("credential.password")),
            connect_timeout=ensure_int(
                flat.get("options.connect_timeout"), default=DEFAULT_CONNECT_TIMEOUT
            ),
            timeout=ensure_int(
                flat.get("options.response_timeout", flat.get("options.timeout")),
                default=DEFAULT_TIMEOUT,
            ),
            retries=ensure_int(flat.get("options.retries"), default=DEFAULT_RETRIES),
        )

    @property
    def has_connection(self) -> bool:
        """True when any connection target key was configured."""
        return any(
            getattr(self, name) is not None for name in _CONNECTION_KEYS
        )

    def with_connection(self, params: Mapping[str, Any]) -> "ConnectionSettings":
        """Return a copy with connection keys overridden by params.

        Accepts bare keys ("host") as returned by a discovery service.
        """
        flat = flatten_config(params)
        values: dict[str, Any] = {}
        for name in _CONNECTION_KEYS:
            value = flat.get(name, flat.get(f"connection.{name}"))
            if value is None:
                continue
            values[name] = ensure_int(value, default=None) if name == "port" else _text(value)
        return replace(self, **values)

    def with_credential(self, params: Mapping[str, Any]) -> "ConnectionSettings":
        """Return a copy with credential keys overridden by params."""
        flat = flatten_config(params)
        values: dict[str, Any] = {}
        for name in _CREDENTIAL_KEYS:
            value = flat.get(name, flat.get(f"credential.{name}"))
            if value is not None:
                values[name] = _text(value)
        return replace(self, **values)

    def __str__(self) -> str:
        """String representation hiding sensitive information."""
        password_display = "***" if self.password else "None"
        target = self.uri or f"{self.host or DEFAULT_HOST}:{self.port or DEFAULT_PORT}"
        if self.uri and "@" in self.uri:
            scheme, _, rest = self.uri.partition("://")
            target = f"{scheme}://***@{rest.rsplit('@', 1)[-1]}"
        return (
            f"ConnectionSettings(target={target}, password={password_display}, "
            f"connect_timeout={self.connect_timeout}, timeout={self.timeout}, "
            f"retries={self.retries})"
        )
