"""Exceptions for cachelock components."""


class CacheLockError(Exception):
    """Base exception for cache and lock errors."""


class ConfigurationError(CacheLockError):
    """Raise when a connection to the store cannot be resolved."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")


class NotOpenError(CacheLockError):
    """Raise when a data operation is attempted on a closed component."""

    def __init__(self) -> None:
        super().__init__("Connection is not opened")


class TransportError(CacheLockError):
    """Raise when the store cannot be reached or a command fails."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Store command '{operation}' failed: {reason}")


class DecodeError(CacheLockError):
    """Raise when a stored value cannot be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Cannot decode value for key '{key}': {reason}")


class SerializationError(CacheLockError):
    """Raise when a value cannot be serialized for storage."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot serialize value: {reason}")


class LockTimeoutError(CacheLockError):
    """Raise when unable to acquire lock within timeout."""

    def __init__(self, key: str, timeout: int) -> None:
        self.key = key
        self.timeout = timeout
        super().__init__(
            f"Failed to acquire lock for key '{key}' within {timeout}ms"
        )
