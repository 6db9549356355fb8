"""Base cache interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class Cache(ABC):
    """Abstract base class for expiring value caches.

    Caches are responsible for:
    - Storing serialized values under a key with a TTL
    - Retrieving and decoding values until they expire
    - Removing values on request
    """

    @abstractmethod
    def store(self, key: str, value: Any, ttl: int = 0) -> Any:
        """Store a value.

        Args:
            key: The cache key
            value: The value to store
            ttl: Time-to-live in milliseconds (<= 0 = component default)

        Returns:
            The stored value, or None if the store rejected the write
        """
        pass

    @abstractmethod
    def retrieve(
        self, key: str, factory: Callable[[Any], Any] | None = None
    ) -> Any | None:
        """Retrieve a value by key.

        Args:
            key: The cache key
            factory: Optional callable that builds the result from decoded data

        Returns:
            The value if found, None otherwise
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a value. Missing keys are ignored.

        Args:
            key: The cache key
        """
        pass
