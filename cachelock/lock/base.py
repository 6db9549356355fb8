"""Lock capability interface."""

from abc import ABC, abstractmethod


class Lock(ABC):
    """Interface for mutual-exclusion locks shared by processes.

    Implementations must make acquisition a single atomic set-if-absent
    and release a compare-and-delete against the holder's token.
    """

    @abstractmethod
    def open(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @abstractmethod
    def is_open(self) -> bool:
        pass

    @abstractmethod
    def try_acquire(self, key: str, ttl: int) -> bool:
        """Make a single attempt to acquire a lock.

        Args:
            key: The lock key
            ttl: Lock time-to-live in milliseconds

        Returns:
            True if the lock was acquired, False if it is held
        """
        pass

    @abstractmethod
    def acquire(self, key: str, ttl: int, timeout: int) -> None:
        """Acquire a lock, retrying until timeout.

        Args:
            key: The lock key
            ttl: Lock time-to-live in milliseconds
            timeout: Maximum time to wait in milliseconds
        """
        pass

    @abstractmethod
    def release(self, key: str) -> bool:
        """Release a lock held by this instance.

        Args:
            key: The lock key

        Returns:
            True if the lock was deleted, False if it was not held
        """
        pass
