"""Distributed mutual-exclusion locks."""

from .base import Lock
from .redis import RedisLock

__all__ = ["Lock", "RedisLock"]
