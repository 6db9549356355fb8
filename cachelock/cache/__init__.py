"""Expiring value caches."""

from .base import Cache
from .redis import RedisCache

__all__ = ["Cache", "RedisCache"]
