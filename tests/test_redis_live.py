"""Tests against a running Redis server.

Note: These tests require a running Redis instance.
They will be skipped if Redis is not reachable or REDIS_ENABLED is false.
"""

import os
import time

import pytest

from cachelock import RedisCache, RedisLock, TransportError

REDIS_ENABLED = os.environ.get("REDIS_ENABLED", "true").lower() in ("1", "true", "yes")
REDIS_CONFIG = {
    "connection.host": os.environ.get("REDIS_SERVICE_HOST", "localhost"),
    "connection.port": os.environ.get("REDIS_SERVICE_PORT", "6379"),
    "options.connect_timeout": 1000,
    "options.retries": 0,
}

pytestmark = pytest.mark.skipif(not REDIS_ENABLED, reason="Redis disabled")


def _open(component):
    try:
        component.open()
    except TransportError:
        pytest.skip("Redis server not running")
    return component


@pytest.fixture
def redis_cache():
    """Create an open RedisCache for testing."""
    cache = _open(RedisCache(REDIS_CONFIG))
    yield cache
    # Cleanup
    cache.remove("test:live:cache")
    cache.close()


@pytest.fixture
def redis_locks():
    """Create two open RedisLock instances for testing."""
    first = _open(RedisLock(REDIS_CONFIG))
    second = _open(RedisLock(REDIS_CONFIG))
    yield first, second
    # Cleanup
    first.release("test:live:lock")
    second.release("test:live:lock")
    first.close()
    second.close()


def test_redis_cache_round_trip(redis_cache):
    """Test store/retrieve/remove with a real server."""
    value = {"id": "1", "tags": ["a", "b"], "nested": {"n": 1.5}}

    assert redis_cache.store("test:live:cache", value, ttl=5000) == value
    assert redis_cache.retrieve("test:live:cache") == value

    redis_cache.remove("test:live:cache")
    assert redis_cache.retrieve("test:live:cache") is None


def test_redis_cache_expiry(redis_cache):
    """Test TTL expiration with a real server."""
    redis_cache.store("test:live:cache", "value", ttl=50)

    # Wait for expiration
    time.sleep(0.2)

    assert redis_cache.retrieve("test:live:cache") is None


def test_redis_lock_exclusion(redis_locks):
    """Test mutual exclusion and release with a real server."""
    first, second = redis_locks

    assert first.try_acquire("test:live:lock", 5000) is True
    assert second.try_acquire("test:live:lock", 5000) is False

    assert second.release("test:live:lock") is False
    assert first.release("test:live:lock") is True

    assert second.try_acquire("test:live:lock", 5000) is True


def test_redis_lock_safe_release(redis_locks):
    """Test that a lapsed holder cannot release the new holder's lock."""
    first, second = redis_locks

    assert first.try_acquire("test:live:lock", 50) is True
    time.sleep(0.2)
    assert second.try_acquire("test:live:lock", 5000) is True

    assert first.release("test:live:lock") is False
    assert first.try_acquire("test:live:lock", 5000) is False
