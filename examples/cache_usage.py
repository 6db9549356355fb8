"""Cache usage examples for cachelock.

Requires a Redis server on localhost:6379.
"""

import time

from cachelock import DecodeError, RedisCache

CONFIG = {
    "connection": {"host": "localhost", "port": 6379},
    "options": {"connect_timeout": 5000, "retries": 2},
}

with RedisCache(CONFIG) as cache:
    # Example 1: Store and retrieve
    print("=" * 60)
    print("Example 1: Store and retrieve")
    print("=" * 60)

    invoice = {"invoice_id": 123, "user_id": 1, "amount": 100.0}
    cache.store("invoice:123", invoice, ttl=60000)
    print(f"Retrieved: {cache.retrieve('invoice:123')}")
    print()

    # Example 2: Expiry
    print("=" * 60)
    print("Example 2: Expiry")
    print("=" * 60)

    cache.store("session:abc", {"user_id": 1}, ttl=100)
    print(f"Before expiry: {cache.retrieve('session:abc')}")
    time.sleep(0.2)
    print(f"After expiry: {cache.retrieve('session:abc')}")
    print()

    # Example 3: Removal and decode errors
    print("=" * 60)
    print("Example 3: Removal and decode errors")
    print("=" * 60)

    cache.remove("invoice:123")
    print(f"After remove: {cache.retrieve('invoice:123')}")

    cache.store("invoice:124", {"amount": 5}, ttl=60000)
    try:
        cache.retrieve("invoice:124", factory=lambda data: data["invoice_id"])
    except DecodeError as e:
        print(f"Error: {e}")
    cache.remove("invoice:124")
