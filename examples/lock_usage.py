"""Lock usage examples for cachelock.

Requires a Redis server on localhost:6379.
"""

from cachelock import LockTimeoutError, RedisLock

CONFIG = {"connection.host": "localhost", "connection.port": 6379}


def process_order(order_id):
    """Do work that must not run twice at once."""
    print(f"📦 Processing order {order_id}")


if __name__ == "__main__":
    worker_a = RedisLock(CONFIG)
    worker_b = RedisLock(CONFIG)
    worker_a.open()
    worker_b.open()

    print("=" * 60)
    print("Example 1: Single attempt")
    print("=" * 60)

    # Worker A gets the lock
    print(f"Worker A acquired: {worker_a.try_acquire('order-42', ttl=5000)}")

    # Worker B is turned away immediately
    print(f"Worker B acquired: {worker_b.try_acquire('order-42', ttl=5000)}")

    process_order(42)
    worker_a.release("order-42")
    print("Worker A released the lock")

    print(f"Worker B acquired: {worker_b.try_acquire('order-42', ttl=5000)}\n")
    worker_b.release("order-42")

    print("=" * 60)
    print("Example 2: Waiting for a lock")
    print("=" * 60)

    # A short TTL stands in for a crashed holder
    worker_a.try_acquire("order-43", ttl=300)
    worker_b.acquire("order-43", ttl=5000, timeout=1000)
    print("Worker B acquired after Worker A's lock expired")

    # Worker A's late release cannot remove Worker B's lock
    print(f"Worker A release applied: {worker_a.release('order-43')}")
    print(f"Worker B release applied: {worker_b.release('order-43')}\n")

    print("=" * 60)
    print("Example 3: Giving up")
    print("=" * 60)

    worker_a.try_acquire("order-44", ttl=5000)
    try:
        worker_b.acquire("order-44", ttl=5000, timeout=200)
    except LockTimeoutError as e:
        print(f"Error: {e}")
    worker_a.release("order-44")

    worker_a.close()
    worker_b.close()
