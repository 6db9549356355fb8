"""Shared fixtures backed by an in-process fake Redis server."""

import fakeredis
import pytest

from cachelock import RedisCache, RedisLock

CONFIG = {"connection.host": "localhost", "connection.port": 6379}


@pytest.fixture
def fake_server():
    """A fake Redis server shared by every client a test creates."""
    return fakeredis.FakeServer()


@pytest.fixture
def client_class(fake_server):
    """Client class whose instances all talk to fake_server."""

    class FakeClient(fakeredis.FakeRedis):
        def __init__(self, *args, **kwargs):
            self.init_kwargs = dict(kwargs)
            # The fake server has no requirepass; record the password only
            kwargs.pop("password", None)
            kwargs["server"] = fake_server
            super().__init__(*args, **kwargs)

        @classmethod
        def from_url(cls, url, **kwargs):
            client = cls(**kwargs)
            client.url = url
            return client

    return FakeClient


@pytest.fixture
def inspector(fake_server):
    """A separate client for checking server state directly."""
    client = fakeredis.FakeRedis(server=fake_server, decode_responses=True)
    yield client
    client.close()


@pytest.fixture
def cache(client_class):
    """An open RedisCache."""
    cache = RedisCache(CONFIG, client_class=client_class)
    cache.open()
    yield cache
    cache.close()


@pytest.fixture
def lock_a(client_class):
    """An open RedisLock."""
    lock = RedisLock(CONFIG, client_class=client_class)
    lock.open()
    yield lock
    lock.close()


@pytest.fixture
def lock_b(client_class):
    """A second open RedisLock with its own token and connection."""
    lock = RedisLock(CONFIG, client_class=client_class)
    lock.open()
    yield lock
    lock.close()
