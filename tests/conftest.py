"""Shared fixtures: an in-process store and a controllable clock."""

import fakeredis
import pytest

from redislogger.core.counter import Counter
from redislogger.core.entry_store import EntryStore
from redislogger.core.group_index import GroupIndex
from redislogger.store.keys import INTERSECT_COUNTER_KEY
from redislogger.utils.config import reset_config


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


@pytest.fixture
def client():
    """Store client backed by a fresh fake server."""
    server = fakeredis.FakeServer()
    fake = fakeredis.FakeRedis(server=server, decode_responses=True)
    yield fake
    fake.close()


@pytest.fixture
def clock():
    """Frozen clock starting at a fixed second."""
    return FrozenClock()


@pytest.fixture
def entry_store(client):
    return EntryStore(client)


@pytest.fixture
def group_index(client):
    return GroupIndex(client)


@pytest.fixture
def counter(client):
    return Counter(client, INTERSECT_COUNTER_KEY)


@pytest.fixture(autouse=True)
def clean_config():
    """Never leak the global config between tests."""
    reset_config()
    yield
    reset_config()
