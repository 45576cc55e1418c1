"""Atomic store-side counter."""

import redis


class Counter:
    """
    Monotonically increasing integer kept in the store.

    Every increment is one INCR round trip, so concurrent callers in any
    process always get distinct values.
    """

    def __init__(self, client: redis.Redis, key: str):
        self._client = client
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def next_value(self) -> int:
        """Increment and return the new value."""
        return self._client.incr(self._key)

    def current(self) -> int:
        """Get the last value handed out (0 if never incremented)."""
        value = self._client.get(self._key)
        return int(value) if value is not None else 0
