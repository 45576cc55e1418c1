"""
Error names callers can catch.

redislogger never wraps, retries or masks store failures: these are the
redis client's own exception classes under descriptive names. Empty
groups and empty intersections are not errors; they return empty
collections.
"""

from redis.exceptions import ConnectionError as StoreUnavailable
from redis.exceptions import RedisError as StoreError
from redis.exceptions import TimeoutError as StoreTimeout

__all__ = ["StoreError", "StoreTimeout", "StoreUnavailable"]
