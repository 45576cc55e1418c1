"""
redislogger - grouped, browsable log entries in Redis.

Log entries are stored as hashes and indexed into named groups (the log
level plus any extra tags). Groups can be listed, paged newest-first and
intersected.
"""

__version__ = "0.2.0"

from redislogger.logger import RedisLogger
from redislogger.store.client import StoreAddress, create_client

__all__ = [
    "RedisLogger",
    "StoreAddress",
    "create_client",
]
