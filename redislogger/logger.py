"""
RedisLogger: one object for recording and browsing grouped log entries.

Wires the ingestor and query service around a single explicit store
client. Typical use:

    config = Config("redislogger.yaml")
    log = RedisLogger.from_config(config)
    log.error({"msg": "connection refused"}, ["db"])
    log.entries("error")
    log.intersect(["error", "db"])
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

import redis

from redislogger.core.counter import Counter
from redislogger.core.entry_store import EntryStore
from redislogger.core.group_index import GroupIndex
from redislogger.core.identity import IdGenerator, create_id_generator
from redislogger.ingest.ingestor import Ingestor
from redislogger.query.service import (
    DEFAULT_INTERSECT_LIMIT,
    DEFAULT_PAGE_SIZE,
    QueryService,
)
from redislogger.store.client import StoreAddress, create_client
from redislogger.store.keys import INTERSECT_COUNTER_KEY
from redislogger.utils.config import Config
from redislogger.utils.logging import get_logger

logger = get_logger(__name__)


class RedisLogger:
    """Facade over Ingestor and QueryService sharing one store client."""

    def __init__(
        self,
        client: redis.Redis,
        id_generator: Optional[IdGenerator] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        intersect_limit: int = DEFAULT_INTERSECT_LIMIT,
        ephemeral_ttl_seconds: int = 0,
    ):
        """
        Initialize logger.

        Args:
            client: Store client, created with decode_responses=True
            id_generator: Source of entry ids (default: coarse seconds)
            page_size: Default page size for entries()
            intersect_limit: Maximum entries returned by intersect()
            ephemeral_ttl_seconds: Expiry for intersection scratch sets
        """
        self._client = client
        self._page_size = page_size

        entry_store = EntryStore(client)
        group_index = GroupIndex(client)

        self.ingestor = Ingestor(entry_store, group_index, id_generator)
        self.queries = QueryService(
            entry_store,
            group_index,
            Counter(client, INTERSECT_COUNTER_KEY),
            intersect_limit=intersect_limit,
            ephemeral_ttl_seconds=ephemeral_ttl_seconds,
        )

    @classmethod
    def from_config(cls, config: Config) -> "RedisLogger":
        """
        Build a logger and its store client from configuration.

        Args:
            config: Configuration (redis.*, ingest.*, query.* keys)

        Returns:
            RedisLogger instance
        """
        address = StoreAddress.from_config(config)
        client = create_client(
            address,
            socket_timeout=config.get("redis.socket_timeout"),
            socket_connect_timeout=config.get("redis.socket_connect_timeout"),
        )

        return cls(
            client,
            id_generator=create_id_generator(config.get("ingest.id_strategy", "coarse")),
            page_size=int(config.get("query.page_size", DEFAULT_PAGE_SIZE)),
            intersect_limit=int(config.get("query.intersect_limit", DEFAULT_INTERSECT_LIMIT)),
            ephemeral_ttl_seconds=int(config.get("query.ephemeral_ttl_seconds", 0)),
        )

    @property
    def client(self) -> redis.Redis:
        return self._client

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record(
        self,
        level: str,
        fields: Mapping[str, Any],
        extra_groups: Sequence[str] = (),
    ) -> int:
        return self.ingestor.record(level, fields, extra_groups)

    def debug(self, fields: Mapping[str, Any], groups: Sequence[str] = ()) -> int:
        return self.ingestor.debug(fields, groups)

    def warn(self, fields: Mapping[str, Any], groups: Sequence[str] = ()) -> int:
        return self.ingestor.warn(fields, groups)

    def error(self, fields: Mapping[str, Any], groups: Sequence[str] = ()) -> int:
        return self.ingestor.error(fields, groups)

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    def groups(self) -> Dict[str, int]:
        return self.queries.list_groups()

    def size(self, group: str) -> int:
        return self.queries.size(group)

    def entries(
        self,
        group: str,
        start: int = 0,
        page_size: Optional[int] = None,
    ) -> List[Dict[str, str]]:
        """Get a page of a group's entries, newest first."""
        if page_size is None:
            page_size = self._page_size
        return self.queries.entries(group, start, page_size)

    def intersect(self, groups: Sequence[str]) -> List[Dict[str, str]]:
        return self.queries.intersect(groups)
