"""
Store address and client construction.

The store handle is an explicit value: callers build one client from a
StoreAddress and hand it to every component that needs it.
"""

from dataclasses import dataclass
from typing import Any, Optional

import redis

from redislogger.utils.config import Config
from redislogger.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379
DEFAULT_DB = 0


@dataclass(frozen=True)
class StoreAddress:
    """
    Location of the backing store.

    Attributes:
        host: Server hostname
        port: Server port
        db: Logical database index
    """
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    db: int = DEFAULT_DB

    def __post_init__(self):
        if not self.host:
            raise ValueError("Store host must not be empty")
        if self.port <= 0:
            raise ValueError(f"Store port must be positive: {self.port}")
        if self.db < 0:
            raise ValueError(f"Store db index must be non-negative: {self.db}")

    def to_string(self) -> str:
        """Render as a "host:port:db" server string."""
        return f"{self.host}:{self.port}:{self.db}"

    @classmethod
    def parse(cls, server: str) -> "StoreAddress":
        """
        Parse a "host:port:db" server string.

        Port and db may be omitted ("host" or "host:port") and fall back
        to the defaults.

        Args:
            server: Server string

        Returns:
            StoreAddress

        Raises:
            ValueError: If the string has too many parts or bad numbers
        """
        parts = server.split(":")
        if len(parts) > 3:
            raise ValueError(f"Invalid store address: {server}")

        host = parts[0] or DEFAULT_HOST
        port = int(parts[1]) if len(parts) > 1 and parts[1] else DEFAULT_PORT
        db = int(parts[2]) if len(parts) > 2 and parts[2] else DEFAULT_DB
        return cls(host=host, port=port, db=db)

    @classmethod
    def from_config(cls, config: Config) -> "StoreAddress":
        """
        Build from the redis.* section of a Config.

        redis.server is parsed first; redis.host, redis.port and
        redis.db override its parts when present.

        Args:
            config: Configuration

        Returns:
            StoreAddress

        Raises:
            ValueError: If the server string or a part is invalid
        """
        server = config.get("redis.server")
        base = cls.parse(server) if server else cls()

        return cls(
            host=config.get("redis.host", base.host),
            port=int(config.get("redis.port", base.port)),
            db=int(config.get("redis.db", base.db)),
        )


def create_client(
    address: Optional[StoreAddress] = None,
    socket_timeout: Optional[float] = None,
    socket_connect_timeout: Optional[float] = None,
    **options: Any,
) -> redis.Redis:
    """
    Create a store client for an address.

    Responses are decoded to str so field maps come back as str -> str.
    The client pools its connections and is safe to share across threads.
    Timeouts are the client's own; nothing here retries or times out.

    Args:
        address: Store address (defaults to localhost:6379:0)
        socket_timeout: Client read/write timeout in seconds
        socket_connect_timeout: Client connect timeout in seconds
        **options: Extra keyword arguments for redis.Redis

    Returns:
        redis.Redis client
    """
    address = address or StoreAddress()

    client = redis.Redis(
        host=address.host,
        port=address.port,
        db=address.db,
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_connect_timeout,
        **options,
    )

    logger.info(
        "Store client created",
        host=address.host,
        port=address.port,
        db=address.db,
    )

    return client
