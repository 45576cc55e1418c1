"""
Per-entry field map storage.

Each entry lives in one hash at log:<id>. Entries are never deleted by
this library.
"""

from typing import Any, Dict, List, Mapping, Sequence, Union

import redis

from redislogger.store.keys import entry_key
from redislogger.utils.logging import get_logger

logger = get_logger(__name__)

EntryId = Union[int, str]


class EntryStore:
    """Reads and writes entry field maps."""

    def __init__(self, client: redis.Redis):
        """
        Initialize entry store.

        Args:
            client: Store client (shared, thread-safe)
        """
        self._client = client

    def write(self, entry_id: EntryId, fields: Mapping[str, Any]) -> None:
        """
        Write fields into an entry's map.

        Existing fields with the same name are replaced, others are kept.

        Args:
            entry_id: Entry identity
            fields: Field name to value; values are stored as strings
        """
        if not fields:
            return

        mapping = {str(name): str(value) for name, value in fields.items()}
        self._client.hset(entry_key(entry_id), mapping=mapping)

        logger.debug("Wrote entry fields", entry_id=entry_id, field_count=len(mapping))

    def read(self, entry_id: EntryId) -> Dict[str, str]:
        """
        Read an entry's field map.

        Returns:
            Field map, empty if the entry does not exist
        """
        return self._client.hgetall(entry_key(entry_id))

    def read_many(self, entry_ids: Sequence[EntryId]) -> List[Dict[str, str]]:
        """
        Read field maps for several entries in one round trip.

        Args:
            entry_ids: Entry identities, in the order wanted

        Returns:
            Field maps in the same order; missing entries yield {}
        """
        if not entry_ids:
            return []

        pipe = self._client.pipeline(transaction=False)
        for entry_id in entry_ids:
            pipe.hgetall(entry_key(entry_id))
        return pipe.execute()
