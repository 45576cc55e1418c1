"""
Read path: list groups, page through a group, intersect groups.

Intersections are computed in the store. Each query materialises the
common ids into a scratch set named after a fresh counter value, reads
the newest ids from it and deletes it:

    INCR logger:index          -> n
    SINTERSTORE logger:inter:n logger:set:a logger:set:b ...
    SORT logger:inter:n DESC LIMIT 0 <limit>
    HGETALL log:<id> ...
    DEL logger:inter:n

Distinct counter values keep concurrent queries from seeing each other's
scratch sets. If the read or delete fails the scratch set is left
behind; an optional TTL lets such sets expire on their own.
"""

from typing import Dict, List, Sequence

from redislogger.core.counter import Counter
from redislogger.core.entry_store import EntryId, EntryStore
from redislogger.core.group_index import GroupIndex
from redislogger.store.keys import intersect_key
from redislogger.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50
DEFAULT_INTERSECT_LIMIT = 100


class QueryService:
    """Queries over recorded entries."""

    def __init__(
        self,
        entry_store: EntryStore,
        group_index: GroupIndex,
        counter: Counter,
        intersect_limit: int = DEFAULT_INTERSECT_LIMIT,
        ephemeral_ttl_seconds: int = 0,
    ):
        """
        Initialize query service.

        Args:
            entry_store: Entry field map storage
            group_index: Group membership index
            counter: Counter naming intersection scratch sets
            intersect_limit: Maximum entries returned by intersect()
            ephemeral_ttl_seconds: Expiry for scratch sets (0 = none)
        """
        if intersect_limit < 0:
            raise ValueError(f"Intersect limit must be non-negative: {intersect_limit}")
        if ephemeral_ttl_seconds < 0:
            raise ValueError(
                f"Ephemeral TTL must be non-negative: {ephemeral_ttl_seconds}"
            )

        self._entries = entry_store
        self._groups = group_index
        self._counter = counter
        self._intersect_limit = intersect_limit
        self._ephemeral_ttl_seconds = ephemeral_ttl_seconds

        logger.info(
            "QueryService initialized",
            intersect_limit=intersect_limit,
            ephemeral_ttl_seconds=ephemeral_ttl_seconds,
        )

    def list_groups(self) -> Dict[str, int]:
        """
        Get every known group with its entry count.

        Returns:
            Map of group name to number of entries
        """
        return self._groups.sizes()

    def size(self, group: str) -> int:
        """Get the number of entries in a group (0 if unknown)."""
        return self._groups.size(group)

    def entries(
        self,
        group: str,
        start: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> List[Dict[str, str]]:
        """
        Get a page of a group's entries, newest first.

        Args:
            group: Group name
            start: Number of newest entries to skip
            page_size: Maximum entries to return

        Returns:
            Field maps in descending id order; an entry whose field map
            is missing comes back as {}

        Raises:
            ValueError: If start or page_size is negative
        """
        if start < 0:
            raise ValueError(f"Start must be non-negative: {start}")
        if page_size < 0:
            raise ValueError(f"Page size must be non-negative: {page_size}")

        entry_ids = self._groups.members_desc(group, start, page_size)

        logger.debug(
            "Fetched group page",
            group=group,
            start=start,
            page_size=page_size,
            count=len(entry_ids),
        )

        return self.fetch_entries(entry_ids)

    def intersect(self, groups: Sequence[str]) -> List[Dict[str, str]]:
        """
        Get the newest entries that belong to every given group.

        Args:
            groups: At least two group names

        Returns:
            Up to intersect_limit field maps in descending id order

        Raises:
            ValueError: If fewer than two groups are given
        """
        if isinstance(groups, str) or len(groups) < 2:
            raise ValueError("Intersection needs at least two group names")

        counter = self._counter.next_value()
        scratch_key = intersect_key(counter)

        common = self._groups.intersect_into(scratch_key, groups)
        # An empty intersection stores nothing, so there is nothing to expire
        if self._ephemeral_ttl_seconds and common:
            self._groups.expire_set(scratch_key, self._ephemeral_ttl_seconds)

        entry_ids = self._groups.sort_desc(scratch_key, 0, self._intersect_limit)
        entries = self.fetch_entries(entry_ids)

        self._groups.delete_set(scratch_key)

        logger.debug(
            "Intersected groups",
            groups=list(groups),
            counter=counter,
            common=common,
            returned=len(entries),
        )

        return entries

    def fetch_entries(self, entry_ids: Sequence[EntryId]) -> List[Dict[str, str]]:
        """
        Get field maps for entry ids, keeping their order.

        Args:
            entry_ids: Entry identities

        Returns:
            Field maps, {} for entries that no longer exist
        """
        return self._entries.read_many(entry_ids)
