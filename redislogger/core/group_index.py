"""
Group bookkeeping: the group-name universe and per-group membership sets.

A group springs into existence the first time an entry id is added to
it and is never removed. Membership adds are set adds, so repeating one
is harmless.
"""

from typing import Dict, List, Sequence, Set

import redis

from redislogger.store.keys import GROUP_UNIVERSE_KEY, group_key
from redislogger.utils.logging import get_logger

logger = get_logger(__name__)


class GroupIndex:
    """
    Index of entry ids by group name.

    The universe set (logger:sets) names every group ever used; each
    group's members live in logger:set:<group>.
    """

    def __init__(self, client: redis.Redis):
        """
        Initialize group index.

        Args:
            client: Store client (shared, thread-safe)
        """
        self._client = client

    def add_member(self, group: str, entry_id: int) -> None:
        """
        Add an entry id to a group, registering the group name.

        The name is registered before the membership so the universe is
        never missing a group that has members.

        Args:
            group: Group name
            entry_id: Entry identity
        """
        self._client.sadd(GROUP_UNIVERSE_KEY, group)
        self._client.sadd(group_key(group), entry_id)

        logger.debug("Added group member", group=group, entry_id=entry_id)

    def names(self) -> Set[str]:
        """Get every known group name."""
        return self._client.smembers(GROUP_UNIVERSE_KEY)

    def size(self, group: str) -> int:
        """
        Get the number of entries in a group.

        Returns:
            Membership count, 0 for a group that was never used
        """
        return self._client.scard(group_key(group))

    def sizes(self) -> Dict[str, int]:
        """
        Get the membership count of every known group.

        Returns:
            Map of group name to count
        """
        names = sorted(self.names())
        if not names:
            return {}

        pipe = self._client.pipeline(transaction=False)
        for name in names:
            pipe.scard(group_key(name))
        return dict(zip(names, pipe.execute()))

    def members_desc(self, group: str, start: int, count: int) -> List[int]:
        """
        Get a page of a group's entry ids, newest first.

        Args:
            group: Group name
            start: Offset into the sorted ids
            count: Maximum number of ids

        Returns:
            Entry ids in descending numeric order
        """
        return self.sort_desc(group_key(group), start, count)

    def sort_desc(self, key: str, start: int, count: int) -> List[int]:
        """
        Sort any set of entry ids numerically, descending, with a limit.

        Args:
            key: Store key of the set
            start: Offset into the sorted ids
            count: Maximum number of ids

        Returns:
            Entry ids in descending numeric order
        """
        if count == 0:
            return []
        members = self._client.sort(key, start=start, num=count, desc=True)
        return [int(member) for member in members]

    def intersect_into(self, dest_key: str, groups: Sequence[str]) -> int:
        """
        Store the ids common to all groups under a new key.

        Groups that were never used count as empty sets.

        Args:
            dest_key: Key to store the intersection at
            groups: Group names

        Returns:
            Number of ids in the intersection
        """
        return self._client.sinterstore(dest_key, [group_key(g) for g in groups])

    def expire_set(self, key: str, seconds: int) -> None:
        """Give a derived set an expiry."""
        self._client.expire(key, seconds)

    def delete_set(self, key: str) -> None:
        """Delete a derived set."""
        self._client.delete(key)
