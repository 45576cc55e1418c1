"""Core storage components: entries, groups, counters and ids."""

from redislogger.core.counter import Counter
from redislogger.core.entry_store import EntryStore
from redislogger.core.group_index import GroupIndex
from redislogger.core.identity import (
    CoarseIdGenerator,
    IdGenerator,
    SequencedIdGenerator,
    create_id_generator,
)

__all__ = [
    "Counter",
    "EntryStore",
    "GroupIndex",
    # Identity
    "IdGenerator",
    "CoarseIdGenerator",
    "SequencedIdGenerator",
    "create_id_generator",
]
