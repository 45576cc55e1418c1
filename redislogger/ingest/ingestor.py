"""
Write path: record log entries and index them by group.

An entry is written in two independent steps:
1. Its field map (plus a timestamp field equal to its id)
2. Its membership in the level group and every extra group

The steps are not transactional. A failure in between leaves either an
entry with no group or a group member with no field map, and the store
error propagates to the caller unchanged. Retrying the membership step
is safe because set adds are idempotent.
"""

from typing import Any, Mapping, Optional, Sequence

from redislogger.core.entry_store import EntryStore
from redislogger.core.group_index import GroupIndex
from redislogger.core.identity import CoarseIdGenerator, IdGenerator
from redislogger.utils.logging import get_logger

logger = get_logger(__name__)

TIMESTAMP_FIELD = "timestamp"

DEBUG = "debug"
WARN = "warn"
ERROR = "error"


class Ingestor:
    """
    Records log entries into the store.

    With the default coarse id generator, two entries recorded in the
    same second share one id: the second entry's fields overwrite the
    first's and the group sets hold the id once. Pass a
    SequencedIdGenerator to keep same-second entries apart.
    """

    def __init__(
        self,
        entry_store: EntryStore,
        group_index: GroupIndex,
        id_generator: Optional[IdGenerator] = None,
    ):
        """
        Initialize ingestor.

        Args:
            entry_store: Entry field map storage
            group_index: Group membership index
            id_generator: Source of entry ids (default: coarse seconds)
        """
        self._entries = entry_store
        self._groups = group_index
        self._id_generator = id_generator or CoarseIdGenerator()

        logger.info(
            "Ingestor initialized",
            id_generator=type(self._id_generator).__name__,
        )

    def record(
        self,
        level: str,
        fields: Mapping[str, Any],
        extra_groups: Sequence[str] = (),
    ) -> int:
        """
        Record one log entry.

        Args:
            level: Level name, used as the entry's primary group
            fields: Entry fields; a "timestamp" key is replaced
            extra_groups: Further groups to add the entry to

        Returns:
            The entry id

        Raises:
            ValueError: If level is empty
            TypeError: If extra_groups is a single string
        """
        if not level:
            raise ValueError("Level must be a non-empty string")
        if isinstance(extra_groups, str):
            raise TypeError(
                f"extra_groups must be a sequence of group names, got string {extra_groups!r}"
            )

        entry_id = self._id_generator.next_id()

        entry_fields = dict(fields)
        entry_fields[TIMESTAMP_FIELD] = entry_id
        self._entries.write(entry_id, entry_fields)

        self._groups.add_member(level, entry_id)
        for group in extra_groups:
            self._groups.add_member(group, entry_id)

        logger.debug(
            "Recorded entry",
            entry_id=entry_id,
            level=level,
            groups=list(extra_groups),
        )

        return entry_id

    def debug(self, fields: Mapping[str, Any], groups: Sequence[str] = ()) -> int:
        """Record an entry at the debug level."""
        return self.record(DEBUG, fields, groups)

    def warn(self, fields: Mapping[str, Any], groups: Sequence[str] = ()) -> int:
        """Record an entry at the warn level."""
        return self.record(WARN, fields, groups)

    def error(self, fields: Mapping[str, Any], groups: Sequence[str] = ()) -> int:
        """Record an entry at the error level."""
        return self.record(ERROR, fields, groups)
