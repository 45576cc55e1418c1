"""
Key layout in the backing store.

Names are compatible with stores written by earlier redis_logger
releases, so existing data can be browsed without migration:

    logger:sets            set of every group name
    logger:set:<group>     membership set of entry ids
    log:<id>               field map of one entry
    logger:index           counter naming intersection sets
    logger:inter:<n>       scratch set for one intersection query
"""

from typing import Union

GROUP_UNIVERSE_KEY = "logger:sets"
GROUP_KEY_PREFIX = "logger:set:"
ENTRY_KEY_PREFIX = "log:"
INTERSECT_COUNTER_KEY = "logger:index"
INTERSECT_KEY_PREFIX = "logger:inter:"


def group_key(group: str) -> str:
    """Key of a group's membership set."""
    return f"{GROUP_KEY_PREFIX}{group}"


def entry_key(entry_id: Union[int, str]) -> str:
    """Key of an entry's field map."""
    return f"{ENTRY_KEY_PREFIX}{entry_id}"


def intersect_key(counter: int) -> str:
    """Key of the scratch set for one intersection query."""
    return f"{INTERSECT_KEY_PREFIX}{counter}"
