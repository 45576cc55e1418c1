"""
Entry identity generation.

Entry ids are integers derived from wall-clock seconds, so sorting ids
descending lists entries newest first.

Two strategies are available:
- coarse: the id is the Unix time in seconds. Two entries recorded in
  the same second share an id and are merged into one stored entry.
- sequenced: the id is seconds * 1000000 plus a process-local sequence
  number. Entries from one process never collide; entries from
  different processes in the same second still can.
"""

import threading
import time
from typing import Callable

from redislogger.utils.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], float]

SEQUENCE_SPAN = 1_000_000


class IdGenerator:
    """Base class for entry id generators."""

    def next_id(self) -> int:
        """
        Get the id for a new entry.

        Returns:
            Entry id
        """
        raise NotImplementedError


class CoarseIdGenerator(IdGenerator):
    """Second-resolution ids; same-second entries collide."""

    def __init__(self, clock: Clock = time.time):
        self._clock = clock

    def next_id(self) -> int:
        return int(self._clock())


class SequencedIdGenerator(IdGenerator):
    """
    Second-resolution ids composed with a process-local sequence.

    The sequence restarts at 0 whenever the second changes, so within
    one second later calls get larger ids. It wraps at SEQUENCE_SPAN,
    which only happens above a million entries in a single second.
    """

    def __init__(self, clock: Clock = time.time):
        self._clock = clock
        self._last_second = None
        self._next_sequence = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            seconds = int(self._clock())
            if seconds != self._last_second:
                self._last_second = seconds
                self._next_sequence = 0
            sequence = self._next_sequence % SEQUENCE_SPAN
            self._next_sequence += 1
        return seconds * SEQUENCE_SPAN + sequence


def create_id_generator(strategy: str = "coarse", clock: Clock = time.time) -> IdGenerator:
    """
    Factory method to create an id generator.

    Args:
        strategy: Id strategy
            - "coarse": Unix seconds
            - "sequenced": Unix seconds with a per-process sequence
        clock: Time source returning Unix seconds

    Returns:
        IdGenerator instance
    """
    generators = {
        "coarse": CoarseIdGenerator,
        "sequenced": SequencedIdGenerator,
    }

    generator_class = generators.get(strategy)

    if generator_class is None:
        raise ValueError(f"Unknown id strategy: {strategy}")

    logger.debug("Created id generator", strategy=strategy)

    return generator_class(clock=clock)
