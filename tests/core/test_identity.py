"""Tests for entry id generation."""

import threading

import pytest

from redislogger.core.identity import (
    SEQUENCE_SPAN,
    CoarseIdGenerator,
    SequencedIdGenerator,
    create_id_generator,
)


class TestCoarseIdGenerator:
    """Test second-resolution ids."""

    def test_id_is_seconds(self, clock):
        """Test the id is the whole second."""
        clock.now = 1_700_000_000.75
        generator = CoarseIdGenerator(clock)

        assert generator.next_id() == 1_700_000_000

    def test_same_second_collides(self, clock):
        """Test two ids in one second are equal."""
        generator = CoarseIdGenerator(clock)

        assert generator.next_id() == generator.next_id()

    def test_later_second_is_larger(self, clock):
        """Test ids follow the clock."""
        generator = CoarseIdGenerator(clock)

        first = generator.next_id()
        clock.advance()

        assert generator.next_id() > first


class TestSequencedIdGenerator:
    """Test sequenced ids."""

    def test_same_second_distinct_and_increasing(self, clock):
        """Test ids in one second differ and grow."""
        generator = SequencedIdGenerator(clock)

        ids = [generator.next_id() for _ in range(5)]

        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    def test_encodes_seconds(self, clock):
        """Test the seconds are recoverable from the id."""
        generator = SequencedIdGenerator(clock)

        assert generator.next_id() // SEQUENCE_SPAN == int(clock.now)

    def test_later_second_sorts_after(self, clock):
        """Test a later second beats any sequence from an earlier one."""
        generator = SequencedIdGenerator(clock)
        for _ in range(10):
            earlier = generator.next_id()

        clock.advance()

        assert generator.next_id() > earlier

    def test_sequence_restarts_each_second(self, clock):
        """Test a new second starts the sequence from zero."""
        generator = SequencedIdGenerator(clock)
        for _ in range(5):
            generator.next_id()

        clock.advance()

        assert generator.next_id() == int(clock.now) * SEQUENCE_SPAN

    def test_order_kept_past_span(self, clock):
        """Test ids stay ordered once a process has issued more than SEQUENCE_SPAN ids."""
        generator = SequencedIdGenerator(clock)
        generator.next_id()
        generator._next_sequence = SEQUENCE_SPAN - 1

        last_of_second = generator.next_id()
        clock.advance()
        first_of_next = generator.next_id()
        second_of_next = generator.next_id()

        assert last_of_second == int(clock.now - 1) * SEQUENCE_SPAN + SEQUENCE_SPAN - 1
        assert last_of_second < first_of_next < second_of_next

    def test_thread_safe(self, clock):
        """Test concurrent callers get distinct ids."""
        generator = SequencedIdGenerator(clock)
        ids = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                entry_id = generator.next_id()
                with lock:
                    ids.append(entry_id)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(ids)) == 200


class TestCreateIdGenerator:
    """Test the factory."""

    def test_known_strategies(self, clock):
        """Test strategy names map to generators."""
        assert isinstance(create_id_generator("coarse", clock), CoarseIdGenerator)
        assert isinstance(create_id_generator("sequenced", clock), SequencedIdGenerator)

    def test_default_is_coarse(self):
        """Test the default strategy."""
        assert isinstance(create_id_generator(), CoarseIdGenerator)

    def test_unknown_strategy(self):
        """Test unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown id strategy"):
            create_id_generator("uuid")
