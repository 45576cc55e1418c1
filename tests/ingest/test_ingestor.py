"""Tests for the write path."""

import pytest
import redis

from redislogger.core.identity import CoarseIdGenerator, SequencedIdGenerator
from redislogger.ingest.ingestor import Ingestor
from redislogger.store.keys import GROUP_UNIVERSE_KEY, entry_key, group_key


class TestIngestor:
    """Test Ingestor.record()."""

    @pytest.fixture
    def ingestor(self, entry_store, group_index, clock):
        return Ingestor(entry_store, group_index, CoarseIdGenerator(clock))

    def test_record_writes_fields_with_timestamp(self, ingestor, entry_store, clock):
        """Test the field map gets a timestamp equal to the id."""
        entry_id = ingestor.record("error", {"msg": "boom"})

        assert entry_id == int(clock.now)
        assert entry_store.read(entry_id) == {"msg": "boom", "timestamp": str(entry_id)}

    def test_record_indexes_level_and_extra_groups(self, ingestor, client):
        """Test level and extra groups get the id."""
        entry_id = ingestor.record("error", {"msg": "boom"}, ["db", "payments"])

        assert client.smembers(GROUP_UNIVERSE_KEY) == {"error", "db", "payments"}
        for group in ("error", "db", "payments"):
            assert client.smembers(group_key(group)) == {str(entry_id)}

    def test_record_without_extra_groups(self, ingestor, client):
        """Test only the level group is used by default."""
        ingestor.record("debug", {"msg": "x"})

        assert client.smembers(GROUP_UNIVERSE_KEY) == {"debug"}

    def test_caller_timestamp_overwritten(self, ingestor, entry_store):
        """Test a caller-supplied timestamp is replaced."""
        entry_id = ingestor.record("warn", {"timestamp": "yesterday"})

        assert entry_store.read(entry_id)["timestamp"] == str(entry_id)

    def test_caller_fields_not_mutated(self, ingestor):
        """Test the caller's mapping is left alone."""
        fields = {"msg": "x"}

        ingestor.record("warn", fields)

        assert fields == {"msg": "x"}

    def test_empty_level_rejected(self, ingestor, client):
        """Test an empty level fails before touching the store."""
        with pytest.raises(ValueError):
            ingestor.record("", {"msg": "x"})

        assert client.dbsize() == 0

    def test_string_extra_groups_rejected(self, ingestor, client):
        """Test a bare string is not treated as a list of groups."""
        with pytest.raises(TypeError):
            ingestor.record("warn", {"msg": "x"}, "db")

        assert client.dbsize() == 0

    def test_same_second_records_merge(self, ingestor, entry_store, group_index):
        """Test coarse ids merge same-second records into one entry."""
        first = ingestor.record("warn", {"msg": "first", "host": "a"})
        second = ingestor.record("warn", {"msg": "second"})

        assert first == second
        assert group_index.size("warn") == 1
        assert entry_store.read(first) == {
            "msg": "second",
            "host": "a",
            "timestamp": str(first),
        }

    def test_sequenced_ids_keep_records_apart(self, entry_store, group_index, clock):
        """Test sequenced ids give same-second records their own entries."""
        ingestor = Ingestor(entry_store, group_index, SequencedIdGenerator(clock))

        first = ingestor.record("warn", {"msg": "first"})
        second = ingestor.record("warn", {"msg": "second"})

        assert second > first
        assert group_index.size("warn") == 2
        assert entry_store.read(first)["msg"] == "first"

    def test_level_helpers(self, ingestor, group_index, clock):
        """Test debug/warn/error record under their level."""
        ingestor.debug({"msg": "d"})
        clock.advance()
        ingestor.warn({"msg": "w"}, ["db"])
        clock.advance()
        ingestor.error({"msg": "e"})

        assert group_index.sizes() == {"db": 1, "debug": 1, "error": 1, "warn": 1}

    def test_membership_failure_leaves_entry(self, ingestor, group_index, client, monkeypatch):
        """Test a failed membership write propagates and leaves the fields."""
        def fail(group, entry_id):
            raise redis.exceptions.ConnectionError("store went away")

        monkeypatch.setattr(group_index, "add_member", fail)

        with pytest.raises(redis.exceptions.ConnectionError):
            ingestor.record("error", {"msg": "orphan"})

        assert client.exists(entry_key(1_700_000_000)) == 1
        assert client.exists(GROUP_UNIVERSE_KEY) == 0
