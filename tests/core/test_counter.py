"""Tests for the store-side counter."""

import threading


class TestCounter:
    """Test Counter."""

    def test_starts_at_zero(self, counter):
        """Test an unused counter reads 0."""
        assert counter.current() == 0

    def test_increments(self, counter, client):
        """Test values increase by one and persist in the store."""
        assert counter.next_value() == 1
        assert counter.next_value() == 2
        assert counter.current() == 2
        assert client.get(counter.key) == "2"

    def test_concurrent_values_distinct(self, counter):
        """Test concurrent increments never hand out the same value."""
        values = []
        lock = threading.Lock()

        def worker():
            for _ in range(25):
                value = counter.next_value()
                with lock:
                    values.append(value)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(values) == 100
        assert len(set(values)) == 100
