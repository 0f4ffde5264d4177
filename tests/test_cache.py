"""Tests for cache.py — single-flight lazy values."""

import threading
import time

import pytest

from testrail_cli.cache import LazyValue


class TestLazyValue:
    def test_not_realized_until_get(self):
        calls = []
        cell = LazyValue(lambda: calls.append(1) or "v")
        assert cell.is_realized is False
        assert calls == []
        assert cell.get() == "v"
        assert cell.is_realized is True

    def test_factory_runs_once(self):
        calls = []

        def factory():
            calls.append(1)
            return ["a"]

        cell = LazyValue(factory)
        first = cell.get()
        second = cell.get()
        assert first is second
        assert len(calls) == 1

    def test_concurrent_first_access_runs_factory_once(self):
        calls = []
        barrier = threading.Barrier(8)

        def factory():
            calls.append(1)
            time.sleep(0.05)
            return {"levels": [1, 2, 3]}

        cell = LazyValue(factory)
        results = []

        def worker():
            barrier.wait()
            results.append(cell.get())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_failed_factory_leaves_cell_empty(self):
        attempts = []

        def factory():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("network down")
            return "ok"

        cell = LazyValue(factory)
        with pytest.raises(RuntimeError):
            cell.get()
        assert cell.is_realized is False
        assert cell.get() == "ok"
        assert len(attempts) == 2

    def test_none_is_a_valid_value(self):
        calls = []
        cell = LazyValue(lambda: calls.append(1))
        assert cell.get() is None
        assert cell.get() is None
        assert len(calls) == 1

    def test_reset_recomputes(self):
        counter = iter(range(10))
        cell = LazyValue(lambda: next(counter))
        assert cell.get() == 0
        cell.reset()
        assert cell.is_realized is False
        assert cell.get() == 1
