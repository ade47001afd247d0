"""Tests for in-process metrics."""

import pytest

from observability import Metrics


def test_counters():
    m = Metrics()
    m.counter("intelligence.aggregate_ok")
    m.counter("intelligence.aggregate_ok", 2)
    assert m.count("intelligence.aggregate_ok") == 3
    assert m.count("missing") == 0


def test_timer_records_on_error():
    m = Metrics()
    with pytest.raises(RuntimeError):
        with m.timer("intelligence.aggregate"):
            raise RuntimeError("read failed")
    assert m.summary()["timers"]["intelligence.aggregate"]["count"] == 1


def test_samples_bounded():
    m = Metrics(max_samples=3)
    for _ in range(5):
        with m.timer("t"):
            pass
    assert m.summary()["timers"]["t"]["count"] == 3


def test_reset():
    m = Metrics()
    m.counter("a")
    with m.timer("t"):
        pass
    m.reset()
    assert m.summary() == {"counters": {}, "timers": {}}
