"""Observability: in-process counters and timers for the aggregation path."""

import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


class Metrics:
    """Dict-based counters and duration samples, process-local."""

    def __init__(self, max_samples: int = 500):
        self.max_samples = max_samples
        self._counters: dict[str, int] = {}
        self._timers: dict[str, list[float]] = {}

    def counter(self, name: str, value: int = 1):
        self._counters[name] = self._counters.get(name, 0) + value

    def count(self, name: str) -> int:
        return self._counters.get(name, 0)

    @contextmanager
    def timer(self, name: str):
        """Record the wall time of the block, even when it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            samples = self._timers.setdefault(name, [])
            samples.append(time.perf_counter() - start)
            if len(samples) > self.max_samples:
                del samples[: len(samples) - self.max_samples]

    def summary(self) -> dict[str, Any]:
        timer_summary = {}
        for name, durations in self._timers.items():
            if not durations:
                continue
            ordered = sorted(durations)
            timer_summary[name] = {
                "count": len(durations),
                "avg_ms": round(sum(durations) / len(durations) * 1000, 2),
                "p95_ms": round(ordered[int(0.95 * (len(ordered) - 1))] * 1000, 2),
                "max_ms": round(ordered[-1] * 1000, 2),
            }
        return {"counters": dict(self._counters), "timers": timer_summary}

    def reset(self):
        self._counters.clear()
        self._timers.clear()


# Module-level singleton
metrics = Metrics()


def log_run_summary():
    logger.info("run_summary", **metrics.summary())
