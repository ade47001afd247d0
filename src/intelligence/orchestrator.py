"""Aggregation orchestrator: parallel tracker reads -> scores, charts, insights.

Each request fans out eight independent reads, joins them, then derives
everything synchronously. Reads are not mutually consistent (a habit completed
between two reads is fine); any failed read fails the whole aggregation.
"""

import asyncio
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo

import structlog
import structlog.contextvars

from observability import metrics as run_metrics
from tracker.models import TrackerSnapshot
from tracker.store import TrackerStore

from .insights import domain_status, evaluate, mini_insight
from .modules import module_performance, performance_distribution
from .normalizer import MetricSet, cash_flow, global_score, normalize
from .timeseries import build_performance_data, heat_indicator
from .windows import trailing_window_start

logger = structlog.get_logger()

FOCUS_WINDOW_DAYS = 7
MONEY_WINDOW_DAYS = 30
ATTENDANCE_WINDOW_DAYS = 30


class AggregationFailed(Exception):
    """A tracker read failed or timed out during aggregation."""


@dataclass
class AggregatedData:
    now: datetime
    snapshot: TrackerSnapshot
    metrics: MetricSet
    global_score: int

    @property
    def has_cash_flow(self) -> bool:
        income, spent = cash_flow(self.snapshot.expenses)
        return income + spent > 0


class IntelligenceOrchestrator:
    """Builds the dashboard and core views from a TrackerStore."""

    def __init__(
        self,
        store: TrackerStore,
        tz: tzinfo,
        read_timeout: float = 5.0,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.tz = tz
        self.read_timeout = read_timeout
        self._clock = clock or (lambda: datetime.now(tz))

    async def _read(self, name: str, func, *args):
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args), self.read_timeout)
        except asyncio.TimeoutError as e:
            raise AggregationFailed(f"{name} read timed out after {self.read_timeout}s") from e
        except AggregationFailed:
            raise
        except Exception as e:
            raise AggregationFailed(f"{name} read failed: {e}") from e

    async def fetch_snapshot(self, now: datetime) -> TrackerSnapshot:
        week_start = trailing_window_start(now, FOCUS_WINDOW_DAYS)
        month_start = trailing_window_start(now, MONEY_WINDOW_DAYS)
        attendance_start = trailing_window_start(now, ATTENDANCE_WINDOW_DAYS)
        store = self.store

        (
            focus_sessions,
            habits,
            routines,
            expenses,
            attendance,
            study_items,
            goals,
            weekly_review,
        ) = await asyncio.gather(
            self._read("focus_sessions", store.focus_sessions_since, week_start),
            self._read("habits", store.habits),
            self._read("routines", store.routines),
            self._read("expenses", store.expenses_since, month_start),
            self._read("attendance", store.attendance_since, attendance_start),
            self._read("study_items", store.study_items),
            self._read("goals", store.goals),
            self._read("weekly_review", store.latest_weekly_review),
        )
        return TrackerSnapshot(
            focus_sessions=focus_sessions,
            habits=habits,
            routines=routines,
            expenses=expenses,
            attendance=attendance,
            study_items=study_items,
            goals=goals,
            weekly_review=weekly_review,
        )

    async def aggregate(self) -> AggregatedData:
        now = self._clock()
        # Correlation ID for every log line of this fan-out
        structlog.contextvars.bind_contextvars(run_id=uuid.uuid4().hex[:8])
        try:
            try:
                with run_metrics.timer("intelligence.aggregate"):
                    snapshot = await self.fetch_snapshot(now)
            except AggregationFailed as e:
                run_metrics.counter("intelligence.aggregate_failed")
                logger.error("intelligence.aggregate_failed", error=str(e))
                raise

            metric_set = normalize(
                habits=snapshot.habits,
                attendance=snapshot.attendance,
                focus_sessions=snapshot.focus_sessions,
                study_items=snapshot.study_items,
                expenses=snapshot.expenses,
            )
            run_metrics.counter("intelligence.aggregate_ok")
            logger.debug(
                "intelligence.aggregated",
                focus_sessions=len(snapshot.focus_sessions),
                habits=len(snapshot.habits),
                expenses=len(snapshot.expenses),
                **metric_set.to_dict(),
            )
            return AggregatedData(
                now=now,
                snapshot=snapshot,
                metrics=metric_set,
                global_score=global_score(metric_set),
            )
        finally:
            structlog.contextvars.unbind_contextvars("run_id")

    async def dashboard(self) -> dict:
        return build_dashboard(await self.aggregate())

    async def core(self) -> dict:
        return build_core(await self.aggregate())


def build_dashboard(data: AggregatedData) -> dict:
    return {
        "globalScore": data.global_score,
        "metrics": data.metrics.to_dict(),
        "miniInsight": mini_insight(data.metrics),
    }


def build_core(data: AggregatedData) -> dict:
    snap = data.snapshot
    points = build_performance_data(snap.focus_sessions, snap.routines, data.now)
    modules = module_performance(data.metrics, snap.routines, snap.goals, snap.attendance)
    insight = evaluate(data.metrics, data.now, has_cash_flow=data.has_cash_flow)

    return {
        "globalScore": data.global_score,
        "metrics": data.metrics.to_dict(),
        "domainStatus": domain_status(data.metrics),
        "charts": {
            "performanceData": [p.to_dict() for p in points],
            "modulePerformance": [m.to_dict() for m in modules],
            "performanceDistribution": performance_distribution(modules),
        },
        "heatIndicator": heat_indicator(points),
        "aiLayer": insight.ai_layer(),
        "predictions": insight.predictions.to_dict(),
    }
