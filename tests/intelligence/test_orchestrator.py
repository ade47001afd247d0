"""Tests for the aggregation orchestrator."""

import time
from datetime import timezone

import pytest

from intelligence.orchestrator import AggregationFailed, IntelligenceOrchestrator
from observability import metrics as run_metrics
from shared_types import AttendanceStatus, ExpenseType, LinkedItemType
from tracker.demo import demo_records
from tracker.models import (
    Attendance,
    Expense,
    FocusSession,
    Habit,
    Routine,
    RoutineTask,
    StudyItem,
)


@pytest.fixture
def orchestrator(store, now):
    return IntelligenceOrchestrator(store, tz=timezone.utc, clock=lambda: now)


@pytest.fixture(autouse=True)
def reset_metrics():
    run_metrics.reset()
    yield
    run_metrics.reset()


class TestDashboard:
    @pytest.mark.asyncio
    async def test_empty_store(self, orchestrator):
        view = await orchestrator.dashboard()

        assert view["metrics"] == {"consistency": 82, "focus": 0, "studyLoad": 0, "financial": 0}
        assert view["globalScore"] == 29
        assert view["miniInsight"] == "Strong habits · Low study load · Expense drift detected"

    @pytest.mark.asyncio
    async def test_scores_from_records(self, store, orchestrator, days_ago):
        store.add_many(
            [
                Habit("Run", current_streak=4),
                Habit("Read", current_streak=0),
                Attendance("Math", date=days_ago(3)),
                Attendance("Math", status=AttendanceStatus.ABSENT, date=days_ago(5)),
                FocusSession(duration=120, completed_at=days_ago(1)),
                FocusSession(duration=30, completed_at=days_ago(0)),
                StudyItem("Algebra", progress=70),
                Expense("Stipend", 600, type=ExpenseType.INCOME, date=days_ago(10)),
                Expense("Books", 200, date=days_ago(4)),
            ]
        )
        view = await orchestrator.dashboard()

        assert view["metrics"] == {
            "consistency": 50,
            "focus": 50,
            "studyLoad": 70,
            "financial": 75,
        }
        # 17.5 + 17.5 + 21
        assert view["globalScore"] == 56


class TestWindows:
    @pytest.mark.asyncio
    async def test_focus_window_is_seven_calendar_days(self, store, orchestrator, days_ago):
        store.add_many(
            [
                FocusSession(duration=150, completed_at=days_ago(6, hour=0)),
                FocusSession(duration=150, completed_at=days_ago(7, hour=23)),
            ]
        )
        data = await orchestrator.aggregate()
        assert len(data.snapshot.focus_sessions) == 1
        assert data.metrics.focus == 50

    @pytest.mark.asyncio
    async def test_money_and_attendance_use_thirty_days(self, store, orchestrator, days_ago):
        store.add_many(
            [
                Expense("Old rent", 500, date=days_ago(30)),
                Expense("Groceries", 50, date=days_ago(29)),
                Attendance("Math", status=AttendanceStatus.ABSENT, date=days_ago(40)),
                Attendance("Math", date=days_ago(20)),
            ]
        )
        data = await orchestrator.aggregate()

        assert [e.title for e in data.snapshot.expenses] == ["Groceries"]
        assert len(data.snapshot.attendance) == 1
        assert data.has_cash_flow


class TestCore:
    @pytest.mark.asyncio
    async def test_payload_shape(self, store, orchestrator, now):
        store.add_many(demo_records(now))
        view = await orchestrator.core()

        assert set(view) == {
            "globalScore",
            "metrics",
            "domainStatus",
            "charts",
            "heatIndicator",
            "aiLayer",
            "predictions",
        }
        charts = view["charts"]
        assert len(charts["performanceData"]) == 7
        assert charts["performanceData"][-1]["date"] == "Wed"
        assert len(charts["modulePerformance"]) == 7
        assert 1 <= len(charts["performanceDistribution"]) <= 5
        assert view["heatIndicator"] == [p["focus"] for p in charts["performanceData"]]
        assert len(view["aiLayer"]["recommendations"]) == 3
        assert view["predictions"]["nextRiskDay"] == "Wed"

    @pytest.mark.asyncio
    async def test_study_series_from_linked_sessions(self, store, orchestrator, days_ago):
        store.add_many(
            [
                FocusSession(
                    duration=30, completed_at=days_ago(0), linked_type=LinkedItemType.STUDY
                ),
                FocusSession(duration=30, completed_at=days_ago(0)),
                Routine("Night", tasks=[RoutineTask("a", completed=True)]),
            ]
        )
        view = await orchestrator.core()
        today = view["charts"]["performanceData"][-1]

        assert today == {"date": "Wed", "focus": 100, "load": 100, "study": 50}

    @pytest.mark.asyncio
    async def test_empty_store_distribution_has_only_habits(self, store, orchestrator):
        view = await orchestrator.core()
        names = [s["name"] for s in view["charts"]["performanceDistribution"]]
        # Habits still scores the 82 default
        assert names == ["Habits"]


class TestFailures:
    @pytest.mark.asyncio
    async def test_any_read_failure_fails_everything(self, store, orchestrator, monkeypatch):
        def boom():
            raise RuntimeError("collection unavailable")

        monkeypatch.setattr(store, "goals", boom)
        with pytest.raises(AggregationFailed, match="goals read failed"):
            await orchestrator.dashboard()
        assert run_metrics.count("intelligence.aggregate_failed") == 1
        assert run_metrics.count("intelligence.aggregate_ok") == 0

    @pytest.mark.asyncio
    async def test_slow_read_times_out(self, store, now, monkeypatch):
        def slow():
            time.sleep(0.5)
            return []

        monkeypatch.setattr(store, "habits", slow)
        orchestrator = IntelligenceOrchestrator(
            store, tz=timezone.utc, read_timeout=0.05, clock=lambda: now
        )
        with pytest.raises(AggregationFailed, match="timed out"):
            await orchestrator.core()

    @pytest.mark.asyncio
    async def test_success_is_counted(self, orchestrator):
        await orchestrator.dashboard()
        assert run_metrics.count("intelligence.aggregate_ok") == 1
        assert run_metrics.summary()["timers"]["intelligence.aggregate"]["count"] == 1
