"""Tests for the SQLite tracker store."""

from datetime import datetime, timedelta, timezone

import pytest

from shared_types import AttendanceStatus, ExpenseType, GoalStatus, LinkedItemType, StudyItemType
from tracker import TrackerStore
from tracker.demo import demo_records
from tracker.models import (
    Attendance,
    Expense,
    FocusSession,
    Goal,
    Habit,
    Routine,
    RoutineTask,
    StudyItem,
    WeeklyReview,
)


class TestRoundTrip:
    def test_focus_session(self, store, now):
        session = FocusSession(
            duration=25, completed_at=now, linked_type=LinkedItemType.STUDY
        )
        store.add(session)

        [loaded] = store.focus_sessions_since(now - timedelta(days=1))
        assert loaded.id == session.id
        assert loaded.duration == 25
        assert loaded.linked_type == "study"
        assert loaded.completed_at == now

    def test_routine_tasks_preserved(self, store):
        routine = Routine(
            "Morning",
            type="morning",
            tasks=[RoutineTask("Stretch", True, "06:30"), RoutineTask("Plan")],
        )
        store.add(routine)

        [loaded] = store.routines()
        assert loaded.name == "Morning"
        assert [(t.title, t.completed, t.time) for t in loaded.tasks] == [
            ("Stretch", True, "06:30"),
            ("Plan", False, None),
        ]

    def test_enums_restored(self, store, now):
        store.add_many(
            [
                Expense("Stipend", 500, type=ExpenseType.INCOME, date=now),
                Attendance("Math", status=AttendanceStatus.ABSENT, date=now),
                StudyItem("Ch 1", type=StudyItemType.CHAPTER, progress=20),
                Goal("Save", progress=30, status=GoalStatus.BEHIND),
            ]
        )
        since = now - timedelta(days=1)
        assert store.expenses_since(since)[0].type == ExpenseType.INCOME
        assert store.attendance_since(since)[0].status == AttendanceStatus.ABSENT
        assert store.study_items()[0].type == StudyItemType.CHAPTER
        assert store.goals()[0].status == GoalStatus.BEHIND

    def test_naive_datetimes_treated_as_utc(self, store):
        naive = datetime(2026, 10, 14, 8, 0)
        store.add(Habit("Run", current_streak=2, last_completed_date=naive))
        [habit] = store.habits()
        assert habit.last_completed_date == naive.replace(tzinfo=timezone.utc)

    def test_unsupported_record(self, store):
        with pytest.raises(TypeError, match="Unsupported tracker record"):
            store.add({"title": "not a record"})


class TestWindowedReads:
    def test_focus_since_is_inclusive_and_ordered(self, store, now):
        start = now - timedelta(days=2)
        store.add_many(
            [
                FocusSession(duration=10, completed_at=now),
                FocusSession(duration=20, completed_at=start),
                FocusSession(duration=30, completed_at=start - timedelta(seconds=1)),
            ]
        )
        assert [s.duration for s in store.focus_sessions_since(start)] == [20, 10]

    def test_other_zone_normalized(self, store, now):
        ist = timezone(timedelta(hours=5, minutes=30))
        store.add(Expense("Lunch", 8, date=now.astimezone(ist)))
        assert len(store.expenses_since(now - timedelta(minutes=1))) == 1
        assert store.expenses_since(now + timedelta(minutes=1)) == []


class TestWeeklyReview:
    def test_none_when_empty(self, store):
        assert store.latest_weekly_review() is None

    def test_latest_by_week_start(self, store, now):
        store.add_many(
            [
                WeeklyReview(now - timedelta(days=14), now - timedelta(days=7), {"n": 1}),
                WeeklyReview(now - timedelta(days=7), now, {"n": 2}),
            ]
        )
        assert store.latest_weekly_review().summary == {"n": 2}


class TestCounts:
    def test_counts_per_table(self, store, now):
        store.add_many(demo_records(now))
        counts = store.counts()

        assert counts["habits"] == 3
        assert counts["routines"] == 2
        assert counts["goals"] == 3
        assert counts["weekly_reviews"] == 1
        assert counts["focus_sessions"] == 10

    def test_persists_across_instances(self, tmp_path):
        TrackerStore(tmp_path / "t.db").add(Habit("Read"))
        assert [h.title for h in TrackerStore(tmp_path / "t.db").habits()] == ["Read"]


def test_demo_records_are_deterministic(now):
    first = demo_records(now)
    second = demo_records(now)
    assert [type(r) for r in first] == [type(r) for r in second]
    sessions = [r for r in first if isinstance(r, FocusSession)]
    assert all(now - timedelta(days=7) < s.completed_at <= now for s in sessions)
