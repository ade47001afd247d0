"""SQLite persistence for the tracking collections, in the read shapes the intelligence engine uses."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from db import wal_connect
from shared_types import AttendanceStatus, ExpenseType, GoalStatus, SessionType, StudyItemType

from .models import (
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

logger = structlog.get_logger()

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS focus_sessions (
        id TEXT PRIMARY KEY,
        duration REAL NOT NULL,
        session_type TEXT NOT NULL DEFAULT 'custom',
        linked_type TEXT,
        completed_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_focus_completed ON focus_sessions(completed_at);

    CREATE TABLE IF NOT EXISTS habits (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        current_streak INTEGER NOT NULL DEFAULT 0,
        longest_streak INTEGER NOT NULL DEFAULT 0,
        last_completed_date TEXT
    );

    CREATE TABLE IF NOT EXISTS routines (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        type TEXT NOT NULL DEFAULT 'custom',
        tasks_json TEXT NOT NULL DEFAULT '[]'
    );

    CREATE TABLE IF NOT EXISTS expenses (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        amount REAL NOT NULL,
        type TEXT NOT NULL DEFAULT 'expense' CHECK(type IN ('income','expense')),
        category TEXT NOT NULL DEFAULT 'other',
        date TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_expense_date ON expenses(date);

    CREATE TABLE IF NOT EXISTS attendance (
        id TEXT PRIMARY KEY,
        subject TEXT NOT NULL,
        type TEXT NOT NULL DEFAULT 'theory',
        status TEXT NOT NULL DEFAULT 'present' CHECK(status IN ('present','absent')),
        date TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_attendance_date ON attendance(date);

    CREATE TABLE IF NOT EXISTS study_items (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        type TEXT NOT NULL CHECK(type IN ('subject','chapter','topic')),
        parent_id TEXT,
        completed INTEGER NOT NULL DEFAULT 0,
        progress REAL NOT NULL DEFAULT 0
    );

    CREATE TABLE IF NOT EXISTS goals (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        type TEXT NOT NULL DEFAULT 'short-term',
        progress REAL NOT NULL DEFAULT 0,
        status TEXT NOT NULL DEFAULT 'on-track',
        deadline TEXT
    );

    CREATE TABLE IF NOT EXISTS weekly_reviews (
        id TEXT PRIMARY KEY,
        week_start TEXT NOT NULL,
        week_end TEXT NOT NULL,
        summary_json TEXT NOT NULL DEFAULT '{}'
    );
    CREATE INDEX IF NOT EXISTS idx_review_week ON weekly_reviews(week_start DESC);
"""


def _ts(value: Optional[datetime]) -> Optional[str]:
    """Normalize to a UTC ISO string so lexical order matches time order."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _dt(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


class TrackerStore:
    """SQLite-backed view of the habits/routines/focus/expense/... collections."""

    def __init__(self, db_path: Path, timeout: float = 5.0):
        self.db_path = Path(db_path).expanduser()
        self.timeout = timeout
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_tables()

    def _connect(self) -> sqlite3.Connection:
        return wal_connect(self.db_path, row_factory=True, timeout=self.timeout)

    def _init_tables(self):
        conn = self._connect()
        try:
            conn.executescript(_SCHEMA)
            conn.commit()
        finally:
            conn.close()

    def _query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        conn = self._connect()
        try:
            return conn.execute(sql, params).fetchall()
        finally:
            conn.close()

    # --- Writes (seeding / collaborator modules) ---

    def add(self, record) -> str:
        """Insert any tracker record, return its id."""
        table, row = self._to_row(record)
        cols = ", ".join(row)
        marks = ", ".join("?" for _ in row)
        conn = self._connect()
        try:
            conn.execute(f"INSERT INTO {table} ({cols}) VALUES ({marks})", tuple(row.values()))
            conn.commit()
        finally:
            conn.close()
        logger.debug("tracker.record_added", table=table, id=record.id)
        return record.id

    def add_many(self, records) -> int:
        count = 0
        for record in records:
            self.add(record)
            count += 1
        return count

    @staticmethod
    def _to_row(record) -> tuple[str, dict]:
        if isinstance(record, FocusSession):
            return "focus_sessions", {
                "id": record.id,
                "duration": record.duration,
                "session_type": str(record.session_type),
                "linked_type": str(record.linked_type) if record.linked_type else None,
                "completed_at": _ts(record.completed_at),
            }
        if isinstance(record, Habit):
            return "habits", {
                "id": record.id,
                "title": record.title,
                "current_streak": record.current_streak,
                "longest_streak": record.longest_streak,
                "last_completed_date": _ts(record.last_completed_date),
            }
        if isinstance(record, Routine):
            tasks = [
                {"title": t.title, "completed": t.completed, "time": t.time}
                for t in record.tasks
            ]
            return "routines", {
                "id": record.id,
                "name": record.name,
                "type": record.type,
                "tasks_json": json.dumps(tasks),
            }
        if isinstance(record, Expense):
            return "expenses", {
                "id": record.id,
                "title": record.title,
                "amount": record.amount,
                "type": str(record.type),
                "category": record.category,
                "date": _ts(record.date),
            }
        if isinstance(record, Attendance):
            return "attendance", {
                "id": record.id,
                "subject": record.subject,
                "type": record.type,
                "status": str(record.status),
                "date": _ts(record.date),
            }
        if isinstance(record, StudyItem):
            return "study_items", {
                "id": record.id,
                "title": record.title,
                "type": str(record.type),
                "parent_id": record.parent_id,
                "completed": int(record.completed),
                "progress": record.progress,
            }
        if isinstance(record, Goal):
            return "goals", {
                "id": record.id,
                "title": record.title,
                "type": record.type,
                "progress": record.progress,
                "status": str(record.status),
                "deadline": _ts(record.deadline),
            }
        if isinstance(record, WeeklyReview):
            return "weekly_reviews", {
                "id": record.id,
                "week_start": _ts(record.week_start),
                "week_end": _ts(record.week_end),
                "summary_json": json.dumps(record.summary),
            }
        raise TypeError(f"Unsupported tracker record: {type(record).__name__}")

    # --- Reads used by the aggregation engine ---

    def focus_sessions_since(self, start: datetime) -> list[FocusSession]:
        rows = self._query(
            "SELECT * FROM focus_sessions WHERE completed_at >= ? ORDER BY completed_at ASC",
            (_ts(start),),
        )
        return [
            FocusSession(
                id=r["id"],
                duration=r["duration"] or 0,
                session_type=SessionType(r["session_type"]),
                linked_type=r["linked_type"],
                completed_at=_dt(r["completed_at"]),
            )
            for r in rows
        ]

    def habits(self) -> list[Habit]:
        rows = self._query("SELECT * FROM habits")
        return [
            Habit(
                id=r["id"],
                title=r["title"],
                current_streak=r["current_streak"] or 0,
                longest_streak=r["longest_streak"] or 0,
                last_completed_date=_dt(r["last_completed_date"]),
            )
            for r in rows
        ]

    def routines(self) -> list[Routine]:
        rows = self._query("SELECT * FROM routines")
        routines = []
        for r in rows:
            tasks = [
                RoutineTask(
                    title=t.get("title", ""),
                    completed=bool(t.get("completed")),
                    time=t.get("time"),
                )
                for t in json.loads(r["tasks_json"] or "[]")
            ]
            routines.append(Routine(id=r["id"], name=r["name"], type=r["type"], tasks=tasks))
        return routines

    def expenses_since(self, start: datetime) -> list[Expense]:
        rows = self._query(
            "SELECT * FROM expenses WHERE date >= ? ORDER BY date ASC", (_ts(start),)
        )
        return [
            Expense(
                id=r["id"],
                title=r["title"],
                amount=r["amount"] or 0,
                type=ExpenseType(r["type"]),
                category=r["category"],
                date=_dt(r["date"]),
            )
            for r in rows
        ]

    def attendance_since(self, start: datetime) -> list[Attendance]:
        rows = self._query(
            "SELECT * FROM attendance WHERE date >= ? ORDER BY date ASC", (_ts(start),)
        )
        return [
            Attendance(
                id=r["id"],
                subject=r["subject"],
                type=r["type"],
                status=AttendanceStatus(r["status"]),
                date=_dt(r["date"]),
            )
            for r in rows
        ]

    def study_items(self) -> list[StudyItem]:
        rows = self._query("SELECT * FROM study_items")
        return [
            StudyItem(
                id=r["id"],
                title=r["title"],
                type=StudyItemType(r["type"]),
                parent_id=r["parent_id"],
                completed=bool(r["completed"]),
                progress=r["progress"] or 0,
            )
            for r in rows
        ]

    def goals(self) -> list[Goal]:
        rows = self._query("SELECT * FROM goals")
        return [
            Goal(
                id=r["id"],
                title=r["title"],
                type=r["type"],
                progress=r["progress"] or 0,
                status=GoalStatus(r["status"]),
                deadline=_dt(r["deadline"]),
            )
            for r in rows
        ]

    def latest_weekly_review(self) -> Optional[WeeklyReview]:
        rows = self._query("SELECT * FROM weekly_reviews ORDER BY week_start DESC LIMIT 1")
        if not rows:
            return None
        r = rows[0]
        return WeeklyReview(
            id=r["id"],
            week_start=_dt(r["week_start"]),
            week_end=_dt(r["week_end"]),
            summary=json.loads(r["summary_json"] or "{}"),
        )

    def counts(self) -> dict[str, int]:
        """Row count per table."""
        tables = self._query(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
        )
        return {
            t["name"]: self._query(f"SELECT COUNT(*) AS n FROM {t['name']}")[0]["n"]
            for t in tables
        }
