"""Record types owned by the tracking modules and consumed read-only here."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from shared_types import (
    AttendanceStatus,
    ExpenseType,
    GoalStatus,
    SessionType,
    StudyItemType,
)


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FocusSession:
    duration: float  # minutes
    completed_at: datetime = field(default_factory=_utcnow)
    session_type: SessionType = SessionType.CUSTOM
    linked_type: str | None = None  # routine | study | custom
    id: str = field(default_factory=_new_id)


@dataclass
class Habit:
    title: str
    current_streak: int = 0
    longest_streak: int = 0
    last_completed_date: datetime | None = None
    id: str = field(default_factory=_new_id)


@dataclass
class RoutineTask:
    title: str
    completed: bool = False
    time: str | None = None


@dataclass
class Routine:
    name: str
    type: str = "custom"
    tasks: list[RoutineTask] = field(default_factory=list)
    id: str = field(default_factory=_new_id)


@dataclass
class Expense:
    title: str
    amount: float
    type: ExpenseType = ExpenseType.EXPENSE
    category: str = "other"
    date: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=_new_id)


@dataclass
class Attendance:
    subject: str
    status: AttendanceStatus = AttendanceStatus.PRESENT
    type: str = "theory"
    date: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=_new_id)


@dataclass
class StudyItem:
    title: str
    type: StudyItemType = StudyItemType.SUBJECT
    progress: float = 0
    parent_id: str | None = None
    completed: bool = False
    id: str = field(default_factory=_new_id)


@dataclass
class Goal:
    title: str
    progress: float = 0
    status: GoalStatus = GoalStatus.ON_TRACK
    type: str = "short-term"
    deadline: datetime | None = None
    id: str = field(default_factory=_new_id)

    @property
    def is_completed(self) -> bool:
        return self.status == GoalStatus.COMPLETED or self.progress >= 100


@dataclass
class WeeklyReview:
    week_start: datetime
    week_end: datetime
    summary: dict = field(default_factory=dict)
    id: str = field(default_factory=_new_id)


@dataclass
class TrackerSnapshot:
    """One eventually-consistent read of every collection the engine consumes."""

    focus_sessions: list[FocusSession] = field(default_factory=list)
    habits: list[Habit] = field(default_factory=list)
    routines: list[Routine] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    attendance: list[Attendance] = field(default_factory=list)
    study_items: list[StudyItem] = field(default_factory=list)
    goals: list[Goal] = field(default_factory=list)
    weekly_review: WeeklyReview | None = None
