"""Read-side access to the life-tracking collections (habits, focus, expenses, ...)."""

from .models import (
    Attendance,
    Expense,
    FocusSession,
    Goal,
    Habit,
    Routine,
    RoutineTask,
    StudyItem,
    TrackerSnapshot,
    WeeklyReview,
)
from .store import TrackerStore

__all__ = [
    "Attendance",
    "Expense",
    "FocusSession",
    "Goal",
    "Habit",
    "Routine",
    "RoutineTask",
    "StudyItem",
    "TrackerSnapshot",
    "TrackerStore",
    "WeeklyReview",
]
