"""Metric normalization: raw tracker records -> 0-100 routine-health scores."""

import math
from dataclasses import dataclass

from shared_types import AttendanceStatus, ExpenseType, StudyItemType
from tracker.models import Attendance, Expense, FocusSession, Habit, StudyItem

WEEKLY_FOCUS_TARGET_MINUTES = 300

# Habit share used when no habits are tracked yet ("not tracked" is not "failing")
NO_HABITS_PRIOR = 80
# Consistency when neither habits nor attendance exist
NO_CONSISTENCY_DATA_DEFAULT = 82

GLOBAL_WEIGHTS = {"consistency": 0.35, "focus": 0.35, "study_load": 0.30}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, like a JS Math.round on scores."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, default: int = 0) -> int:
    """Round and clamp into [0, 100]; NaN/inf fall back to `default`."""
    if value is None or math.isnan(value) or math.isinf(value):
        return default
    return max(0, min(100, round_half_up(value)))


@dataclass(frozen=True)
class MetricSet:
    consistency: int
    focus: int
    study_load: int
    financial: int

    def to_dict(self) -> dict:
        return {
            "consistency": self.consistency,
            "focus": self.focus,
            "studyLoad": self.study_load,
            "financial": self.financial,
        }


def consistency_score(habits: list[Habit], attendance: list[Attendance]) -> int:
    if not habits and not attendance:
        return NO_CONSISTENCY_DATA_DEFAULT

    if habits:
        active = sum(1 for h in habits if h.current_streak > 0)
        habit_share = active / len(habits) * 100
    else:
        habit_share = NO_HABITS_PRIOR

    if attendance:
        present = sum(1 for a in attendance if a.status == AttendanceStatus.PRESENT)
        attendance_rate = present / len(attendance) * 100
    else:
        attendance_rate = 0

    return clamp_score((habit_share + attendance_rate) / 2)


def total_focus_minutes(sessions: list[FocusSession]) -> float:
    return sum(max(s.duration or 0, 0) for s in sessions)


def focus_score(sessions: list[FocusSession]) -> int:
    return clamp_score(total_focus_minutes(sessions) / WEEKLY_FOCUS_TARGET_MINUTES * 100)


def study_load_score(items: list[StudyItem]) -> int:
    subjects = [i for i in items if i.type == StudyItemType.SUBJECT]
    if not subjects:
        return 0
    return clamp_score(sum(s.progress or 0 for s in subjects) / len(subjects))


def cash_flow(expenses: list[Expense]) -> tuple[float, float]:
    """(income, expense) totals for the window."""
    income = sum(e.amount for e in expenses if e.type == ExpenseType.INCOME)
    spent = sum(e.amount for e in expenses if e.type == ExpenseType.EXPENSE)
    return income, spent


def financial_score(expenses: list[Expense]) -> int:
    income, spent = cash_flow(expenses)
    total = income + spent
    if total <= 0:
        return 0
    return clamp_score(income / total * 100)


def global_score(metrics: MetricSet) -> int:
    return clamp_score(
        metrics.consistency * GLOBAL_WEIGHTS["consistency"]
        + metrics.focus * GLOBAL_WEIGHTS["focus"]
        + metrics.study_load * GLOBAL_WEIGHTS["study_load"]
    )


def normalize(
    habits: list[Habit],
    attendance: list[Attendance],
    focus_sessions: list[FocusSession],
    study_items: list[StudyItem],
    expenses: list[Expense],
) -> MetricSet:
    return MetricSet(
        consistency=consistency_score(habits, attendance),
        focus=focus_score(focus_sessions),
        study_load=study_load_score(study_items),
        financial=financial_score(expenses),
    )
