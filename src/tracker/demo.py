"""Deterministic demo week for local runs and screenshots."""

from datetime import datetime, timedelta, timezone

from shared_types import AttendanceStatus, ExpenseType, GoalStatus, LinkedItemType, StudyItemType

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


def demo_records(now: datetime | None = None) -> list:
    """A student's last week: focus blocks, three habits, two routines, some cash flow."""
    now = now or datetime.now(timezone.utc)
    records: list = []

    # ── Focus: one study block most days, a longer custom block every other day ──
    for days_ago in range(7):
        day = now - timedelta(days=days_ago)
        if days_ago != 3:
            records.append(
                FocusSession(
                    duration=45, completed_at=day.replace(hour=9), linked_type=LinkedItemType.STUDY
                )
            )
        if days_ago % 2 == 0:
            records.append(FocusSession(duration=30, completed_at=day.replace(hour=15)))

    records += [
        Habit("Morning run", current_streak=6, longest_streak=14, last_completed_date=now),
        Habit("Read 20 pages", current_streak=2, longest_streak=9, last_completed_date=now),
        Habit("No phone after 11pm", current_streak=0, longest_streak=4),
    ]

    records += [
        Routine(
            "Morning",
            type="morning",
            tasks=[
                RoutineTask("Stretch", completed=True, time="06:30"),
                RoutineTask("Breakfast", completed=True, time="07:00"),
                RoutineTask("Plan day", completed=False, time="07:30"),
            ],
        ),
        Routine(
            "Night",
            type="night",
            tasks=[
                RoutineTask("Journal", completed=True, time="22:00"),
                RoutineTask("Lay out clothes", completed=False, time="22:15"),
            ],
        ),
    ]

    records += [
        Expense("Stipend", 800, type=ExpenseType.INCOME, category="salary",
                date=now - timedelta(days=12)),
        Expense("Groceries", 120, category="necessary", date=now - timedelta(days=5)),
        Expense("Concert ticket", 60, category="hobby", date=now - timedelta(days=2)),
        Expense("Bus pass", 45, category="necessary", date=now - timedelta(days=20)),
    ]

    for days_ago in range(0, 20, 2):
        status = AttendanceStatus.ABSENT if days_ago in (6, 14) else AttendanceStatus.PRESENT
        records.append(
            Attendance("Linear Algebra", status=status, date=now - timedelta(days=days_ago))
        )

    algebra = StudyItem("Linear Algebra", type=StudyItemType.SUBJECT, progress=70)
    physics = StudyItem("Physics", type=StudyItemType.SUBJECT, progress=45)
    records += [
        algebra,
        physics,
        StudyItem("Eigenvalues", type=StudyItemType.CHAPTER, progress=30, parent_id=algebra.id),
    ]

    records += [
        Goal("Finish algebra syllabus", progress=70),
        Goal("Run 100km this month", progress=100, status=GoalStatus.COMPLETED),
        Goal("Save for laptop", progress=20, status=GoalStatus.BEHIND),
    ]

    week_start = now - timedelta(days=7)
    records.append(
        WeeklyReview(
            week_start=week_start,
            week_end=now,
            summary={"routinesCompleted": 9, "routinesMissed": 3, "focusMinutes": 375},
        )
    )
    return records
