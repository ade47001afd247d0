"""Shared enums and types for routine-intel."""

from enum import StrEnum


class ExpenseType(StrEnum):
    INCOME = "income"
    EXPENSE = "expense"


class AttendanceStatus(StrEnum):
    PRESENT = "present"
    ABSENT = "absent"


class StudyItemType(StrEnum):
    SUBJECT = "subject"
    CHAPTER = "chapter"
    TOPIC = "topic"


class GoalStatus(StrEnum):
    ON_TRACK = "on-track"
    BEHIND = "behind"
    COMPLETED = "completed"


class SessionType(StrEnum):
    CUSTOM = "custom"
    POMODORO = "pomodoro"


class LinkedItemType(StrEnum):
    ROUTINE = "routine"
    STUDY = "study"
    CUSTOM = "custom"


class Risk(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class Module(StrEnum):
    TIME = "Time"
    GOALS = "Goals"
    FOCUS = "Focus"
    HABITS = "Habits"
    ATTENDANCE = "Attendance"
    ROUTINES = "Routines"
    STUDY = "Study"
