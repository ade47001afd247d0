"""Seven-day performance series and heat indicator."""

from dataclasses import dataclass
from datetime import datetime, timezone

from shared_types import LinkedItemType
from tracker.models import FocusSession, Routine

from .normalizer import clamp_score
from .windows import day_bounds, weekday_abbr

SERIES_DAYS = 7
DAILY_FOCUS_TARGET_MINUTES = 60
# Past-day load is the routine completion baseline decayed per day back.
# Routines only store current completion state, so prior days are approximate.
LOAD_DECAY = 0.9


@dataclass(frozen=True)
class PerformancePoint:
    date: str
    focus: int
    load: int
    study: int

    def to_dict(self) -> dict:
        return {"date": self.date, "focus": self.focus, "load": self.load, "study": self.study}


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def routine_completion(routines: list[Routine]) -> int:
    """Completed routine tasks over all routine tasks, 0 when there are none."""
    total = sum(len(r.tasks) for r in routines)
    if total == 0:
        return 0
    done = sum(1 for r in routines for t in r.tasks if t.completed)
    return clamp_score(done / total * 100)


def daily_minutes_score(minutes: float) -> int:
    return clamp_score(minutes / DAILY_FOCUS_TARGET_MINUTES * 100)


def build_performance_data(
    sessions: list[FocusSession], routines: list[Routine], now: datetime
) -> list[PerformancePoint]:
    """One point per calendar day, oldest first, ending with today."""
    baseline = routine_completion(routines)
    points = []
    for days_ago in range(SERIES_DAYS - 1, -1, -1):
        start, end = day_bounds(now, days_ago)
        day_sessions = [s for s in sessions if start <= _aware(s.completed_at) < end]
        focus_minutes = sum(max(s.duration or 0, 0) for s in day_sessions)
        study_minutes = sum(
            max(s.duration or 0, 0)
            for s in day_sessions
            if s.linked_type == LinkedItemType.STUDY
        )
        points.append(
            PerformancePoint(
                date=weekday_abbr(start),
                focus=daily_minutes_score(focus_minutes),
                load=clamp_score(baseline * LOAD_DECAY**days_ago),
                study=daily_minutes_score(study_minutes),
            )
        )
    return points


def heat_indicator(points: list[PerformancePoint]) -> list[int]:
    return [p.focus for p in points]
