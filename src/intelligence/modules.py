"""Per-module performance scores and the distribution chart."""

from dataclasses import dataclass

from shared_types import AttendanceStatus, Module
from tracker.models import Attendance, Goal, Routine

from .normalizer import MetricSet, clamp_score
from .timeseries import routine_completion

DISTRIBUTION_PALETTE = ["#f43f5e", "#f59e0b", "#8b5cf6", "#3b82f6", "#10b981"]
DISTRIBUTION_SLICES = 5
EMPTY_DISTRIBUTION = [{"name": "None", "value": 100, "fill": "#10b981"}]


@dataclass(frozen=True)
class ModuleScore:
    name: str
    score: int

    def to_dict(self) -> dict:
        return {"name": str(self.name), "score": self.score}


def _ratio_score(done: int, total: int) -> int:
    if total == 0:
        return 0
    return clamp_score(done / total * 100)


def module_performance(
    metrics: MetricSet,
    routines: list[Routine],
    goals: list[Goal],
    attendance: list[Attendance],
) -> list[ModuleScore]:
    present = sum(1 for a in attendance if a.status == AttendanceStatus.PRESENT)
    completed_goals = sum(1 for g in goals if g.is_completed)
    return [
        ModuleScore(Module.TIME, clamp_score((metrics.study_load + metrics.focus) / 2)),
        ModuleScore(Module.GOALS, _ratio_score(completed_goals, len(goals))),
        ModuleScore(Module.FOCUS, metrics.focus),
        ModuleScore(Module.HABITS, metrics.consistency),
        ModuleScore(Module.ATTENDANCE, _ratio_score(present, len(attendance))),
        ModuleScore(Module.ROUTINES, routine_completion(routines)),
        ModuleScore(Module.STUDY, metrics.study_load),
    ]


def performance_distribution(modules: list[ModuleScore]) -> list[dict]:
    """Top scoring modules (score > 0), best first, coloured by rank."""
    ranked = sorted((m for m in modules if m.score > 0), key=lambda m: m.score, reverse=True)
    if not ranked:
        return [dict(s) for s in EMPTY_DISTRIBUTION]
    return [
        {"name": str(m.name), "value": m.score, "fill": DISTRIBUTION_PALETTE[i]}
        for i, m in enumerate(ranked[:DISTRIBUTION_SLICES])
    ]
