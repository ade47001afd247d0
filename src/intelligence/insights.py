"""Rule-based insight engine: metric thresholds -> summary, causal chains, recommendations."""

from dataclasses import dataclass, field
from datetime import datetime

from shared_types import Risk

from .normalizer import MetricSet, clamp_score
from .windows import weekday_abbr

SOURCE_TAG = "rule-engine"
RECOMMENDATION_SLOTS = 3

BURNOUT_OVERLOAD = 89
BURNOUT_PEAK = 5
BURNOUT_STABLE = 35


@dataclass(frozen=True)
class Recommendation:
    title: str
    impact: int
    risk: Risk
    icon: str
    action: str
    source: str = SOURCE_TAG

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "impact": self.impact,
            "risk": str(self.risk),
            "icon": self.icon,
            "action": self.action,
            "source": self.source,
        }


DELOAD = Recommendation(
    "Mandatory Deload", 25, Risk.HIGH, "Timer",
    "Cut study blocks by a third for the next three days and protect recovery time.",
)
INCREASE_DIFFICULTY = Recommendation(
    "Increase Goal Difficulty", 10, Risk.LOW, "Target",
    "Raise one active goal's target while momentum is high.",
)
EXTEND_SLEEP = Recommendation(
    "Extend Deep Sleep", 18, Risk.MEDIUM, "Moon",
    "Move bedtime 30 minutes earlier this week to rebuild focus capacity.",
)
DEEP_WORK_BLOCK = Recommendation(
    "Trigger Deep Work Block", 12, Risk.LOW, "Brain",
    "Schedule one uninterrupted 90-minute study block tomorrow morning.",
)
LIMIT_SPEND = Recommendation(
    "Limit Discretionary Spend", 15, Risk.MEDIUM, "DollarSign",
    "Pause hobby purchases until income catches up with this month's expenses.",
)

FILLERS = (
    Recommendation(
        "Micro-Adjust Schedule", 8, Risk.LOW, "Clock",
        "Shift your hardest task to your best-focus hour.",
    ),
    Recommendation(
        "Hydration Protocol", 5, Risk.LOW, "Droplet",
        "Keep water at your desk during focus sessions.",
    ),
    Recommendation(
        "Weekly Reflection", 4, Risk.LOW, "NotebookPen",
        "Spend ten minutes reviewing what worked this week.",
    ),
)


@dataclass(frozen=True)
class Predictions:
    next_risk_day: str
    burnout_probability: int
    financial_risk: Risk = Risk.LOW

    def to_dict(self) -> dict:
        return {
            "nextRiskDay": self.next_risk_day,
            "burnoutProbability": self.burnout_probability,
            "financialRisk": str(self.financial_risk),
        }


@dataclass
class InsightBundle:
    branch: str
    summary: str
    cause_effect_chains: list[str]
    predictions: Predictions
    recommendations: list[Recommendation] = field(default_factory=list)

    def ai_layer(self) -> dict:
        return {
            "humanReadableSummary": self.summary,
            "causeEffectChains": list(self.cause_effect_chains),
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


def _has_title(recs: list[Recommendation], *words: str) -> bool:
    return any(w in r.title for r in recs for w in words)


def finalize_recommendations(recs: list[Recommendation]) -> list[Recommendation]:
    """Pad with fillers (in order, skipping duplicates) and cut to exactly three."""
    result = list(recs)
    for filler in FILLERS:
        if len(result) >= RECOMMENDATION_SLOTS:
            break
        if filler not in result:
            result.append(filler)
    return result[:RECOMMENDATION_SLOTS]


def financial_risk(metrics: MetricSet, has_cash_flow: bool) -> Risk:
    """Static Low without cash-flow records; otherwise graded on the financial score."""
    if not has_cash_flow:
        return Risk.LOW
    if metrics.financial < 40 and metrics.consistency < 60:
        return Risk.CRITICAL
    if metrics.financial < 60:
        return Risk.MEDIUM
    return Risk.LOW


def evaluate(metrics: MetricSet, today: datetime, has_cash_flow: bool = False) -> InsightBundle:
    """Run the decision table. Branch precedence: overload, peak, stable."""
    recs: list[Recommendation] = []

    if metrics.study_load > 80 and metrics.focus < 50:
        branch = "overload"
        summary = (
            "System indicates severe study overload resulting in rapid focus depletion. "
            "Your cognitive stamina is breaking under the current task density."
        )
        chains = ["Excessive Study Hours → Cognitive Fatigue → Reduced Focus Quality"]
        recs.append(DELOAD)
        burnout = BURNOUT_OVERLOAD
    elif metrics.consistency > 80 and metrics.focus > 75:
        branch = "peak"
        summary = (
            "Master execution state achieved. Habits are highly locked in and focus "
            "energy is optimal. You are operating at peak efficiency."
        )
        chains = ["Consistent Discipline → Lower Activation Energy → Superior Focus"]
        recs.append(INCREASE_DIFFICULTY)
        burnout = BURNOUT_PEAK
    else:
        branch = "stable"
        summary = (
            "Routine is stable but showing signs of friction. Focus metrics are average "
            "while habits are maintained at a functional baseline."
        )
        chains = ["Average Task Density → Sub-optimal Recovery → Plateaued Growth"]
        burnout = BURNOUT_STABLE

    if metrics.focus < 65 and not _has_title(recs, "Sleep", "Rest"):
        recs.append(EXTEND_SLEEP)
    if metrics.study_load < 50 and not _has_title(recs, "Study", "Work"):
        recs.append(DEEP_WORK_BLOCK)
    if has_cash_flow and metrics.financial < 60:
        recs.append(LIMIT_SPEND)

    return InsightBundle(
        branch=branch,
        summary=summary,
        cause_effect_chains=chains,
        predictions=Predictions(
            next_risk_day=weekday_abbr(today),
            burnout_probability=burnout,
            financial_risk=financial_risk(metrics, has_cash_flow),
        ),
        recommendations=finalize_recommendations(recs),
    )


def mini_insight(metrics: MetricSet) -> str:
    parts = ["Strong habits" if metrics.consistency > 75 else "Inconsistent habits"]
    if metrics.study_load > 85:
        parts.append("Study overload")
    elif metrics.study_load < 30:
        parts.append("Low study load")
    parts.append("Expense drift detected" if metrics.financial < 60 else "Finances stable")
    return " · ".join(parts)


def domain_status(metrics: MetricSet) -> list[dict]:
    return [
        {
            "domain": "Productivity",
            "score": clamp_score(metrics.consistency * 0.6 + metrics.focus * 0.4),
            "status": "Strong" if metrics.consistency > 80 else "Stable",
        },
        {
            "domain": "Focus & Energy",
            "score": metrics.focus,
            "status": "Strong" if metrics.focus > 70 else "Weak",
        },
        {
            "domain": "Discipline",
            "score": metrics.consistency,
            "status": "Strong" if metrics.consistency > 75 else "Weak",
        },
        {
            "domain": "Study Load",
            "score": metrics.study_load,
            "status": "Overload" if metrics.study_load > 80 else "Stable",
        },
        {
            "domain": "Financial Balance",
            "score": metrics.financial,
            "status": "Stable" if metrics.financial > 60 else "Weak",
        },
    ]
