"""Shared test fixtures for routine-intel."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from intelligence.normalizer import MetricSet  # noqa: E402
from tracker.store import TrackerStore  # noqa: E402

# Wednesday afternoon, UTC
FIXED_NOW = datetime(2026, 10, 14, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def store(tmp_path):
    """Fresh tracker database per test."""
    return TrackerStore(tmp_path / "tracker.db")


@pytest.fixture
def days_ago(now):
    """days_ago(n, hour) -> datetime n calendar days before `now` at `hour`."""

    def _at(n: int, hour: int = 10) -> datetime:
        return (now - timedelta(days=n)).replace(hour=hour, minute=0)

    return _at


@pytest.fixture
def metric_set():
    def _make(consistency=70, focus=70, study_load=60, financial=70):
        return MetricSet(
            consistency=consistency, focus=focus, study_load=study_load, financial=financial
        )

    return _make


VALID_REPORT = """{
  "DynamicTitle": "Steady Climb Ahead",
  "PriorityLabel": "RECOVERY FOCUS",
  "AISynthesis": "Your habits are holding while focus dipped midweek.",
  "BulletInsights": [
    "Habits are consistent",
    "Focus dipped on Thursday",
    "Study load is moderate",
    "Income covers spending",
    "Sleep is the main lever"
  ],
  "CausalChain": "Late nights → Low focus → Slower study",
  "AIPredictions": [{"type": "Warning", "label": "Focus dip", "value": "Thu"}],
  "WeeklySummary": "A balanced week with one low-focus day.",
  "MonthlyOutlook": "Keep the routine and progress should compound.",
  "Recommendations": [
    {"title": "Earlier Bedtime", "impact": 15, "risk": "Low", "icon": "Moon", "action": "Sleep by 11pm."},
    {"title": "Morning Block", "impact": 12, "risk": "Medium", "icon": "Brain", "action": "Study 9-10am."},
    {"title": "Phone Away", "impact": 8, "risk": "Low", "icon": "Phone", "action": "Leave it in another room."}
  ]
}"""


@pytest.fixture
def valid_report_text():
    return VALID_REPORT
