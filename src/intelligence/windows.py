"""Midnight-aligned trailing windows in a single reference time zone."""

from datetime import datetime, time, timedelta, tzinfo

DAY_ABBREVIATIONS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def day_start(now: datetime, days_ago: int = 0) -> datetime:
    """Midnight of the calendar day `days_ago` days before `now`, in now's zone."""
    day = now.date() - timedelta(days=days_ago)
    return datetime.combine(day, time.min, tzinfo=now.tzinfo)


def trailing_window_start(now: datetime, days: int) -> datetime:
    """Start of a `days`-long window of whole calendar days ending today (inclusive)."""
    return day_start(now, max(days, 1) - 1)


def day_bounds(now: datetime, days_ago: int) -> tuple[datetime, datetime]:
    """Half-open [start, end) bounds of one calendar day."""
    start = day_start(now, days_ago)
    end = datetime.combine(start.date() + timedelta(days=1), time.min, tzinfo=now.tzinfo)
    return start, end


def weekday_abbr(moment: datetime) -> str:
    return DAY_ABBREVIATIONS[moment.weekday()]
