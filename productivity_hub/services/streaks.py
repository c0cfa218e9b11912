"""
Habit streak calculation.

Pure functions over a completions mapping (YYYY-MM-DD → bool). Nothing here
touches storage, so both the habit repository and the dashboard can use it.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Mapping, Union

DateLike = Union[date, str]


def _as_date(value: DateLike) -> date:
    return value if isinstance(value, date) else date.fromisoformat(value)


def compute_streak(completions: Mapping[str, bool], anchor: DateLike) -> int:
    """
    Count consecutive completed days walking backward from anchor.

    Stops at the first day that isn't marked complete, including the anchor
    itself. Never looks past the anchor.
    """
    day = _as_date(anchor)
    streak = 0
    while completions.get(day.isoformat()):
        streak += 1
        day -= timedelta(days=1)
    return streak


def current_streak(completions: Mapping[str, bool], today: DateLike) -> int:
    """
    Streak as of today, for display only.

    An unchecked today doesn't break a run that ended yesterday; the user
    still has the rest of the day to tick it.
    """
    day = _as_date(today)
    if completions.get(day.isoformat()):
        return compute_streak(completions, day)
    return compute_streak(completions, day - timedelta(days=1))


def longest_streak(completions: Mapping[str, bool]) -> int:
    """Longest run of consecutive completed days anywhere in history."""
    days = sorted(_as_date(k) for k, done in completions.items() if done)
    best = run = 0
    previous = None
    for d in days:
        run = run + 1 if previous is not None and d - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = d
    return best
