"""
Calendar agenda — merges task due dates and calendar events by day.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Sequence

from productivity_hub.data.models import CalendarEvent, Task


@dataclass(frozen=True)
class AgendaItem:
    kind: str  # "task" or "event"
    id: str
    title: str
    done: bool = False


def items_for_day(day: date, tasks: Sequence[Task],
                  events: Sequence[CalendarEvent]) -> List[AgendaItem]:
    """Events first, then tasks due that day."""
    key = day.isoformat()
    items = [AgendaItem("event", e.id, e.title) for e in events if e.date == key]
    items += [AgendaItem("task", t.id, t.text, t.completed)
              for t in tasks if t.due_date == key]
    return items


def month_markers(year: int, month: int, tasks: Sequence[Task],
                  events: Sequence[CalendarEvent]) -> Dict[int, int]:
    """Day-of-month → number of agenda items, only for days that have any."""
    prefix = f"{year:04d}-{month:02d}-"
    last_day = calendar.monthrange(year, month)[1]
    counts: Dict[int, int] = {}
    dates = [e.date for e in events] + [t.due_date for t in tasks if t.due_date]
    for d in dates:
        if not d.startswith(prefix):
            continue
        try:
            dom = int(d[len(prefix):])
        except ValueError:
            continue
        if 1 <= dom <= last_day:
            counts[dom] = counts.get(dom, 0) + 1
    return counts
