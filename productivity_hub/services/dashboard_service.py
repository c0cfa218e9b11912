"""
Dashboard aggregation — read-only stats over the live repositories.

Recomputed on every render. Collections are personal-scale, so there is no
cache to invalidate.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from productivity_hub.data.models import (
    Habit, PomodoroSession, Project, Task, TaskCategory, TaskPriority,
)


@dataclass
class ProjectProgress:
    project_id: Optional[str]
    name: str
    total: int = 0
    completed: int = 0

    @property
    def ratio(self) -> float:
        return self.completed / self.total if self.total else 0.0


@dataclass
class DashboardStats:
    total_tasks: int = 0
    completed_tasks: int = 0
    by_category: Dict[TaskCategory, int] = field(default_factory=dict)
    by_priority: Dict[TaskPriority, int] = field(default_factory=dict)
    due_today: List[Task] = field(default_factory=list)
    overdue: List[Task] = field(default_factory=list)

    session_count: int = 0
    total_focus_minutes: int = 0
    today_focus_minutes: int = 0
    sessions_per_day: Dict[str, int] = field(default_factory=dict)
    focus_minutes_per_day: Dict[str, int] = field(default_factory=dict)

    habit_streaks: Dict[str, int] = field(default_factory=dict)
    best_streak: int = 0

    projects: List[ProjectProgress] = field(default_factory=list)

    @property
    def open_tasks(self) -> int:
        return self.total_tasks - self.completed_tasks

    @property
    def completion_ratio(self) -> float:
        return self.completed_tasks / self.total_tasks if self.total_tasks else 0.0


def project_progress(tasks: Sequence[Task],
                     projects: Sequence[Project]) -> List[ProjectProgress]:
    """
    Per-project completion, in project order, plus an "Unassigned" bucket
    when any task has no (or a dangling) project id.
    """
    rows = {p.id: ProjectProgress(p.id, p.name) for p in projects}
    unassigned = ProjectProgress(None, "Unassigned")
    for t in tasks:
        row = rows.get(t.project_id) if t.project_id else None
        row = row or unassigned
        row.total += 1
        if t.completed:
            row.completed += 1
    result = list(rows.values())
    if unassigned.total:
        result.append(unassigned)
    return result


def compute_dashboard(
    tasks: Sequence[Task],
    sessions: Sequence[PomodoroSession],
    habits: Sequence[Habit],
    projects: Sequence[Project],
    today: Optional[date] = None,
) -> DashboardStats:
    """Build every dashboard number in one pass per collection."""
    today = today or date.today()
    today_key = today.isoformat()
    stats = DashboardStats()

    # ── Tasks ───────────────────────────────────────────────────────────────
    stats.total_tasks = len(tasks)
    stats.completed_tasks = sum(1 for t in tasks if t.completed)
    stats.by_category = dict(Counter(t.category for t in tasks))
    stats.by_priority = dict(Counter(t.priority for t in tasks))
    for t in tasks:
        if t.completed or not t.due_date:
            continue
        if t.due_date == today_key:
            stats.due_today.append(t)
        elif t.due_date < today_key:  # ISO dates sort lexically
            stats.overdue.append(t)

    # ── Pomodoro ────────────────────────────────────────────────────────────
    per_day: Dict[str, int] = defaultdict(int)
    minutes_per_day: Dict[str, int] = defaultdict(int)
    for s in sessions:
        per_day[s.date] += 1
        minutes_per_day[s.date] += s.duration
    stats.session_count = len(sessions)
    stats.total_focus_minutes = sum(s.duration for s in sessions)
    stats.today_focus_minutes = minutes_per_day.get(today_key, 0)
    stats.sessions_per_day = dict(sorted(per_day.items()))
    stats.focus_minutes_per_day = dict(sorted(minutes_per_day.items()))

    # ── Habits ──────────────────────────────────────────────────────────────
    stats.habit_streaks = {h.name: h.streak for h in habits}
    stats.best_streak = max((h.streak for h in habits), default=0)

    # ── Projects ────────────────────────────────────────────────────────────
    stats.projects = project_progress(tasks, projects)
    return stats


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Turns raw collections into the numbers on the dashboard: task counts by
#   category/priority, focus minutes per day, habit streaks, per-project
#   completion.
#
# Key design decisions:
#   - Pure function of its inputs (plus "today"), so tests pass fixed data
#     and a fixed date and get deterministic stats.
#   - Counters only include categories that actually occur; the view decides
#     how to show zeros.
#   - Habit streaks are read as stored (anchored on the last toggle), not
#     recomputed for today. The habits view can show current_streak()
#     alongside if it wants the "as of today" number.
