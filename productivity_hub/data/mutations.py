"""
Mutation operations — pure "current collection + command → next collection".

Repositories call these and then persist whatever comes back. None of them
modify their input; records are replaced, never edited in place.
"""

from __future__ import annotations

import dataclasses
from typing import Callable, List, Sequence, TypeVar

from productivity_hub.services.streaks import compute_streak

from .models import Habit, Note, Task

T = TypeVar("T")


def append(items: Sequence[T], item: T) -> List[T]:
    return [*items, item]


def prepend(items: Sequence[T], item: T) -> List[T]:
    return [item, *items]


def remove_by_id(items: Sequence[T], record_id: str) -> List[T]:
    return [i for i in items if getattr(i, "id") != record_id]


def replace_by_id(items: Sequence[T], record_id: str,
                  change: Callable[[T], T]) -> List[T]:
    """Apply change() to the record with record_id; everything else as-is."""
    return [change(i) if getattr(i, "id") == record_id else i for i in items]


def contains_id(items: Sequence[T], record_id: str) -> bool:
    return any(getattr(i, "id") == record_id for i in items)


# ── Record-level changes ────────────────────────────────────────────────────

def toggle_task(task: Task) -> Task:
    return dataclasses.replace(task, completed=not task.completed)


def update_note(note: Note, title: str, content: str) -> Note:
    return dataclasses.replace(note, title=title, content=content)


def toggle_habit_day(habit: Habit, day: str) -> Habit:
    """Flip one day and re-anchor the streak on that day."""
    completions = {**habit.completions, day: not habit.completions.get(day, False)}
    return dataclasses.replace(
        habit,
        completions=completions,
        streak=compute_streak(completions, day),
    )


def is_blank(text: str) -> bool:
    return not text or not text.strip()
