"""
Quick-action search — substring filter over tasks and notes for the
command palette.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from productivity_hub.data.models import Note, Task

TASK = "task"
NOTE = "note"


@dataclass(frozen=True)
class QuickActionResult:
    kind: str  # TASK or NOTE
    id: str
    label: str


def search(query: str, tasks: Sequence[Task], notes: Sequence[Note],
           limit: int = 50) -> List[QuickActionResult]:
    """Case-insensitive match on task text and note title/content."""
    needle = query.strip().lower()
    if not needle:
        return []

    results: List[QuickActionResult] = []
    for t in tasks:
        if needle in t.text.lower():
            results.append(QuickActionResult(TASK, t.id, t.text))
    for n in notes:
        if needle in n.title.lower() or needle in n.content.lower():
            results.append(QuickActionResult(NOTE, n.id, n.title))
    return results[:limit]
