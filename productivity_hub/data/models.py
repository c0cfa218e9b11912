"""
Data models for Productivity Hub.

These are plain dataclasses that represent stored records. Each one knows how
to turn itself into the JSON-ready dict that lives in the key-value store and
how to rebuild itself from one, so every layer speaks the same "language."
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class TaskCategory(str, Enum):
    WORK = "Work"
    PERSONAL = "Personal"
    URGENT = "Urgent"
    NONE = "None"


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NONE = "None"


# helpers shared by every record type
def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_dt(value: Any) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    # older snapshots carry JavaScript-style "Z" suffixes
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _format_dt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _enum_or_none(enum_cls, value: Any):
    try:
        return enum_cls(value)
    except ValueError:
        return enum_cls.NONE


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _is_day(value: Any) -> bool:
    """True for a YYYY-MM-DD string."""
    if not isinstance(value, str):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _whole_number(value: Any, name: str) -> int:
    # json reads 1e400 as inf, which int() can't convert
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} is not a number: {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} is not finite: {value!r}")
    return int(value)


def _require_id(data: Dict[str, Any]) -> str:
    record_id = data.get("id")
    if not isinstance(record_id, str) or not record_id:
        raise ValueError(f"record has no usable id: {data!r}")
    return record_id


@dataclass
class Task:
    """A to-do item, optionally filed under a project."""
    id: str
    text: str
    completed: bool = False
    project_id: Optional[str] = None
    due_date: Optional[str] = None  # YYYY-MM-DD
    category: TaskCategory = TaskCategory.NONE
    priority: TaskPriority = TaskPriority.NONE
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "projectId": self.project_id,
            "category": self.category.value,
            "priority": self.priority.value,
            "createdAt": _format_dt(self.created_at),
        }
        if self.due_date:
            data["dueDate"] = self.due_date
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(
            id=_require_id(data),
            text=str(data.get("text", "")),
            completed=bool(data.get("completed", False)),
            project_id=_optional_str(data.get("projectId")),
            due_date=data.get("dueDate") if _is_day(data.get("dueDate")) else None,
            category=_enum_or_none(TaskCategory, data.get("category")),
            priority=_enum_or_none(TaskPriority, data.get("priority")),
            created_at=_parse_dt(data.get("createdAt")),
        )


@dataclass
class Note:
    """A free-form note. Notes may sit in a folder and/or a project."""
    id: str
    title: str
    content: str
    created_at: Optional[datetime] = None
    project_id: Optional[str] = None
    folder_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "createdAt": _format_dt(self.created_at),
            "projectId": self.project_id,
            "folderId": self.folder_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Note":
        return cls(
            id=_require_id(data),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            created_at=_parse_dt(data.get("createdAt")),
            project_id=_optional_str(data.get("projectId")),
            folder_id=_optional_str(data.get("folderId")),
        )


@dataclass
class Folder:
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Folder":
        return cls(id=_require_id(data), name=str(data.get("name", "")))


@dataclass
class Project:
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(id=_require_id(data), name=str(data.get("name", "")))


@dataclass
class Habit:
    """
    A daily habit.

    completions maps YYYY-MM-DD → bool. streak is recomputed from completions
    every time a day is toggled (see services/streaks.py).
    """
    id: str
    name: str
    completions: Dict[str, bool] = field(default_factory=dict)
    streak: int = 0
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "completions": dict(self.completions),
            "streak": self.streak,
            "createdAt": _format_dt(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        raw = data.get("completions") or {}
        completions = (
            {k: bool(v) for k, v in raw.items() if _is_day(k)}
            if isinstance(raw, dict) else {}
        )
        try:
            streak = max(_whole_number(data.get("streak", 0), "streak"), 0)
        except ValueError:
            # recomputed on the next toggle anyway
            streak = 0
        return cls(
            id=_require_id(data),
            name=str(data.get("name", "")),
            completions=completions,
            streak=streak,
            created_at=_parse_dt(data.get("createdAt")),
        )


@dataclass
class PomodoroSession:
    """One finished pomodoro work phase. Append-only, so no id."""
    date: str  # YYYY-MM-DD
    duration: int  # minutes

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "duration": self.duration}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PomodoroSession":
        day = data.get("date")
        if not isinstance(day, str) or not day:
            raise ValueError(f"pomodoro session has no date: {data!r}")
        return cls(date=day, duration=_whole_number(data.get("duration", 0), "duration"))


@dataclass
class CalendarEvent:
    id: str
    title: str
    date: str  # YYYY-MM-DD

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title, "date": self.date}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarEvent":
        return cls(
            id=_require_id(data),
            title=str(data.get("title", "")),
            date=str(data.get("date", "")),
        )


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Defines the "shape" of every record the app stores. They are flat:
#   nothing owns anything else, relationships are plain string ids
#   (Task.project_id, Note.folder_id).
#
# Key points:
#   - to_dict() emits camelCase keys ("projectId", "createdAt") so the
#     stored JSON matches the layout older snapshots already use.
#   - from_dict() is best-effort: unknown enum strings fall back to NONE,
#     missing or wrongly typed optional keys take defaults (a numeric
#     dueDate, a completions key that isn't a YYYY-MM-DD day), and only a
#     missing id or an unusable pomodoro date/duration is fatal for a
#     single record (the repository skips it).
#   - Enums subclass str, so TaskCategory.WORK == "Work" and both hash
#     alike (str comes before Enum in the MRO): a counter keyed by the
#     enum can be read back with the raw stored string.
#
# Interviewer-friendly talking points:
#   1. uuid4 ids: no central counter needed in a local-first app. Collisions
#      are astronomically unlikely, so we don't handle them.
#   2. Timestamps are timezone-aware UTC; dates that the user picks (due
#      dates, habit days) stay as YYYY-MM-DD strings because they are
#      calendar days, not instants.
