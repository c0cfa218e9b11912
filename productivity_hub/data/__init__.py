from .database import Database
from .models import (
    CalendarEvent, Folder, Habit, Note, PomodoroSession, Project, Task,
    TaskCategory, TaskPriority,
)
from .store import PersistentStore
from .repository import (
    CalendarRepository, FolderRepository, HabitRepository, NoteRepository,
    PomodoroRepository, ProjectRepository, TaskRepository,
)
from .context import AppContext

__all__ = [
    "Database", "PersistentStore", "AppContext",
    "Task", "Note", "Folder", "Project", "Habit", "PomodoroSession",
    "CalendarEvent", "TaskCategory", "TaskPriority",
    "TaskRepository", "NoteRepository", "FolderRepository", "ProjectRepository",
    "HabitRepository", "PomodoroRepository", "CalendarRepository",
]
