"""
AppContext — the one object that owns all application state.

Views get handed this (or the repositories hanging off it) instead of
reaching for globals.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .database import Database
from .repository import (
    CalendarRepository, EntityRepository, FolderRepository, HabitRepository,
    NoteRepository, PomodoroRepository, ProjectRepository, TaskRepository,
)
from .store import PersistentStore

logger = logging.getLogger(__name__)


class AppContext:
    """Database + store + every repository, with one lifetime."""

    def __init__(self, db: Database, config: Optional[Dict[str, Any]] = None) -> None:
        self.db = db
        self.config: Dict[str, Any] = config or {}
        self.store = PersistentStore(db.connect())

        self.tasks = TaskRepository(self.store)
        self.notes = NoteRepository(self.store)
        self.folders = FolderRepository(self.store)
        self.projects = ProjectRepository(self.store)
        self.habits = HabitRepository(self.store)
        self.pomodoro = PomodoroRepository(self.store)
        self.calendar = CalendarRepository(self.store)

    @classmethod
    def open(cls, db_path: Optional[Path] = None,
             config: Optional[Dict[str, Any]] = None) -> "AppContext":
        return cls(Database(db_path), config)

    @property
    def repositories(self) -> List[EntityRepository]:
        return [self.tasks, self.notes, self.folders, self.projects,
                self.habits, self.pomodoro, self.calendar]

    def close(self) -> None:
        self.db.close()

    def reset_all(self) -> None:
        """Wipe every collection and reload (views get notified)."""
        self.store.clear_all()
        for repo in self.repositories:
            repo.reload()

    def export_json(self, path: Path) -> None:
        path.write_text(json.dumps(self.store.export_all(), indent=2), encoding="utf-8")
        logger.info("Exported all data to %s", path)

    def import_json(self, path: Path) -> int:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Import file must contain a JSON object.")
        written = self.store.import_all(data)
        for repo in self.repositories:
            repo.reload()
        logger.info("Imported %d collection(s) from %s", written, path)
        return written
