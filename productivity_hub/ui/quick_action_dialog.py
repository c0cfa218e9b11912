"""
Quick Action dialog — the Ctrl+K command palette.

Type to search tasks and notes; Enter on an empty result list (or the
"Add task" button) adds the query as a new task.
"""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QDialog, QHBoxLayout, QLineEdit, QListWidget, QListWidgetItem,
    QPushButton, QVBoxLayout, QWidget,
)

from productivity_hub.data.repository import NoteRepository, TaskRepository
from productivity_hub.services.quick_action import TASK, QuickActionResult, search


class QuickActionDialog(QDialog):
    """Ephemeral: nothing survives closing except tasks it added."""

    def __init__(
        self,
        tasks: TaskRepository,
        notes: NoteRepository,
        on_open_result: Optional[Callable[[QuickActionResult], None]] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.tasks = tasks
        self.notes = notes
        self.on_open_result = on_open_result
        self.on_task_added: Optional[Callable[[], None]] = None
        self.setWindowTitle("Quick action")
        self.setMinimumWidth(480)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        self.query_input = QLineEdit()
        self.query_input.setPlaceholderText("Search tasks and notes, or type a new task…")
        self.query_input.textChanged.connect(self._refresh)
        self.query_input.returnPressed.connect(self._on_return)
        layout.addWidget(self.query_input)

        self.results = QListWidget()
        self.results.itemActivated.connect(self._on_activated)
        layout.addWidget(self.results)

        row = QHBoxLayout()
        row.addStretch()
        self.add_btn = QPushButton("Add as task")
        self.add_btn.setObjectName("primary")
        self.add_btn.clicked.connect(self._on_add_task)
        row.addWidget(self.add_btn)
        layout.addLayout(row)

    def open_palette(self) -> None:
        self.query_input.clear()
        self._refresh("")
        self.show()
        self.raise_()
        self.activateWindow()
        self.query_input.setFocus()

    def toggle(self) -> None:
        if self.isVisible():
            self.close()
        else:
            self.open_palette()

    @Slot(str)
    def _refresh(self, text: str) -> None:
        self.results.clear()
        for result in search(text, self.tasks.all(), self.notes.all()):
            icon = "☐" if result.kind == TASK else "📝"
            item = QListWidgetItem(f"{icon} {result.label}")
            item.setData(Qt.ItemDataRole.UserRole, result)
            self.results.addItem(item)
        self.add_btn.setEnabled(bool(text.strip()))

    @Slot()
    def _on_return(self) -> None:
        if self.results.count() and self.results.currentItem():
            self._on_activated(self.results.currentItem())
        else:
            self._on_add_task()

    @Slot()
    def _on_add_task(self) -> None:
        if self.tasks.add(self.query_input.text()):
            if self.on_task_added:
                self.on_task_added()
            self.close()

    @Slot(QListWidgetItem)
    def _on_activated(self, item: QListWidgetItem) -> None:
        result: QuickActionResult = item.data(Qt.ItemDataRole.UserRole)
        if self.on_open_result:
            self.on_open_result(result)
        self.close()

