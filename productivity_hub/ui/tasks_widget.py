"""
Tasks view — add, tick off and delete to-dos.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QDate, Qt, Slot
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QDateEdit, QHBoxLayout, QLabel, QLineEdit,
    QListWidget, QListWidgetItem, QPushButton, QVBoxLayout, QWidget,
)

from productivity_hub.data.models import Task, TaskCategory, TaskPriority
from productivity_hub.data.repository import ProjectRepository, TaskRepository

logger = logging.getLogger(__name__)

SHOW_ALL = "all"
SHOW_OPEN = "open"
SHOW_DONE = "done"


class TasksWidget(QWidget):
    """To-do list bound to the task and project repositories."""

    def __init__(self, tasks: TaskRepository, projects: ProjectRepository,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.tasks = tasks
        self.projects = projects
        self._setup_ui()
        tasks.subscribe(self.refresh)
        projects.subscribe(self._reload_projects)
        self._reload_projects()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(10)

        title = QLabel("Tasks")
        title.setObjectName("title")
        layout.addWidget(title)

        # ── Entry row ─────────────────────────────────────────────────
        entry = QHBoxLayout()
        self.text_input = QLineEdit()
        self.text_input.setPlaceholderText("What needs doing?")
        self.text_input.returnPressed.connect(self._on_add)
        entry.addWidget(self.text_input, 1)

        self.category_combo = QComboBox()
        for c in TaskCategory:
            self.category_combo.addItem(c.value, c)
        entry.addWidget(self.category_combo)

        self.priority_combo = QComboBox()
        for p in TaskPriority:
            self.priority_combo.addItem(p.value, p)
        entry.addWidget(self.priority_combo)

        self.project_combo = QComboBox()
        entry.addWidget(self.project_combo)

        self.due_check = QCheckBox("Due")
        self.due_edit = QDateEdit(QDate.currentDate())
        self.due_edit.setCalendarPopup(True)
        self.due_edit.setEnabled(False)
        self.due_check.toggled.connect(self.due_edit.setEnabled)
        entry.addWidget(self.due_check)
        entry.addWidget(self.due_edit)

        add_btn = QPushButton("Add")
        add_btn.setObjectName("primary")
        add_btn.clicked.connect(self._on_add)
        entry.addWidget(add_btn)
        layout.addLayout(entry)

        # ── Filter row ────────────────────────────────────────────────
        filters = QHBoxLayout()
        filters.addWidget(QLabel("Show:"))
        self.filter_combo = QComboBox()
        self.filter_combo.addItem("All", SHOW_ALL)
        self.filter_combo.addItem("Open", SHOW_OPEN)
        self.filter_combo.addItem("Completed", SHOW_DONE)
        self.filter_combo.currentIndexChanged.connect(self.refresh)
        filters.addWidget(self.filter_combo)
        filters.addStretch()
        self.summary_label = QLabel()
        self.summary_label.setObjectName("subtitle")
        filters.addWidget(self.summary_label)
        layout.addLayout(filters)

        self.list = QListWidget()
        self.list.itemChanged.connect(self._on_item_changed)
        layout.addWidget(self.list, 1)

        delete_btn = QPushButton("Delete selected")
        delete_btn.setObjectName("danger")
        delete_btn.clicked.connect(self._on_delete)
        layout.addWidget(delete_btn, alignment=Qt.AlignmentFlag.AlignRight)

    # ── Rendering ───────────────────────────────────────────────────────

    def _reload_projects(self) -> None:
        current = self.project_combo.currentData()
        self.project_combo.clear()
        self.project_combo.addItem("No project", None)
        for p in self.projects:
            self.project_combo.addItem(p.name, p.id)
        idx = self.project_combo.findData(current)
        self.project_combo.setCurrentIndex(max(idx, 0))
        self.refresh()

    def refresh(self) -> None:
        mode = self.filter_combo.currentData()
        names = {p.id: p.name for p in self.projects}
        self.list.blockSignals(True)
        self.list.clear()
        for task in self.tasks:
            if mode == SHOW_OPEN and task.completed:
                continue
            if mode == SHOW_DONE and not task.completed:
                continue
            item = QListWidgetItem(_describe(task, names))
            item.setData(Qt.ItemDataRole.UserRole, task.id)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(Qt.CheckState.Checked if task.completed
                               else Qt.CheckState.Unchecked)
            self.list.addItem(item)
        self.list.blockSignals(False)
        done = sum(1 for t in self.tasks if t.completed)
        self.summary_label.setText(f"{done}/{len(self.tasks)} done")

    def show_task(self, task_id: str) -> None:
        self.filter_combo.setCurrentIndex(0)
        for row in range(self.list.count()):
            item = self.list.item(row)
            if item.data(Qt.ItemDataRole.UserRole) == task_id:
                self.list.setCurrentItem(item)
                self.list.scrollToItem(item)
                return

    # ── Actions ─────────────────────────────────────────────────────────

    @Slot()
    def _on_add(self) -> None:
        due = self.due_edit.date().toString("yyyy-MM-dd") if self.due_check.isChecked() else None
        task = self.tasks.add(
            self.text_input.text(),
            project_id=self.project_combo.currentData(),
            due_date=due,
            category=self.category_combo.currentData(),
            priority=self.priority_combo.currentData(),
        )
        if task:
            self.text_input.clear()

    @Slot(QListWidgetItem)
    def _on_item_changed(self, item: QListWidgetItem) -> None:
        self.tasks.toggle(item.data(Qt.ItemDataRole.UserRole))

    @Slot()
    def _on_delete(self) -> None:
        for item in self.list.selectedItems():
            self.tasks.delete(item.data(Qt.ItemDataRole.UserRole))


def _describe(task: Task, project_names: dict) -> str:
    parts = [task.text]
    tags = []
    if task.priority is not TaskPriority.NONE:
        tags.append(task.priority.value)
    if task.category is not TaskCategory.NONE:
        tags.append(task.category.value)
    # dangling project ids read as unassigned
    project = project_names.get(task.project_id) if task.project_id else None
    if project:
        tags.append(project)
    if task.due_date:
        tags.append(f"due {task.due_date}")
    if tags:
        parts.append("  [" + " · ".join(tags) + "]")
    return "".join(parts)
