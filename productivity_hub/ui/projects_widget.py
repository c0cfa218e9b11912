"""
Projects view — create projects and see how far along each one is.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QMessageBox, QPushButton, QVBoxLayout, QWidget,
)

from productivity_hub.data.repository import ProjectRepository, TaskRepository
from productivity_hub.services.dashboard_service import project_progress


class ProjectsWidget(QWidget):
    def __init__(self, tasks: TaskRepository, projects: ProjectRepository,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.tasks = tasks
        self.projects = projects
        self._setup_ui()
        tasks.subscribe(self.refresh)
        projects.subscribe(self.refresh)
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)

        title = QLabel("Projects")
        title.setObjectName("title")
        layout.addWidget(title)

        row = QHBoxLayout()
        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("New project name")
        self.name_input.returnPressed.connect(self._on_add)
        row.addWidget(self.name_input, 1)
        add_btn = QPushButton("Add project")
        add_btn.setObjectName("primary")
        add_btn.clicked.connect(self._on_add)
        row.addWidget(add_btn)
        layout.addLayout(row)

        self.list = QListWidget()
        layout.addWidget(self.list, 1)

        delete_btn = QPushButton("Delete project")
        delete_btn.setObjectName("danger")
        delete_btn.clicked.connect(self._on_delete)
        layout.addWidget(delete_btn, alignment=Qt.AlignmentFlag.AlignRight)

    def refresh(self) -> None:
        self.list.clear()
        for row in project_progress(self.tasks.all(), self.projects.all()):
            pct = row.ratio * 100
            item = QListWidgetItem(f"{row.name} — {row.completed}/{row.total} tasks ({pct:.0f}%)")
            item.setData(Qt.ItemDataRole.UserRole, row.project_id)
            self.list.addItem(item)

    @Slot()
    def _on_add(self) -> None:
        if self.projects.add(self.name_input.text()):
            self.name_input.clear()

    @Slot()
    def _on_delete(self) -> None:
        item = self.list.currentItem()
        project_id = item.data(Qt.ItemDataRole.UserRole) if item else None
        if project_id is None:
            return
        reply = QMessageBox.question(
            self, "Delete project",
            "Delete this project? Its tasks and notes are kept as unassigned.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply == QMessageBox.StandardButton.Yes:
            self.projects.delete(project_id)
