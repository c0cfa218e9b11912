"""
Calendar view — month grid with marked days and an agenda for the
selected day (events + tasks due).
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from PySide6.QtCore import QDate, Qt, Slot
from PySide6.QtGui import QTextCharFormat, QFont
from PySide6.QtWidgets import (
    QCalendarWidget, QHBoxLayout, QLabel, QLineEdit, QListWidget,
    QListWidgetItem, QPushButton, QVBoxLayout, QWidget,
)

from productivity_hub.data.repository import CalendarRepository, TaskRepository
from productivity_hub.services.calendar_service import items_for_day, month_markers


class CalendarWidget(QWidget):
    def __init__(self, tasks: TaskRepository, events: CalendarRepository,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.tasks = tasks
        self.events = events
        self._marked: list = []
        self._setup_ui()
        tasks.subscribe(self.refresh)
        events.subscribe(self.refresh)
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)

        title = QLabel("Calendar")
        title.setObjectName("title")
        layout.addWidget(title)

        body = QHBoxLayout()
        self.calendar = QCalendarWidget()
        self.calendar.setGridVisible(True)
        self.calendar.selectionChanged.connect(self.refresh)
        self.calendar.currentPageChanged.connect(lambda *_: self.refresh())
        body.addWidget(self.calendar, 2)

        side = QVBoxLayout()
        self.day_label = QLabel()
        self.day_label.setObjectName("subtitle")
        side.addWidget(self.day_label)
        self.agenda = QListWidget()
        side.addWidget(self.agenda, 1)

        row = QHBoxLayout()
        self.event_input = QLineEdit()
        self.event_input.setPlaceholderText("New event on this day")
        self.event_input.returnPressed.connect(self._on_add_event)
        row.addWidget(self.event_input, 1)
        add_btn = QPushButton("Add")
        add_btn.setObjectName("primary")
        add_btn.clicked.connect(self._on_add_event)
        row.addWidget(add_btn)
        side.addLayout(row)

        delete_btn = QPushButton("Delete event")
        delete_btn.clicked.connect(self._on_delete_event)
        side.addWidget(delete_btn)
        body.addLayout(side, 1)
        layout.addLayout(body, 1)

    def _selected_day(self) -> date:
        return self.calendar.selectedDate().toPython()

    def refresh(self) -> None:
        self._paint_markers()
        day = self._selected_day()
        self.day_label.setText(day.strftime("%A, %d %B %Y"))
        self.agenda.clear()
        for entry in items_for_day(day, self.tasks.all(), self.events.all()):
            prefix = "📅" if entry.kind == "event" else ("☑" if entry.done else "☐")
            item = QListWidgetItem(f"{prefix} {entry.title}")
            item.setData(Qt.ItemDataRole.UserRole, (entry.kind, entry.id))
            self.agenda.addItem(item)

    def _paint_markers(self) -> None:
        for qd in self._marked:
            self.calendar.setDateTextFormat(qd, QTextCharFormat())
        self._marked = []
        year, month = self.calendar.yearShown(), self.calendar.monthShown()
        bold = QTextCharFormat()
        bold.setFontWeight(QFont.Weight.Bold)
        bold.setForeground(Qt.GlobalColor.cyan)
        for dom in month_markers(year, month, self.tasks.all(), self.events.all()):
            qd = QDate(year, month, dom)
            self.calendar.setDateTextFormat(qd, bold)
            self._marked.append(qd)

    @Slot()
    def _on_add_event(self) -> None:
        if self.events.add(self.event_input.text(), self._selected_day().isoformat()):
            self.event_input.clear()

    @Slot()
    def _on_delete_event(self) -> None:
        item = self.agenda.currentItem()
        if item is None:
            return
        kind, record_id = item.data(Qt.ItemDataRole.UserRole)
        if kind == "event":
            self.events.delete(record_id)
