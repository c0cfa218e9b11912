"""
Habits view — a week grid of checkboxes per habit, plus streaks.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, List, Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QCheckBox, QGridLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QVBoxLayout, QWidget,
)

from productivity_hub.data.repository import HabitRepository
from productivity_hub.services.streaks import current_streak, longest_streak

DAYS_SHOWN = 7


class HabitsWidget(QWidget):
    def __init__(self, habits: HabitRepository,
                 today: Callable[[], date] = date.today,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.habits = habits
        self.today = today
        self._setup_ui()
        habits.subscribe(self.refresh)
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)

        title = QLabel("Habits")
        title.setObjectName("title")
        layout.addWidget(title)

        row = QHBoxLayout()
        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("New habit, e.g. 'Read 20 pages'")
        self.name_input.returnPressed.connect(self._on_add)
        row.addWidget(self.name_input, 1)
        add_btn = QPushButton("Add habit")
        add_btn.setObjectName("primary")
        add_btn.clicked.connect(self._on_add)
        row.addWidget(add_btn)
        layout.addLayout(row)

        self.grid_host = QWidget()
        self.grid = QGridLayout(self.grid_host)
        self.grid.setHorizontalSpacing(10)
        layout.addWidget(self.grid_host)
        layout.addStretch()

    def _days(self) -> List[date]:
        today = self.today()
        return [today - timedelta(days=i) for i in range(DAYS_SHOWN - 1, -1, -1)]

    def refresh(self) -> None:
        while self.grid.count():
            w = self.grid.takeAt(0).widget()
            if w is not None:
                w.deleteLater()

        days = self._days()
        self.grid.addWidget(QLabel("Habit"), 0, 0)
        for col, d in enumerate(days, start=1):
            header = QLabel(d.strftime("%a\n%d"))
            header.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self.grid.addWidget(header, 0, col)
        self.grid.addWidget(QLabel("Streak"), 0, len(days) + 1)
        self.grid.addWidget(QLabel("Best"), 0, len(days) + 2)

        for row, habit in enumerate(self.habits, start=1):
            self.grid.addWidget(QLabel(habit.name), row, 0)
            for col, d in enumerate(days, start=1):
                key = d.isoformat()
                box = QCheckBox()
                box.setChecked(bool(habit.completions.get(key)))
                box.toggled.connect(
                    lambda _checked, hid=habit.id, k=key: self.habits.toggle(hid, k)
                )
                self.grid.addWidget(box, row, col, alignment=Qt.AlignmentFlag.AlignCenter)
            streak = QLabel(f"🔥 {current_streak(habit.completions, self.today())}")
            streak.setToolTip(f"Streak at last check-in: {habit.streak}")
            self.grid.addWidget(streak, row, len(days) + 1)
            self.grid.addWidget(QLabel(str(longest_streak(habit.completions))), row, len(days) + 2)
            delete_btn = QPushButton("✕")
            delete_btn.setFixedWidth(28)
            delete_btn.clicked.connect(lambda _=False, hid=habit.id: self.habits.delete(hid))
            self.grid.addWidget(delete_btn, row, len(days) + 3)

    @Slot()
    def _on_add(self) -> None:
        if self.habits.add(self.name_input.text()):
            self.name_input.clear()
