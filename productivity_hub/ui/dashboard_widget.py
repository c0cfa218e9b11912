"""
Dashboard Widget — metric cards and charts over every collection.

Stats come from compute_dashboard() and are rebuilt whenever a repository
the dashboard reads from changes, or when the view is shown.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QProgressBar, QScrollArea, QSizePolicy,
    QVBoxLayout, QWidget,
)
from PySide6.QtCharts import QChartView

from productivity_hub.data.context import AppContext
from productivity_hub.services.dashboard_service import DashboardStats, compute_dashboard
from productivity_hub.ui import plot_backend

logger = logging.getLogger(__name__)

_SURFACE = "#252525"
_BORDER = "#333333"
_MUTED = "#9b9a97"
_DIM = "#5a5a5a"


class MetricCard(QFrame):
    """Single number with a small label underneath."""

    def __init__(self, label: str, accent: str = "#58C4DD",
                 tooltip: str = "", parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setMinimumWidth(120)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setFixedHeight(70)
        self.setStyleSheet(f"""
            MetricCard {{
                background-color: {_SURFACE};
                border-radius: 6px;
                border: 1px solid {_BORDER};
            }}
        """)
        if tooltip:
            self.setToolTip(tooltip)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 10, 14, 8)
        layout.setSpacing(2)

        self.value_label = QLabel("—")
        self.value_label.setStyleSheet(
            f"font-size: 20px; font-weight: 500; color: {accent}; background: transparent;"
        )
        name_label = QLabel(label.lower())
        name_label.setStyleSheet(
            f"font-size: 9px; color: {_DIM}; background: transparent; letter-spacing: 0.5px;"
        )
        layout.addWidget(self.value_label)
        layout.addWidget(name_label)

    def set_text(self, text: str) -> None:
        self.value_label.setText(text)


class SectionHeader(QLabel):
    def __init__(self, text: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(text.lower(), parent)
        self.setStyleSheet(f"""
            font-size: 11px; font-weight: 600; color: {_MUTED};
            background: transparent; letter-spacing: 1px; padding-top: 12px;
        """)


class ChartSlot(QFrame):
    """Container that holds a QChartView — swapped on refresh."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(2, 2, 2, 2)
        self._current_view: Optional[QChartView] = None
        self.setMinimumHeight(220)

    def set_chart(self, view: QChartView) -> None:
        if self._current_view is not None:
            self._layout.removeWidget(self._current_view)
            self._current_view.deleteLater()
        self._current_view = view
        self._layout.addWidget(view)


class DashboardWidget(QWidget):
    """Overview of tasks, focus time, habits and projects."""

    def __init__(self, ctx: AppContext, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.ctx = ctx
        self._setup_ui()
        for repo in (ctx.tasks, ctx.pomodoro, ctx.habits, ctx.projects):
            repo.subscribe(self.refresh_data)
        self.refresh_data()

    def _setup_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        outer.addWidget(scroll)

        content = QWidget()
        cl = QVBoxLayout(content)
        cl.setContentsMargins(24, 20, 24, 24)
        cl.setSpacing(12)
        scroll.setWidget(content)

        title = QLabel("Dashboard")
        title.setObjectName("title")
        cl.addWidget(title)

        # ── Tasks ─────────────────────────────────────────────────────
        cl.addWidget(SectionHeader("tasks"))
        r1 = QHBoxLayout()
        self.card_tasks = MetricCard("tasks", "#58C4DD")
        self.card_done = MetricCard("completed", "#83C167",
                                    "Completed tasks out of all tasks.")
        self.card_due = MetricCard("due today", "#F4D345")
        self.card_overdue = MetricCard("overdue", "#FC6255",
                                       "Open tasks whose due date has passed.")
        for c in (self.card_tasks, self.card_done, self.card_due, self.card_overdue):
            r1.addWidget(c)
        cl.addLayout(r1)

        r2 = QHBoxLayout()
        self.chart_category = ChartSlot()
        self.chart_priority = ChartSlot()
        r2.addWidget(self.chart_category)
        r2.addWidget(self.chart_priority)
        cl.addLayout(r2)

        # ── Focus ─────────────────────────────────────────────────────
        cl.addWidget(SectionHeader("focus"))
        r3 = QHBoxLayout()
        self.card_sessions = MetricCard("pomodoros", "#9A72AC")
        self.card_focus_total = MetricCard("focus time", "#83C167")
        self.card_focus_today = MetricCard("focus today", "#58C4DD")
        for c in (self.card_sessions, self.card_focus_total, self.card_focus_today):
            r3.addWidget(c)
        cl.addLayout(r3)

        r4 = QHBoxLayout()
        self.chart_focus = ChartSlot()
        self.chart_histogram = ChartSlot()
        r4.addWidget(self.chart_focus, 2)
        r4.addWidget(self.chart_histogram, 1)
        cl.addLayout(r4)

        # ── Habits & projects ─────────────────────────────────────────
        cl.addWidget(SectionHeader("habits"))
        self.habits_label = QLabel()
        self.habits_label.setWordWrap(True)
        cl.addWidget(self.habits_label)

        cl.addWidget(SectionHeader("projects"))
        self.projects_box = QVBoxLayout()
        cl.addLayout(self.projects_box)
        cl.addStretch()

    def showEvent(self, event) -> None:
        self.refresh_data()
        super().showEvent(event)

    def refresh_data(self) -> None:
        stats = compute_dashboard(
            self.ctx.tasks.all(), self.ctx.pomodoro.all(),
            self.ctx.habits.all(), self.ctx.projects.all(),
        )
        self._render(stats)

    def _render(self, stats: DashboardStats) -> None:
        self.card_tasks.set_text(str(stats.total_tasks))
        self.card_done.set_text(
            f"{stats.completed_tasks} ({stats.completion_ratio * 100:.0f}%)"
        )
        self.card_due.set_text(str(len(stats.due_today)))
        self.card_overdue.set_text(str(len(stats.overdue)))

        self.card_sessions.set_text(str(stats.session_count))
        self.card_focus_total.set_text(_fmt_minutes(stats.total_focus_minutes))
        self.card_focus_today.set_text(_fmt_minutes(stats.today_focus_minutes))

        self.chart_category.set_chart(plot_backend.plot_breakdown(
            "by category", {k.value: v for k, v in stats.by_category.items()},
            plot_backend.CATEGORY_COLORS))
        self.chart_priority.set_chart(plot_backend.plot_breakdown(
            "by priority", {k.value: v for k, v in stats.by_priority.items()},
            plot_backend.PRIORITY_COLORS))
        self.chart_focus.set_chart(plot_backend.plot_focus_over_time(stats.focus_minutes_per_day))
        self.chart_histogram.set_chart(
            plot_backend.plot_daily_focus_histogram(stats.focus_minutes_per_day))

        if stats.habit_streaks:
            parts = [f"{name}: {streak}d" for name, streak in stats.habit_streaks.items()]
            self.habits_label.setText(
                " · ".join(parts) + f"   (best streak {stats.best_streak}d)"
            )
        else:
            self.habits_label.setText("No habits yet.")

        _clear_layout(self.projects_box)
        for row in stats.projects:
            self.projects_box.addWidget(ProjectProgressRow(row.name, row.completed, row.total))


class ProjectProgressRow(QWidget):
    def __init__(self, name: str, completed: int, total: int,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        label = QLabel(name)
        label.setMinimumWidth(160)
        bar = QProgressBar()
        bar.setRange(0, max(total, 1))
        bar.setValue(completed)
        bar.setFormat(f"{completed}/{total}")
        layout.addWidget(label)
        layout.addWidget(bar, 1)


def _fmt_minutes(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins:02d}m" if hours else f"{mins}m"


def _clear_layout(layout) -> None:
    while layout.count():
        item = layout.takeAt(0)
        widget = item.widget()
        if widget is not None:
            widget.deleteLater()
