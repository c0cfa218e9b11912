"""
Chart backend for the dashboard — QtCharts views on a dark surface.

Each public function takes already-aggregated numbers (see
services/dashboard_service.py) and returns a live, hoverable QChartView.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Mapping

import numpy as np
from PySide6.QtCore import QMargins, QPointF, Qt
from PySide6.QtGui import QBrush, QColor, QCursor, QFont, QPainter, QPen
from PySide6.QtWidgets import QToolTip
from PySide6.QtCharts import (
    QBarCategoryAxis, QBarSeries, QBarSet, QChart, QChartView,
    QDateTimeAxis, QHorizontalStackedBarSeries, QLineSeries, QScatterSeries,
    QValueAxis,
)

logger = logging.getLogger(__name__)

BG = QColor("#191919")
MUTED = QColor("#9b9a97")
DIM = QColor("#5a5a5a")
GRID_CLR = QColor("#2a2a2a")

BLUE = "#58C4DD"
GREEN = "#83C167"
RED = "#FC6255"
GOLD = "#F4D345"
PURPLE = "#9A72AC"

CATEGORY_COLORS = {"Work": BLUE, "Personal": GREEN, "Urgent": RED, "None": DIM.name()}
PRIORITY_COLORS = {"High": RED, "Medium": GOLD, "Low": GREEN, "None": DIM.name()}


def _base_chart(title: str = "") -> QChart:
    chart = QChart()
    chart.setBackgroundBrush(QBrush(BG))
    chart.setBackgroundRoundness(0)
    chart.setMargins(QMargins(8, 8, 8, 8))
    if title:
        chart.setTitle(title)
        chart.setTitleFont(QFont("Segoe UI", 10))
        chart.setTitleBrush(QBrush(MUTED))
    chart.legend().setVisible(False)
    chart.setAnimationOptions(QChart.AnimationOption.SeriesAnimations)
    chart.setAnimationDuration(400)
    return chart


def _value_axis() -> QValueAxis:
    axis = QValueAxis()
    axis.setLabelsColor(DIM)
    axis.setLabelsFont(QFont("Segoe UI", 8))
    axis.setGridLineColor(GRID_CLR)
    axis.setLineVisible(False)
    axis.setMinorGridLineVisible(False)
    return axis


def _cat_axis(categories: list) -> QBarCategoryAxis:
    axis = QBarCategoryAxis()
    axis.append(categories)
    axis.setLabelsColor(MUTED)
    axis.setLabelsFont(QFont("Segoe UI", 8))
    axis.setGridLineVisible(False)
    axis.setLineVisible(False)
    return axis


def make_chart_view(chart: QChart) -> QChartView:
    """Wrap chart in a styled view with antialiasing."""
    view = QChartView(chart)
    view.setRenderHint(QPainter.RenderHint.Antialiasing)
    view.setStyleSheet("background: transparent; border: none;")
    view.setMinimumHeight(200)
    return view


# ── Public chart functions ───────────────────────────────────────────────────

def plot_focus_over_time(minutes_per_day: Mapping[str, int]) -> QChartView:
    """Focused minutes per day as a line with hoverable dots."""
    chart = _base_chart("focus minutes per day")
    if not minutes_per_day:
        chart.setTitle("focus minutes per day — no sessions yet")
        return make_chart_view(chart)

    x_axis = QDateTimeAxis()
    x_axis.setFormat("MMM dd")
    x_axis.setLabelsColor(DIM)
    x_axis.setGridLineColor(GRID_CLR)
    y_axis = _value_axis()
    chart.addAxis(x_axis, Qt.AlignmentFlag.AlignBottom)
    chart.addAxis(y_axis, Qt.AlignmentFlag.AlignLeft)

    points = []
    labels = []
    for day, minutes in sorted(minutes_per_day.items()):
        dt = datetime.fromisoformat(day)
        points.append(QPointF(dt.timestamp() * 1000, minutes))
        labels.append(f"{dt.strftime('%b %d')}: {minutes} min")

    line = QLineSeries()
    line.setPen(QPen(QColor(BLUE), 2.5))
    dots = QScatterSeries()
    dots.setMarkerSize(8)
    dots.setColor(QColor(BLUE))
    dots.setBorderColor(QColor(0, 0, 0, 0))
    for p in points:
        line.append(p)
        dots.append(p)

    def _on_hover(point: QPointF, state: bool) -> None:
        if not state:
            return
        idx = min(range(len(points)), key=lambda i: abs(points[i].x() - point.x()))
        QToolTip.showText(QCursor.pos(), labels[idx])

    dots.hovered.connect(_on_hover)
    for series in (line, dots):
        chart.addSeries(series)
        series.attachAxis(x_axis)
        series.attachAxis(y_axis)

    y_axis.setRange(0, max(minutes_per_day.values()) * 1.2 + 1)
    return make_chart_view(chart)


def plot_breakdown(title: str, counts: Mapping[str, int],
                   colors: Dict[str, str]) -> QChartView:
    """Horizontal bars, one per key (category or priority)."""
    chart = _base_chart(title)
    if not counts:
        chart.setTitle(f"{title} — no tasks yet")
        return make_chart_view(chart)

    labels = list(counts.keys())
    y_axis = _cat_axis(labels)
    x_axis = _value_axis()
    chart.addAxis(x_axis, Qt.AlignmentFlag.AlignBottom)
    chart.addAxis(y_axis, Qt.AlignmentFlag.AlignLeft)

    # set i is non-zero only on row i
    series = QHorizontalStackedBarSeries()
    for row, label in enumerate(labels):
        bar_set = QBarSet(label)
        for i in range(len(labels)):
            bar_set.append(float(counts[label]) if i == row else 0.0)
        bar_set.setColor(QColor(colors.get(label, PURPLE)))
        bar_set.setBorderColor(QColor(0, 0, 0, 0))
        series.append(bar_set)
    series.setBarWidth(0.5)

    def _hover(status, idx, barset):
        if status:
            QToolTip.showText(QCursor.pos(), f"{barset.label()}: {barset.at(idx):.0f} tasks")

    series.hovered.connect(_hover)
    chart.addSeries(series)
    series.attachAxis(x_axis)
    series.attachAxis(y_axis)
    x_axis.setRange(0, max(counts.values()) * 1.15 + 1)
    return make_chart_view(chart)


def plot_daily_focus_histogram(minutes_per_day: Mapping[str, int]) -> QChartView:
    """How many days landed in each focused-minutes bucket."""
    chart = _base_chart("daily focus distribution")
    values = list(minutes_per_day.values())
    if not values:
        chart.setTitle("daily focus distribution — no sessions yet")
        return make_chart_view(chart)

    n_bins = min(10, max(3, len(values) // 3))
    counts, bin_edges = np.histogram(values, bins=n_bins)
    categories = [f"{bin_edges[i]:.0f}" for i in range(len(bin_edges) - 1)]

    x_axis = _cat_axis(categories)
    y_axis = _value_axis()
    chart.addAxis(x_axis, Qt.AlignmentFlag.AlignBottom)
    chart.addAxis(y_axis, Qt.AlignmentFlag.AlignLeft)

    bar_set = QBarSet("days")
    bar_set.setColor(QColor(PURPLE))
    bar_set.setBorderColor(QColor(0, 0, 0, 0))
    for c in counts:
        bar_set.append(float(c))
    series = QBarSeries()
    series.append(bar_set)
    series.setBarWidth(0.85)

    def _hist_hover(status, idx, barset):
        if status and 0 <= idx < len(counts):
            lo, hi = bin_edges[idx], bin_edges[idx + 1]
            QToolTip.showText(QCursor.pos(), f"{lo:.0f}–{hi:.0f} min: {counts[idx]} days")

    series.hovered.connect(_hist_hover)
    chart.addSeries(series)
    series.attachAxis(x_axis)
    series.attachAxis(y_axis)
    y_axis.setRange(0, int(counts.max()) * 1.2 + 1)
    return make_chart_view(chart)
