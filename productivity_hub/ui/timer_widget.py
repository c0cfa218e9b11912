"""
Timer view — pomodoro clock with start / pause / reset / skip.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from productivity_hub.audio.sound_manager import BREAK_DONE, WORK_DONE, SoundManager
from productivity_hub.data.models import PomodoroSession
from productivity_hub.services.pomodoro_service import (
    PomodoroPhase, PomodoroTimer, format_clock,
)

logger = logging.getLogger(__name__)

PHASE_LABELS = {
    PomodoroPhase.WORK: "Focus",
    PomodoroPhase.SHORT_BREAK: "Short break",
    PomodoroPhase.LONG_BREAK: "Long break",
}


class TimerWidget(QWidget):
    def __init__(self, timer: PomodoroTimer, sound: Optional[SoundManager] = None,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.timer = timer
        self.sound = sound
        self.timer.on_tick = self._on_tick
        self.timer.on_phase_complete = self._on_phase_complete
        self._setup_ui()
        self._on_tick(self.timer.remaining_seconds)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        self.phase_label = QLabel()
        self.phase_label.setObjectName("state_label")
        self.phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.phase_label)

        self.clock_label = QLabel()
        self.clock_label.setObjectName("timer")
        self.clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.clock_label)

        self.count_label = QLabel()
        self.count_label.setObjectName("subtitle")
        self.count_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.count_label)

        buttons = QHBoxLayout()
        self.btn_start = QPushButton("Start")
        self.btn_start.setObjectName("primary")
        self.btn_start.setMinimumHeight(44)
        self.btn_start.clicked.connect(self._on_start_pause)
        reset_btn = QPushButton("Reset")
        reset_btn.clicked.connect(self.timer.reset)
        skip_btn = QPushButton("Skip")
        skip_btn.clicked.connect(self._on_skip)
        for b in (self.btn_start, reset_btn, skip_btn):
            buttons.addWidget(b)
        layout.addLayout(buttons)
        layout.addStretch()

    @Slot()
    def _on_start_pause(self) -> None:
        if self.timer.is_running:
            self.timer.pause()
        else:
            self.timer.start()
        self._sync_button()

    @Slot()
    def _on_skip(self) -> None:
        self.timer.skip()
        self._sync_button()

    def _sync_button(self) -> None:
        self.btn_start.setText("Pause" if self.timer.is_running else "Start")

    def _on_tick(self, remaining: int) -> None:
        self.clock_label.setText(format_clock(remaining))
        self.phase_label.setText(PHASE_LABELS[self.timer.phase])
        self.count_label.setText(
            f"{self.timer.completed_work_sessions} pomodoro(s) this run"
        )

    def _on_phase_complete(self, phase: str, session: Optional[PomodoroSession]) -> None:
        if self.sound:
            self.sound.play(WORK_DONE if phase == PomodoroPhase.WORK else BREAK_DONE)
        self._sync_button()
