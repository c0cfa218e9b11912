"""
Pomodoro Service — the countdown behind the Timer view.

A one-second QTimer drives tick(). When a work phase runs out, the session is
logged to the pomodoro repository and the timer moves to a break and stops;
the user starts the next phase.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from PySide6.QtCore import QTimer

from productivity_hub.data.models import PomodoroSession
from productivity_hub.data.repository import PomodoroRepository

logger = logging.getLogger(__name__)

TICK_MS = 1000


class PomodoroPhase:
    """Which countdown is loaded."""
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


class PomodoroTimer:
    """
    Work / break countdown.

    Phases cycle: work → short break → work → ... and every Nth finished work
    phase is followed by a long break instead.
    """

    def __init__(
        self,
        repo: PomodoroRepository,
        work_minutes: int = 25,
        short_break_minutes: int = 5,
        long_break_minutes: int = 15,
        sessions_before_long_break: int = 4,
        on_tick: Optional[Callable[[int], None]] = None,
        on_phase_complete: Optional[Callable[[str, Optional[PomodoroSession]], None]] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.repo = repo
        self.today = today

        # Callbacks the UI will set
        self.on_tick = on_tick
        self.on_phase_complete = on_phase_complete

        self.configure(work_minutes, short_break_minutes, long_break_minutes,
                       sessions_before_long_break)

        self.phase = PomodoroPhase.WORK
        self.remaining_seconds = self.phase_seconds(self.phase)
        self.completed_work_sessions = 0

        self._timer = QTimer()
        self._timer.setInterval(TICK_MS)
        self._timer.timeout.connect(self.tick)

    # ── Public API ──────────────────────────────────────────────────────────

    def configure(self, work_minutes: int, short_break_minutes: int,
                  long_break_minutes: int, sessions_before_long_break: int) -> None:
        """Update phase lengths. Applies from the next reset/phase change."""
        for name, value in (("work_minutes", work_minutes),
                            ("short_break_minutes", short_break_minutes),
                            ("long_break_minutes", long_break_minutes),
                            ("sessions_before_long_break", sessions_before_long_break)):
            if int(value) < 1:
                raise ValueError(f"{name} must be at least 1, got {value!r}")
        self.work_minutes = int(work_minutes)
        self.short_break_minutes = int(short_break_minutes)
        self.long_break_minutes = int(long_break_minutes)
        self.sessions_before_long_break = int(sessions_before_long_break)

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def phase_seconds(self, phase: str) -> int:
        minutes = {
            PomodoroPhase.WORK: self.work_minutes,
            PomodoroPhase.SHORT_BREAK: self.short_break_minutes,
            PomodoroPhase.LONG_BREAK: self.long_break_minutes,
        }[phase]
        return minutes * 60

    def start(self) -> None:
        if self.is_running:
            return
        self._timer.start()
        logger.info("Pomodoro %s started: %d s left", self.phase, self.remaining_seconds)

    def pause(self) -> None:
        self._timer.stop()

    def reset(self) -> None:
        """Stop and refill the current phase."""
        self._timer.stop()
        self.remaining_seconds = self.phase_seconds(self.phase)
        self._emit_tick()

    def skip(self) -> None:
        """Jump to the next phase without logging anything."""
        self._timer.stop()
        self._advance_phase()
        self._emit_tick()

    def stop(self) -> None:
        self._timer.stop()

    # ── Timer callback ──────────────────────────────────────────────────────

    def tick(self) -> None:
        if self.remaining_seconds > 0:
            self.remaining_seconds -= 1
        self._emit_tick()
        if self.remaining_seconds == 0:
            self._complete_phase()

    # ── Internal ────────────────────────────────────────────────────────────

    def _complete_phase(self) -> None:
        self._timer.stop()
        finished = self.phase
        session: Optional[PomodoroSession] = None
        if finished == PomodoroPhase.WORK:
            self.completed_work_sessions += 1
            session = self.repo.log(self.today().isoformat(), self.work_minutes)
        logger.info("Pomodoro %s complete.", finished)
        self._advance_phase()
        if self.on_phase_complete:
            self.on_phase_complete(finished, session)
        self._emit_tick()

    def _advance_phase(self) -> None:
        if self.phase == PomodoroPhase.WORK:
            long_due = (self.completed_work_sessions > 0 and
                        self.completed_work_sessions % self.sessions_before_long_break == 0)
            self.phase = PomodoroPhase.LONG_BREAK if long_due else PomodoroPhase.SHORT_BREAK
        else:
            self.phase = PomodoroPhase.WORK
        self.remaining_seconds = self.phase_seconds(self.phase)

    def _emit_tick(self) -> None:
        if self.on_tick:
            self.on_tick(self.remaining_seconds)


def format_clock(seconds: int) -> str:
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{secs:02d}"


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Runs the pomodoro countdown and records finished work phases.
#
# Key design decisions:
#   - QTimer (PySide6) so tick() runs on the GUI thread and can touch the
#     repository and the widgets without locks.
#   - tick() is public: tests drive it by hand instead of waiting real
#     seconds.
#   - Only WORK phases are logged; breaks aren't focus time. Skipping a
#     phase never logs.
#   - Callbacks are injected (on_tick, on_phase_complete), so the service
#     doesn't know which widget or sound is listening.
