"""Tests for the pomodoro countdown (driven by hand, no real seconds)."""

import pytest
from datetime import date
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from productivity_hub.data.repository import PomodoroRepository
from productivity_hub.services.pomodoro_service import (
    PomodoroPhase, PomodoroTimer, format_clock,
)


@pytest.fixture
def repo(store):
    return PomodoroRepository(store)


@pytest.fixture
def timer(qt_app, repo):
    t = PomodoroTimer(repo, work_minutes=1, short_break_minutes=1,
                      long_break_minutes=2, sessions_before_long_break=2,
                      today=lambda: date(2024, 3, 5))
    yield t
    t.stop()


def _run_phase(timer: PomodoroTimer) -> None:
    for _ in range(timer.remaining_seconds):
        timer.tick()


class TestPomodoroTimer:
    def test_starts_in_work_phase(self, timer):
        assert timer.phase == PomodoroPhase.WORK
        assert timer.remaining_seconds == 60
        assert not timer.is_running

    def test_work_phase_logs_session(self, timer, repo):
        timer.start()
        _run_phase(timer)
        assert [(s.date, s.duration) for s in repo] == [("2024-03-05", 1)]
        assert timer.phase == PomodoroPhase.SHORT_BREAK
        assert timer.remaining_seconds == 60
        assert not timer.is_running

    def test_break_does_not_log(self, timer, repo):
        _run_phase(timer)
        _run_phase(timer)
        assert len(repo) == 1
        assert timer.phase == PomodoroPhase.WORK

    def test_long_break_every_nth(self, timer):
        _run_phase(timer)   # work 1
        _run_phase(timer)   # short break
        _run_phase(timer)   # work 2
        assert timer.phase == PomodoroPhase.LONG_BREAK
        assert timer.remaining_seconds == 120

    def test_skip_never_logs(self, timer, repo):
        timer.skip()
        assert timer.phase == PomodoroPhase.SHORT_BREAK
        assert len(repo) == 0

    def test_reset_refills_phase(self, timer):
        for _ in range(10):
            timer.tick()
        timer.reset()
        assert timer.remaining_seconds == 60

    def test_callbacks(self, timer):
        ticks, done = [], []
        timer.on_tick = ticks.append
        timer.on_phase_complete = lambda phase, session: done.append((phase, session.duration))
        _run_phase(timer)
        assert ticks[0] == 59
        assert done == [(PomodoroPhase.WORK, 1)]

    def test_start_twice_is_noop(self, timer):
        timer.start()
        timer.start()
        assert timer.is_running
        timer.pause()
        assert not timer.is_running

    @pytest.mark.parametrize("field", ["work_minutes", "short_break_minutes",
                                       "long_break_minutes", "sessions_before_long_break"])
    def test_invalid_lengths_rejected(self, qt_app, repo, field):
        with pytest.raises(ValueError):
            PomodoroTimer(repo, **{field: 0})


def test_format_clock():
    assert format_clock(0) == "00:00"
    assert format_clock(25 * 60) == "25:00"
    assert format_clock(61) == "01:01"
    assert format_clock(-5) == "00:00"
