"""Unit tests for the service layer."""

import json
import pytest
from datetime import date
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from productivity_hub.config import DEFAULT_CONFIG, load_config, save_config
from productivity_hub.data.models import (
    CalendarEvent, Habit, Note, PomodoroSession, Project, Task, TaskCategory,
    TaskPriority,
)
from productivity_hub.services.assistant_service import (
    API_KEY_ENV, AssistantService, safe_ask,
)
from productivity_hub.services.calendar_service import items_for_day, month_markers
from productivity_hub.services.dashboard_service import compute_dashboard, project_progress
from productivity_hub.services.note_tasks import extract_action_items
from productivity_hub.services.quick_action import NOTE, TASK, search
from productivity_hub.services.streaks import compute_streak, current_streak, longest_streak


def _task(tid, text="t", completed=False, **kw):
    return Task(id=tid, text=text, completed=completed, **kw)


class TestStreaks:
    def test_walks_back_from_anchor(self):
        done = {"2024-01-01": True, "2024-01-02": True, "2024-01-03": True}
        assert compute_streak(done, "2024-01-03") == 3
        assert compute_streak(done, "2024-01-02") == 2

    def test_unmarked_anchor_is_zero(self):
        done = {"2024-01-01": True, "2024-01-02": True, "2024-01-03": False}
        assert compute_streak(done, "2024-01-03") == 0

    def test_never_looks_forward(self):
        done = {"2024-01-01": True, "2024-01-02": True, "2024-01-03": True}
        assert compute_streak(done, date(2024, 1, 1)) == 1

    def test_gap_stops_walk(self):
        done = {"2024-01-01": True, "2024-01-03": True}
        assert compute_streak(done, "2024-01-03") == 1

    def test_crosses_month_boundary(self):
        done = {"2024-02-28": True, "2024-02-29": True, "2024-03-01": True}
        assert compute_streak(done, "2024-03-01") == 3

    def test_current_streak_forgives_today(self):
        done = {"2024-01-01": True, "2024-01-02": True}
        assert current_streak(done, date(2024, 1, 3)) == 2
        assert current_streak(done, date(2024, 1, 4)) == 0

    def test_longest_streak(self):
        done = {"2024-01-01": True, "2024-01-02": True, "2024-01-05": True,
                "2024-01-06": True, "2024-01-07": True, "2024-01-08": False}
        assert longest_streak(done) == 3
        assert longest_streak({}) == 0


class TestDashboard:
    def test_category_breakdown_and_ratio(self):
        tasks = [
            _task("1", completed=True, category=TaskCategory.WORK),
            _task("2", completed=True, category=TaskCategory.WORK),
            _task("3", completed=False, category=TaskCategory.PERSONAL),
        ]
        stats = compute_dashboard(tasks, [], [], [], today=date(2024, 1, 1))
        assert stats.by_category == {TaskCategory.WORK: 2, TaskCategory.PERSONAL: 1}
        assert stats.by_category["Work"] == 2
        assert stats.completion_ratio == pytest.approx(2 / 3)
        assert stats.open_tasks == 1

    def test_stored_task_with_numeric_due_date(self):
        task = Task.from_dict({"id": "t", "text": "x", "dueDate": 20240101})
        stats = compute_dashboard([task], [], [], [], today=date(2024, 1, 2))
        assert stats.overdue == []
        assert stats.due_today == []

    def test_empty_dashboard(self):
        stats = compute_dashboard([], [], [], [])
        assert stats.completion_ratio == 0.0
        assert stats.best_streak == 0
        assert stats.projects == []

    def test_priority_and_due_dates(self):
        today = date(2024, 5, 10)
        tasks = [
            _task("1", priority=TaskPriority.HIGH, due_date="2024-05-10"),
            _task("2", priority=TaskPriority.HIGH, due_date="2024-05-01"),
            _task("3", completed=True, due_date="2024-05-01"),
            _task("4"),
        ]
        stats = compute_dashboard(tasks, [], [], [], today=today)
        assert stats.by_priority == {TaskPriority.HIGH: 2, TaskPriority.NONE: 2}
        assert [t.id for t in stats.due_today] == ["1"]
        assert [t.id for t in stats.overdue] == ["2"]

    def test_pomodoro_aggregates(self):
        sessions = [
            PomodoroSession("2024-01-02", 25),
            PomodoroSession("2024-01-01", 25),
            PomodoroSession("2024-01-02", 50),
        ]
        stats = compute_dashboard([], sessions, [], [], today=date(2024, 1, 2))
        assert stats.session_count == 3
        assert stats.total_focus_minutes == 100
        assert stats.today_focus_minutes == 75
        assert list(stats.sessions_per_day.items()) == [("2024-01-01", 1), ("2024-01-02", 2)]
        assert stats.focus_minutes_per_day["2024-01-02"] == 75

    def test_habit_streaks_read_as_stored(self):
        habits = [Habit("h1", "Read", streak=4), Habit("h2", "Walk", streak=1)]
        stats = compute_dashboard([], [], habits, [])
        assert stats.habit_streaks == {"Read": 4, "Walk": 1}
        assert stats.best_streak == 4

    def test_project_progress_with_dangling_ref(self):
        projects = [Project("p1", "Site"), Project("p2", "Empty")]
        tasks = [
            _task("1", completed=True, project_id="p1"),
            _task("2", project_id="p1"),
            _task("3", project_id="deleted"),
            _task("4"),
        ]
        rows = project_progress(tasks, projects)
        assert [(r.name, r.completed, r.total) for r in rows] == [
            ("Site", 1, 2), ("Empty", 0, 0), ("Unassigned", 0, 2),
        ]
        assert rows[0].ratio == 0.5
        assert rows[1].ratio == 0.0


class TestQuickAction:
    def test_report_query(self):
        tasks = [_task("t1", "Write report"), _task("t2", "Buy milk")]
        notes = [Note("n1", "Report notes", "q3"), Note("n2", "Groceries", "eggs")]
        results = search("report", tasks, notes)
        assert [(r.kind, r.id) for r in results] == [(TASK, "t1"), (NOTE, "n1")]

    def test_blank_query_returns_nothing(self):
        assert search("   ", [_task("t1", "anything")], []) == []

    def test_matches_note_content(self):
        notes = [Note("n1", "Groceries", "eggs and milk")]
        assert [r.label for r in search("MILK", [], notes)] == ["Groceries"]

    def test_limit(self):
        tasks = [_task(str(i), f"item {i}") for i in range(10)]
        assert len(search("item", tasks, [], limit=3)) == 3


class TestCalendar:
    def test_items_for_day_events_first(self):
        tasks = [_task("t1", "Pay rent", due_date="2024-06-01"),
                 _task("t2", "Other", due_date="2024-06-02")]
        events = [CalendarEvent("e1", "Dentist", "2024-06-01")]
        items = items_for_day(date(2024, 6, 1), tasks, events)
        assert [(i.kind, i.title) for i in items] == [("event", "Dentist"), ("task", "Pay rent")]

    def test_month_markers(self):
        tasks = [_task("t1", due_date="2024-06-01"), _task("t2", due_date="2024-07-01")]
        events = [CalendarEvent("e1", "A", "2024-06-01"), CalendarEvent("e2", "B", "2024-06-30"),
                  CalendarEvent("e3", "bad", "2024-06-xx")]
        assert month_markers(2024, 6, tasks, events) == {1: 2, 30: 1}


    def test_stored_task_with_numeric_due_date(self):
        task = Task.from_dict({"id": "t", "text": "x", "dueDate": 20240101})
        assert month_markers(2024, 1, [task], []) == {}


class TestNoteTasks:
    def test_extracts_checklist_lines(self):
        content = "\n".join([
            "Meeting notes",
            "- [ ] Send slides",
            "- [x] Book room",
            "* Call Sam",
            "TODO: file expenses",
            "plain text",
        ])
        assert extract_action_items(content) == ["Send slides", "Call Sam", "file expenses"]

    def test_empty_box_without_text_skipped(self):
        assert extract_action_items("- [ ]") == []


class TestConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.json") == DEFAULT_CONFIG

    def test_partial_file_merges_sections(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"pomodoro": {"work_minutes": 50}, "log_level": "DEBUG"}))
        cfg = load_config(path)
        assert cfg["pomodoro"]["work_minutes"] == 50
        assert cfg["pomodoro"]["short_break_minutes"] == 5
        assert cfg["log_level"] == "DEBUG"

    def test_bad_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{oops")
        assert load_config(path) == DEFAULT_CONFIG

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        cfg = load_config(path)
        cfg["sound"]["enabled"] = False
        save_config(cfg, path)
        assert load_config(path)["sound"]["enabled"] is False

    def test_defaults_not_mutated(self, tmp_path):
        cfg = load_config(tmp_path / "nope.json")
        cfg["pomodoro"]["work_minutes"] = 1
        assert DEFAULT_CONFIG["pomodoro"]["work_minutes"] == 25


class _Reply:
    def __init__(self, content):
        self.content = content


class _FakeClient:
    def __init__(self, reply="Sure."):
        self.reply = reply
        self.calls = []

    def invoke(self, messages):
        self.calls.append(list(messages))
        if isinstance(self.reply, Exception):
            raise self.reply
        return _Reply(self.reply)


class TestAssistant:
    def test_ask_keeps_history(self):
        client = _FakeClient("Plan: do the report first.")
        svc = AssistantService(client=client)
        assert svc.ask("  help me plan  ") == "Plan: do the report first."
        svc.ask("and then?")
        last = client.calls[-1]
        assert last[0][0] == "system"
        assert ("human", "help me plan") in last
        assert last[-1] == ("human", "and then?")

    def test_empty_prompt_rejected(self):
        with pytest.raises(ValueError):
            AssistantService(client=_FakeClient()).ask("   ")

    def test_unavailable_without_key(self, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        svc = AssistantService()
        assert svc.is_available() is False
        ok, text = safe_ask(svc, "hello")
        assert ok is False
        assert API_KEY_ENV in text

    def test_provider_error_is_reported(self):
        svc = AssistantService(client=_FakeClient(RuntimeError("quota")))
        ok, text = safe_ask(svc, "hello")
        assert ok is False
        assert "quota" in text
        assert svc.history == []

    def test_clear(self):
        svc = AssistantService(client=_FakeClient())
        svc.ask("hi")
        svc.clear()
        assert svc.history == []


class TestSoundCues:
    def test_cues_are_wav(self):
        from productivity_hub.audio.sound_manager import (
            ADDED, BREAK_DONE, WORK_DONE, generate_cues,
        )
        cues = generate_cues()
        assert set(cues) == {WORK_DONE, BREAK_DONE, ADDED}
        for data in cues.values():
            assert data[:4] == b"RIFF"
            assert data[8:12] == b"WAVE"

    def test_disabled_manager_is_silent(self, tmp_path):
        from productivity_hub.audio.sound_manager import WORK_DONE, SoundManager
        sound = SoundManager(enabled=False, sounds_dir=tmp_path)
        sound.play(WORK_DONE)
        sound.set_volume(3.0)
        assert sound.volume == 1.0
