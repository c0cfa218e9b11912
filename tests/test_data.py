"""Unit tests for the data layer (store, repositories, models, context)."""

import json
import pytest
from datetime import datetime, timezone

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from productivity_hub.data.models import (
    Habit, Note, PomodoroSession, Task, TaskCategory, TaskPriority,
)
from productivity_hub.data.repository import (
    HabitRepository, NoteRepository, PomodoroRepository, ProjectRepository,
    TaskRepository, snapshot,
)
from productivity_hub.data.store import (
    ALL_KEYS, FORMAT_VERSION, HABITS_KEY, POMODORO_KEY, TASKS_KEY,
    PersistentStore,
)
from productivity_hub.services.streaks import longest_streak


@pytest.fixture
def tasks(store):
    return TaskRepository(store)


@pytest.fixture
def notes(store):
    return NoteRepository(store)


@pytest.fixture
def habits(store):
    return HabitRepository(store)


def _raw(store: PersistentStore, key: str) -> str:
    row = store.conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    return row["value"]


class TestPersistentStore:
    def test_missing_key_loads_empty(self, store):
        assert store.load(TASKS_KEY) == []

    def test_save_then_load(self, store):
        items = [{"id": "a", "text": "one"}, {"id": "b", "text": "two"}]
        store.save(TASKS_KEY, items)
        assert store.load(TASKS_KEY) == items

    def test_save_writes_versioned_envelope(self, store):
        store.save(TASKS_KEY, [])
        payload = json.loads(_raw(store, TASKS_KEY))
        assert payload == {"version": FORMAT_VERSION, "items": []}

    def test_save_overwrites(self, store):
        store.save(TASKS_KEY, [{"id": "a"}])
        store.save(TASKS_KEY, [{"id": "b"}])
        assert store.load(TASKS_KEY) == [{"id": "b"}]
        assert store.keys() == [TASKS_KEY]

    def test_malformed_json_fails_open(self, store):
        store.conn.execute("INSERT INTO kv_store (key, value) VALUES (?, ?)",
                           (TASKS_KEY, "{not json"))
        assert store.load(TASKS_KEY) == []

    def test_unexpected_shape_fails_open(self, store):
        store.conn.execute("INSERT INTO kv_store (key, value) VALUES (?, ?)",
                           (TASKS_KEY, '"just a string"'))
        assert store.load(TASKS_KEY) == []

    def test_bare_array_still_readable(self, store):
        store.conn.execute("INSERT INTO kv_store (key, value) VALUES (?, ?)",
                           (TASKS_KEY, '[{"id": "x", "text": "legacy"}]'))
        assert store.load(TASKS_KEY) == [{"id": "x", "text": "legacy"}]

    def test_clear_single_key(self, store):
        store.save(TASKS_KEY, [{"id": "a"}])
        store.save(HABITS_KEY, [{"id": "h"}])
        store.clear(TASKS_KEY)
        assert store.keys() == [HABITS_KEY]
        assert store.load(TASKS_KEY) == []

    def test_clear_all(self, store):
        for key in ALL_KEYS:
            store.save(key, [{"id": key}])
        store.clear_all()
        assert store.keys() == []

    def test_export_import(self, store):
        store.save(TASKS_KEY, [{"id": "t"}])
        exported = store.export_all()
        assert set(exported) == set(ALL_KEYS)
        assert exported[HABITS_KEY] == []

        store.clear_all()
        written = store.import_all({TASKS_KEY: [{"id": "t"}], HABITS_KEY: "oops"})
        assert written == 1
        assert store.load(TASKS_KEY) == [{"id": "t"}]
        assert store.load(HABITS_KEY) == []


class TestModels:
    def test_task_round_trip(self):
        task = Task(id="t1", text="Write report", completed=True, project_id="p1",
                    due_date="2024-03-01", category=TaskCategory.WORK,
                    priority=TaskPriority.HIGH,
                    created_at=datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc))
        assert Task.from_dict(task.to_dict()) == task

    def test_task_dict_uses_camel_case(self):
        data = Task(id="t1", text="x", due_date="2024-03-01").to_dict()
        assert data["projectId"] is None
        assert data["dueDate"] == "2024-03-01"
        assert "dueDate" not in Task(id="t2", text="y").to_dict()

    def test_unknown_enum_reads_as_none(self):
        task = Task.from_dict({"id": "t1", "text": "x", "category": "Chores",
                               "priority": 3})
        assert task.category is TaskCategory.NONE
        assert task.priority is TaskPriority.NONE

    def test_js_timestamp_parses(self):
        note = Note.from_dict({"id": "n", "title": "a", "content": "b",
                               "createdAt": "2024-01-05T10:00:00.000Z"})
        assert note.created_at == datetime(2024, 1, 5, 10, tzinfo=timezone.utc)

    def test_record_without_id_rejected(self):
        with pytest.raises(ValueError):
            Task.from_dict({"text": "orphan"})

    def test_habit_negative_streak_clamped(self):
        habit = Habit.from_dict({"id": "h", "name": "Read", "streak": -4})
        assert habit.streak == 0

    def test_pomodoro_needs_date(self):
        with pytest.raises(ValueError):
            PomodoroSession.from_dict({"duration": 25})


class TestTaskRepository:
    def test_add_assigns_unique_id(self, tasks):
        first = tasks.add("Write report")
        before = len(tasks)
        second = tasks.add("Buy milk")
        assert second.id != first.id
        assert len(tasks) == before + 1
        assert second.created_at is not None

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_add_blank_is_noop(self, tasks, text):
        tasks.add("keep me")
        assert tasks.add(text) is None
        assert [t.text for t in tasks] == ["keep me"]

    def test_add_appends(self, tasks):
        for text in ("a", "b", "c"):
            tasks.add(text)
        assert [t.text for t in tasks] == ["a", "b", "c"]

    def test_toggle_flips_only_completed(self, tasks):
        task = tasks.add("Write report", project_id="p1", due_date="2024-02-02",
                         category=TaskCategory.WORK, priority=TaskPriority.LOW)
        before = task.to_dict()
        tasks.toggle(task.id)
        after = tasks.get(task.id).to_dict()
        assert after.pop("completed") is True
        before.pop("completed")
        assert after == before

    def test_toggle_twice_restores(self, tasks):
        task = tasks.add("x")
        tasks.toggle(task.id)
        tasks.toggle(task.id)
        assert tasks.get(task.id).completed is False

    def test_toggle_unknown_id_is_noop(self, tasks):
        tasks.add("x")
        before = snapshot(tasks)
        tasks.toggle("does-not-exist")
        assert snapshot(tasks) == before

    def test_delete_keeps_order(self, tasks):
        a, b, c = tasks.add("a"), tasks.add("b"), tasks.add("c")
        tasks.delete(b.id)
        assert [t.id for t in tasks] == [a.id, c.id]

    def test_delete_unknown_id_is_noop(self, tasks):
        tasks.add("a")
        tasks.delete("nope")
        assert len(tasks) == 1

    def test_persists_across_instances(self, store, tasks):
        task = tasks.add("Write report", category=TaskCategory.PERSONAL)
        tasks.toggle(task.id)
        reloaded = TaskRepository(store)
        assert reloaded.all() == tasks.all()

    def test_add_many_single_write(self, store, tasks):
        created = tasks.add_many(["one", "  ", "two"], project_id="p1")
        assert [t.text for t in created] == ["one", "two"]
        assert all(t.project_id == "p1" for t in created)
        assert len(TaskRepository(store)) == 2

    def test_for_project(self, tasks):
        tasks.add("a", project_id="p1")
        tasks.add("b")
        assert [t.text for t in tasks.for_project("p1")] == ["a"]

    def test_malformed_record_skipped(self, store):
        store.save(TASKS_KEY, [{"id": "ok", "text": "fine"}, {"text": "no id"}, 42])
        repo = TaskRepository(store)
        assert [t.id for t in repo] == ["ok"]

    def test_wrongly_typed_optionals_dropped(self, store):
        store.save(TASKS_KEY, [{"id": "t", "text": "x", "dueDate": 20240101,
                                "projectId": 7},
                               {"id": "u", "text": "y", "dueDate": "someday"}])
        repo = TaskRepository(store)
        assert [(t.id, t.due_date, t.project_id) for t in repo] == [
            ("t", None, None), ("u", None, None),
        ]

    def test_subscribers_notified(self, tasks):
        calls = []
        tasks.subscribe(lambda: calls.append(len(tasks)))
        tasks.add("a")
        tasks.add("")
        assert calls == [1]


class TestNoteRepository:
    def test_add_prepends(self, notes):
        notes.add("first", "body")
        notes.add("second", "body")
        assert [n.title for n in notes] == ["second", "first"]

    def test_requires_title_and_content(self, notes):
        assert notes.add("title", " ") is None
        assert notes.add("", "content") is None
        assert len(notes) == 0

    def test_update(self, notes):
        note = notes.add("Draft", "old")
        notes.update(note.id, "Final", "new")
        updated = notes.get(note.id)
        assert (updated.title, updated.content) == ("Final", "new")
        assert updated.created_at == note.created_at

    def test_in_folder(self, notes):
        notes.add("a", "x", folder_id="f1")
        notes.add("b", "x")
        assert [n.title for n in notes.in_folder("f1")] == ["a"]
        assert [n.title for n in notes.in_folder(None)] == ["b"]


class TestHabitRepository:
    def test_unmarking_anchor_gives_zero(self, habits):
        habit = habits.add("Read")
        for day in ("2024-01-01", "2024-01-02", "2024-01-03"):
            habits.toggle(habit.id, day)
        assert habits.get(habit.id).streak == 3

        habits.toggle(habit.id, "2024-01-03")
        h = habits.get(habit.id)
        assert h.completions["2024-01-03"] is False
        assert h.streak == 0

    def test_streak_anchored_at_toggled_day(self, habits):
        habit = habits.add("Read")
        habits.toggle(habit.id, "2024-01-01")
        habits.toggle(habit.id, "2024-01-03")
        habits.toggle(habit.id, "2024-01-03")  # now explicitly false
        habits.toggle(habit.id, "2024-01-02")
        h = habits.get(habit.id)
        assert h.completions == {"2024-01-01": True, "2024-01-02": True,
                                 "2024-01-03": False}
        assert h.streak == 2

    def test_toggle_unknown_habit_is_noop(self, habits):
        habits.add("Read")
        before = snapshot(habits)
        habits.toggle("ghost", "2024-01-01")
        assert snapshot(habits) == before


class TestHabitDecoding:
    def test_oversized_streak_loads_as_zero(self, store):
        store.conn.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?)",
            (HABITS_KEY, '[{"id": "h", "name": "x", "completions": {}, "streak": 1e400}]'),
        )
        repo = HabitRepository(store)
        assert [(h.id, h.streak) for h in repo] == [("h", 0)]

    def test_non_day_completion_keys_dropped(self, store):
        store.save(HABITS_KEY, [{"id": "h", "name": "x",
                                 "completions": {"yesterday": True, "2024-01-01": True}}])
        habit = HabitRepository(store).get("h")
        assert habit.completions == {"2024-01-01": True}
        assert longest_streak(habit.completions) == 1


class TestPomodoroRepository:
    def test_log_appends(self, store):
        repo = PomodoroRepository(store)
        repo.log("2024-01-01", 25)
        repo.log("2024-01-02", 50)
        assert [s.duration for s in PomodoroRepository(store)] == [25, 50]

    def test_non_finite_duration_skipped(self, store):
        store.conn.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?)",
            (POMODORO_KEY, '[{"date": "2024-01-01", "duration": 1e400},'
                           ' {"date": "2024-01-02", "duration": 25}]'),
        )
        repo = PomodoroRepository(store)
        assert [(s.date, s.duration) for s in repo] == [("2024-01-02", 25)]

    def test_append_only(self, store):
        repo = PomodoroRepository(store)
        repo.log("2024-01-01", 25)
        assert not hasattr(repo, "delete")
        assert hasattr(TaskRepository(store), "delete")


class TestAppContext:
    def test_reset_all_clears_every_repository(self, ctx):
        ctx.tasks.add("a")
        ctx.notes.add("n", "c")
        ctx.projects.add("p")
        ctx.pomodoro.log("2024-01-01", 25)
        ctx.reset_all()
        assert all(len(repo) == 0 for repo in ctx.repositories)

    def test_export_then_import(self, ctx, tmp_path):
        ctx.tasks.add("Write report")
        ctx.habits.add("Read")
        path = tmp_path / "export.json"
        ctx.export_json(path)

        ctx.reset_all()
        written = ctx.import_json(path)
        assert written == len(ALL_KEYS)
        assert [t.text for t in ctx.tasks] == ["Write report"]
        assert [h.name for h in ctx.habits] == ["Read"]

    def test_import_rejects_non_object(self, ctx, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ValueError):
            ctx.import_json(path)

    def test_reset_notifies_views(self, ctx):
        calls = []
        ctx.tasks.subscribe(lambda: calls.append("tasks"))
        ctx.reset_all()
        assert calls == ["tasks"]

    def test_project_repo_blank_name(self, store):
        projects = ProjectRepository(store)
        assert projects.add("  ") is None
        assert projects.add("Home").name == "Home"
