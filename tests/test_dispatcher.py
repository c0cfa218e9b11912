"""Tests for view selection (no widgets: factories return plain objects)."""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from productivity_hub.ui.view_dispatcher import ViewDispatcher, ViewName


class _FakeView:
    def __init__(self, name, ctx):
        self.name = name
        self.ctx = ctx


@pytest.fixture
def built():
    return []


@pytest.fixture
def dispatcher(ctx, built):
    def factory(view):
        def make(c):
            built.append(view)
            return _FakeView(view, c)
        return make
    return ViewDispatcher(ctx, {v: factory(v) for v in ViewName})


class TestViewDispatcher:
    def test_select_returns_matching_view(self, dispatcher, ctx):
        view = dispatcher.select(ViewName.TASKS)
        assert view.name is ViewName.TASKS
        assert view.ctx is ctx
        assert dispatcher.current is ViewName.TASKS

    def test_views_built_lazily_and_cached(self, dispatcher, built):
        assert built == []
        first = dispatcher.select(ViewName.NOTES)
        dispatcher.select(ViewName.HABITS)
        again = dispatcher.select(ViewName.NOTES)
        assert again is first
        assert built == [ViewName.NOTES, ViewName.HABITS]
        assert dispatcher.is_built(ViewName.NOTES)
        assert not dispatcher.is_built(ViewName.TIMER)

    def test_selection_does_not_touch_repositories(self, dispatcher, ctx):
        ctx.tasks.add("Write report")
        before = [t.to_dict() for t in ctx.tasks]
        for view in ViewName:
            dispatcher.select(view)
        assert [t.to_dict() for t in ctx.tasks] == before

    def test_unregistered_view_raises(self, ctx):
        partial = ViewDispatcher(ctx, {ViewName.DASHBOARD: lambda c: object()})
        assert partial.available == [ViewName.DASHBOARD]
        with pytest.raises(KeyError):
            partial.select(ViewName.CALENDAR)
        assert partial.current is None


class TestViewName:
    @pytest.mark.parametrize("raw, expected", [
        ("tasks", ViewName.TASKS),
        ("TIMER", ViewName.TIMER),
        ("ai-assistant", ViewName.AI_ASSISTANT),
        (" Dashboard ", ViewName.DASHBOARD),
    ])
    def test_parse(self, raw, expected):
        assert ViewName.parse(raw) is expected

    def test_parse_unknown(self):
        with pytest.raises(KeyError):
            ViewName.parse("inbox")

    def test_labels(self):
        assert ViewName.AI_ASSISTANT.label == "AI Assistant"
        assert ViewName.CALENDAR.label == "Calendar"
        assert len(ViewName) == 8
