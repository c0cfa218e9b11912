"""
View Dispatcher — maps the active-view selector to a feature view.

Deliberately free of Qt imports: factories build the widgets, the dispatcher
only picks one and remembers it.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from productivity_hub.data.context import AppContext

logger = logging.getLogger(__name__)


class ViewName(str, Enum):
    DASHBOARD = "DASHBOARD"
    TASKS = "TASKS"
    PROJECTS = "PROJECTS"
    NOTES = "NOTES"
    CALENDAR = "CALENDAR"
    HABITS = "HABITS"
    TIMER = "TIMER"
    AI_ASSISTANT = "AI_ASSISTANT"

    @property
    def label(self) -> str:
        if self is ViewName.AI_ASSISTANT:
            return "AI Assistant"
        return self.value.title()

    @classmethod
    def parse(cls, name: str) -> "ViewName":
        """Accepts 'tasks', 'TASKS', 'ai-assistant' and friends."""
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            raise KeyError(f"Unknown view: {name!r}") from None


ViewFactory = Callable[[AppContext], Any]


class ViewDispatcher:
    """
    Selects which feature view is active.

    Each view is built on first selection and cached, so switching back and
    forth keeps the view's own widget state (scroll position, half-typed
    input). Selecting has no effect on repositories.
    """

    def __init__(self, ctx: AppContext, factories: Mapping[ViewName, ViewFactory]) -> None:
        self.ctx = ctx
        self._factories: Dict[ViewName, ViewFactory] = dict(factories)
        self._views: Dict[ViewName, Any] = {}
        self.current: Optional[ViewName] = None

    @property
    def available(self) -> list:
        return [v for v in ViewName if v in self._factories]

    def widget_for(self, view: ViewName) -> Any:
        if view not in self._factories:
            raise KeyError(f"No view registered for {view!r}")
        if view not in self._views:
            logger.debug("Building view %s", view.value)
            self._views[view] = self._factories[view](self.ctx)
        return self._views[view]

    def is_built(self, view: ViewName) -> bool:
        return view in self._views

    def select(self, view: ViewName) -> Any:
        widget = self.widget_for(view)
        self.current = view
        return widget
