from .main_window import MainWindow, default_factories
from .view_dispatcher import ViewDispatcher, ViewName

__all__ = ["MainWindow", "ViewDispatcher", "ViewName", "default_factories"]
