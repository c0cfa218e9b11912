"""Shared fixtures: in-memory storage and a headless Qt core app."""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from PySide6.QtCore import QCoreApplication

from productivity_hub.data.context import AppContext
from productivity_hub.data.database import Database
from productivity_hub.data.store import PersistentStore


@pytest.fixture(scope="session")
def qt_app():
    """QTimer needs an application object, even if the loop never runs."""
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def db():
    database = Database(db_path=Path(":memory:"))
    database.connect()
    yield database
    database.close()


@pytest.fixture
def store(db):
    return PersistentStore(db.conn)


@pytest.fixture
def ctx():
    context = AppContext(Database(db_path=Path(":memory:")))
    yield context
    context.close()
