"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite file under tmp_path, so tests never share
rows and never touch the developer's tasktracker.db.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.api.todo.label import services as label_services
from app.api.todo.label.schemas import LabelCreate
from app.api.todo.task import services as task_services
from app.api.todo.task.schemas import TaskCreate
from app.config import Settings
from app.db.session import Database
from app.main import create_app


@pytest.fixture()
def database(tmp_path: Path):
    database = Database(f"sqlite:///{tmp_path / 'tasks.sqlite3'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture()
def db(database: Database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'api.sqlite3'}",
        SEED_DEFAULT_LABELS=False,
    )


@pytest.fixture()
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture()
def make_label(db):
    def _make(name: str, color: str = "#0A84FF"):
        return label_services.create_label(db, LabelCreate(name=name, color=color))

    return _make


@pytest.fixture()
def make_task(db):
    def _make(title: str, **fields):
        return task_services.create_task(db, TaskCreate(title=title, **fields))

    return _make
