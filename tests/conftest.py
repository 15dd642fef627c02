import pytest
from fastapi.testclient import TestClient

from todo_api.app import create_app
from todo_api.db import SQLiteStore
from todo_api.settings import Settings


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        db_path=str(tmp_path / "todos.db"),
        cors_allow_origins=["*"],
        log_level="INFO",
        host="127.0.0.1",
        port=5000,
    )


@pytest.fixture()
def store(settings) -> SQLiteStore:
    s = SQLiteStore(settings.db_path)
    s.init_schema()
    return s


@pytest.fixture()
def client(settings, store) -> TestClient:
    return TestClient(create_app(settings, store))
