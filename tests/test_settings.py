from __future__ import annotations

import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_tracker.app.logging_setup import setup_logging
from task_tracker.app.storage import SqliteTaskStorage
from task_tracker.main import create_app
from task_tracker.settings import Settings


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASK_TRACKER_DATABASE_PATH", "/tmp/other.db")
    monkeypatch.setenv("TASK_TRACKER_VALIDATE_ENUMS", "true")
    monkeypatch.setenv("TASK_TRACKER_CORS_ORIGINS", '["http://localhost:5173"]')
    monkeypatch.delenv("PORT", raising=False)

    settings = Settings()
    assert settings.database_path == "/tmp/other.db"
    assert settings.validate_enums is True
    assert settings.cors_origins == ["http://localhost:5173"]
    assert settings.resolved_port() == 3001


def test_plain_port_overrides_configured_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    assert Settings(port=3001).resolved_port() == 8080

    monkeypatch.setenv("PORT", "not-a-port")
    assert Settings(port=3001).resolved_port() == 3001

    for out_of_range in ("0", "70000", "-1"):
        monkeypatch.setenv("PORT", out_of_range)
        assert Settings(port=3001).resolved_port() == 3001


def test_create_app_builds_sqlite_storage_from_settings(tmp_path: Path) -> None:
    db_path = tmp_path / "configured.db"
    app = create_app(settings_override=Settings(database_path=str(db_path)))

    assert isinstance(app.state.storage, SqliteTaskStorage)
    assert app.state.storage.database_path == str(db_path)
    # Building the app does not open the database.
    assert not db_path.exists()

    with TestClient(app) as client:
        assert client.post("/api/tasks", json={"title": "On disk"}).status_code == 201
    assert db_path.exists()


def test_create_app_with_enum_validation(storage: SqliteTaskStorage) -> None:
    app = create_app(
        storage=storage,
        settings_override=Settings(database_path=":memory:", validate_enums=True),
    )
    client = TestClient(app)

    response = client.post("/api/tasks", json={"title": "Strict", "priority": "urgent"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown priority: urgent"
    assert client.get("/api/tasks").json() == []


def test_setup_logging_installs_single_stderr_handler() -> None:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        setup_logging("debug")
        setup_logging("debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

        setup_logging("not-a-level")
        assert root.level == logging.INFO
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        logging.captureWarnings(False)


def test_injected_storage_survives_app_shutdown(storage: SqliteTaskStorage) -> None:
    app = create_app(
        storage=storage,
        settings_override=Settings(database_path=":memory:"),
    )
    with TestClient(app) as client:
        assert client.post("/api/tasks", json={"title": "Kept"}).status_code == 201

    assert [task.title for task in storage.list_tasks()] == ["Kept"]


def test_owned_storage_is_closed_on_shutdown(tmp_path: Path) -> None:
    app = create_app(settings_override=Settings(database_path=str(tmp_path / "owned.db")))
    with TestClient(app) as client:
        client.get("/api/tasks")
        assert app.state.storage._conn is not None

    assert app.state.storage._conn is None
