from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from task_tracker.app.storage import SqliteTaskStorage
from task_tracker.main import create_app
from task_tracker.settings import Settings


@pytest.fixture
def storage() -> Iterator[SqliteTaskStorage]:
    # One shared connection, so an in-memory database lives for the whole test.
    task_storage = SqliteTaskStorage(":memory:")
    yield task_storage
    task_storage.close()


@pytest.fixture
def settings() -> Settings:
    return Settings(app_name="task-tracker-test", database_path=":memory:")


@pytest.fixture
def client(storage: SqliteTaskStorage, settings: Settings) -> Iterator[TestClient]:
    app = create_app(storage=storage, settings_override=settings)
    with TestClient(app) as test_client:
        yield test_client
