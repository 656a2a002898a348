"""FastAPI application wiring for the task tracker.

Beginner terms used in this file:
- FastAPI app: the main web application object.
- Route/path operation: a function exposed over HTTP (for example, GET /health).
- response_model: Pydantic model used to validate/shape API responses.
- app.state: a place to store shared runtime objects (settings, storage, service).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import asynccontextmanager, contextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from .app.logging_setup import setup_logging
from .app.models import CreateTaskRequest, StatusDescriptor, Task, UpdateTaskRequest
from .app.service import TaskService, TaskValidationError
from .app.statuses import all_statuses
from .app.storage import SqliteTaskStorage, TaskStorage
from .app.ui import render_homepage
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    *,
    storage: TaskStorage | None = None,
    settings_override: Settings | None = None,
) -> FastAPI:
    """Application factory.

    Tests pass their own storage (usually SQLite `:memory:`) and settings;
    the module-level `app` uses the configured database file. The store
    connects lazily, so building the app never touches the disk.
    """
    settings = settings_override or get_settings()
    task_storage = storage or SqliteTaskStorage(settings.database_path)
    # Only a store built here is closed on shutdown; an injected one belongs to the caller.
    owns_storage = storage is None
    service = TaskService(task_storage, validate_enums=settings.validate_enums)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.storage.close()

    app_lifespan = lifespan if owns_storage else None
    app = FastAPI(title=settings.app_name, lifespan=app_lifespan)
    # Shared objects live in app.state so route handlers can reuse them.
    app.state.settings = settings
    app.state.storage = task_storage
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Malformed bodies are client errors: 400, not 422. A path id that is not an
    # integer can never match a row, so it is reported as not found.
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        if any((error.get("loc") or ("",))[0] == "path" for error in exc.errors()):
            return JSONResponse(status_code=404, content={"detail": "Task not found"})
        return JSONResponse(status_code=400, content={"detail": _describe_errors(exc)})

    def _get_service(request: Request) -> TaskService:
        return request.app.state.service

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "service": settings.app_name}

    @app.get("/", response_class=HTMLResponse)
    def home() -> str:
        return render_homepage(app_name=settings.app_name, api_base=settings.api_base)

    @app.get("/api/tasks", response_model=list[Task])
    def list_tasks(request: Request, sort: str = "created") -> list[Task]:
        with _map_service_errors("Failed to fetch tasks"):
            return _get_service(request).list_tasks(sort=sort)

    @app.get("/api/tasks/{task_id}", response_model=Task)
    def get_task(task_id: int, request: Request) -> Task:
        with _map_service_errors("Failed to fetch task"):
            task = _get_service(request).get_task(task_id)
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return task

    @app.post("/api/tasks", response_model=Task, status_code=201)
    def create_task(payload: CreateTaskRequest, request: Request) -> Task:
        with _map_service_errors("Failed to create task"):
            return _get_service(request).create_task(
                payload.title,
                description=payload.description,
                status=payload.status,
                priority=payload.priority,
            )

    @app.put("/api/tasks/{task_id}", response_model=Task)
    def update_task(
        task_id: int, request: Request, payload: UpdateTaskRequest | None = None
    ) -> Task:
        # A missing body is treated as an empty update, which only refreshes updated_at.
        changes = payload.changes() if payload is not None else {}
        with _map_service_errors("Failed to update task"):
            task = _get_service(request).update_task(task_id, changes)
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return task

    @app.delete("/api/tasks/{task_id}", status_code=204, response_class=Response)
    def delete_task(task_id: int, request: Request) -> Response:
        with _map_service_errors("Failed to delete task"):
            deleted = _get_service(request).delete_task(task_id)
        if not deleted:
            raise HTTPException(status_code=404, detail="Task not found")
        return Response(status_code=204)

    @app.get("/api/statuses", response_model=list[StatusDescriptor])
    def list_statuses() -> list[StatusDescriptor]:
        return all_statuses()

    return app


@contextmanager
def _map_service_errors(failure_detail: str) -> Iterator[None]:
    """Translate service exceptions into HTTP errors (400 validation, 500 anything else)."""
    try:
        yield
    except HTTPException:
        raise
    except TaskValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("api event=request_failed detail=%r", failure_detail)
        raise HTTPException(status_code=500, detail=failure_detail) from exc


def _describe_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def run() -> None:
    """Console entry point: configure logging and serve the module-level app."""
    settings = get_settings()
    setup_logging(settings.log_level)
    port = settings.resolved_port()
    logger.info(
        "server event=start host=%s port=%s database_path=%s",
        settings.host,
        port,
        settings.database_path,
    )
    # log_config=None keeps uvicorn on the handlers installed above.
    uvicorn.run(app, host=settings.host, port=port, log_config=None)


# Module-level app for `uvicorn task_tracker.main:app`.
app = create_app()


if __name__ == "__main__":
    run()
