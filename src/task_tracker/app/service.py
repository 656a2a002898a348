"""Task service: composes storage and the status catalog, emits lifecycle events."""

from __future__ import annotations

import logging
from typing import Any

from . import statuses
from .events import TaskEvent, TaskEventListener, log_task_event
from .models import Task
from .storage import TaskStorage

logger = logging.getLogger(__name__)

SORT_KEYS = ("created", "priority")


class TaskValidationError(ValueError):
    """Input rejected before reaching storage (mapped to HTTP 400)."""


class TaskService:
    """Task operations used by the API layer.

    Events are emitted synchronously after each successful mutation. The
    listener is best-effort: if it raises, the error is logged and the
    mutation stands.
    """

    def __init__(
        self,
        storage: TaskStorage,
        *,
        on_event: TaskEventListener | None = log_task_event,
        validate_enums: bool = False,
    ) -> None:
        self.storage = storage
        self.on_event = on_event
        self.validate_enums = validate_enums

    def list_tasks(self, sort: str = "created") -> list[Task]:
        if sort not in SORT_KEYS:
            raise TaskValidationError(f"Unknown sort key: {sort}")
        tasks = self.storage.list_tasks()
        if sort == "priority":
            # sorted() is stable, so newest-first order survives within a priority.
            rank = {priority: index for index, priority in enumerate(statuses.TASK_PRIORITIES)}
            tasks = sorted(tasks, key=lambda task: rank.get(task.priority, len(rank)))
        return tasks

    def get_task(self, task_id: int) -> Task | None:
        return self.storage.get_task(task_id)

    def create_task(
        self,
        title: str | None,
        description: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> Task:
        if not title or not title.strip():
            raise TaskValidationError("Title is required")
        self._check_enums(status=status, priority=priority)

        created = self.storage.create_task(
            title,
            description=description,
            status=status,
            priority=priority,
        )
        self._emit(TaskEvent(kind="created", task_id=created.id, task=created))
        return created

    def update_task(self, task_id: int, updates: dict[str, Any]) -> Task | None:
        """Apply a partial update; None when `task_id` does not exist."""
        title = updates.get("title")
        if title is not None and not str(title).strip():
            raise TaskValidationError("Title cannot be blank")
        self._check_enums(status=updates.get("status"), priority=updates.get("priority"))

        new_status = updates.get("status")
        previous = self.storage.get_task(task_id) if new_status is not None else None

        updated = self.storage.update_task(
            task_id,
            title=title,
            description=updates.get("description"),
            status=new_status,
            priority=updates.get("priority"),
        )
        if updated is None:
            return None

        if previous is not None and not statuses.can_transition(previous.status, updated.status):
            logger.warning(
                "task_update event=unusual_transition task_id=%s from_status=%s to_status=%s",
                task_id,
                previous.status,
                updated.status,
            )
        self._emit(TaskEvent(kind="updated", task_id=updated.id, task=updated))
        return updated

    def delete_task(self, task_id: int) -> bool:
        if not self.storage.delete_task(task_id):
            return False
        self._emit(TaskEvent(kind="deleted", task_id=task_id))
        return True

    def _check_enums(self, *, status: str | None, priority: str | None) -> None:
        if not self.validate_enums:
            return
        if status is not None and status not in statuses.TASK_STATUSES:
            raise TaskValidationError(f"Unknown status: {status}")
        if priority is not None and priority not in statuses.TASK_PRIORITIES:
            raise TaskValidationError(f"Unknown priority: {priority}")

    def _emit(self, event: TaskEvent) -> None:
        if self.on_event is None:
            return
        try:
            self.on_event(event)
        except Exception:  # noqa: BLE001
            logger.warning(
                "task_event event=%s task_id=%s listener_failed=true",
                event.kind,
                event.task_id,
                exc_info=True,
            )
