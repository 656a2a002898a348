"""Task lifecycle events and the logging sink that consumes them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from .models import Task

logger = logging.getLogger(__name__)

TaskEventKind = Literal["created", "updated", "deleted"]


@dataclass(frozen=True)
class TaskEvent:
    kind: TaskEventKind
    task_id: int
    # Snapshot after the mutation; None for "deleted" since the row is gone.
    task: Task | None = None


TaskEventListener = Callable[[TaskEvent], None]


def log_task_event(event: TaskEvent) -> None:
    """Write one human-readable line per lifecycle event."""
    if event.task is None:
        logger.info("task_event event=%s task_id=%s", event.kind, event.task_id)
        return
    logger.info(
        "task_event event=%s task_id=%s title=%r status=%s priority=%s",
        event.kind,
        event.task_id,
        event.task.title,
        event.task.status,
        event.task.priority,
    )
