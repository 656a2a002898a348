"""Static status catalog: display metadata and advisory transitions."""

from __future__ import annotations

from .models import StatusDescriptor, TaskPriority, TaskStatus

DEFAULT_STATUS: TaskStatus = "pending"
DEFAULT_PRIORITY: TaskPriority = "medium"

TASK_STATUSES: tuple[TaskStatus, ...] = ("pending", "in-progress", "completed")
# Ordered from most to least urgent.
TASK_PRIORITIES: tuple[TaskPriority, ...] = ("high", "medium", "low")

_CATALOG: dict[str, StatusDescriptor] = {
    "pending": StatusDescriptor(
        key="pending",
        name="Pending",
        color="yellow",
        can_transition_to=["in-progress", "completed"],
    ),
    "in-progress": StatusDescriptor(
        key="in-progress",
        name="In Progress",
        color="blue",
        can_transition_to=["completed", "pending"],
    ),
    "completed": StatusDescriptor(
        key="completed",
        name="Completed",
        color="green",
        can_transition_to=["pending"],
    ),
}


def describe(status_key: str) -> StatusDescriptor | None:
    """Return a copy of the descriptor for `status_key`, or None when unknown."""
    descriptor = _CATALOG.get(status_key)
    return descriptor.model_copy(deep=True) if descriptor else None


def all_statuses() -> list[StatusDescriptor]:
    return [_CATALOG[key].model_copy(deep=True) for key in TASK_STATUSES]


def can_transition(from_key: str, to_key: str) -> bool:
    """Advisory check only; the service never blocks an update on this."""
    if from_key == to_key:
        return True
    descriptor = _CATALOG.get(from_key)
    if descriptor is None:
        return False
    return to_key in descriptor.can_transition_to
