"""Pydantic models shared across API, service, storage, and status catalog.

Beginner terms used in this file:
- Model: a typed schema class used for validation/serialization.
- Literal: restricts a field to a fixed set of allowed string values.
- Partial update: a request where every field is optional and only the
  fields the client actually sent are applied.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# Allowed values. Writes are not checked against these unless the service
# runs with enum validation enabled, so stored rows use plain `str`.
TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]


class Task(BaseModel):
    """Canonical task record shape returned by API/storage."""

    id: int
    title: str
    description: str = ""
    status: str = "pending"
    priority: str = "medium"
    created_at: datetime
    updated_at: datetime


class StatusDescriptor(BaseModel):
    """Display metadata for one status plus its advisory transitions."""

    key: str
    name: str
    color: str
    can_transition_to: list[str] = Field(default_factory=list)


class CreateTaskRequest(BaseModel):
    """Request body for POST /api/tasks.

    `title` is optional at the schema level so the route can answer a missing
    title with 400 instead of FastAPI's default 422.
    """

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None


class UpdateTaskRequest(BaseModel):
    """Request body for PUT /api/tasks/{id}. Unknown keys (id, timestamps) are ignored."""

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None

    def changes(self) -> dict[str, str]:
        """Fields the client supplied with a non-null value."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }
