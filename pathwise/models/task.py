"""Task model — the unit of schedulable work in a project."""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pathwise.config import EngineConfig


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps as UTC so every instant compares with every other."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TaskStatus(str, Enum):
    """Board states. Any state may move to any other."""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    DONE = "done"


class TaskPriority(str, Enum):
    """Display priority. Not used by the scheduling math."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Task(BaseModel):
    """A task record as returned by the task store."""

    id: str = Field(description="Unique task identifier, assigned by the store")
    project_id: str = Field(description="Owning project")
    title: str = Field(default="", description="Display title")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current board state")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Display priority")
    dependencies: list[str] = Field(default_factory=list, description="Task IDs that must be done first")
    start_date: Optional[datetime] = Field(default=None, description="Planned start")
    due_date: Optional[datetime] = Field(default=None, description="Planned end")
    estimated_hours: Optional[float] = Field(default=None, ge=0, description="Fallback duration source")
    progress: int = Field(default=0, ge=0, le=100, description="Percent complete")
    completed_date: Optional[datetime] = Field(default=None, description="Set while status is done")

    @field_validator("start_date", "due_date", "completed_date")
    @classmethod
    def _attach_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    def duration_days(self, config: Optional[EngineConfig] = None) -> int:
        """Duration in whole days: dates first, then estimated hours, then the default."""
        config = config or EngineConfig()
        if self.start_date is not None and self.due_date is not None:
            days = (self.due_date - self.start_date).total_seconds() / 86400
            return max(1, math.ceil(days))
        if self.estimated_hours:
            return max(1, math.ceil(self.estimated_hours / config.hours_per_day))
        return config.default_duration_days

    def is_overdue(self, now: datetime) -> bool:
        """True if the due date has passed and the task is not done."""
        return self.due_date is not None and self.due_date < as_utc(now) and not self.is_done

    def __repr__(self) -> str:
        return (
            f"Task(id={self.id!r}, project={self.project_id!r}, "
            f"status={self.status.value}, deps={len(self.dependencies)})"
        )


class TaskUpdate(BaseModel):
    """Field changes derived from a status or progress change.

    Only fields that were explicitly set are part of the update, so a
    ``completed_date=None`` entry means "clear it" while an absent entry
    means "leave it alone".
    """

    status: Optional[TaskStatus] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    completed_date: Optional[datetime] = None

    @field_validator("completed_date")
    @classmethod
    def _attach_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    def changes(self) -> dict:
        """The set fields only, ready to hand to the task store."""
        return self.model_dump(exclude_unset=True)

    def apply_to(self, task: Task) -> Task:
        """Return a copy of ``task`` with these changes applied."""
        return task.model_copy(update=self.changes())
