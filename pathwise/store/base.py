"""Task store port — where task records come from and go back to."""

from abc import ABC, abstractmethod
from typing import Optional

from pathwise.models.task import Task


class TaskStore(ABC):
    """Abstract task persistence. Adapters wrap a real key-value store."""

    @abstractmethod
    def list_tasks(self, project_id: str) -> list[Task]:
        """Return every task of the project. Partial results corrupt the graph."""
        ...

    @abstractmethod
    def get_task(self, task_id: str) -> Optional[Task]:
        """Return the task, or None if it does not exist."""
        ...

    @abstractmethod
    def save_task_dependencies(self, task_id: str, dependencies: list[str]) -> None:
        """Persist an already validated dependency list."""
        ...

    @abstractmethod
    def update_task(self, task_id: str, changes: dict) -> None:
        """Persist a partial update of task fields."""
        ...
