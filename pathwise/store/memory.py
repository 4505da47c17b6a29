"""In-memory task store — dict-backed adapter for tests, scripts and demos."""

import json
from pathlib import Path
from typing import Optional

from pathwise.errors import TaskNotFound
from pathwise.models.task import Task
from pathwise.store.base import TaskStore


class InMemoryTaskStore(TaskStore):
    """Keeps task records in a dict keyed by task ID.

    Records are copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, tasks: Optional[list[Task]] = None):
        self._tasks: dict[str, Task] = {}
        self._task_counter = 0
        for task in tasks or []:
            self._tasks[task.id] = task.model_copy(deep=True)

    def create_task(self, project_id: str, **fields) -> Task:
        """Create a task and assign it the next free ID."""
        while True:
            self._task_counter += 1
            task_id = f"task-{self._task_counter:04d}"
            if task_id not in self._tasks:
                break
        task = Task(id=task_id, project_id=project_id, **fields)
        self._tasks[task_id] = task
        return task.model_copy(deep=True)

    def delete_task(self, task_id: str) -> None:
        if task_id not in self._tasks:
            raise TaskNotFound(task_id)
        del self._tasks[task_id]

    def list_tasks(self, project_id: str) -> list[Task]:
        return [
            t.model_copy(deep=True)
            for t in self._tasks.values()
            if t.project_id == project_id
        ]

    def get_task(self, task_id: str) -> Optional[Task]:
        task = self._tasks.get(task_id)
        return task.model_copy(deep=True) if task is not None else None

    def save_task_dependencies(self, task_id: str, dependencies: list[str]) -> None:
        self.update_task(task_id, {"dependencies": list(dependencies)})

    def update_task(self, task_id: str, changes: dict) -> None:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        # Round-trip through validation so bad values never land in the store
        merged = {**task.model_dump(), **changes}
        self._tasks[task_id] = Task.model_validate(merged)

    @classmethod
    def from_json(cls, path: str) -> "InMemoryTaskStore":
        """Load a JSON array of task records."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls([Task.model_validate(item) for item in data])

    def to_json(self, path: str) -> None:
        records = [t.model_dump(mode="json") for t in self._tasks.values()]
        Path(path).write_text(json.dumps(records, indent=2), encoding="utf-8")

    def __len__(self) -> int:
        return len(self._tasks)
