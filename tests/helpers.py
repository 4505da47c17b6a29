"""Task builders shared by the test modules."""

from datetime import datetime, timedelta, timezone

from pathwise.models.task import Task, TaskStatus


PROJECT_START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_task(id: str, deps: list[str] | None = None, days: int | None = None,
              project: str = "p1", status: TaskStatus = TaskStatus.TODO,
              offset: int = 0, **fields) -> Task:
    """Task helper; ``days`` sets start/due dates ``offset`` days into the project."""
    if days is not None:
        fields["start_date"] = PROJECT_START + timedelta(days=offset)
        fields["due_date"] = PROJECT_START + timedelta(days=offset + days)
    return Task(id=id, project_id=project, dependencies=deps or [], status=status, **fields)
