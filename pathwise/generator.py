"""Scenario generator — creates reproducible projects for analysis and tests."""

import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from pathwise.models.task import Task, TaskPriority, TaskStatus


class ScenarioGenerator:
    """Generates deterministic projects using a seeded RNG."""

    def __init__(self, seed: int = 42):
        self.rng = random.Random(seed)
        self._task_counter = 0

    def generate_tasks(
        self,
        project_id: str = "project-001",
        num_tasks: int = 20,
        dependency_density: float = 0.2,
        dated_fraction: float = 0.7,
        project_start: Optional[datetime] = None,
    ) -> list[Task]:
        """Generate tasks with random attributes. Dependencies only reference earlier tasks (DAG)."""
        if project_start is None:
            project_start = datetime(2024, 1, 1, tzinfo=timezone.utc)

        tasks: list[Task] = []

        for _ in range(num_tasks):
            task_id = f"task-{self._task_counter:04d}"
            self._task_counter += 1

            start_date = due_date = None
            estimated_hours = None
            if self.rng.random() < dated_fraction:
                start_date = project_start + timedelta(days=self.rng.randint(0, 30))
                due_date = start_date + timedelta(days=self.rng.randint(1, 10))
            else:
                estimated_hours = float(self.rng.choice([4, 8, 16, 24, 40]))

            # Dependencies: only on earlier tasks (maintains DAG property)
            dependencies: list[str] = []
            if tasks and dependency_density > 0:
                max_deps = min(3, len(tasks))
                for earlier_task in self.rng.sample(tasks, min(len(tasks), max_deps * 3)):
                    if self.rng.random() < dependency_density:
                        dependencies.append(earlier_task.id)
                        if len(dependencies) >= max_deps:
                            break

            tasks.append(Task(
                id=task_id,
                project_id=project_id,
                title=f"Task {self._task_counter}",
                status=TaskStatus.TODO,
                priority=self.rng.choice(list(TaskPriority)),
                dependencies=dependencies,
                start_date=start_date,
                due_date=due_date,
                estimated_hours=estimated_hours,
            ))

        return tasks
