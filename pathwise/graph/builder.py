"""Dependency graph builder — forward and reverse adjacency over a task list."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from pathwise.models.task import Task

logger = logging.getLogger(__name__)


@dataclass
class DependencyGraph:
    """Tasks indexed by ID with two adjacency maps.

    ``dependencies[t]`` lists what ``t`` depends on, exactly as declared
    (dangling IDs included). ``dependents[t]`` lists in-set tasks that
    depend on ``t``. Built per operation and thrown away afterwards.
    """
    tasks: dict[str, Task] = field(default_factory=dict)
    dependencies: dict[str, list[str]] = field(default_factory=dict)
    dependents: dict[str, list[str]] = field(default_factory=dict)

    def __contains__(self, task_id: str) -> bool:
        return task_id in self.tasks

    def __len__(self) -> int:
        return len(self.tasks)

    def in_set_dependencies(self, task_id: str) -> list[str]:
        """Dependencies of ``task_id`` that are present in the graph."""
        return [d for d in self.dependencies.get(task_id, []) if d in self.tasks]

    def edges(self) -> list[tuple[str, str]]:
        """All in-set (dependency, dependent) pairs."""
        return [
            (dep_id, task_id)
            for task_id in self.tasks
            for dep_id in self.in_set_dependencies(task_id)
        ]


def build_graph(
    tasks: Iterable[Task],
    overrides: Optional[dict[str, Iterable[str]]] = None,
) -> DependencyGraph:
    """Build a graph from ``tasks``; ``overrides`` replaces the edges of selected tasks.

    Dangling dependency IDs are kept on the forward side and skipped
    when dependents are derived.
    """
    overrides = overrides or {}
    graph = DependencyGraph()

    for task in tasks:
        graph.tasks[task.id] = task
        deps = overrides[task.id] if task.id in overrides else task.dependencies
        # Membership is unique, declaration order kept
        graph.dependencies[task.id] = list(dict.fromkeys(deps))
        graph.dependents[task.id] = []

    for task_id, deps in graph.dependencies.items():
        for dep_id in deps:
            if dep_id in graph.dependents:
                graph.dependents[dep_id].append(task_id)
            else:
                logger.debug("Skipping dangling dependency %s -> %s", task_id, dep_id)

    return graph
