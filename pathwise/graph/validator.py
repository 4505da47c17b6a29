"""Cycle validator — decides whether a proposed dependency set is safe to commit.

The proposed edges replace the task's current edges in a temporary graph
and a depth-first search from the task looks for a back-edge. Identity
problems (self, unknown, other project) are reported before the cycle
check, each as its own error.
"""

import logging
from typing import Iterable

from pathwise.errors import (
    CrossProjectDependency,
    CyclicDependency,
    SelfDependency,
    TaskNotFound,
    UnknownDependency,
)
from pathwise.graph.builder import build_graph
from pathwise.models.task import Task

logger = logging.getLogger(__name__)


def would_create_cycle(
    task_id: str,
    proposed_dependencies: Iterable[str],
    all_tasks: Iterable[Task],
) -> bool:
    """True if giving ``task_id`` these dependencies closes a directed cycle."""
    proposed = list(proposed_dependencies)
    if task_id in proposed:
        return True

    graph = build_graph(all_tasks, overrides={task_id: proposed})
    if task_id not in graph:
        graph.dependencies[task_id] = list(dict.fromkeys(proposed))

    visited: set[str] = set()
    on_stack: set[str] = set()

    def visit(node_id: str) -> bool:
        visited.add(node_id)
        on_stack.add(node_id)
        for neighbor_id in graph.dependencies.get(node_id, []):
            if neighbor_id in on_stack:
                return True
            if neighbor_id not in visited and visit(neighbor_id):
                return True
        on_stack.discard(node_id)
        return False

    return visit(task_id)


def validate_dependencies(
    task_id: str,
    proposed_dependencies: Iterable[str],
    all_tasks: Iterable[Task],
) -> list[str]:
    """Check a proposed dependency set and return it de-duplicated.

    ``all_tasks`` is the universe used to resolve IDs; it must include the
    task itself and any task a proposed ID may refer to.

    Raises:
        SelfDependency: ``task_id`` names itself.
        UnknownDependency: a proposed ID does not resolve.
        CrossProjectDependency: a proposed ID belongs to another project.
        TaskNotFound: ``task_id`` itself is not in ``all_tasks``.
        CyclicDependency: committing the edges would create a cycle.
    """
    tasks = list(all_tasks)
    by_id = {t.id: t for t in tasks}
    proposed = list(dict.fromkeys(proposed_dependencies))
    task = by_id.get(task_id)
    if task is None:
        raise TaskNotFound(task_id)

    for dep_id in proposed:
        if dep_id == task_id:
            logger.info("Rejected self-dependency on %s", task_id)
            raise SelfDependency(task_id)
        dep = by_id.get(dep_id)
        if dep is None:
            logger.info("Rejected unknown dependency %s for %s", dep_id, task_id)
            raise UnknownDependency(task_id, dep_id)
        if dep.project_id != task.project_id:
            logger.info("Rejected cross-project dependency %s for %s", dep_id, task_id)
            raise CrossProjectDependency(task_id, dep_id)

    if would_create_cycle(task_id, proposed, tasks):
        logger.info("Rejected cyclic dependencies %s for %s", proposed, task_id)
        raise CyclicDependency(task_id)

    return proposed


def find_cycle(all_tasks: Iterable[Task]) -> list[str]:
    """Return one directed cycle in the task set as a list of IDs, or ``[]``."""
    graph = build_graph(all_tasks)
    visited: set[str] = set()
    stack: list[str] = []
    on_stack: set[str] = set()

    def visit(node_id: str) -> list[str]:
        visited.add(node_id)
        stack.append(node_id)
        on_stack.add(node_id)
        for neighbor_id in graph.in_set_dependencies(node_id):
            if neighbor_id in on_stack:
                return stack[stack.index(neighbor_id):] + [neighbor_id]
            if neighbor_id not in visited:
                cycle = visit(neighbor_id)
                if cycle:
                    return cycle
        stack.pop()
        on_stack.discard(node_id)
        return []

    for task_id in graph.tasks:
        if task_id not in visited:
            cycle = visit(task_id)
            if cycle:
                return cycle
    return []
