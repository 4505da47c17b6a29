"""Topological sequencer — dependency-respecting order over a task set."""

from typing import Iterable

from pathwise.graph.builder import DependencyGraph, build_graph
from pathwise.models.task import Task


def topological_order(tasks: Iterable[Task]) -> list[str]:
    """Order task IDs so every in-set dependency comes before its dependent."""
    return order_graph(build_graph(tasks))


def order_graph(graph: DependencyGraph) -> list[str]:
    """Depth-first topological sort of an already-built graph.

    Assumes the graph is acyclic. On a cyclic graph the visited set still
    guarantees termination and a permutation of the IDs, but the order
    within the cycle is meaningless.
    """
    visited: set[str] = set()
    order: list[str] = []

    def visit(task_id: str) -> None:
        if task_id in visited:
            return
        visited.add(task_id)
        for dep_id in graph.in_set_dependencies(task_id):
            visit(dep_id)
        order.append(task_id)

    for task_id in graph.tasks:
        visit(task_id)

    return order
