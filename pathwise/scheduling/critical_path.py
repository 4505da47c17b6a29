"""Critical Path Calculator — CPM forward and backward passes over the task DAG.

Forward pass (topological order):
    ES[t] = max(EF[d] for d in deps), 0 if none
    EF[t] = ES[t] + duration[t]

Backward pass (reverse topological order):
    LF[t] = project_duration if t has no dependents
            else min(LS[s] for s in dependents)
    LS[t] = LF[t] - duration[t]

A task is critical when LS - ES is zero within the configured tolerance.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from pathwise.config import EngineConfig
from pathwise.graph.builder import DependencyGraph, build_graph
from pathwise.graph.topology import order_graph
from pathwise.models.task import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskSchedule:
    """CPM timings for one task, in days from project start."""
    task_id: str
    duration: int
    earliest_start: float
    earliest_finish: float
    latest_start: float
    latest_finish: float

    @property
    def slack(self) -> float:
        return self.latest_start - self.earliest_start


@dataclass
class CriticalPathResult:
    """Outcome of a critical path calculation.

    ``ordered_path`` is the reconstructed chain followed by any critical
    tasks the walk did not reach, so it always covers ``critical_tasks``.
    """
    ordered_path: list[str] = field(default_factory=list)
    project_duration: float = 0
    critical_tasks: list[Task] = field(default_factory=list)
    schedule: dict[str, TaskSchedule] = field(default_factory=dict)

    @property
    def critical_ids(self) -> set[str]:
        return {t.id for t in self.critical_tasks}

    def slack_of(self, task_id: str) -> Optional[float]:
        entry = self.schedule.get(task_id)
        return entry.slack if entry is not None else None


class CriticalPathCalculator:
    """Computes the critical path of a full project task set."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def calculate(self, tasks: Iterable[Task]) -> CriticalPathResult:
        tasks = list(tasks)
        if not tasks:
            return CriticalPathResult()

        graph = build_graph(tasks)
        order = order_graph(graph)
        durations = {
            task_id: graph.tasks[task_id].duration_days(self.config)
            for task_id in order
        }

        earliest_start, earliest_finish = self._forward_pass(graph, order, durations)
        project_duration = max(earliest_finish.values())
        latest_start, latest_finish = self._backward_pass(
            graph, order, durations, project_duration
        )

        schedule = {
            task_id: TaskSchedule(
                task_id=task_id,
                duration=durations[task_id],
                earliest_start=earliest_start[task_id],
                earliest_finish=earliest_finish[task_id],
                latest_start=latest_start[task_id],
                latest_finish=latest_finish[task_id],
            )
            for task_id in order
        }

        critical_ids = [
            task_id for task_id in order
            if abs(schedule[task_id].slack) < self.config.slack_tolerance
        ]
        path = self._build_sequence(graph, critical_ids, schedule)

        logger.info(
            "Critical path over %d tasks: %d days, %d critical",
            len(tasks), project_duration, len(critical_ids),
        )
        logger.debug("Critical path sequence: %s", path)

        return CriticalPathResult(
            ordered_path=path,
            project_duration=project_duration,
            critical_tasks=[graph.tasks[task_id] for task_id in critical_ids],
            schedule=schedule,
        )

    def _forward_pass(
        self,
        graph: DependencyGraph,
        order: list[str],
        durations: dict[str, int],
    ) -> tuple[dict[str, float], dict[str, float]]:
        earliest_start: dict[str, float] = {}
        earliest_finish: dict[str, float] = {}
        for task_id in order:
            start = max(
                (earliest_finish.get(dep_id, 0) for dep_id in graph.in_set_dependencies(task_id)),
                default=0,
            )
            earliest_start[task_id] = start
            earliest_finish[task_id] = start + durations[task_id]
        return earliest_start, earliest_finish

    def _backward_pass(
        self,
        graph: DependencyGraph,
        order: list[str],
        durations: dict[str, int],
        project_duration: float,
    ) -> tuple[dict[str, float], dict[str, float]]:
        latest_start: dict[str, float] = {}
        latest_finish: dict[str, float] = {}
        for task_id in reversed(order):
            dependents = graph.dependents.get(task_id, [])
            if dependents:
                # A dependent not yet seen only happens on a cyclic input
                finish = min(latest_start.get(s, project_duration) for s in dependents)
            else:
                finish = project_duration
            latest_finish[task_id] = finish
            latest_start[task_id] = finish - durations[task_id]
        return latest_start, latest_finish

    def _build_sequence(
        self,
        graph: DependencyGraph,
        critical_ids: list[str],
        schedule: dict[str, TaskSchedule],
    ) -> list[str]:
        """Walk forward from the first critical root through tight critical edges.

        Critical tasks the walk misses (parallel chains of equal length)
        are appended in topological order.
        """
        if not critical_ids:
            return []

        critical = set(critical_ids)
        tolerance = self.config.slack_tolerance
        sequence: list[str] = []
        visited: set[str] = set()

        current = next(
            (
                task_id for task_id in critical_ids
                if not any(d in critical for d in graph.in_set_dependencies(task_id))
            ),
            None,
        )
        while current is not None:
            visited.add(current)
            sequence.append(current)
            finish = schedule[current].earliest_finish
            current = next(
                (
                    s for s in graph.dependents.get(current, [])
                    if s in critical and s not in visited
                    and abs(schedule[s].earliest_start - finish) < tolerance
                ),
                None,
            )

        sequence.extend(task_id for task_id in critical_ids if task_id not in visited)
        return sequence


def critical_path(
    tasks: Iterable[Task], config: Optional[EngineConfig] = None
) -> CriticalPathResult:
    """Convenience wrapper around :class:`CriticalPathCalculator`."""
    return CriticalPathCalculator(config).calculate(tasks)
