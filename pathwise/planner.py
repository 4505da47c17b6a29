"""Project planner — the caller-facing entry point over a task store.

Reads the full task set for a project on every call, runs the pure graph
and scheduling functions on it, and only writes back through the store
after validation has passed. Dependency writes are serialized per project
so two callers cannot both validate against a stale snapshot.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from pathwise.config import EngineConfig
from pathwise.errors import DependencyError, DuplicateDependency, PathwiseError, TaskNotFound
from pathwise.graph.builder import build_graph
from pathwise.graph.validator import validate_dependencies
from pathwise.metrics.collector import ProjectStats, ProjectStatsCollector
from pathwise.models.task import Task, TaskStatus, TaskUpdate, as_utc
from pathwise.scheduling.critical_path import CriticalPathCalculator, CriticalPathResult
from pathwise.scheduling.status import apply_progress_update, apply_status_transition, parse_status
from pathwise.store.base import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyValidation:
    """Outcome of validating a proposed dependency set."""
    task_id: str
    ok: bool
    dependencies: tuple[str, ...] = ()
    error: Optional[PathwiseError] = None


@dataclass(frozen=True)
class BulkResult:
    """Per-task outcome of a bulk operation."""
    task_id: str
    success: bool
    error: Optional[str] = None


class ProjectPlanner:
    """Dependency, scheduling and status operations for projects in a TaskStore."""

    def __init__(self, store: TaskStore, config: Optional[EngineConfig] = None):
        self.store = store
        self.config = config or EngineConfig()
        self._calculator = CriticalPathCalculator(self.config)
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ── Dependencies ──────────────────────────────────────────────────

    def validate_dependency_change(
        self, task_id: str, proposed_dependencies: Iterable[str]
    ) -> DependencyValidation:
        """Check a proposed dependency set without writing anything."""
        try:
            task = self._require_task(task_id)
            deps = self._validate(task, proposed_dependencies)
        except (DependencyError, TaskNotFound) as exc:
            return DependencyValidation(task_id=task_id, ok=False, error=exc)
        return DependencyValidation(task_id=task_id, ok=True, dependencies=tuple(deps))

    def set_dependencies(self, task_id: str, dependencies: Iterable[str]) -> list[str]:
        """Validate and persist a full dependency set. Raises the specific DependencyError."""
        dependencies = list(dependencies)
        task = self._require_task(task_id)
        with self._project_lock(task.project_id):
            task = self._require_task(task_id)
            return self._commit(task, dependencies)

    def add_dependency(self, task_id: str, dependency_id: str) -> list[str]:
        """Add one dependency edge after validating the resulting set."""
        task = self._require_task(task_id)
        with self._project_lock(task.project_id):
            task = self._require_task(task_id)
            if dependency_id in task.dependencies:
                raise DuplicateDependency(task_id, dependency_id)
            return self._commit(task, task.dependencies + [dependency_id])

    def remove_dependency(self, task_id: str, dependency_id: str) -> list[str]:
        """Drop one dependency edge. Removing edges cannot create a cycle."""
        task = self._require_task(task_id)
        with self._project_lock(task.project_id):
            task = self._require_task(task_id)
            remaining = [d for d in task.dependencies if d != dependency_id]
            self.store.save_task_dependencies(task_id, remaining)
            logger.info("Removed dependency %s from %s", dependency_id, task_id)
            return remaining

    def _commit(self, task: Task, dependencies: list[str]) -> list[str]:
        deps = self._validate(task, dependencies)
        self.store.save_task_dependencies(task.id, deps)
        logger.info("Saved dependencies for %s: %s", task.id, deps)
        return deps

    def _validate(self, task: Task, proposed: Iterable[str]) -> list[str]:
        proposed = list(proposed)
        universe = {t.id: t for t in self.store.list_tasks(task.project_id)}
        universe[task.id] = task
        # IDs outside the project still need resolving to tell
        # "other project" apart from "does not exist"
        for dep_id in proposed:
            if dep_id not in universe:
                other = self.store.get_task(dep_id)
                if other is not None:
                    universe[dep_id] = other
        return validate_dependencies(task.id, proposed, universe.values())

    def _project_lock(self, project_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(project_id, threading.Lock())

    # ── Scheduling ────────────────────────────────────────────────────

    def compute_critical_path(self, project_id: str) -> CriticalPathResult:
        return self._calculator.calculate(self.store.list_tasks(project_id))

    # ── Status ────────────────────────────────────────────────────────

    def apply_status_transition(
        self, task: Task, new_status: Union[str, TaskStatus], now: Optional[datetime] = None
    ) -> TaskUpdate:
        return apply_status_transition(task, new_status, now=now)

    def apply_progress_update(
        self, task: Task, progress: int, now: Optional[datetime] = None
    ) -> TaskUpdate:
        return apply_progress_update(task, progress, now=now)

    def update_status(
        self, task_id: str, new_status: Union[str, TaskStatus], now: Optional[datetime] = None
    ) -> TaskUpdate:
        """Apply a status transition and persist the derived fields."""
        task = self._require_task(task_id)
        update = apply_status_transition(task, new_status, now=now)
        self.store.update_task(task_id, update.changes())
        logger.info("Task %s status updated: %s", task_id, update.status.value)
        return update

    def update_progress(
        self, task_id: str, progress: int, now: Optional[datetime] = None
    ) -> TaskUpdate:
        """Apply a progress update and persist the derived fields."""
        task = self._require_task(task_id)
        update = apply_progress_update(task, progress, now=now)
        self.store.update_task(task_id, update.changes())
        logger.info("Task %s progress updated: %d", task_id, progress)
        return update

    def bulk_update_status(
        self, task_ids: Iterable[str], new_status: Union[str, TaskStatus]
    ) -> list[BulkResult]:
        """Update each task independently; one failure does not stop the rest."""
        results: list[BulkResult] = []
        for task_id in task_ids:
            try:
                self.update_status(task_id, new_status)
                results.append(BulkResult(task_id=task_id, success=True))
            except PathwiseError as exc:
                logger.warning("Bulk status update failed for %s: %s", task_id, exc)
                results.append(BulkResult(task_id=task_id, success=False, error=str(exc)))
        return results

    # ── Dependency analysis ───────────────────────────────────────────

    def dependency_chain(self, task_id: str) -> list[Task]:
        """The task followed by all of its transitive dependencies, depth-first."""
        task = self._require_task(task_id)
        graph = build_graph(self.store.list_tasks(task.project_id))
        chain: list[Task] = []
        visited: set[str] = set()

        def walk(current_id: str) -> None:
            if current_id in visited or current_id not in graph:
                return
            visited.add(current_id)
            chain.append(graph.tasks[current_id])
            for dep_id in graph.dependencies[current_id]:
                walk(dep_id)

        walk(task_id)
        return chain

    def dependent_tasks(self, task_id: str) -> list[Task]:
        """Tasks that directly depend on ``task_id``."""
        task = self._require_task(task_id)
        return [t for t in self.store.list_tasks(task.project_id) if task_id in t.dependencies]

    def blocking_tasks(self, task_id: str) -> list[Task]:
        """Direct dependencies that are not done yet."""
        task = self._require_task(task_id)
        blocking = []
        for dep_id in task.dependencies:
            dep = self.store.get_task(dep_id)
            if dep is not None and not dep.is_done:
                blocking.append(dep)
        return blocking

    def can_start(self, task_id: str) -> bool:
        return not self.blocking_tasks(task_id)

    # ── Queries ───────────────────────────────────────────────────────

    def tasks_by_status(self, project_id: str, status: Union[str, TaskStatus]) -> list[Task]:
        status = parse_status(status)
        return [t for t in self.store.list_tasks(project_id) if t.status == status]

    def blocked_tasks(self, project_id: str) -> list[Task]:
        return self.tasks_by_status(project_id, TaskStatus.BLOCKED)

    def overdue_tasks(self, project_id: str, now: Optional[datetime] = None) -> list[Task]:
        now = as_utc(now) or datetime.now(timezone.utc)
        return [t for t in self.store.list_tasks(project_id) if t.is_overdue(now)]

    def project_stats(self, project_id: str, now: Optional[datetime] = None) -> ProjectStats:
        tasks = self.store.list_tasks(project_id)
        collector = ProjectStatsCollector()
        return collector.calculate(
            project_id=project_id,
            tasks=tasks,
            critical_path=self._calculator.calculate(tasks),
            now=now,
        )

    # ── Utilities ─────────────────────────────────────────────────────

    def _require_task(self, task_id: str) -> Task:
        task = self.store.get_task(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task
