"""Task dependency validation and critical path scheduling for projects."""

from pathwise.config import EngineConfig
from pathwise.errors import (
    CrossProjectDependency,
    CyclicDependency,
    DependencyError,
    DuplicateDependency,
    InvalidProgress,
    InvalidStatus,
    PathwiseError,
    SelfDependency,
    TaskNotFound,
    UnknownDependency,
)
from pathwise.models.task import Task, TaskPriority, TaskStatus, TaskUpdate
from pathwise.planner import DependencyValidation, ProjectPlanner
from pathwise.scheduling.critical_path import CriticalPathResult, critical_path

__all__ = [
    "CriticalPathResult",
    "CrossProjectDependency",
    "CyclicDependency",
    "DependencyError",
    "DependencyValidation",
    "DuplicateDependency",
    "EngineConfig",
    "InvalidProgress",
    "InvalidStatus",
    "PathwiseError",
    "ProjectPlanner",
    "SelfDependency",
    "Task",
    "TaskNotFound",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
    "UnknownDependency",
    "critical_path",
]
