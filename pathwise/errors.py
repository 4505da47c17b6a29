"""Error taxonomy for dependency and status changes.

Every failure is its own class with a stable ``code`` so callers can
render or log the specific reason. None of these are retryable: the same
input always produces the same error.
"""

from typing import Optional


class PathwiseError(Exception):
    """Base class for all engine errors."""
    code = "error"

    def __init__(self, message: str, task_id: Optional[str] = None):
        super().__init__(message)
        self.task_id = task_id


class TaskNotFound(PathwiseError):
    code = "task_not_found"

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id!r} does not exist", task_id=task_id)


class DependencyError(PathwiseError):
    """A proposed dependency edge was rejected."""
    code = "dependency_error"

    def __init__(self, message: str, task_id: str, dependency_id: Optional[str] = None):
        super().__init__(message, task_id=task_id)
        self.dependency_id = dependency_id


class SelfDependency(DependencyError):
    code = "self_dependency"

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id!r} cannot depend on itself", task_id, task_id)


class CrossProjectDependency(DependencyError):
    code = "cross_project_dependency"

    def __init__(self, task_id: str, dependency_id: str):
        super().__init__(
            f"Task {task_id!r} and {dependency_id!r} must be in the same project",
            task_id, dependency_id,
        )


class UnknownDependency(DependencyError):
    code = "unknown_dependency"

    def __init__(self, task_id: str, dependency_id: str):
        super().__init__(
            f"Dependency {dependency_id!r} of task {task_id!r} does not exist",
            task_id, dependency_id,
        )


class DuplicateDependency(DependencyError):
    code = "duplicate_dependency"

    def __init__(self, task_id: str, dependency_id: str):
        super().__init__(
            f"Task {task_id!r} already depends on {dependency_id!r}",
            task_id, dependency_id,
        )


class CyclicDependency(DependencyError):
    code = "cyclic_dependency"

    def __init__(self, task_id: str):
        super().__init__(
            f"Dependencies of task {task_id!r} would create a circular dependency",
            task_id,
        )


class InvalidStatus(PathwiseError):
    code = "invalid_status"

    def __init__(self, value, task_id: Optional[str] = None):
        super().__init__(
            f"Invalid status {value!r}. Must be one of: todo, in-progress, blocked, done",
            task_id=task_id,
        )
        self.value = value


class InvalidProgress(PathwiseError):
    code = "invalid_progress"

    def __init__(self, value, task_id: Optional[str] = None):
        super().__init__(f"Progress must be between 0 and 100, got {value!r}", task_id=task_id)
        self.value = value
