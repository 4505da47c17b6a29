from pathwise.scheduling.critical_path import (
    CriticalPathCalculator,
    CriticalPathResult,
    TaskSchedule,
    critical_path,
)
from pathwise.scheduling.status import apply_progress_update, apply_status_transition, parse_status

__all__ = [
    "CriticalPathCalculator",
    "CriticalPathResult",
    "TaskSchedule",
    "apply_progress_update",
    "apply_status_transition",
    "critical_path",
    "parse_status",
]
