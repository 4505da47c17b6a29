from pathwise.models.task import Task, TaskPriority, TaskStatus, TaskUpdate

__all__ = ["Task", "TaskPriority", "TaskStatus", "TaskUpdate"]
