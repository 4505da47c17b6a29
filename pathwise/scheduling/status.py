"""Task status state machine — transitions and their mandated side effects.

Any state may move to any other. What each transition implies:

    into done        completed_date = now, progress = 100
    out of done      completed_date cleared
    anything else    only status changes

Progress updates derive status: 0 -> todo, 100 -> done, anything in
between promotes todo to in-progress and leaves blocked/done alone.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Union

from pathwise.errors import InvalidProgress, InvalidStatus
from pathwise.models.task import Task, TaskStatus, TaskUpdate, as_utc

logger = logging.getLogger(__name__)


def parse_status(value: Union[str, TaskStatus], task_id: Optional[str] = None) -> TaskStatus:
    """Coerce external input to a TaskStatus or raise InvalidStatus."""
    try:
        return TaskStatus(value)
    except ValueError:
        raise InvalidStatus(value, task_id=task_id) from None


def apply_status_transition(
    task: Task,
    new_status: Union[str, TaskStatus],
    now: Optional[datetime] = None,
) -> TaskUpdate:
    """Return the field changes for moving ``task`` to ``new_status``. Does not persist."""
    status = parse_status(new_status, task_id=task.id)
    now = as_utc(now) or datetime.now(timezone.utc)

    if status == TaskStatus.DONE:
        update = TaskUpdate(status=status, progress=100)
        if not task.is_done or task.completed_date is None:
            update.completed_date = now
    elif task.is_done:
        update = TaskUpdate(status=status, completed_date=None)
    else:
        update = TaskUpdate(status=status)

    logger.debug("Task %s: %s -> %s", task.id, task.status.value, status.value)
    return update


def apply_progress_update(
    task: Task,
    progress: int,
    now: Optional[datetime] = None,
) -> TaskUpdate:
    """Return the field changes for setting ``task`` progress. Does not persist."""
    if isinstance(progress, bool) or not isinstance(progress, int) or not 0 <= progress <= 100:
        raise InvalidProgress(progress, task_id=task.id)

    if progress == 0:
        target = TaskStatus.TODO
    elif progress == 100:
        target = TaskStatus.DONE
    elif task.status == TaskStatus.TODO:
        target = TaskStatus.IN_PROGRESS
    else:
        return TaskUpdate(progress=progress)

    update = apply_status_transition(task, target, now=now)
    update.progress = progress
    return update
