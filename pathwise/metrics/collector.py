"""Project statistics — status breakdown, progress, timeline and critical path summary."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pathwise.models.task import Task, TaskStatus, as_utc
from pathwise.scheduling.critical_path import CriticalPathResult


@dataclass
class ProjectStats:
    """Container for all computed project statistics."""
    project_id: str = ""
    total_tasks: int = 0
    todo_tasks: int = 0
    in_progress_tasks: int = 0
    blocked_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
    overall_progress: int = 0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    project_duration: float = 0
    critical_task_count: int = 0
    critical_path: list[str] = field(default_factory=list)
    slack_by_task: dict[str, float] = field(default_factory=dict)


class ProjectStatsCollector:
    """Computes and reports project statistics."""

    def __init__(self):
        self.report: Optional[ProjectStats] = None

    def calculate(
        self,
        project_id: str,
        tasks: list[Task],
        critical_path: Optional[CriticalPathResult] = None,
        now: Optional[datetime] = None,
    ) -> ProjectStats:
        """Compute all statistics from the current task records."""
        now = as_utc(now) or datetime.now(timezone.utc)
        report = ProjectStats(project_id=project_id, total_tasks=len(tasks))

        counts = {status: 0 for status in TaskStatus}
        for task in tasks:
            counts[task.status] += 1
        report.todo_tasks = counts[TaskStatus.TODO]
        report.in_progress_tasks = counts[TaskStatus.IN_PROGRESS]
        report.blocked_tasks = counts[TaskStatus.BLOCKED]
        report.completed_tasks = counts[TaskStatus.DONE]
        report.overdue_tasks = sum(1 for t in tasks if t.is_overdue(now))

        if tasks:
            report.overall_progress = round(report.completed_tasks / len(tasks) * 100)

        dates = [d for t in tasks for d in (t.start_date, t.due_date) if d is not None]
        if dates:
            report.start_date = min(dates)
            report.end_date = max(dates)

        if critical_path is not None:
            report.project_duration = critical_path.project_duration
            report.critical_task_count = len(critical_path.critical_tasks)
            report.critical_path = list(critical_path.ordered_path)
            report.slack_by_task = {
                task_id: entry.slack for task_id, entry in critical_path.schedule.items()
            }

        self.report = report
        return report

    def print_report(self, console: Optional[Console] = None) -> None:
        """Print the formatted report as rich tables."""
        console = console or Console()
        if self.report is None:
            console.print("No statistics calculated yet. Run calculate() first.")
            return

        r = self.report
        console.print(Panel(
            f"[bold cyan]Pathwise — Project Report[/bold cyan]\n"
            f"Project: [bold yellow]{r.project_id}[/bold yellow]",
            border_style="cyan",
        ))

        task_table = Table(title="Task Summary", border_style="blue")
        task_table.add_column("Metric", style="bold")
        task_table.add_column("Value", justify="right")
        task_table.add_row("Total Tasks", str(r.total_tasks))
        task_table.add_row("To Do", str(r.todo_tasks))
        task_table.add_row("In Progress", f"[yellow]{r.in_progress_tasks}[/yellow]")
        task_table.add_row("Blocked", f"[red]{r.blocked_tasks}[/red]")
        task_table.add_row("Done", f"[green]{r.completed_tasks}[/green]")
        task_table.add_row(
            "Overdue",
            f"[{'red' if r.overdue_tasks else 'green'}]{r.overdue_tasks}[/]",
        )
        task_table.add_row("Overall Progress", f"{r.overall_progress}%")
        if r.start_date is not None:
            task_table.add_row("Timeline", f"{r.start_date:%Y-%m-%d} → {r.end_date:%Y-%m-%d}")
        console.print(task_table)

        path_table = Table(title="Critical Path", border_style="magenta")
        path_table.add_column("#", justify="right")
        path_table.add_column("Task", style="bold")
        for position, task_id in enumerate(r.critical_path, start=1):
            path_table.add_row(str(position), task_id)
        path_table.add_row("", f"[bold]{r.project_duration:g} days[/bold]")
        console.print(path_table)

        floating = {k: v for k, v in r.slack_by_task.items() if k not in r.critical_path}
        if floating:
            slack_table = Table(title="Slack (non-critical tasks)", border_style="green")
            slack_table.add_column("Task", style="bold")
            slack_table.add_column("Slack (days)", justify="right")
            for task_id, slack in sorted(floating.items(), key=lambda item: item[1]):
                slack_table.add_row(task_id, f"{slack:g}")
            console.print(slack_table)
