"""Entry point for analyzing a project's schedule.

Usage:
    python scripts/analyze_project.py --tasks 20 --seed 42
    python scripts/analyze_project.py --input tasks.json --project project-001
"""

import argparse
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rich.console import Console
from rich.logging import RichHandler

from pathwise.config import EngineConfig
from pathwise.generator import ScenarioGenerator
from pathwise.graph.validator import find_cycle
from pathwise.metrics.collector import ProjectStatsCollector
from pathwise.planner import ProjectPlanner
from pathwise.store.memory import InMemoryTaskStore

console = Console()


def build_store(args) -> InMemoryTaskStore:
    """Load tasks from a JSON file, or generate a scenario."""
    if args.input:
        return InMemoryTaskStore.from_json(args.input)
    generator = ScenarioGenerator(seed=args.seed)
    tasks = generator.generate_tasks(
        project_id=args.project,
        num_tasks=args.tasks,
        dependency_density=args.dependency_density,
    )
    return InMemoryTaskStore(tasks)


def main():
    parser = argparse.ArgumentParser(
        description="Pathwise — Critical path analysis for project tasks"
    )
    parser.add_argument("--input", type=str, default=None, help="JSON file of task records")
    parser.add_argument("--project", type=str, default="project-001", help="Project ID (default: project-001)")
    parser.add_argument("--tasks", type=int, default=20, help="Number of generated tasks (default: 20)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dependency-density", type=float, default=0.2, help="Dependency probability (default: 0.2)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    store = build_store(args)
    planner = ProjectPlanner(store, config=EngineConfig.from_env())

    tasks = store.list_tasks(args.project)
    if not tasks:
        console.print(f"[yellow]No tasks found for project {args.project}[/yellow]")
        return 1

    cycle = find_cycle(tasks)
    if cycle:
        console.print(f"[red]Stored dependencies contain a cycle:[/red] {' -> '.join(cycle)}")

    result = planner.compute_critical_path(args.project)
    collector = ProjectStatsCollector()
    collector.calculate(project_id=args.project, tasks=tasks, critical_path=result)
    collector.print_report(console)

    console.print(
        f"\n[dim]Analyzed {len(tasks)} tasks, "
        f"{len(result.critical_tasks)} on the critical path[/dim]"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
