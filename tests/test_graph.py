"""
Tests for the dependency graph builder, topological sequencer and cycle validator.

These tests verify:
    1. Forward and reverse edges are derived from a flat task list
    2. Dangling dependency IDs are tolerated
    3. Topological order puts every dependency before its dependent
    4. Self, unknown, cross-project and cyclic dependencies are told apart
    5. Accepted mutations never leave a cycle behind
"""

import random

import pytest

from pathwise.errors import (
    CrossProjectDependency,
    CyclicDependency,
    DependencyError,
    SelfDependency,
    TaskNotFound,
    UnknownDependency,
)
from pathwise.generator import ScenarioGenerator
from pathwise.graph.builder import build_graph
from pathwise.graph.topology import topological_order
from pathwise.graph.validator import find_cycle, validate_dependencies, would_create_cycle
from tests.helpers import make_task


def diamond():
    """A <- B, A <- C, (B, C) <- D."""
    return [
        make_task("A"),
        make_task("B", deps=["A"]),
        make_task("C", deps=["A"]),
        make_task("D", deps=["B", "C"]),
    ]


# ══════════════════════════════════════════════════════════════════════
# GRAPH BUILDER TESTS
# ══════════════════════════════════════════════════════════════════════

class TestBuildGraph:
    """Tests for build_graph()."""

    def test_forward_and_reverse_edges(self):
        graph = build_graph(diamond())

        assert len(graph) == 4
        assert graph.dependencies["D"] == ["B", "C"]
        assert graph.dependents["A"] == ["B", "C"]
        assert graph.dependents["B"] == ["D"]
        assert graph.dependents["D"] == []

    def test_empty_input(self):
        graph = build_graph([])
        assert len(graph) == 0
        assert graph.edges() == []

    def test_dangling_dependency_tolerated(self):
        """References to unknown tasks are kept forward but never walked."""
        graph = build_graph([make_task("A", deps=["ghost"])])

        assert graph.dependencies["A"] == ["ghost"]
        assert graph.in_set_dependencies("A") == []
        assert "ghost" not in graph
        assert "ghost" not in graph.dependents

    def test_duplicate_dependencies_collapsed(self):
        graph = build_graph([make_task("A"), make_task("B", deps=["A", "A"])])
        assert graph.dependencies["B"] == ["A"]
        assert graph.dependents["A"] == ["B"]

    def test_overrides_replace_edges(self):
        graph = build_graph(diamond(), overrides={"D": ["A"]})

        assert graph.dependencies["D"] == ["A"]
        assert graph.dependents["B"] == []
        assert graph.dependents["A"] == ["B", "C", "D"]

    def test_input_not_mutated(self):
        tasks = diamond()
        build_graph(tasks, overrides={"B": ["C"]})
        assert tasks[1].dependencies == ["A"]

    def test_edges(self):
        assert sorted(build_graph(diamond()).edges()) == [
            ("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"),
        ]


# ══════════════════════════════════════════════════════════════════════
# TOPOLOGICAL ORDER TESTS
# ══════════════════════════════════════════════════════════════════════

class TestTopologicalOrder:
    """Tests for topological_order()."""

    def _assert_respects_dependencies(self, tasks, order):
        position = {task_id: i for i, task_id in enumerate(order)}
        ids = {t.id for t in tasks}
        for task in tasks:
            for dep_id in task.dependencies:
                if dep_id in ids:
                    assert position[dep_id] < position[task.id], (dep_id, task.id)

    def test_diamond(self):
        order = topological_order(diamond())
        assert order[0] == "A"
        assert order[-1] == "D"
        assert sorted(order) == ["A", "B", "C", "D"]

    def test_reverse_input_order(self):
        tasks = list(reversed(diamond()))
        order = topological_order(tasks)
        self._assert_respects_dependencies(tasks, order)

    def test_empty(self):
        assert topological_order([]) == []

    def test_external_dependencies_ignored(self):
        tasks = [make_task("B", deps=["outside"]), make_task("A")]
        assert topological_order(tasks) == ["B", "A"]

    def test_cyclic_input_still_a_permutation(self):
        """A cycle that bypassed validation terminates and keeps every ID once."""
        tasks = [make_task("A", deps=["B"]), make_task("B", deps=["A"]), make_task("C")]
        order = topological_order(tasks)
        assert sorted(order) == ["A", "B", "C"]

    @pytest.mark.parametrize("seed", [1, 7, 42, 99, 2024])
    def test_random_dags(self, seed):
        tasks = ScenarioGenerator(seed=seed).generate_tasks(num_tasks=60, dependency_density=0.3)
        random.Random(seed).shuffle(tasks)
        order = topological_order(tasks)

        assert sorted(order) == sorted(t.id for t in tasks)
        self._assert_respects_dependencies(tasks, order)


# ══════════════════════════════════════════════════════════════════════
# CYCLE VALIDATOR TESTS
# ══════════════════════════════════════════════════════════════════════

class TestWouldCreateCycle:
    """Tests for would_create_cycle()."""

    def test_no_cycle(self):
        assert would_create_cycle("D", ["A"], diamond()) is False

    def test_direct_cycle(self):
        tasks = [make_task("A", deps=["B"]), make_task("B")]
        assert would_create_cycle("B", ["A"], tasks) is True

    def test_transitive_cycle(self):
        assert would_create_cycle("A", ["D"], diamond()) is True

    def test_self_reference_is_cycle(self):
        assert would_create_cycle("A", ["A"], diamond()) is True

    def test_proposal_replaces_existing_edges(self):
        """Dropping B -> A while adding A -> B is not a cycle."""
        tasks = [make_task("A"), make_task("B", deps=["A"])]
        assert would_create_cycle("A", ["B"], tasks) is True
        tasks[1] = make_task("B")
        assert would_create_cycle("A", ["B"], tasks) is False

    def test_cycle_elsewhere_not_reported(self):
        """Only cycles reachable from the task under change are searched."""
        tasks = [
            make_task("X", deps=["Y"]),
            make_task("Y", deps=["X"]),
            make_task("A"),
            make_task("B"),
        ]
        assert would_create_cycle("A", ["B"], tasks) is False

    def test_dangling_edges_skipped(self):
        tasks = [make_task("A", deps=["ghost"]), make_task("B")]
        assert would_create_cycle("B", ["A"], tasks) is False


class TestValidateDependencies:
    """Tests for validate_dependencies()."""

    def test_valid_returns_deduplicated(self):
        assert validate_dependencies("D", ["B", "C", "B"], diamond()) == ["B", "C"]

    def test_empty_proposal_always_valid(self):
        assert validate_dependencies("A", [], diamond()) == []

    def test_self_dependency(self):
        tasks = [make_task("X")]
        with pytest.raises(SelfDependency) as exc_info:
            validate_dependencies("X", ["X"], tasks)
        assert exc_info.value.code == "self_dependency"
        assert exc_info.value.task_id == "X"

    def test_self_dependency_not_reported_as_cycle(self):
        with pytest.raises(DependencyError) as exc_info:
            validate_dependencies("A", ["B", "A"], diamond())
        assert type(exc_info.value) is SelfDependency

    def test_unknown_dependency(self):
        with pytest.raises(UnknownDependency) as exc_info:
            validate_dependencies("A", ["nope"], diamond())
        assert exc_info.value.dependency_id == "nope"
        assert exc_info.value.code == "unknown_dependency"

    def test_cross_project_dependency(self):
        tasks = diamond() + [make_task("Z", project="p2")]
        with pytest.raises(CrossProjectDependency) as exc_info:
            validate_dependencies("A", ["Z"], tasks)
        assert exc_info.value.dependency_id == "Z"

    def test_cyclic_dependency(self):
        tasks = [make_task("A", deps=["B"]), make_task("B")]
        with pytest.raises(CyclicDependency) as exc_info:
            validate_dependencies("B", ["A"], tasks)
        assert exc_info.value.code == "cyclic_dependency"


    def test_missing_subject_task(self):
        """The task being changed must be part of the task set."""
        tasks = diamond() + [make_task("Z", project="p2")]
        with pytest.raises(TaskNotFound):
            validate_dependencies("ghost", ["Z"], tasks)


class TestFindCycle:
    """Tests for find_cycle()."""

    def test_acyclic(self):
        assert find_cycle(diamond()) == []

    def test_reports_cycle_members(self):
        tasks = [
            make_task("A", deps=["C"]),
            make_task("B", deps=["A"]),
            make_task("C", deps=["B"]),
            make_task("D"),
        ]
        cycle = find_cycle(tasks)
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"A", "B", "C"}


# ══════════════════════════════════════════════════════════════════════
# ACYCLICITY PROPERTY
# ══════════════════════════════════════════════════════════════════════

class TestAcyclicityInvariant:
    """Random add/remove sequences filtered by the validator never leave a cycle."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_mutations(self, seed):
        rng = random.Random(seed)
        ids = [f"t{i}" for i in range(12)]
        deps: dict[str, list[str]] = {task_id: [] for task_id in ids}

        def snapshot():
            return [make_task(task_id, deps=list(deps[task_id])) for task_id in ids]

        for _ in range(200):
            task_id = rng.choice(ids)
            if deps[task_id] and rng.random() < 0.3:
                deps[task_id].remove(rng.choice(deps[task_id]))
                continue

            proposed = deps[task_id] + [rng.choice(ids)]
            try:
                deps[task_id] = validate_dependencies(task_id, proposed, snapshot())
            except (SelfDependency, CyclicDependency):
                pass

            assert find_cycle(snapshot()) == []
