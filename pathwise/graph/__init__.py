from pathwise.graph.builder import DependencyGraph, build_graph
from pathwise.graph.topology import order_graph, topological_order
from pathwise.graph.validator import find_cycle, validate_dependencies, would_create_cycle

__all__ = [
    "DependencyGraph",
    "build_graph",
    "find_cycle",
    "order_graph",
    "topological_order",
    "validate_dependencies",
    "would_create_cycle",
]
