"""Module dependency graph: construction, SCC, cycles, condensation."""

from .algorithms import condense, find_cycles, longest_path_lengths, tarjan_scc
from .builder import build_dependency_graph, validate_graph
from .models import CondensedGraph, CycleGroup, DependencyGraph

__all__ = [
    "CondensedGraph",
    "CycleGroup",
    "DependencyGraph",
    "build_dependency_graph",
    "condense",
    "find_cycles",
    "longest_path_lengths",
    "tarjan_scc",
    "validate_graph",
]
