"""Architecture metrics computation.

Computes run-level metrics from the registry and the dependency graph:
- Module counts per layer
- Average dependencies per module: resolved out-degree / module count
- Coupling factor: edge density, edges / (n * (n - 1))
- Maximum dependency depth: longest path on the SCC-condensed graph
"""

from collections import Counter
from typing import Optional

from ..graph.algorithms import condense, longest_path_lengths
from ..graph.models import DependencyGraph
from .models import ArchitectureMetrics, Layer
from .registry import ModuleRegistry


def count_layers(registry: ModuleRegistry) -> Counter:
    """Count registered modules per layer."""
    return Counter(record.layer for record in registry)


def compute_average_dependencies(edge_count: int, total_modules: int) -> float:
    """Average resolved dependencies per module (0.0 for an empty registry).

    Self-loops count as one dependency edge.
    """
    if total_modules == 0:
        return 0.0
    return edge_count / total_modules


def compute_coupling_factor(graph: DependencyGraph) -> float:
    """Edge density of the module graph.

    Self-loops are left out of the numerator because the n * (n - 1)
    denominator counts ordered pairs of distinct modules, which keeps the
    value in [0, 1].

    Returns:
        Density in [0, 1], or 0.0 when there are fewer than two modules
    """
    n = len(graph.nodes)
    if n < 2:
        return 0.0
    cross_edges = graph.edge_count - graph.self_loop_count
    return cross_edges / (n * (n - 1))


def compute_max_depth(
    graph: DependencyGraph,
    components: Optional[list[list[str]]] = None,
) -> int:
    """Longest dependency path, in edges, with each SCC collapsed to one node.

    Args:
        graph: The dependency graph
        components: SCCs already computed for this graph, if available

    Returns:
        Maximum depth, 0 for an empty or edgeless graph
    """
    if not graph.nodes:
        return 0
    longest = longest_path_lengths(condense(graph, components))
    return max(longest.values(), default=0)


def compute_metrics(
    registry: ModuleRegistry,
    graph: DependencyGraph,
    components: Optional[list[list[str]]] = None,
) -> ArchitectureMetrics:
    """Compute all architecture metrics for one run."""
    layers = count_layers(registry)
    total = len(registry)

    return ArchitectureMetrics(
        total_modules=total,
        core_modules=layers[Layer.CORE],
        shared_modules=layers[Layer.SHARED],
        feature_modules=layers[Layer.FEATURE],
        unknown_modules=layers[Layer.UNKNOWN],
        total_dependencies=graph.edge_count,
        external_dependencies=graph.external_count,
        average_dependencies_per_module=compute_average_dependencies(graph.edge_count, total),
        max_dependency_depth=compute_max_depth(graph, components),
        coupling_factor=compute_coupling_factor(graph),
    )
