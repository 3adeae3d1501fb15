"""Dependency graph construction from module records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import MalformedGraphError
from ..logging_config import get_logger
from .models import DependencyGraph

if TYPE_CHECKING:
    from ..architecture.registry import ModuleRegistry

logger = get_logger(__name__)


def build_dependency_graph(registry: ModuleRegistry) -> DependencyGraph:
    """Build the directed module graph from declared dependencies.

    An edge M -> d is added only when d names a registered module. Any
    other name is an external package: it is recorded in ``external`` and
    never becomes a node. A module naming itself keeps its self-loop, and
    a dependency declared twice by the same module yields one edge.
    """
    nodes = list(registry.names())
    adjacency: dict[str, list[str]] = {name: [] for name in nodes}
    reverse: dict[str, list[str]] = {name: [] for name in nodes}
    external: dict[str, list[str]] = {}
    edge_count = 0

    for record in registry:
        seen: set[str] = set()
        for dep in record.declared_dependencies:
            if dep not in registry:
                external.setdefault(record.name, []).append(dep)
                continue
            if dep in seen:
                continue
            seen.add(dep)
            adjacency[record.name].append(dep)
            reverse[dep].append(record.name)
            edge_count += 1

    graph = DependencyGraph(
        nodes=nodes,
        adjacency=adjacency,
        reverse=reverse,
        edge_count=edge_count,
        external=external,
    )
    logger.debug(
        "Built dependency graph: %d nodes, %d edges, %d external references",
        len(nodes),
        edge_count,
        graph.external_count,
    )
    return graph


def validate_graph(graph: DependencyGraph) -> None:
    """Check that every edge connects two known nodes.

    Checks:
        - Every adjacency source and target is a graph node
        - The reverse index mirrors the adjacency lists
        - edge_count matches the number of stored edges

    Raises:
        MalformedGraphError: If any check fails
    """
    known = graph.all_nodes
    reverse_pairs = {
        (source, target) for target, sources in graph.reverse.items() for source in sources
    }
    stored = 0
    for source, targets in graph.adjacency.items():
        for target in targets:
            if source not in known or target not in known:
                raise MalformedGraphError(source, target)
            if (source, target) not in reverse_pairs:
                raise MalformedGraphError(source, target, "missing from reverse index")
            stored += 1

    if stored != graph.edge_count:
        raise MalformedGraphError(
            "*", "*", f"edge_count is {graph.edge_count} but {stored} edges are stored"
        )
