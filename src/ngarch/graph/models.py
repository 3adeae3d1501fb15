"""Data models for the module dependency graph.

Levels:
  Level 1: Nodes (module names from the registry)
  Level 2: Relationships (resolved dependency edges)
  Level 3: Derived structures (strongly connected components, condensation)
"""

from dataclasses import dataclass, field

# ── Level 1 + 2: The dependency graph ──────────────────────────────


@dataclass
class DependencyGraph:
    """Directed dependency graph over module names.

    Edges are directed: adjacency[A] contains B means A depends on B.
    ``nodes`` keeps registry order and every adjacency list keeps declared
    order, so traversals are reproducible. Self-loops (A in adjacency[A])
    are kept.
    """

    nodes: list[str] = field(default_factory=list)
    adjacency: dict[str, list[str]] = field(default_factory=dict)
    reverse: dict[str, list[str]] = field(default_factory=dict)
    edge_count: int = 0

    # Declared names that matched no module (external packages), per module
    external: dict[str, list[str]] = field(default_factory=dict)

    @property
    def all_nodes(self) -> set[str]:
        return set(self.nodes)

    def successors(self, node: str) -> list[str]:
        return self.adjacency.get(node, [])

    def has_self_loop(self, node: str) -> bool:
        return node in self.adjacency.get(node, [])

    def edges(self) -> list[tuple[str, str]]:
        """All edges in node order, then declared order."""
        return [(source, target) for source in self.nodes for target in self.successors(source)]

    @property
    def self_loop_count(self) -> int:
        return sum(1 for node in self.nodes if self.has_self_loop(node))

    @property
    def external_count(self) -> int:
        return sum(len(names) for names in self.external.values())


# ── Level 3: Derived structures ────────────────────────────────────


@dataclass
class CycleGroup:
    """One reported cycle and the strongly connected component it came from.

    ``path`` is an elementary cycle (the closing edge back to path[0] is
    implicit). ``nodes`` is the whole component, sorted by name.
    """

    path: list[str]
    nodes: list[str]


@dataclass
class CondensedGraph:
    """The DAG obtained by collapsing each SCC of a DependencyGraph.

    Component ids are indices into ``components``. ``node_component`` maps
    each module to the id of the component containing it.
    """

    components: list[list[str]] = field(default_factory=list)
    node_component: dict[str, int] = field(default_factory=dict)
    adjacency: dict[int, set[int]] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.components)
