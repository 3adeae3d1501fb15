"""Graph algorithms: SCC, representative cycles, condensation, depth."""

from __future__ import annotations

from graphlib import CycleError, TopologicalSorter
from typing import Iterator, Optional

from ..exceptions import MalformedGraphError
from .models import CondensedGraph, CycleGroup, DependencyGraph


def tarjan_scc(adjacency: dict[str, list[str]], nodes: list[str]) -> list[list[str]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Uses an explicit call stack to avoid Python recursion limits on deep
    dependency chains. Roots are visited in ``nodes`` order and neighbors
    in adjacency order, so the result is reproducible. Components come out
    in reverse topological order (a component is emitted after every
    component it can reach); members of each component are sorted by name.
    """
    known = set(nodes)
    counter = 0
    scc_stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    result: list[list[str]] = []

    for root in nodes:
        if root in index:
            continue

        # Explicit call stack: each frame is (node, neighbor_iterator)
        call_stack: list[tuple[str, Iterator[str]]] = []
        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        neighbors = [w for w in adjacency.get(root, []) if w in known]
        call_stack.append((root, iter(neighbors)))

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    # "Recurse" into w
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    w_neighbors = [n for n in adjacency.get(w, []) if n in known]
                    call_stack.append((w, iter(w_neighbors)))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if not pushed:
                # All neighbors processed: "return" from v
                call_stack.pop()
                if call_stack:
                    caller = call_stack[-1][0]
                    lowlink[caller] = min(lowlink[caller], lowlink[v])

                # If v is an SCC root, pop the component
                if lowlink[v] == index[v]:
                    component: list[str] = []
                    while True:
                        w = scc_stack.pop()
                        on_stack.discard(w)
                        component.append(w)
                        if w == v:
                            break
                    result.append(sorted(component))

    return result


def representative_cycle(graph: DependencyGraph, component: list[str]) -> Optional[list[str]]:
    """Find one elementary cycle through a strongly connected component.

    The walk starts at the lexicographically smallest member and follows a
    depth-first search restricted to the component until an edge leads
    back to the start. Self-loops are ignored here; for a single-node
    component this returns None.
    """
    if len(component) < 2:
        return None

    members = set(component)
    start = min(component)
    path: list[str] = [start]
    visited: set[str] = {start}
    call_stack: list[Iterator[str]] = [iter(graph.successors(start))]

    while call_stack:
        v = path[-1]
        pushed = False
        for w in call_stack[-1]:
            if w == start and v != start:
                return list(path)
            if w in visited or w not in members:
                continue
            visited.add(w)
            path.append(w)
            call_stack.append(iter(graph.successors(w)))
            pushed = True
            break

        if not pushed:
            call_stack.pop()
            path.pop()

    raise MalformedGraphError(start, start, "component has no cycle back to its smallest member")


def find_cycles(
    graph: DependencyGraph, components: Optional[list[list[str]]] = None
) -> list[CycleGroup]:
    """Find the dependency cycles of a directed graph.

    Reports one representative elementary cycle for every SCC with two or
    more modules, and a one-module cycle for every self-loop. Cycles are
    grouped by component (ordered by the component's smallest member);
    within a group the multi-module cycle comes first, then self-loops in
    name order. An acyclic graph yields an empty list.
    """
    if components is None:
        components = tarjan_scc(graph.adjacency, graph.nodes)
    cycles: list[CycleGroup] = []

    for component in sorted(components, key=lambda c: c[0]):
        cycle = representative_cycle(graph, component)
        if cycle is not None:
            cycles.append(CycleGroup(path=cycle, nodes=list(component)))
        for node in component:
            if graph.has_self_loop(node):
                cycles.append(CycleGroup(path=[node], nodes=list(component)))

    return cycles


def condense(graph: DependencyGraph, components: Optional[list[list[str]]] = None) -> CondensedGraph:
    """Collapse each SCC into a single node.

    Intra-component edges (including self-loops) disappear, so the result
    is acyclic. Component ids follow the order of ``components``.
    """
    if components is None:
        components = tarjan_scc(graph.adjacency, graph.nodes)

    node_component: dict[str, int] = {}
    for cid, component in enumerate(components):
        for node in component:
            node_component[node] = cid

    adjacency: dict[int, set[int]] = {cid: set() for cid in range(len(components))}
    for source, target in graph.edges():
        src_cid = node_component[source]
        tgt_cid = node_component[target]
        if src_cid != tgt_cid:
            adjacency[src_cid].add(tgt_cid)

    return CondensedGraph(
        components=[list(c) for c in components],
        node_component=node_component,
        adjacency=adjacency,
    )


def longest_path_lengths(condensed: CondensedGraph) -> dict[int, int]:
    """Length in edges of the longest path starting at each component.

    Dynamic programming over a topological order of the condensed DAG:
    sinks are 0, every other component is one more than its deepest
    successor.
    """
    # TopologicalSorter treats the mapped sets as prerequisites, so
    # successors are emitted before the components that depend on them
    sorter = TopologicalSorter(condensed.adjacency)
    try:
        order = list(sorter.static_order())
    except CycleError as e:
        raise MalformedGraphError("*", "*", f"condensed graph is cyclic: {e.args[1]}")

    longest: dict[int, int] = {}
    for cid in order:
        successors = condensed.adjacency.get(cid, ())
        longest[cid] = 1 + max(longest[s] for s in successors) if successors else 0

    return longest
