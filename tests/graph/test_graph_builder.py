"""Tests for dependency graph construction and validation."""

import pytest

from ngarch.architecture.models import Layer, ModuleRecord
from ngarch.architecture.registry import ModuleRegistry
from ngarch.exceptions import MalformedGraphError
from ngarch.graph.builder import build_dependency_graph, validate_graph
from ngarch.graph.models import DependencyGraph


def _rec(name: str, *deps: str) -> ModuleRecord:
    """Shortcut to build a minimal ModuleRecord."""
    return ModuleRecord(name=name, layer=Layer.UNKNOWN, declared_dependencies=deps)


def _graph(*records: ModuleRecord) -> DependencyGraph:
    return build_dependency_graph(ModuleRegistry.register(records))


class TestBuildDependencyGraph:
    def test_empty_registry(self):
        graph = _graph()
        assert graph.nodes == []
        assert graph.edge_count == 0
        assert graph.edges() == []

    def test_single_module_no_dependencies(self):
        graph = _graph(_rec("A"))
        assert graph.nodes == ["A"]
        assert graph.adjacency["A"] == []
        assert graph.edge_count == 0

    def test_resolved_dependency(self):
        graph = _graph(_rec("A", "B"), _rec("B"))
        assert graph.adjacency["A"] == ["B"]
        assert graph.reverse["B"] == ["A"]
        assert graph.edge_count == 1

    def test_edges_are_directed(self):
        graph = _graph(_rec("A", "B"), _rec("B"))
        assert ("A", "B") in graph.edges()
        assert ("B", "A") not in graph.edges()
        assert graph.adjacency["B"] == []

    def test_external_names_are_not_nodes(self):
        graph = _graph(_rec("A", "@angular/router", "B", "rxjs"), _rec("B"))
        assert graph.nodes == ["A", "B"]
        assert graph.adjacency["A"] == ["B"]
        assert graph.external == {"A": ["@angular/router", "rxjs"]}
        assert graph.external_count == 2
        assert "rxjs" not in graph.adjacency

    def test_self_loop_preserved(self):
        graph = _graph(_rec("A", "A"))
        assert graph.adjacency["A"] == ["A"]
        assert graph.has_self_loop("A")
        assert graph.self_loop_count == 1
        assert graph.edge_count == 1

    def test_repeated_dependency_yields_one_edge(self):
        graph = _graph(_rec("A", "B", "C", "B"), _rec("B"), _rec("C"))
        assert graph.adjacency["A"] == ["B", "C"]
        assert graph.edge_count == 2

    def test_node_and_edge_order_follow_registry(self):
        graph = _graph(_rec("Z", "M", "A"), _rec("M", "A"), _rec("A"))
        assert graph.nodes == ["Z", "M", "A"]
        assert graph.edges() == [("Z", "M"), ("Z", "A"), ("M", "A")]

    def test_no_dangling_edges(self):
        graph = _graph(_rec("A", "B", "X"), _rec("B", "C", "A"), _rec("C", "Y", "C"))
        nodes = set(graph.nodes)
        for source, target in graph.edges():
            assert source in nodes
            assert target in nodes


class TestValidateGraph:
    def test_valid_graph_passes(self):
        graph = _graph(_rec("A", "B"), _rec("B", "A"))
        validate_graph(graph)

    def test_hub_with_many_dependents_passes(self):
        feature_count = 5000
        records = [_rec(f"Feature{i}Module", "SharedModule") for i in range(feature_count)]
        graph = _graph(*records, _rec("SharedModule"))
        assert len(graph.reverse["SharedModule"]) == feature_count
        validate_graph(graph)

    def test_reverse_entry_under_wrong_target_raises(self):
        graph = DependencyGraph(
            nodes=["A", "B", "C"],
            adjacency={"A": ["B"], "B": [], "C": []},
            reverse={"A": [], "B": [], "C": ["A"]},
            edge_count=1,
        )
        with pytest.raises(MalformedGraphError) as exc_info:
            validate_graph(graph)
        assert exc_info.value.target == "B"

    def test_dangling_target_raises(self):
        graph = DependencyGraph(
            nodes=["A"],
            adjacency={"A": ["ghost"]},
            reverse={"A": []},
            edge_count=1,
        )
        with pytest.raises(MalformedGraphError) as exc_info:
            validate_graph(graph)
        assert exc_info.value.source == "A"
        assert exc_info.value.target == "ghost"

    def test_missing_reverse_entry_raises(self):
        graph = DependencyGraph(
            nodes=["A", "B"],
            adjacency={"A": ["B"], "B": []},
            reverse={"A": [], "B": []},
            edge_count=1,
        )
        with pytest.raises(MalformedGraphError):
            validate_graph(graph)

    def test_wrong_edge_count_raises(self):
        graph = DependencyGraph(
            nodes=["A", "B"],
            adjacency={"A": ["B"], "B": []},
            reverse={"A": [], "B": ["A"]},
            edge_count=3,
        )
        with pytest.raises(MalformedGraphError):
            validate_graph(graph)
