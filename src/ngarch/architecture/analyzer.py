"""ArchitectureAnalyzer: the conformance engine entry point.

Orchestrates:
1. Module registration (duplicate name handling)
2. Dependency graph construction
3. Layer violation detection
4. Cycle detection
5. Architecture metrics
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..graph.algorithms import find_cycles, tarjan_scc
from ..graph.builder import build_dependency_graph, validate_graph
from ..logging_config import get_logger
from .metrics import compute_metrics
from .models import AnalysisResult, Cycle, ModuleRecord
from .registry import ModuleRegistry
from .violations import detect_violations

logger = get_logger(__name__)


class ArchitectureAnalyzer:
    """Runs one analysis per call; holds only its configuration."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def analyze(self, records: Iterable[ModuleRecord]) -> AnalysisResult:
        """Analyze module records and assemble the result.

        Args:
            records: Module records from the extractor, in discovery order

        Returns:
            AnalysisResult with modules, violations, cycles, and metrics

        Raises:
            InputCollisionError: On duplicate names under the strict policy
            MalformedGraphError: If the built graph breaks its invariants
        """
        # 1. Register modules
        registry = ModuleRegistry.register(records, strict=self.config.strict)

        # 2. Build graph
        graph = build_dependency_graph(registry)
        if self.config.enable_validation:
            validate_graph(graph)

        # 3. Layering rules
        violations = detect_violations(graph, registry)

        # 4. Cycles (SCCs are shared with the depth computation)
        components = tarjan_scc(graph.adjacency, graph.nodes)
        cycles = [
            Cycle(modules=tuple(group.path), component=tuple(group.nodes))
            for group in find_cycles(graph, components)
        ]

        # 5. Metrics
        metrics = compute_metrics(registry, graph, components)

        result = AnalysisResult(
            modules=registry.all(),
            violations=tuple(violations),
            cycles=tuple(cycles),
            metrics=metrics,
            collisions=registry.collisions,
        )
        logger.debug(
            f"Architecture analysis complete: {metrics.total_modules} modules, "
            f"{metrics.total_dependencies} edges, {len(violations)} violations, "
            f"{len(cycles)} cycles, depth {metrics.max_dependency_depth}"
        )
        return result


def analyze_modules(
    records: Iterable[ModuleRecord], config: Optional[AnalysisConfig] = None
) -> AnalysisResult:
    """Convenience wrapper: analyze records with the given configuration."""
    return ArchitectureAnalyzer(config).analyze(records)
