"""Layering rule evaluation.

Each directed edge A -> B is checked against the rule table:

    Core    -> Feature              CoreDependsOnFeature
    Shared  -> Feature              SharedDependsOnFeature
    Feature -> Feature (A != B)     FeatureToFeatureDirect

Only direct edges are checked; a Feature module reaching another Feature
module through a Shared module is not reported.
"""

from __future__ import annotations

from typing import Optional

from ..exceptions import MalformedGraphError
from ..graph.models import DependencyGraph
from ..logging_config import get_logger
from .models import DependencyViolation, Layer, ViolationType
from .registry import ModuleRegistry

logger = get_logger(__name__)

# Read-only rule table shared by all analyses
LAYER_RULES: dict[tuple[Layer, Layer], tuple[ViolationType, str]] = {
    (Layer.CORE, Layer.FEATURE): (
        ViolationType.CORE_DEPENDS_ON_FEATURE,
        "Core module depends on Feature module",
    ),
    (Layer.SHARED, Layer.FEATURE): (
        ViolationType.SHARED_DEPENDS_ON_FEATURE,
        "Shared module depends on Feature module",
    ),
    (Layer.FEATURE, Layer.FEATURE): (
        ViolationType.FEATURE_TO_FEATURE_DIRECT,
        "Feature module depends directly on another Feature module",
    ),
}


def classify_edge(
    source: str, source_layer: Layer, target: str, target_layer: Layer
) -> Optional[tuple[ViolationType, str]]:
    """Return the rule an edge breaks, or None if it is allowed."""
    rule = LAYER_RULES.get((source_layer, target_layer))
    if rule is None:
        return None
    # A Feature module may reference itself
    if rule[0] is ViolationType.FEATURE_TO_FEATURE_DIRECT and source == target:
        return None
    return rule


def detect_violations(
    graph: DependencyGraph,
    registry: ModuleRegistry,
) -> list[DependencyViolation]:
    """Detect layering violations over every edge of the graph.

    Violations are emitted in edge-visit order: modules in registry order,
    then each module's dependencies in declared order.

    Args:
        graph: Directed module dependency graph
        registry: Registry supplying each module's layer

    Returns:
        List of DependencyViolation objects
    """
    violations: list[DependencyViolation] = []

    for source, target in graph.edges():
        source_record = registry.lookup(source)
        target_record = registry.lookup(target)
        if source_record is None or target_record is None:
            raise MalformedGraphError(source, target)

        rule = classify_edge(source, source_record.layer, target, target_record.layer)
        if rule is None:
            continue

        violation_type, description = rule
        violations.append(
            DependencyViolation(
                from_module=source,
                to_module=target,
                violation_type=violation_type,
                description=description,
            )
        )

    logger.debug("Found %d layering violations", len(violations))
    return violations
