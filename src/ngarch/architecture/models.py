"""Architecture analysis models.

Defines the module record supplied by the extractor and the findings the
conformance engine produces from it: violations, cycles, metrics, and the
aggregate AnalysisResult.

All models are frozen. A result never changes after the orchestrator
assembles it, so concurrent analyses cannot observe each other's state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Layer(Enum):
    """Architectural layer of a module, assigned by the extractor."""

    CORE = "Core"
    SHARED = "Shared"
    FEATURE = "Feature"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str) -> Layer:
        """Parse a layer label case-insensitively ("core", "Core", "CORE")."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"unknown layer '{value}'")


class ViolationType(Enum):
    """Layering rules a dependency edge can break."""

    CORE_DEPENDS_ON_FEATURE = "CoreDependsOnFeature"
    SHARED_DEPENDS_ON_FEATURE = "SharedDependsOnFeature"
    FEATURE_TO_FEATURE_DIRECT = "FeatureToFeatureDirect"


@dataclass(frozen=True)
class ModuleRecord:
    """One module-definition file as seen by the extractor.

    ``declared_dependencies`` keeps the order in which they appear in the
    source. Entries may name other modules or external packages. The
    informational lists are carried through for reporting only.
    """

    name: str
    layer: Layer = Layer.UNKNOWN
    declared_dependencies: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    exports: tuple[str, ...] = ()
    providers: tuple[str, ...] = ()
    declarations: tuple[str, ...] = ()
    path: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "module_type": self.layer.value,
            "imports": list(self.imports),
            "exports": list(self.exports),
            "providers": list(self.providers),
            "declarations": list(self.declarations),
            "dependencies": list(self.declared_dependencies),
        }


@dataclass(frozen=True)
class ModuleCollision:
    """A record dropped because an earlier record already used its name."""

    name: str
    kept_path: Optional[str] = None
    dropped_path: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kept_path": self.kept_path,
            "dropped_path": self.dropped_path,
        }


@dataclass(frozen=True)
class DependencyViolation:
    """A dependency edge that breaks the layering rules."""

    from_module: str
    to_module: str
    violation_type: ViolationType
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "from_module": self.from_module,
            "to_module": self.to_module,
            "violation_type": self.violation_type.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class Cycle:
    """A closed dependency walk.

    ``modules`` lists each member once; the edge from the last member back
    to the first is implicit. A self-loop is a cycle of one module.
    ``component`` holds every module of the strongly connected component
    the cycle was drawn from, sorted by name.
    """

    modules: tuple[str, ...]
    component: tuple[str, ...] = ()

    @property
    def is_self_loop(self) -> bool:
        return len(self.modules) == 1

    def __len__(self) -> int:
        return len(self.modules)


@dataclass(frozen=True)
class ArchitectureMetrics:
    """Aggregate structural measurements of one analysis run."""

    total_modules: int = 0
    core_modules: int = 0
    shared_modules: int = 0
    feature_modules: int = 0
    unknown_modules: int = 0
    total_dependencies: int = 0  # resolved edges, self-loops included
    external_dependencies: int = 0  # declared names with no matching module
    average_dependencies_per_module: float = 0.0
    max_dependency_depth: int = 0
    coupling_factor: float = 0.0  # edge density, in [0, 1]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_modules": self.total_modules,
            "core_modules": self.core_modules,
            "shared_modules": self.shared_modules,
            "feature_modules": self.feature_modules,
            "unknown_modules": self.unknown_modules,
            "total_dependencies": self.total_dependencies,
            "external_dependencies": self.external_dependencies,
            "average_dependencies_per_module": self.average_dependencies_per_module,
            "max_dependency_depth": self.max_dependency_depth,
            "coupling_factor": self.coupling_factor,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Top-level result of architecture analysis."""

    modules: tuple[ModuleRecord, ...] = ()
    violations: tuple[DependencyViolation, ...] = ()
    cycles: tuple[Cycle, ...] = ()
    metrics: ArchitectureMetrics = field(default_factory=ArchitectureMetrics)
    collisions: tuple[ModuleCollision, ...] = ()

    @property
    def has_findings(self) -> bool:
        """True if any layering violation or cycle was found."""
        return bool(self.violations or self.cycles)

    def to_dict(self) -> dict[str, Any]:
        """Structured form of the result, in deterministic order."""
        return {
            "modules": [m.to_dict() for m in self.modules],
            "dependency_violations": [v.to_dict() for v in self.violations],
            "circular_dependencies": [list(c.modules) for c in self.cycles],
            "metrics": self.metrics.to_dict(),
            "collisions": [c.to_dict() for c in self.collisions],
        }
