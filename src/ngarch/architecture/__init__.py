"""Architecture conformance: registry, layering rules, cycles, metrics."""

from .analyzer import ArchitectureAnalyzer, analyze_modules
from .models import (
    AnalysisResult,
    ArchitectureMetrics,
    Cycle,
    DependencyViolation,
    Layer,
    ModuleCollision,
    ModuleRecord,
    ViolationType,
)
from .records import load_records, parse_records
from .registry import ModuleRegistry

__all__ = [
    "AnalysisResult",
    "ArchitectureAnalyzer",
    "ArchitectureMetrics",
    "Cycle",
    "DependencyViolation",
    "Layer",
    "ModuleCollision",
    "ModuleRecord",
    "ModuleRegistry",
    "ViolationType",
    "analyze_modules",
    "load_records",
    "parse_records",
]
