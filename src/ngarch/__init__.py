"""
ngarch - Frontend Module Architecture Conformance

Checks the module-level architecture of a component-based frontend
project: layering rules between Core, Shared and Feature modules,
dependency cycles, and coupling/depth metrics. Module records come from
an external extractor; ngarch builds the directed dependency graph and
evaluates it.
"""

__version__ = "0.1.0"

from .architecture import (
    AnalysisResult,
    ArchitectureAnalyzer,
    Layer,
    ModuleRecord,
    analyze_modules,
)
from .config import AnalysisConfig, load_config

__all__ = [
    "analyze_modules",  # Main entry point
    "ArchitectureAnalyzer",
    "AnalysisConfig",
    "AnalysisResult",
    "Layer",
    "ModuleRecord",
    "load_config",
]
