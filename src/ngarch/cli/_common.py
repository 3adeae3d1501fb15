"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

# stdout carries the JSON document, so messages go to stderr
console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    strict: bool = False,
    fail_on_violations: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides: dict = {"verbose": verbose, "quiet": quiet}
    if strict:
        overrides["collision_policy"] = "strict"
    if fail_on_violations:
        overrides["fail_on_violations"] = True
    return load_config(config_file=config, **overrides)
