"""Configuration loading and management for ngarch.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.ngarch.toml)
    3. Project config (./ngarch.toml)
    4. Explicit config file
    5. Environment variables (NGARCH_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(collision_policy="strict")
    >>> config.collision_policy
    'strict'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, NgArchError

Verbosity = Literal["quiet", "normal", "verbose"]
CollisionPolicy = Literal["keep_first", "strict"]

_COLLISION_POLICIES = ("keep_first", "strict")
_VERBOSITIES = ("quiet", "normal", "verbose")
_BOOL_FIELDS = ("enable_validation", "fail_on_violations")

GLOBAL_CONFIG_NAME = ".ngarch.toml"
PROJECT_CONFIG_NAME = "ngarch.toml"
ENV_PREFIX = "NGARCH_"


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        collision_policy: "keep_first" keeps the first record with a given
            name and reports the rest; "strict" raises InputCollisionError.
        enable_validation: Check graph invariants after the graph is built.
        verbosity: Logging verbosity level.
        fail_on_violations: CLI exits with status 1 when violations or
            cycles are found.
    """

    collision_policy: CollisionPolicy = "keep_first"
    enable_validation: bool = True
    verbosity: Verbosity = "normal"
    fail_on_violations: bool = False

    def __post_init__(self) -> None:
        if self.collision_policy not in _COLLISION_POLICIES:
            raise InvalidConfigError(
                "collision_policy",
                self.collision_policy,
                f"expected one of {', '.join(_COLLISION_POLICIES)}",
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )
        for key in _BOOL_FIELDS:
            value = getattr(self, key)
            if not isinstance(value, bool):
                raise InvalidConfigError(key, value, "expected true or false")

    @property
    def strict(self) -> bool:
        return self.collision_policy == "strict"


DEFAULT_CONFIG = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        NgArchError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise NgArchError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Boolean verbosity flags from the CLI collapse into the verbosity field
    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise NgArchError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict[str, Any]:
    try:
        data = _load_toml_file(path)
    except NgArchError:
        raise
    except Exception as e:
        raise NgArchError(f"Invalid {label} '{path}': {e}")
    # Settings may live at top level or under an [ngarch] table
    section = data.get("ngarch", data)
    if not isinstance(section, dict):
        raise NgArchError(f"Invalid {label} '{path}': [ngarch] must be a table")
    return dict(section)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from NGARCH_* environment variables.

    Supported environment variables:
        NGARCH_COLLISION_POLICY: keep_first/strict
        NGARCH_ENABLE_VALIDATION: bool (true/false/1/0)
        NGARCH_VERBOSITY: quiet/normal/verbose
        NGARCH_FAIL_ON_VIOLATIONS: bool

    Returns:
        Dict of field_name -> parsed_value for any NGARCH_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise NgArchError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        NgArchError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise NgArchError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
