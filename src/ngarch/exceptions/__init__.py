"""Exception hierarchy for ngarch."""

from .analysis import (
    AnalysisError,
    InputCollisionError,
    MalformedGraphError,
)
from .base import NgArchError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    RecordFormatError,
)

__all__ = [
    "NgArchError",
    "AnalysisError",
    "InputCollisionError",
    "MalformedGraphError",
    "ConfigurationError",
    "InvalidConfigError",
    "RecordFormatError",
]
