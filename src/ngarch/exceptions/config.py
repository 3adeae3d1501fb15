"""Configuration and input-document exceptions."""

from pathlib import Path
from typing import Any, Union

from .base import NgArchError


class ConfigurationError(NgArchError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class RecordFormatError(ConfigurationError):
    """Raised when a module record document cannot be read or decoded."""

    def __init__(self, source: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot load module records from {source}",
            details={"source": str(source), "reason": reason},
        )
        self.source = source
        self.reason = reason
