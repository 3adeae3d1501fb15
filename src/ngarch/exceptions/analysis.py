"""Analysis-related exceptions: input collisions and graph integrity."""

from typing import Optional

from .base import NgArchError


class AnalysisError(NgArchError):
    """Base class for analysis-related errors."""
    pass


class InputCollisionError(AnalysisError):
    """Raised when two module records share the same name.

    Only raised under the strict collision policy. The default policy keeps
    the first record and reports the others as collisions on the result.
    """

    def __init__(
        self,
        name: str,
        first_path: Optional[str] = None,
        duplicate_path: Optional[str] = None,
    ):
        details = {"name": name}
        if first_path:
            details["first"] = first_path
        if duplicate_path:
            details["duplicate"] = duplicate_path

        super().__init__(f"Duplicate module name: {name}", details=details)
        self.name = name
        self.first_path = first_path
        self.duplicate_path = duplicate_path


class MalformedGraphError(AnalysisError):
    """Raised when a graph edge references a module that is not registered.

    The builder resolves every dependency before inserting an edge, so this
    signals a defect rather than bad input.
    """

    def __init__(self, source: str, target: str, reason: str = "endpoint not registered"):
        super().__init__(
            f"Malformed dependency graph: {source} -> {target}",
            details={"source": source, "target": target, "reason": reason},
        )
        self.source = source
        self.target = target
        self.reason = reason
