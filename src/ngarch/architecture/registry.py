"""Module registry: the set of module records for one analysis run.

Records are keyed by name and kept in insertion order, so everything that
iterates the registry (graph building, violation detection, serialization)
is deterministic for identical input.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from ..exceptions import InputCollisionError
from ..logging_config import get_logger
from .models import ModuleCollision, ModuleRecord

logger = get_logger(__name__)


class ModuleRegistry:
    """Name-keyed, insertion-ordered collection of module records."""

    def __init__(self) -> None:
        self._records: dict[str, ModuleRecord] = {}
        self._collisions: list[ModuleCollision] = []

    @classmethod
    def register(cls, records: Iterable[ModuleRecord], strict: bool = False) -> ModuleRegistry:
        """Build a registry from extractor output.

        The first record seen for a name wins. Later records with the same
        name are reported as collisions, or raise InputCollisionError when
        ``strict`` is set.

        Args:
            records: Module records in discovery order
            strict: Raise on the first duplicate name instead of reporting it

        Returns:
            Populated ModuleRegistry

        Raises:
            InputCollisionError: On a duplicate name in strict mode
        """
        registry = cls()
        for record in records:
            registry.add(record, strict=strict)

        if registry._collisions:
            logger.warning(
                "Ignored %d module record(s) with duplicate names: %s",
                len(registry._collisions),
                ", ".join(c.name for c in registry._collisions),
            )
        logger.debug("Registered %d modules", len(registry))
        return registry

    def add(self, record: ModuleRecord, strict: bool = False) -> bool:
        """Add one record. Returns False if the name was already taken."""
        existing = self._records.get(record.name)
        if existing is None:
            self._records[record.name] = record
            return True

        if strict:
            raise InputCollisionError(record.name, existing.path, record.path)
        self._collisions.append(
            ModuleCollision(name=record.name, kept_path=existing.path, dropped_path=record.path)
        )
        return False

    def lookup(self, name: str) -> Optional[ModuleRecord]:
        return self._records.get(name)

    def all(self) -> tuple[ModuleRecord, ...]:
        """All registered records in insertion order."""
        return tuple(self._records.values())

    def names(self) -> tuple[str, ...]:
        return tuple(self._records)

    @property
    def collisions(self) -> tuple[ModuleCollision, ...]:
        return tuple(self._collisions)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ModuleRecord]:
        return iter(self._records.values())
