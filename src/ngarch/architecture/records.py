"""Loading module records produced by an external extractor.

The extractor writes a JSON document that is either a list of module
objects or an object with a ``modules`` list. Each module object uses the
keys below; only ``name`` is required.

    {
        "name": "CoreModule",
        "path": "src/app/core/core.module.ts",
        "type": "Core",
        "dependencies": ["@app/shared", "SharedModule"],
        "imports": ["CommonModule"],
        "exports": [],
        "providers": ["AuthService"],
        "declarations": []
    }

``layer`` is accepted as an alias of ``type``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from ..exceptions import RecordFormatError
from ..logging_config import get_logger
from .models import Layer, ModuleRecord

logger = get_logger(__name__)

_LIST_FIELDS = ("imports", "exports", "providers", "declarations")


def load_records(path: Union[str, Path]) -> list[ModuleRecord]:
    """Read module records from a JSON file.

    Raises:
        RecordFormatError: If the file cannot be read or is not a valid
            record document
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RecordFormatError(path, e.strerror or str(e))
    except UnicodeDecodeError as e:
        raise RecordFormatError(path, f"not valid UTF-8 at byte {e.start}")

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordFormatError(path, f"invalid JSON at line {e.lineno}: {e.msg}")

    records = parse_records(document, source=str(path))
    logger.debug("Loaded %d module records from %s", len(records), path)
    return records


def parse_records(document: Any, source: str = "<document>") -> list[ModuleRecord]:
    """Convert a decoded record document into ModuleRecords, keeping order."""
    if isinstance(document, dict):
        document = document.get("modules")
    if not isinstance(document, list):
        raise RecordFormatError(source, "expected a list of modules or a 'modules' list")

    return [_parse_record(entry, i, source) for i, entry in enumerate(document)]


def _parse_record(entry: Any, position: int, source: str) -> ModuleRecord:
    if not isinstance(entry, dict):
        raise RecordFormatError(source, f"module #{position} is not an object")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise RecordFormatError(source, f"module #{position} has no name")

    layer_value = entry.get("type", entry.get("layer", Layer.UNKNOWN.value))
    try:
        layer = Layer.parse(str(layer_value))
    except ValueError as e:
        raise RecordFormatError(source, f"module '{name}': {e}")

    lists = {key: _string_list(entry, key, name, source) for key in _LIST_FIELDS}
    path = entry.get("path")

    return ModuleRecord(
        name=name,
        layer=layer,
        declared_dependencies=_string_list(entry, "dependencies", name, source),
        path=str(path) if path is not None else None,
        **lists,
    )


def _string_list(entry: dict, key: str, name: str, source: str) -> tuple[str, ...]:
    value = entry.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise RecordFormatError(source, f"module '{name}': '{key}' must be a list of strings")
    return tuple(value)
