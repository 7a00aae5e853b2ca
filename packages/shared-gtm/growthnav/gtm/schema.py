"""GTM container export ingestion.

Container exports come in several shapes:
- bare ({"tag": [...], "macro": [...]}) or wrapped under "containerVersion"
- variable definitions under "macro" (GTM v1) or "variable" (GTM v2 / sGTM)

The shape is resolved once here into a ContainerExport so extraction code
never has to probe for keys.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Variable reference pattern (e.g., {{Purchase Value}}, {{ECOMMERCE.total}})
VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")


class ExportFormat(str, Enum):
    """Where an export keeps its variable definitions."""

    MACRO_V1 = "macro"  # GTM v1 "macro" array
    VARIABLE_V2 = "variable"  # GTM v2 / server-side "variable" array
    EMPTY = "empty"  # No variable definitions found


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


@dataclass
class ContainerExport:
    """A GTM container export with its shape resolved.

    Attributes:
        format: Which array the variable definitions came from.
        wrapped: True if the export was wrapped under "containerVersion".
        tags: Tag records.
        macros: Variable ("macro") definition records.
        triggers: Trigger records.
        container_id: GTM container ID, if the export carries one.
        raw: The unwrapped export document.
    """

    format: ExportFormat = ExportFormat.EMPTY
    wrapped: bool = False
    tags: list[dict[str, Any]] = field(default_factory=list)
    macros: list[dict[str, Any]] = field(default_factory=list)
    triggers: list[dict[str, Any]] = field(default_factory=list)
    container_id: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> ContainerExport:
        """Resolve an export document into a ContainerExport.

        Malformed documents degrade to an empty export rather than raising.
        """
        if not isinstance(data, dict):
            logger.warning(f"GTM export is not an object: {type(data).__name__}")
            return cls()

        wrapped = isinstance(data.get("containerVersion"), dict)
        body = data["containerVersion"] if wrapped else data

        # Prefer "macro" when present, fall back to "variable"
        if isinstance(body.get("macro"), list):
            export_format = ExportFormat.MACRO_V1
            macros = body["macro"]
        elif isinstance(body.get("variable"), list):
            export_format = ExportFormat.VARIABLE_V2
            macros = body["variable"]
        else:
            export_format = ExportFormat.EMPTY
            macros = []

        container = body.get("container")
        container_id = None
        if isinstance(container, dict):
            container_id = container.get("publicId") or container.get("containerId")

        return cls(
            format=export_format,
            wrapped=wrapped,
            tags=[tag for tag in _as_list(body.get("tag")) if isinstance(tag, dict)],
            macros=macros,
            triggers=_as_list(body.get("trigger")),
            container_id=container_id,
            raw=body,
        )

    @classmethod
    def from_json(cls, raw: str | bytes) -> ContainerExport:
        """Parse an export from JSON; invalid JSON yields an empty export."""
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Invalid GTM export JSON: {e}")
            return cls()
        return cls.from_dict(data)


def load_container_export(source: ContainerExport | dict[str, Any] | str | bytes | Path) -> ContainerExport:
    """Load a container export from a dict, JSON text, or file path.

    A ``str`` or ``bytes`` is always JSON text; only a ``Path`` is read from
    disk. Unparsable text yields an empty export.

    Raises:
        FileNotFoundError: If ``source`` is a path that doesn't exist.
    """
    if isinstance(source, ContainerExport):
        return source
    if isinstance(source, dict):
        return ContainerExport.from_dict(source)
    if isinstance(source, (str, bytes)):
        return ContainerExport.from_json(source)

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return ContainerExport.from_json(path.read_text(encoding="utf-8"))
