"""Safe dot-path reads over untrusted dataLayer snapshots.

Live dataLayer objects are customer-defined and may omit any branch, so every
function here is total: missing keys, ``None`` intermediates and scalar
intermediates all resolve to ``None`` instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any


def _step(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if key.isdigit():
            index = int(key)
            return current[index] if index < len(current) else None
    return None


def get_from_datalayer(obj: Any, path: str) -> Any:
    """Read a value from a nested object using a dot-notation path.

    Args:
        obj: Object to read from (e.g., a dataLayer snapshot).
        path: Dot-notation path (e.g., "ecommerce.total"). Numeric segments
            index into lists ("ecommerce.items.0.item_id").

    Returns:
        The value at ``path``, or None if any segment is missing.
    """
    if not obj or not path:
        return None

    current = obj
    for key in path.split("."):
        if current is None:
            return None
        current = _step(current, key)

    return current


def get_first_valid_path(obj: Any, paths: Iterable[str]) -> Any:
    """Return the value of the first path that resolves to a non-None value."""
    for path in paths:
        value = get_from_datalayer(obj, path)
        if value is not None:
            return value
    return None


def path_exists(obj: Any, path: str) -> bool:
    """Return True if ``path`` resolves to a non-None value."""
    return get_from_datalayer(obj, path) is not None
