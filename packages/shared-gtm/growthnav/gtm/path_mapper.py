"""DataLayer path mapper.

Heuristic fallback for variables referenced by tags that have no macro
definition: guess a dataLayer path from the variable's display name.

Examples:
    Ecommerce.total -> ecommerce.total
    ecommerceTotal  -> ecommerce.total
    Purchase Value  -> None (custom label, needs manual mapping)

Rules are applied in order and the first match wins; a name can match more
than one rule, so the order matters.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

KNOWN_PREFIXES = (
    "event",
    "page",
    "ecommerce",
    "user",
    "google_tag_params",
    "enhanced ecommerce data",
)

_CAMEL_CASE = re.compile(r"^[a-z]+([A-Z][a-z]*)*$")
_UPPERCASE = re.compile(r"([A-Z])")
_WHITESPACE = re.compile(r"\s+")


def is_camel_case(name: str) -> bool:
    """True for lowerCamelCase names with at least one uppercase letter."""
    return bool(_CAMEL_CASE.match(name)) and name != name.lower()


def camel_case_to_path(name: str) -> str:
    """ecommerceTotal -> ecommerce.total"""
    return _UPPERCASE.sub(r".\1", name).lower().lstrip(".")


def variable_to_datalayer_path(name: str) -> str | None:
    """Convert a GTM variable name to a dataLayer path.

    Returns:
        The dataLayer path, or None if the name can't be mapped safely.
        None means "could not auto-map", never the dataLayer root.
    """
    variable = name.strip()

    # Already dot notation
    if "." in variable:
        return _WHITESPACE.sub("", variable.lower())

    if is_camel_case(variable):
        return camel_case_to_path(variable)

    # Custom labels ("Purchase Value") are ambiguous
    if " " in variable:
        return None

    lowered = variable.lower()
    if lowered.startswith(KNOWN_PREFIXES):
        return lowered

    return None


def map_variables_to_datalayer(names: Iterable[str]) -> dict[str, str | None]:
    """Map each variable name to its dataLayer path (None if unmappable)."""
    return {name: variable_to_datalayer_path(name) for name in names}
