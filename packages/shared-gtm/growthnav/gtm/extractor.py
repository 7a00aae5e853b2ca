"""Variable extractor.

Finds {{variable}} references in GTM tag parameters and extracts macro
definitions bound to dataLayer paths.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from growthnav.gtm.schema import VARIABLE_PATTERN

# Parameter keys that can hold values; GTM nests LIST/MAP parameters under
# "list" and "map" rather than "value".
VALUE_KEYS = ("value", "list", "map")

DATALAYER_VARIABLE_KEY = "dataLayerVariable"


def _collect(value: Any, variables: set[str]) -> None:
    """Recursively collect variable references from strings, dicts and lists."""
    if isinstance(value, str):
        for match in VARIABLE_PATTERN.finditer(value):
            name = match.group(1).strip()
            if name:
                variables.add(name)
    elif isinstance(value, dict):
        for item in value.values():
            _collect(item, variables)
    elif isinstance(value, list):
        for item in value:
            _collect(item, variables)
    # Numbers, booleans and None carry no references


def extract_variables(tag: Any) -> set[str]:
    """Extract all {{variable}} references from a tag's parameters.

    Args:
        tag: GTM tag record from an export.

    Returns:
        Set of trimmed variable names (without braces).
    """
    variables: set[str] = set()
    if not isinstance(tag, dict):
        return variables

    parameters = tag.get("parameter")
    if not isinstance(parameters, list):
        return variables

    for param in parameters:
        if isinstance(param, dict):
            for key in VALUE_KEYS:
                _collect(param.get(key), variables)
        else:
            _collect(param, variables)

    return variables


def extract_all_variables(tags: Iterable[Any]) -> set[str]:
    """Union of variable references across all tags."""
    variables: set[str] = set()
    for tag in tags:
        variables |= extract_variables(tag)
    return variables


def _datalayer_path(macro: dict[str, Any]) -> str | None:
    for param in macro["parameter"]:
        if isinstance(param, dict) and param.get("key") == DATALAYER_VARIABLE_KEY and param.get("value"):
            return param["value"]
    return None


def extract_macro_definitions(macros: Any) -> dict[str, str]:
    """Extract macro name -> dataLayer path bindings.

    Only macros with a truthy ``dataLayerVariable`` parameter produce a
    binding; everything else is skipped. Later duplicates overwrite earlier
    ones. The returned dict keeps export order.

    Args:
        macros: The export's macro/variable array.

    Returns:
        Ordered mapping of macro name to dataLayer path.
    """
    definitions: dict[str, str] = {}
    if not isinstance(macros, list):
        return definitions

    for macro in macros:
        if not isinstance(macro, dict) or not macro.get("name"):
            continue
        if not isinstance(macro.get("parameter"), list) or not macro["parameter"]:
            continue

        path = _datalayer_path(macro)
        if path:
            definitions[macro["name"]] = path

    return definitions
