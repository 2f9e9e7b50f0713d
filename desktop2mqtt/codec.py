"""Attribute value conversion for Home Assistant.

Attributes are published as a JSON object on each entity's attributes
topic. Values are converted here first so they behave predictably in
Home Assistant templates and automations.
"""

import json
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any


def _to_json_value(value: Any) -> Any:
    """Generic value-to-JSON fallback for nested values.

    Unlike ``convert_for_home_assistant`` this keeps booleans as JSON
    booleans. Containers are walked to any depth and every mapping key
    becomes a string, so the result always sorts and serializes.
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")

    if isinstance(value, (date, time)):
        return value.isoformat()

    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_json_value(item) for item in value]

    if isinstance(value, Mapping):
        return {str(key): _to_json_value(item) for key, item in value.items()}

    return value


def convert_for_home_assistant(value: Any) -> Any:
    """Convert an attribute value to a JSON-safe representation.

    - bool becomes the string "true" or "false"
    - datetime, date and time become ISO-8601 strings
    - lists, tuples and sets become lists of their items as JSON values
    - mappings become dicts with string keys, values as JSON values
    - anything else is returned unchanged

    Nested items go through the generic fallback only: nested booleans stay
    JSON booleans, nested dates still become ISO-8601 strings. Never raises.

    Args:
        value: Attribute value

    Returns:
        Converted value
    """
    # bool before anything numeric: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return _to_json_value(value)

    if isinstance(value, (datetime, date, time)):
        return _to_json_value(value)

    # TODO: add a converter registry for custom value kinds (enums, dataclasses)
    return value


def convert_attributes(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Convert every value of an attribute mapping."""
    return {str(key): convert_for_home_assistant(value) for key, value in attributes.items()}


def to_compact_json(data: Any) -> str:
    """Serialize to compact JSON.

    Keys are sorted so that equal documents always serialize to the same
    bytes. Mapping keys are made strings at every depth first; values json
    cannot express are written as their string form.
    """
    return json.dumps(
        _to_json_value(data), separators=(",", ":"), sort_keys=True, default=str
    )
