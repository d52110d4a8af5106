"""
Field allow-listing for parsed request bodies.

Rules:
- Keys not in the allow-list are dropped entirely (not set to None)
- An empty allow-list yields an empty mapping
- Surviving keys keep the input mapping's order
- Non-object JSON (arrays, scalars) is returned unchanged

Pure functions: inputs are never modified.
"""
from collections.abc import Mapping
from typing import Any, Iterable, List


def permit(mapping: Any, allowed: Iterable[str]) -> Any:
    """
    Restrict a mapping to allow-listed keys.

    Args:
        mapping: Parsed JSON value (usually a dict)
        allowed: Key names permitted to pass through

    Returns:
        A new dict with only the permitted keys, or `mapping` itself
        if it is not a JSON object.
    """
    if not isinstance(mapping, Mapping):
        return mapping

    allowed_set = frozenset(allowed)
    return {key: value for key, value in mapping.items() if key in allowed_set}


def dropped_keys(mapping: Any, allowed: Iterable[str]) -> List[str]:
    """Names of keys that permit() would strip, in input order."""
    if not isinstance(mapping, Mapping):
        return []

    allowed_set = frozenset(allowed)
    return [key for key in mapping if key not in allowed_set]
