# src/contract_kit/extraction/confidence.py

from collections.abc import Mapping, Sequence
from typing import Any

from .merge import is_empty

_MISSING = object()


def resolve_path(data: Mapping[str, Any], path: str) -> Any:
    """Follow a dotted path through nested mappings; missing steps give None."""
    value: Any = data
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part, _MISSING)
        if value is _MISSING:
            return None
    return value


def calculate_confidence(
    data: Mapping[str, Any], required_fields: Sequence[str]
) -> int:
    """Percentage of required fields holding a non-empty value, rounded.

    A schema without required fields is trivially complete.
    """
    if not required_fields:
        return 100
    completed = sum(
        1 for field in required_fields if not is_empty(resolve_path(data, field))
    )
    return round(100 * completed / len(required_fields))
