# src/contract_kit/extraction/merge.py

import copy
from collections.abc import Mapping, Sequence
from typing import Any

PartialRecord = Mapping[str, Any]


def is_empty(value: Any) -> bool:
    """True for values that carry no extracted information."""
    return value is None or value == ""


def merge_partial_records(records: Sequence[PartialRecord]) -> dict[str, Any]:
    """Fold per-chunk records into one, in the order given.

    For every field the latest non-empty value wins; an empty value never
    overwrites an earlier one. Nested mappings are merged key by key, while
    lists and scalars are replaced whole. Fields that are empty everywhere
    stay in the result as ``None``.
    """
    merged: dict[str, Any] = {}
    for record in records:
        _merge_into(merged, record)
    return merged


def _merge_into(target: dict[str, Any], update: PartialRecord) -> None:
    for key, value in update.items():
        current = target.get(key)

        if is_empty(value):
            target.setdefault(key, None)
        elif isinstance(value, Mapping):
            if not isinstance(current, dict):
                current = {}
                target[key] = current
            _merge_into(current, value)
        else:
            # scalars and lists
            target[key] = copy.deepcopy(value)
