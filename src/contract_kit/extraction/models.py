# src/contract_kit/extraction/models.py

from dataclasses import dataclass
from typing import Any

from .confidence import calculate_confidence

DEGRADED_SUFFIX = " (with default data due to parsing failure)"
FALLBACK_SUFFIX = " (fallback)"


@dataclass(frozen=True)
class ExtractionResult:
    """Merged record plus the facts needed to judge it.

    ``confidence`` is computed from ``data`` on every access, so it always
    describes the record as it currently is.
    """

    data: dict[str, Any]
    backend_used: str
    required_fields: tuple[str, ...]
    degraded: bool = False
    chunk_count: int = 1

    @property
    def confidence(self) -> int:
        return calculate_confidence(self.data, self.required_fields)
