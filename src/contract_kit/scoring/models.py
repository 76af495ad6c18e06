# src/contract_kit/scoring/models.py

from dataclasses import dataclass
from enum import Enum


class Strategy(str, Enum):
    """How much of a document made it into a chunk set."""

    FULL = "full"
    HIERARCHICAL = "hierarchical"


@dataclass(frozen=True)
class Chunk:
    """A scored span of contract text.

    ``section_index`` is the section's position in the document and
    ``chunk_index`` the chunk's position inside that section, so
    ``order_key`` sorts chunks back into reading order. Importance is set at
    creation; the embedding is attached later with ``dataclasses.replace``.
    """

    id: str
    text: str
    section_title: str
    importance: float
    section_index: int
    chunk_index: int
    embedding: list[float] | None = None

    @property
    def order_key(self) -> tuple[int, int]:
        return (self.section_index, self.chunk_index)


@dataclass(frozen=True)
class ChunkingResult:
    chunks: list[Chunk]
    strategy: Strategy
    coverage: float
