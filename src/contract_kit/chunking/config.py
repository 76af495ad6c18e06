# src/contract_kit/chunking/config.py

from dataclasses import dataclass

# Header patterns in priority order: numbered ARTICLE/SECTION/PART headings,
# "1) Title:" style numbered clauses, then short ALL-CAPS captions.
DEFAULT_SECTION_PATTERNS: tuple[tuple[str, bool], ...] = (
    (r"(?:^|\n)\s*(?:ARTICLE|SECTION|PART)\s+(?:[IVXLCDM]+|\d+)[:.\s]+([^\n]+)", True),
    (r"(?:^|\n)\s*(\d+[.)]\s*[A-Z][^:\n]+)[:.]", True),
    (r"(?:^|\n)\s*([A-Z][A-Z\s&]{3,30})[:.\n]", False),
)


@dataclass(frozen=True)
class ChunkingConfig:
    """Configuration for section segmentation and overlap chunking.

    Immutable. Explicit. Each pattern is a ``(regex, ignore_case)`` pair whose
    first group captures the section title.
    """

    chunk_size: int = 1000
    overlap: int = 200
    boundary_ratio: float = 0.7
    min_chunk_length: int = 50
    min_section_length: int = 100
    fallback_title: str = "Contract"
    patterns: tuple[tuple[str, bool], ...] = DEFAULT_SECTION_PATTERNS
