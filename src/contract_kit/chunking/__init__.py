from .chunking import chunk_with_overlap
from .config import DEFAULT_SECTION_PATTERNS, ChunkingConfig
from .sections import Section, segment_sections
from .text import estimate_tokens, sanitize_text

__all__ = [
    "ChunkingConfig",
    "DEFAULT_SECTION_PATTERNS",
    "Section",
    "chunk_with_overlap",
    "estimate_tokens",
    "sanitize_text",
    "segment_sections",
]
