from .config import DEFAULT_QUERY, RankingConfig
from .ranker import (
    RankingResult,
    RelevanceRanker,
    RelevantText,
    ScoredChunk,
    assemble_relevant_text,
    combined_score,
)
from .similarity import cosine_similarity

__all__ = [
    "DEFAULT_QUERY",
    "RankingConfig",
    "RankingResult",
    "RelevanceRanker",
    "RelevantText",
    "ScoredChunk",
    "assemble_relevant_text",
    "combined_score",
    "cosine_similarity",
]
