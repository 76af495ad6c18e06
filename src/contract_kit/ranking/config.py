# src/contract_kit/ranking/config.py

from dataclasses import dataclass

DEFAULT_QUERY = (
    "Extract key contract information including parties, terms, dates, "
    "and financial details"
)


@dataclass(frozen=True)
class RankingConfig:
    """Configuration for embedding-based relevance ranking.

    ``batch_delay`` is in seconds and is always awaited between embedding
    batches. ``combined = similarity_weight * similarity +
    importance_weight * importance / importance_scale``.
    """

    max_candidates: int = 30
    batch_size: int = 3
    batch_delay: float = 0.5
    similarity_weight: float = 0.7
    importance_weight: float = 0.3
    importance_scale: float = 5.0
    top_k: int = 5
    max_tokens_for_chunking: int = 100_000
    fallback_chars: int = 15_000
    separator: str = "\n\n---\n\n"
    default_query: str = DEFAULT_QUERY
