# Chunking
from .chunking import (
    ChunkingConfig,
    Section,
    chunk_with_overlap,
    sanitize_text,
    segment_sections,
)

# Embeddings
from .embeddings import (
    Embedding,
    EmbeddingsClient,
    EmbeddingsConfig,
    create_embeddings_client,
)

# Extraction
from .extraction import (
    BackendConfig,
    ContractSchema,
    ExtractionBackend,
    ExtractionConfig,
    ExtractionFailedError,
    ExtractionOrchestrator,
    ExtractionResult,
    InvalidDocumentError,
    LLMExtractionBackend,
    QuotaExceededError,
    UnsupportedSchemaError,
    merge_partial_records,
)

# LLMs
from .llms import LLMConfig, create_llm_client

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

# Prompts
from .prompts import Prompt, PromptsLibrary

# Ranking
from .ranking import RankingConfig, RelevanceRanker, RelevantText, cosine_similarity

# Scoring
from .scoring import (
    BudgetConfig,
    Chunk,
    ChunkingResult,
    CoverageBudgeter,
    ImportanceScorer,
    ScoringConfig,
    Strategy,
)

__all__ = [
    # Chunking
    "ChunkingConfig",
    "Section",
    "chunk_with_overlap",
    "sanitize_text",
    "segment_sections",
    # Embeddings
    "Embedding",
    "EmbeddingsClient",
    "EmbeddingsConfig",
    "create_embeddings_client",
    # Extraction
    "BackendConfig",
    "ContractSchema",
    "ExtractionBackend",
    "ExtractionConfig",
    "ExtractionFailedError",
    "ExtractionOrchestrator",
    "ExtractionResult",
    "InvalidDocumentError",
    "LLMExtractionBackend",
    "QuotaExceededError",
    "UnsupportedSchemaError",
    "merge_partial_records",
    # LLMs
    "LLMConfig",
    "create_llm_client",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Prompts
    "Prompt",
    "PromptsLibrary",
    # Ranking
    "RankingConfig",
    "RelevanceRanker",
    "RelevantText",
    "cosine_similarity",
    # Scoring
    "BudgetConfig",
    "Chunk",
    "ChunkingResult",
    "CoverageBudgeter",
    "ImportanceScorer",
    "ScoringConfig",
    "Strategy",
]
