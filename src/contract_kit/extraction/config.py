# src/contract_kit/extraction/config.py

from dataclasses import dataclass

from contract_kit.chunking import ChunkingConfig
from contract_kit.llms import LLMConfig

DEFAULT_QUOTA_MARKERS: tuple[str, ...] = (
    "quota",
    "429",
    "too many requests",
    "rate limit",
)


@dataclass(frozen=True)
class BackendConfig:
    """Everything needed to build one extraction backend.

    ``llm`` picks the provider and model. ``token_limit`` is the largest
    prompt sent in one call and ``max_chunk_chars`` the chunk size used
    beyond it (70 % of ``token_limit * chars_per_token`` when unset).
    ``quota_markers`` are matched case-insensitively against error text.
    """

    name: str
    llm: LLMConfig
    token_limit: int
    max_chunk_chars: int | None = None
    chars_per_token: float = 4.0
    temperature: float = 0.1
    max_tokens: int = 1500
    quota_markers: tuple[str, ...] = DEFAULT_QUOTA_MARKERS


PRIMARY_BACKEND = BackendConfig(
    name="OpenAI",
    llm=LLMConfig(provider="openai"),
    token_limit=120_000,
)

SECONDARY_BACKEND = BackendConfig(
    name="Claude",
    llm=LLMConfig(provider="anthropic"),
    token_limit=800_000,
    max_chunk_chars=600_000,
)


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for the extraction orchestrator.

    Immutable. ``chunking`` controls how oversized documents are split; the
    chunk size itself comes from each backend.
    """

    chars_per_token: float = 4.0
    min_document_length: int = 100
    chunking: ChunkingConfig = ChunkingConfig(boundary_ratio=0.8, min_chunk_length=1)
    concurrent_chunks: bool = True
    chunk_notice_prompt: tuple[str, str] = ("chunk_notice", "1.0")
    summary_prompt: tuple[str, str] = ("contract_summary", "1.0")
    document_opener: str = "\nCONTRACT_TEXT:\n<<<\n"
    document_terminator: str = "\n>>>"
