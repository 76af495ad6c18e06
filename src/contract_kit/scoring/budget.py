# src/contract_kit/scoring/budget.py

import logging
from time import monotonic

from contract_kit.chunking import (
    ChunkingConfig,
    Section,
    chunk_with_overlap,
    estimate_tokens,
    segment_sections,
)
from contract_kit.observability import names
from contract_kit.observability.base import MetricsHook, NoOpMetricsHook

from .config import BudgetConfig
from .importance import ImportanceScorer
from .models import Chunk, ChunkingResult, Strategy

logger = logging.getLogger(__name__)


class CoverageBudgeter:
    """Select the highest-signal parts of a document under a token budget.

    Documents that fit are chunked whole. Larger ones are segmented, their
    sections ranked by importance and consumed best-first until the budget
    runs out; the section that overflows contributes only the prefix that
    still fits. Coverage reports the share of estimated tokens processed.
    """

    def __init__(
        self,
        config: BudgetConfig = BudgetConfig(),
        scorer: ImportanceScorer | None = None,
        chunking_config: ChunkingConfig = ChunkingConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config
        self.scorer = scorer or ImportanceScorer()
        self.chunking_config = chunking_config
        self.metrics_hook = metrics_hook

    def process(self, document: str, max_tokens: int | None = None) -> ChunkingResult:
        start = monotonic()
        budget = self.config.max_tokens if max_tokens is None else max_tokens
        if budget < 0:
            raise ValueError("max_tokens must be >= 0")
        total_tokens = estimate_tokens(document, self.config.chars_per_token)

        logger.info(
            "Processing document: length=%d, estimated_tokens=%.0f, budget=%d",
            len(document),
            total_tokens,
            budget,
        )

        sections = segment_sections(
            document, self.chunking_config, metrics_hook=self.metrics_hook
        )

        if total_tokens <= budget:
            chunks: list[Chunk] = []
            for index, section in enumerate(sections):
                chunks.extend(self._chunk_section(section, index, section.content))
            result = ChunkingResult(chunks=chunks, strategy=Strategy.FULL, coverage=1.0)
        else:
            logger.info(
                "Document exceeds budget, selecting from %d sections", len(sections)
            )
            result = self._select_sections(sections, budget, total_tokens)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.BUDGETING_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.BUDGETING_REQUESTS_TOTAL, labels={"strategy": result.strategy.value}
        )
        self.metrics_hook.record_gauge(names.BUDGETING_COVERAGE, result.coverage)
        logger.info(
            "Budgeted %d chunks: strategy=%s, coverage=%.2f",
            len(result.chunks),
            result.strategy.value,
            result.coverage,
        )
        return result

    def _select_sections(
        self, sections: list[Section], budget: int, total_tokens: float
    ) -> ChunkingResult:
        ranked = sorted(
            enumerate(sections),
            key=lambda item: self.scorer.score_section(item[1].content, item[1].title),
            reverse=True,
        )

        processed_tokens = 0.0
        chunks: list[Chunk] = []
        chars_per_token = self.config.chars_per_token

        for index, section in ranked:
            section_tokens = estimate_tokens(section.content, chars_per_token)

            if processed_tokens + section_tokens > budget:
                remaining = budget - processed_tokens
                prefix = section.content[: int(remaining * chars_per_token)]
                chunks.extend(self._chunk_section(section, index, prefix))
                processed_tokens += estimate_tokens(prefix, chars_per_token)
                logger.debug(
                    "Section %r truncated to %d characters", section.title, len(prefix)
                )
                break

            chunks.extend(self._chunk_section(section, index, section.content))
            processed_tokens += section_tokens

        coverage = min(1.0, processed_tokens / total_tokens) if total_tokens else 1.0
        return ChunkingResult(
            chunks=chunks, strategy=Strategy.HIERARCHICAL, coverage=coverage
        )

    def _chunk_section(self, section: Section, index: int, content: str) -> list[Chunk]:
        if not content:
            return []
        pieces = chunk_with_overlap(
            content,
            chunk_size=self.config.chunk_size,
            overlap=self.config.overlap,
            config=self.chunking_config,
            metrics_hook=self.metrics_hook,
        )
        return [
            Chunk(
                id=f"section-{index}-chunk-{chunk_index}",
                text=piece,
                section_title=section.title,
                importance=self.scorer.score(piece, section.title),
                section_index=index,
                chunk_index=chunk_index,
            )
            for chunk_index, piece in enumerate(pieces)
        ]
