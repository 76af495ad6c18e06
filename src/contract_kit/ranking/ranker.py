# src/contract_kit/ranking/ranker.py

import asyncio
import logging
from dataclasses import dataclass, replace
from time import monotonic

from contract_kit.chunking import sanitize_text
from contract_kit.embeddings.base import EmbeddingsClient
from contract_kit.observability import names
from contract_kit.observability.base import MetricsHook, NoOpMetricsHook
from contract_kit.scoring import Chunk, ChunkingResult, CoverageBudgeter, Strategy

from .config import RankingConfig
from .similarity import cosine_similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredChunk:
    chunk: Chunk
    similarity: float
    combined_score: float


@dataclass(frozen=True)
class RankingResult:
    """Everything a ranking pass produced.

    ``chunks`` holds the selected chunks in document order. ``error`` is set
    when an embedding batch failed and ranking went ahead with fewer
    candidates.
    """

    chunks: list[Chunk]
    scored: list[ScoredChunk]
    budget: ChunkingResult
    candidates: int
    embedded: int
    error: str | None = None


@dataclass(frozen=True)
class RelevantText:
    text: str
    chunk_count: int
    selected_chunks: int
    original_length: int
    relevant_length: int
    strategy: Strategy | None
    coverage: float
    fallback: bool = False
    error: str | None = None


def combined_score(similarity: float, importance: float, config: RankingConfig) -> float:
    return (
        config.similarity_weight * similarity
        + config.importance_weight * (importance / config.importance_scale)
    )


def assemble_relevant_text(chunks: list[Chunk], separator: str = "\n\n---\n\n") -> str:
    """Join chunks under their section headings, in the order given."""
    return separator.join(f"[{chunk.section_title}]\n{chunk.text}" for chunk in chunks)


class RelevanceRanker:
    """Pick the chunks of a contract most relevant to a query.

    Chunks come from the coverage budgeter, the most important ones are
    embedded in small rate-limited batches and ranked by a blend of cosine
    similarity and importance. The winners are returned in reading order.
    """

    def __init__(
        self,
        embeddings: EmbeddingsClient,
        config: RankingConfig = RankingConfig(),
        budgeter: CoverageBudgeter | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.embeddings = embeddings
        self.config = config
        self.budgeter = budgeter or CoverageBudgeter(metrics_hook=metrics_hook)
        self.metrics_hook = metrics_hook

    async def rank(
        self,
        document: str,
        query: str,
        max_tokens_for_chunking: int | None = None,
        top_k: int | None = None,
    ) -> list[Chunk]:
        result = await self.rank_detailed(document, query, max_tokens_for_chunking, top_k)
        return result.chunks

    async def rank_detailed(
        self,
        document: str,
        query: str,
        max_tokens_for_chunking: int | None = None,
        top_k: int | None = None,
    ) -> RankingResult:
        """Rank ``document`` against ``query``.

        Raises:
            Whatever the embeddings client raises for the query itself.
            Failures while embedding chunks only shrink the candidate set.
        """
        start = monotonic()
        config = self.config
        max_tokens = (
            config.max_tokens_for_chunking
            if max_tokens_for_chunking is None
            else max_tokens_for_chunking
        )
        k = config.top_k if top_k is None else top_k

        [query_embedding] = await self.embeddings.embed([query])

        budget = self.budgeter.process(document, max_tokens)
        candidates = sorted(budget.chunks, key=lambda c: c.importance, reverse=True)
        candidates = candidates[: config.max_candidates]
        self.metrics_hook.record_gauge(names.RANKING_CANDIDATES, len(candidates))
        logger.info(
            "Ranking %d of %d chunks against query", len(candidates), len(budget.chunks)
        )

        embedded, error = await self._embed_in_batches(candidates)

        scored = []
        for chunk in embedded:
            similarity = cosine_similarity(chunk.embedding, query_embedding.vector)
            scored.append(
                ScoredChunk(
                    chunk=chunk,
                    similarity=similarity,
                    combined_score=combined_score(similarity, chunk.importance, config),
                )
            )
        scored.sort(key=lambda s: s.combined_score, reverse=True)

        selected = sorted((s.chunk for s in scored[:k]), key=lambda c: c.order_key)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.RANKING_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.RANKING_REQUESTS_TOTAL)
        logger.info(
            "Selected %d chunks (%d embedded) in %.0fms",
            len(selected),
            len(embedded),
            elapsed_ms,
        )
        return RankingResult(
            chunks=selected,
            scored=scored,
            budget=budget,
            candidates=len(candidates),
            embedded=len(embedded),
            error=error,
        )

    async def extract_relevant_text(
        self,
        document: str,
        query: str | None = None,
        top_k: int | None = None,
    ) -> RelevantText:
        """Reduce ``document`` to its most relevant passages.

        Never raises for embedding problems: if nothing could be ranked, the
        result falls back to the document's first ``fallback_chars``
        characters and carries the error message.
        """
        clean_document = sanitize_text(document)
        clean_query = sanitize_text(query or self.config.default_query)

        try:
            result = await self.rank_detailed(clean_document, clean_query, top_k=top_k)
        except Exception as exc:
            logger.warning("Relevance ranking failed, truncating instead: %s", exc)
            return self._fallback(document, clean_document, str(exc))

        if not result.chunks:
            return self._fallback(
                document, clean_document, result.error or "No chunks could be ranked"
            )

        text = assemble_relevant_text(result.chunks, self.config.separator)
        return RelevantText(
            text=text,
            chunk_count=len(result.budget.chunks),
            selected_chunks=len(result.chunks),
            original_length=len(document),
            relevant_length=len(text),
            strategy=result.budget.strategy,
            coverage=result.budget.coverage,
            error=result.error,
        )

    async def _embed_in_batches(
        self, candidates: list[Chunk]
    ) -> tuple[list[Chunk], str | None]:
        """Embed candidates batch by batch, pausing between batches.

        The first failing batch ends the loop; chunks embedded so far are kept.
        """
        batch_size = self.config.batch_size
        embedded: list[Chunk] = []

        for batch_start in range(0, len(candidates), batch_size):
            batch = candidates[batch_start : batch_start + batch_size]
            try:
                vectors = await self.embeddings.embed([c.text for c in batch])
                embedded.extend(
                    replace(chunk, embedding=vector.vector)
                    for chunk, vector in zip(batch, vectors, strict=True)
                )
            except Exception as exc:
                logger.warning(
                    "Embedding batch %d-%d failed, keeping %d chunks: %s",
                    batch_start,
                    batch_start + len(batch),
                    len(embedded),
                    exc,
                )
                self.metrics_hook.increment(names.RANKING_BATCH_FAILURES)
                return embedded, str(exc)

            logger.debug("Embedded batch %d-%d", batch_start, batch_start + len(batch))
            if batch_start + batch_size < len(candidates):
                await asyncio.sleep(self.config.batch_delay)

        return embedded, None

    def _fallback(self, document: str, clean_document: str, error: str) -> RelevantText:
        self.metrics_hook.increment(names.RANKING_FALLBACKS_TOTAL)
        text = clean_document[: self.config.fallback_chars]
        return RelevantText(
            text=text,
            chunk_count=1,
            selected_chunks=1,
            original_length=len(document),
            relevant_length=len(text),
            strategy=None,
            coverage=len(text) / len(clean_document) if clean_document else 1.0,
            fallback=True,
            error=error,
        )
