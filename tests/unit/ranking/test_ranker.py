from unittest.mock import AsyncMock, patch

import pytest

from contract_kit.embeddings.base import Embedding
from contract_kit.observability import names
from contract_kit.observability.base import InMemoryMetricsHook, NoOpMetricsHook
from contract_kit.ranking.config import RankingConfig
from contract_kit.ranking.ranker import RelevanceRanker, assemble_relevant_text
from contract_kit.scoring.models import Chunk, Strategy


def _body(length: int) -> str:
    sentence = "the parties agree to the terms set out here and nothing else "
    return (sentence * (length // len(sentence) + 1))[:length]


def _vector(text: str) -> list[float]:
    lower = text.lower()
    return [float(lower.count("closing")), float(lower.count("signature")), 1.0]


class FakeEmbeddings:
    """Deterministic keyword-count embeddings that can fail on a given call."""

    def __init__(self, fail_on_calls: tuple[int, ...] = ()) -> None:
        self.metrics_hook = NoOpMetricsHook()
        self.calls: list[list[str]] = []
        self.fail_on_calls = fail_on_calls

    async def embed(self, texts: list[str]) -> list[Embedding]:
        self.calls.append(list(texts))
        if len(self.calls) in self.fail_on_calls:
            raise RuntimeError("429 Too Many Requests")
        return [Embedding(vector=_vector(t)) for t in texts]


@pytest.fixture
def contract() -> str:
    return "\n".join(
        f"ARTICLE {numeral}: {title}\n{_body(480)}"
        for numeral, title in (("I", "Terms"), ("II", "Closing"), ("III", "Signatures"))
    )


@pytest.fixture
def config() -> RankingConfig:
    return RankingConfig(batch_size=2, batch_delay=0.0, top_k=2)


class TestRank:
    @pytest.mark.asyncio
    async def test_returns_top_chunks_in_document_order(
        self, contract: str, config: RankingConfig
    ) -> None:
        ranker = RelevanceRanker(FakeEmbeddings(), config)

        chunks = await ranker.rank(contract, "closing")

        assert [c.section_title for c in chunks] == ["Terms", "Closing"]
        assert all(c.embedding is not None for c in chunks)

    @pytest.mark.asyncio
    async def test_scores_sorted_descending(
        self, contract: str, config: RankingConfig
    ) -> None:
        ranker = RelevanceRanker(FakeEmbeddings(), config)

        result = await ranker.rank_detailed(contract, "closing")

        scores = [s.combined_score for s in result.scored]
        assert scores == sorted(scores, reverse=True)
        assert result.scored[0].chunk.section_title == "Closing"
        assert result.scored[0].similarity == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_top_k_override(self, contract: str, config: RankingConfig) -> None:
        ranker = RelevanceRanker(FakeEmbeddings(), config)

        chunks = await ranker.rank(contract, "closing", top_k=1)

        assert [c.section_title for c in chunks] == ["Closing"]

    @pytest.mark.asyncio
    async def test_embeds_query_then_candidates_in_batches(
        self, contract: str, config: RankingConfig
    ) -> None:
        embeddings = FakeEmbeddings()
        ranker = RelevanceRanker(embeddings, config)

        result = await ranker.rank_detailed(contract, "closing")

        assert embeddings.calls[0] == ["closing"]
        assert [len(call) for call in embeddings.calls[1:]] == [2, 1]
        assert result.candidates == 3
        assert result.embedded == 3
        assert result.error is None

    @pytest.mark.asyncio
    async def test_candidates_limited_by_importance(self, contract: str) -> None:
        """Signatures has the lowest importance and is never embedded."""
        embeddings = FakeEmbeddings()
        ranker = RelevanceRanker(
            embeddings, RankingConfig(max_candidates=2, batch_delay=0.0)
        )

        result = await ranker.rank_detailed(contract, "closing")

        embedded_texts = [t for call in embeddings.calls[1:] for t in call]
        assert result.candidates == 2
        assert not any("Signatures" in t for t in embedded_texts)

    @pytest.mark.asyncio
    async def test_sleeps_between_batches(self, contract: str) -> None:
        ranker = RelevanceRanker(
            FakeEmbeddings(), RankingConfig(batch_size=1, batch_delay=0.5)
        )

        with patch(
            "contract_kit.ranking.ranker.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            await ranker.rank(contract, "closing")

        assert mock_sleep.await_count == 2
        mock_sleep.assert_awaited_with(0.5)

    @pytest.mark.asyncio
    async def test_failed_batch_stops_embedding(self, contract: str) -> None:
        """Chunks embedded before the failure are still ranked."""
        embeddings = FakeEmbeddings(fail_on_calls=(3,))
        hook = InMemoryMetricsHook()
        ranker = RelevanceRanker(
            embeddings,
            RankingConfig(batch_size=1, batch_delay=0.0),
            metrics_hook=hook,
        )

        result = await ranker.rank_detailed(contract, "closing")

        assert len(embeddings.calls) == 3
        assert result.embedded == 1
        assert [c.section_title for c in result.chunks] == ["Terms"]
        assert result.error == "429 Too Many Requests"
        assert hook.counters[names.RANKING_BATCH_FAILURES] == 1

    @pytest.mark.asyncio
    async def test_query_failure_propagates(
        self, contract: str, config: RankingConfig
    ) -> None:
        ranker = RelevanceRanker(FakeEmbeddings(fail_on_calls=(1,)), config)

        with pytest.raises(RuntimeError, match="429"):
            await ranker.rank(contract, "closing")

    @pytest.mark.asyncio
    async def test_hierarchical_budget(self, contract: str, config: RankingConfig) -> None:
        ranker = RelevanceRanker(FakeEmbeddings(), config)

        result = await ranker.rank_detailed(
            contract, "closing", max_tokens_for_chunking=200
        )

        assert result.budget.strategy is Strategy.HIERARCHICAL
        assert {c.section_title for c in result.chunks} <= {"Terms", "Closing"}


class TestExtractRelevantText:
    @pytest.mark.asyncio
    async def test_assembles_selected_chunks(
        self, contract: str, config: RankingConfig
    ) -> None:
        ranker = RelevanceRanker(FakeEmbeddings(), config)

        relevant = await ranker.extract_relevant_text(contract, "closing")

        assert relevant.text.startswith("[Terms]\nARTICLE I: Terms")
        assert "\n\n---\n\n[Closing]\nARTICLE II: Closing" in relevant.text
        assert relevant.chunk_count == 3
        assert relevant.selected_chunks == 2
        assert relevant.original_length == len(contract)
        assert relevant.relevant_length == len(relevant.text)
        assert relevant.strategy is Strategy.FULL
        assert relevant.coverage == 1.0
        assert relevant.fallback is False
        assert relevant.error is None

    @pytest.mark.asyncio
    async def test_uses_default_query(self, contract: str, config: RankingConfig) -> None:
        embeddings = FakeEmbeddings()
        ranker = RelevanceRanker(embeddings, config)

        await ranker.extract_relevant_text(contract)

        assert embeddings.calls[0] == [config.default_query]

    @pytest.mark.asyncio
    async def test_sanitizes_document(self, config: RankingConfig) -> None:
        embeddings = FakeEmbeddings()
        ranker = RelevanceRanker(embeddings, config)
        document = "ARTICLE I:\tTerms\r\n" + _body(300) + "\x00"

        relevant = await ranker.extract_relevant_text(document, "terms")

        assert "\t" not in relevant.text
        assert "\r" not in relevant.text
        assert "\x00" not in relevant.text

    @pytest.mark.asyncio
    async def test_falls_back_when_query_embedding_fails(self, contract: str) -> None:
        hook = InMemoryMetricsHook()
        ranker = RelevanceRanker(
            FakeEmbeddings(fail_on_calls=(1,)),
            RankingConfig(fallback_chars=100),
            metrics_hook=hook,
        )

        relevant = await ranker.extract_relevant_text(contract, "closing")

        assert relevant.fallback is True
        assert relevant.text == contract[:100]
        assert relevant.strategy is None
        assert relevant.error == "429 Too Many Requests"
        assert relevant.coverage == pytest.approx(100 / len(contract))
        assert hook.counters[names.RANKING_FALLBACKS_TOTAL] == 1

    @pytest.mark.asyncio
    async def test_falls_back_when_no_chunk_is_embedded(self, contract: str) -> None:
        ranker = RelevanceRanker(
            FakeEmbeddings(fail_on_calls=(2,)), RankingConfig(batch_delay=0.0)
        )

        relevant = await ranker.extract_relevant_text(contract, "closing")

        assert relevant.fallback is True
        assert relevant.text == contract
        assert relevant.error == "429 Too Many Requests"

    @pytest.mark.asyncio
    async def test_empty_document(self, config: RankingConfig) -> None:
        ranker = RelevanceRanker(FakeEmbeddings(), config)

        relevant = await ranker.extract_relevant_text("", "closing")

        assert relevant.text == ""
        assert relevant.original_length == 0


class TestAssembleRelevantText:
    def test_formats_sections(self) -> None:
        chunks = [
            Chunk(id="a", text="one", section_title="Terms", importance=1.0,
                  section_index=0, chunk_index=0),
            Chunk(id="b", text="two", section_title="Closing", importance=1.0,
                  section_index=1, chunk_index=0),
        ]

        assert assemble_relevant_text(chunks) == "[Terms]\none\n\n---\n\n[Closing]\ntwo"

    def test_empty(self) -> None:
        assert assemble_relevant_text([]) == ""
