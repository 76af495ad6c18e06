from contract_kit.observability import InMemoryMetricsHook, NoOpMetricsHook, names


class TestInMemoryMetricsHook:
    def test_latencies_accumulate(self) -> None:
        hook = InMemoryMetricsHook()

        hook.record_latency(names.EXTRACTION_DURATION, 12.5)
        hook.record_latency(names.EXTRACTION_DURATION, 7.5, labels={"backend": "openai"})

        assert hook.latencies == {names.EXTRACTION_DURATION: [12.5, 7.5]}

    def test_counters_sum(self) -> None:
        hook = InMemoryMetricsHook()

        hook.increment(names.CHUNKING_CHUNKS_CREATED, 3)
        hook.increment(names.CHUNKING_CHUNKS_CREATED)

        assert hook.counters[names.CHUNKING_CHUNKS_CREATED] == 4

    def test_counters_split_by_labels(self) -> None:
        hook = InMemoryMetricsHook()

        hook.increment(names.EXTRACTION_BACKEND_ERRORS, labels={"backend": "OpenAI"})
        hook.increment(names.EXTRACTION_BACKEND_ERRORS, labels={"backend": "OpenAI"})
        hook.increment(names.EXTRACTION_BACKEND_ERRORS, labels={"backend": "Claude"})

        assert hook.counters[names.EXTRACTION_BACKEND_ERRORS] == 3
        assert hook.count(names.EXTRACTION_BACKEND_ERRORS) == 3
        assert hook.count(names.EXTRACTION_BACKEND_ERRORS, backend="OpenAI") == 2
        assert hook.count(names.EXTRACTION_BACKEND_ERRORS, backend="Claude") == 1

    def test_label_sets_match_exactly(self) -> None:
        hook = InMemoryMetricsHook()

        hook.increment(
            names.EMBEDDINGS_REQUESTS_TOTAL,
            5,
            labels={"provider": "openai", "model": "text-embedding-3-small"},
        )

        assert hook.count(
            names.EMBEDDINGS_REQUESTS_TOTAL,
            model="text-embedding-3-small",
            provider="openai",
        ) == 5
        assert hook.count(names.EMBEDDINGS_REQUESTS_TOTAL, provider="openai") == 0
        assert hook.count(names.RANKING_REQUESTS_TOTAL) == 0

    def test_unlabelled_increments_only_reach_totals(self) -> None:
        hook = InMemoryMetricsHook()

        hook.increment(names.CHUNKING_CHUNKS_CREATED, 2)

        assert hook.count(names.CHUNKING_CHUNKS_CREATED) == 2
        assert hook.labelled_counters == {}

    def test_gauges_keep_last_value(self) -> None:
        hook = InMemoryMetricsHook()

        hook.record_gauge(names.BUDGETING_COVERAGE, 0.4)
        hook.record_gauge(names.BUDGETING_COVERAGE, 0.9)

        assert hook.gauges[names.BUDGETING_COVERAGE] == 0.9

    def test_instances_do_not_share_state(self) -> None:
        first = InMemoryMetricsHook()
        second = InMemoryMetricsHook()

        first.increment(names.RANKING_REQUESTS_TOTAL)

        assert second.counters == {}


class TestNoOpMetricsHook:
    def test_accepts_all_calls(self) -> None:
        hook = NoOpMetricsHook()

        hook.record_latency(names.RANKING_DURATION, 1.0)
        hook.increment(names.RANKING_REQUESTS_TOTAL, labels={"a": "b"})
        hook.record_gauge(names.RANKING_CANDIDATES, 3)
