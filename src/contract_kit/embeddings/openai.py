# src/contract_kit/embeddings/openai.py

import asyncio
import logging
from time import monotonic
from typing import Any

from openai import AsyncOpenAI, OpenAIError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from contract_kit.observability import names
from contract_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import Embedding, EmbeddingsClient

logger = logging.getLogger(__name__)


class OpenAIEmbeddingsClient(EmbeddingsClient):
    """OpenAI embeddings client.

    Transport-only retries. Blank inputs are sent as a single space because
    the API rejects empty strings.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "text-embedding-3-small",
        timeout: float = 10,
        batch_size: int = 100,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self._model = model
        self._batch_size = batch_size
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized OpenAIEmbeddingsClient with model=%s, timeout=%s, batch_size=%s",
            model,
            timeout,
            batch_size,
        )

    async def embed(self, texts: list[str]) -> list[Embedding]:
        if not texts:
            logger.debug("Empty input, returning empty list")
            return []

        start = monotonic()
        inputs = [t if t.strip() else " " for t in texts]
        batches = [
            inputs[i : i + self._batch_size]
            for i in range(0, len(inputs), self._batch_size)
        ]
        logger.debug("Embedding %d texts in %d batches", len(inputs), len(batches))

        try:
            responses = await asyncio.gather(
                *[self._embed_batch(batch) for batch in batches]
            )
        except OpenAIError:
            self.metrics_hook.increment(
                names.EMBEDDINGS_ERRORS_TOTAL, labels={"backend": "openai"}
            )
            raise

        embeddings = [
            Embedding(vector=list(data.embedding))
            for response in responses
            for data in response.data
        ]

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.EMBEDDINGS_DURATION, elapsed_ms, labels={"backend": "openai"}
        )
        self.metrics_hook.increment(
            names.EMBEDDINGS_REQUESTS_TOTAL, labels={"backend": "openai"}
        )
        logger.debug("Embedded %d texts in %.0fms", len(embeddings), elapsed_ms)
        return embeddings

    async def _embed_batch(self, batch: list[str]) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(3),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
            retry=retry_if_exception_type(OpenAIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.embeddings.create(
                    model=self._model,
                    input=batch,
                    encoding_format="float",
                )
