# src/contract_kit/embeddings/local.py

from __future__ import annotations

import asyncio
import logging
from time import monotonic

import numpy as np
from sentence_transformers import SentenceTransformer

from contract_kit.observability import names
from contract_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import Embedding, EmbeddingsClient

logger = logging.getLogger(__name__)


class LocalEmbeddingsClient(EmbeddingsClient):
    """
    Local embedding client using sentence-transformers.

    Useful when contract text must not leave the machine. Encoding runs in a
    worker thread so the event loop keeps serving other requests.
    """

    def __init__(
        self,
        model_name: str,
        batch_size: int = 32,
        normalize: bool = False,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._model = SentenceTransformer(model_name)
        self._batch_size = batch_size
        self._normalize = normalize
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized LocalEmbeddingsClient with model=%s, batch_size=%s, normalize=%s",
            model_name,
            batch_size,
            normalize,
        )

    async def embed(self, texts: list[str]) -> list[Embedding]:
        if not texts:
            logger.debug("Empty input, returning empty list")
            return []

        start = monotonic()
        try:
            vectors: np.ndarray = await asyncio.to_thread(
                self._model.encode,
                texts,
                batch_size=self._batch_size,
                convert_to_numpy=True,
                normalize_embeddings=self._normalize,
                show_progress_bar=False,
            )
        except Exception:
            self.metrics_hook.increment(
                names.EMBEDDINGS_ERRORS_TOTAL, labels={"backend": "local"}
            )
            raise

        embeddings = [Embedding(vector=v.tolist()) for v in np.atleast_2d(vectors)]

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.EMBEDDINGS_DURATION, elapsed_ms, labels={"backend": "local"}
        )
        self.metrics_hook.increment(
            names.EMBEDDINGS_REQUESTS_TOTAL, labels={"backend": "local"}
        )
        logger.debug("Embedded %d texts in %.0fms", len(embeddings), elapsed_ms)
        return embeddings
