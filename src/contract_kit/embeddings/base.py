from dataclasses import dataclass
from typing import Protocol

from contract_kit.observability.base import MetricsHook


@dataclass(frozen=True)
class Embedding:
    vector: list[float]


class EmbeddingsClient(Protocol):
    """Fixed-dimension text embedding capability.

    Returns one ``Embedding`` per input text, in input order. Errors propagate;
    callers decide whether a failed batch is fatal.
    """

    metrics_hook: MetricsHook

    async def embed(self, texts: list[str]) -> list[Embedding]: ...
