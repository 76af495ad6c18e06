# src/contract_kit/llms/base.py

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

from contract_kit.observability.base import MetricsHook


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message in the conversation.

    Immutable. Stateless. Provider-agnostic.
    """

    role: Role
    content: str


@dataclass(frozen=True)
class Usage:
    """Token usage for a completion."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class LLMResponse:
    """Normalized LLM response.

    Provider details never leak outside the adapter.
    """

    content: str | None
    finish_reason: Literal["stop", "length", "error"]
    usage: Usage
    latency_ms: float


class LLMClient(Protocol):
    """Protocol for LLM clients.

    Design principles:
    - Stateless: Every call receives full message list
    - Transport only: Retries only on network/rate-limit errors
    - No leakage: Provider objects never escape the adapter
    """

    metrics_hook: MetricsHook

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Single completion. Stateless. Full message list required.

        Args:
            messages: Complete conversation history. No internal state.
            temperature: Sampling temperature (0.0 = deterministic).
            max_tokens: Maximum tokens in response.
            json_mode: Ask the provider for a JSON object where supported.

        Returns:
            Normalized LLMResponse. Provider details never leak.

        Raises:
            Provider-specific errors after retry exhaustion.

        Note:
            Never retries on "bad" model output - that's the caller's problem.
        """
        ...
