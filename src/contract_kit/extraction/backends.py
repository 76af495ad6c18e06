# src/contract_kit/extraction/backends.py

import logging
from typing import Protocol

from contract_kit.llms import LLMClient, Message, Role, create_llm_client
from contract_kit.observability.base import MetricsHook, NoOpMetricsHook

from .config import DEFAULT_QUOTA_MARKERS, BackendConfig

logger = logging.getLogger(__name__)


class ExtractionBackend(Protocol):
    """Structured-extraction capability.

    ``token_limit`` is the largest prompt the backend accepts in one call;
    ``max_chunk_chars`` is the chunk size used when a document exceeds it.
    """

    name: str
    token_limit: int
    max_chunk_chars: int

    async def extract(
        self,
        schema_prompt: str,
        text: str,
        *,
        system: str | None = None,
        json_output: bool = True,
    ) -> str:
        """Return the backend's raw answer for ``schema_prompt`` applied to ``text``."""
        ...

    def is_quota_error(self, error: BaseException) -> bool:
        """True when ``error`` signals a quota or rate-limit condition."""
        ...


class LLMExtractionBackend(ExtractionBackend):
    """Extraction backend on top of any ``LLMClient``.

    The schema prompt and the document travel in a single user message;
    the system prompt, when given, goes first.
    """

    def __init__(
        self,
        name: str,
        client: LLMClient,
        *,
        token_limit: int,
        max_chunk_chars: int | None = None,
        chars_per_token: float = 4.0,
        temperature: float = 0.1,
        max_tokens: int = 1500,
        quota_markers: tuple[str, ...] = DEFAULT_QUOTA_MARKERS,
    ) -> None:
        if token_limit <= 0:
            raise ValueError("token_limit must be > 0")
        hard_limit = int(token_limit * chars_per_token)
        chunk_chars = max_chunk_chars or int(hard_limit * 0.7)
        if chunk_chars >= hard_limit:
            raise ValueError("max_chunk_chars must leave room for the prompt")

        self.name = name
        self.token_limit = token_limit
        self.max_chunk_chars = chunk_chars
        self._client = client
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._quota_markers = tuple(m.lower() for m in quota_markers)
        logger.info(
            "Initialized LLMExtractionBackend %s with token_limit=%d, max_chunk_chars=%d",
            name,
            token_limit,
            chunk_chars,
        )

    @classmethod
    def from_config(
        cls,
        config: BackendConfig,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> "LLMExtractionBackend":
        """Build the provider client and the backend around it from ``config``."""
        return cls(
            config.name,
            create_llm_client(config.llm, metrics_hook=metrics_hook),
            token_limit=config.token_limit,
            max_chunk_chars=config.max_chunk_chars,
            chars_per_token=config.chars_per_token,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            quota_markers=config.quota_markers,
        )

    async def extract(
        self,
        schema_prompt: str,
        text: str,
        *,
        system: str | None = None,
        json_output: bool = True,
    ) -> str:
        messages = []
        if system:
            messages.append(Message(role=Role.SYSTEM, content=system))
        messages.append(Message(role=Role.USER, content=f"{schema_prompt}{text}"))

        response = await self._client.complete(
            messages=messages,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            json_mode=json_output,
        )
        if response.finish_reason == "length":
            logger.warning("%s response truncated at max_tokens", self.name)
        return response.content or ""

    def is_quota_error(self, error: BaseException) -> bool:
        if getattr(error, "status_code", None) == 429:
            return True
        message = str(error).lower()
        return any(marker in message for marker in self._quota_markers)
