# src/contract_kit/llms/factory.py

import logging
from collections.abc import Callable

from contract_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient
from .config import LLMConfig

logger = logging.getLogger(__name__)


def _openai_client(config: LLMConfig, metrics_hook: MetricsHook) -> LLMClient:
    from .openai import OpenAILLMClient

    return OpenAILLMClient(
        api_key=config.api_key,
        model=config.resolved_model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        metrics_hook=metrics_hook,
    )


def _anthropic_client(config: LLMConfig, metrics_hook: MetricsHook) -> LLMClient:
    from .anthropic import AnthropicLLMClient

    return AnthropicLLMClient(
        api_key=config.api_key,
        model=config.resolved_model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        metrics_hook=metrics_hook,
    )


_PROVIDERS: dict[str, Callable[[LLMConfig, MetricsHook], LLMClient]] = {
    "openai": _openai_client,
    "anthropic": _anthropic_client,
}


def create_llm_client(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMClient:
    """Build the client that sits behind an extraction backend.

    Most callers go through ``LLMExtractionBackend.from_config``, which
    pairs the client with the backend's token limits.

    Raises:
        ValueError: If provider is unknown.
    """
    build = _PROVIDERS.get(config.provider)
    if build is None:
        raise ValueError(f"Unknown LLM provider: {config.provider}")
    logger.debug(
        "Creating %s client for %s", config.provider, config.resolved_model
    )
    return build(config, metrics_hook)
