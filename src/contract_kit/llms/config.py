# src/contract_kit/llms/config.py

from dataclasses import dataclass
from typing import Literal

Provider = Literal["openai", "anthropic"]

# Models the bundled extraction prompts are written against.
DEFAULT_MODELS: dict[str, str] = {
    "openai": "gpt-4o",
    "anthropic": "claude-sonnet-4-20250514",
}


@dataclass(frozen=True)
class LLMConfig:
    """Connection settings for one extraction provider.

    ``model`` defaults to the provider's extraction model and ``api_key``
    to the SDK's own environment variable.
    """

    provider: Provider
    model: str | None = None
    api_key: str | None = None
    timeout: float = 120.0
    max_retries: int = 3

    @property
    def resolved_model(self) -> str:
        if self.model:
            return self.model
        if self.provider not in DEFAULT_MODELS:
            raise ValueError(f"Unknown LLM provider: {self.provider}")
        return DEFAULT_MODELS[self.provider]
