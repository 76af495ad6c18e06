# src/contract_kit/llms/__init__.py

"""LLM client layer for contract-kit.

Thin, stateless adapters over LLM providers. The extraction backends in
``contract_kit.extraction`` build on these; nothing here knows about
contracts.

Example:
    >>> from contract_kit.llms import create_llm_client, LLMConfig, Message, Role
    >>>
    >>> config = LLMConfig(provider="openai")  # gpt-4o
    >>> client = create_llm_client(config)
    >>>
    >>> response = await client.complete(
    ...     messages=[Message(role=Role.USER, content="Hello!")],
    ...     json_mode=True,
    ... )
"""

from .base import LLMClient, LLMResponse, Message, Role, Usage
from .config import LLMConfig
from .factory import create_llm_client

__all__ = [
    # Factory
    "create_llm_client",
    # Protocol
    "LLMClient",
    # Config
    "LLMConfig",
    # Types
    "Message",
    "Role",
    "LLMResponse",
    "Usage",
]
